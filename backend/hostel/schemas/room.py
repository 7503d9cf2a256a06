"""Pydantic schemas for rooms and beds."""
from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, Field

from hostel.models.room import BedType, RoomType


class BedRead(BaseModel):
    """Serialized bed."""

    id: uuid.UUID
    room_id: uuid.UUID
    number: int
    bed_type: BedType

    model_config = ConfigDict(from_attributes=True)


class RoomBase(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    room_type: RoomType


class RoomCreate(RoomBase):
    """Payload for creating a room together with its beds."""

    bed_types: list[BedType] = Field(min_length=1)


class RoomUpdate(BaseModel):
    """Mutable room fields; beds are immutable inventory."""

    name: str | None = Field(default=None, min_length=1, max_length=120)
    room_type: RoomType | None = None


class RoomRead(RoomBase):
    """Serialized room with its beds ordered by number."""

    id: uuid.UUID
    capacity: int
    beds: list[BedRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
