"""Pydantic schemas for reservations."""
from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hostel.models.reservation import ReservationStatus
from hostel.models.room import RoomType
from hostel.schemas.guest import GuestCreate, GuestRead, GuestUpdate


class ReservationBedInfo(BaseModel):
    """Bed and room a reservation is assigned to."""

    bed_id: uuid.UUID
    bed_number: int
    room_id: uuid.UUID
    room_name: str


class ReservationCreate(BaseModel):
    """Payload for creating a reservation from the admin UI.

    Without ``bed_id`` the first free bed (optionally of ``room_type``) is
    assigned automatically.
    """

    guest: GuestCreate
    check_in: date
    check_out: date
    bed_id: uuid.UUID | None = None
    room_type: RoomType | None = None
    notes: str | None = Field(default=None, max_length=1024)

    @model_validator(mode="after")
    def _check_range(self) -> "ReservationCreate":
        if self.check_out <= self.check_in:
            raise ValueError("check_out must be after check_in")
        return self


class ReservationUpdate(BaseModel):
    """Mutable reservation fields."""

    bed_id: uuid.UUID | None = None
    check_in: date | None = None
    check_out: date | None = None
    status: ReservationStatus | None = None
    notes: str | None = Field(default=None, max_length=1024)
    guest: GuestUpdate | None = None


class ReservationRead(BaseModel):
    """Denormalized reservation view joining guest and bed/room data."""

    id: uuid.UUID
    bed_id: uuid.UUID
    guest_id: uuid.UUID
    check_in: date
    check_out: date
    status: ReservationStatus
    notes: str | None = None
    created_at: datetime
    guest: GuestRead
    bed_info: ReservationBedInfo

    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode="before")
    @classmethod
    def _collect_bed_info(cls, data: object) -> object:
        bed = getattr(data, "bed", None)
        if bed is None:
            return data
        return {
            "id": data.id,
            "bed_id": data.bed_id,
            "guest_id": data.guest_id,
            "check_in": data.check_in,
            "check_out": data.check_out,
            "status": data.status,
            "notes": data.notes,
            "created_at": data.created_at,
            "guest": data.guest,
            "bed_info": {
                "bed_id": bed.id,
                "bed_number": bed.number,
                "room_id": bed.room_id,
                "room_name": bed.room.name,
            },
        }
