"""Availability search and calendar schemas."""

from __future__ import annotations

import uuid
from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from hostel.models.reservation import ReservationStatus
from hostel.models.room import BedType, RoomType


class ConflictingReservation(BaseModel):
    """A confirmed stay blocking a bed for the searched range."""

    id: uuid.UUID
    check_in: date
    check_out: date
    status: ReservationStatus
    guest_name: str | None = None


class BedAvailabilityRead(BaseModel):
    bed_id: uuid.UUID
    number: int
    bed_type: BedType
    is_available: bool
    conflicts: list[ConflictingReservation] = Field(default_factory=list)


class RoomAvailabilityRead(BaseModel):
    room_id: uuid.UUID
    name: str
    room_type: RoomType
    available_beds: int
    beds: list[BedAvailabilityRead]


class AvailabilityRequest(BaseModel):
    """Availability search parameters."""

    check_in: date
    check_out: date
    room_type: RoomType | None = None
    room_id: uuid.UUID | None = None


class AvailabilityResponse(BaseModel):
    """Availability search result."""

    check_in: date
    check_out: date
    nights: int
    total_available: int
    rooms: list[RoomAvailabilityRead]


class CalendarRequest(BaseModel):
    start: date
    days: int = 14
    room_type: RoomType | None = None


class CalendarCellRead(BaseModel):
    day: date
    reservation_id: uuid.UUID | None = None
    guest_name: str | None = None
    is_check_in: bool = False

    model_config = ConfigDict(from_attributes=True)


class CalendarRowRead(BaseModel):
    room_id: uuid.UUID
    room_name: str
    bed_id: uuid.UUID
    bed_number: int
    bed_type: BedType
    cells: list[CalendarCellRead]


class CalendarResponse(BaseModel):
    start: date
    days: list[date]
    rows: list[CalendarRowRead]


class StatisticsRead(BaseModel):
    """Dashboard occupancy figures."""

    total_rooms: int
    total_beds: int
    total_guests: int
    occupancy_rate: int

    model_config = ConfigDict(from_attributes=True)
