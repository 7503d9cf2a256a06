"""Request/response contract of the public reservation functions.

The automation bot speaks camelCase JSON, so these models alias every field.
"""
from __future__ import annotations

import re
import uuid
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from hostel.models.reservation import Reservation, ReservationStatus
from hostel.models.room import RoomType

REQUIRED_FIELDS: tuple[str, ...] = (
    "name",
    "lastName",
    "idNumber",
    "phone",
    "email",
    "country",
    "checkIn",
    "checkOut",
)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_AGE_INTEGER = re.compile(r"^[+-]?\d+")


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


def missing_fields(body: dict[str, Any]) -> dict[str, bool]:
    """Map every required field to whether it is absent or blank."""
    flags: dict[str, bool] = {}
    for key in REQUIRED_FIELDS:
        value = body.get(key)
        flags[key] = value is None or (isinstance(value, str) and not value.strip())
    return flags


class FunctionReservationRequest(_CamelModel):
    """Booking request sent by the automation bot."""

    name: str = Field(max_length=120)
    last_name: str = Field(max_length=120)
    id_number: str = Field(max_length=64)
    phone: str = Field(max_length=32)
    email: str = Field(max_length=320)
    country: str = Field(max_length=120)
    check_in: date
    check_out: date
    age: int | None = None
    notes: str | None = Field(default=None, max_length=1024)
    room_type: RoomType | None = None

    @field_validator("id_number", "phone", mode="before")
    @classmethod
    def _coerce_to_text(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("check_in", "check_out", mode="before")
    @classmethod
    def _parse_iso_date(cls, value: Any) -> date:
        if isinstance(value, str) and _ISO_DATE.match(value.strip()):
            try:
                return date.fromisoformat(value.strip())
            except ValueError:
                pass
        raise ValueError("Dates must use a valid YYYY-MM-DD format")

    @field_validator("age", mode="before")
    @classmethod
    def _parse_age(cls, value: Any) -> int | None:
        if value is None or value == "":
            return None
        parsed: int | None = None
        if isinstance(value, bool):
            parsed = None
        elif isinstance(value, int):
            parsed = value
        elif isinstance(value, float) and value.is_integer():
            parsed = int(value)
        elif isinstance(value, str):
            match = _AGE_INTEGER.match(value.strip())
            parsed = int(match.group(0)) if match else None
        if parsed is None or not 1 <= parsed <= 120:
            raise ValueError("Age must be a number between 1 and 120")
        return parsed

    @model_validator(mode="after")
    def _check_range(self) -> "FunctionReservationRequest":
        if self.check_out <= self.check_in:
            raise ValueError("Check-out date must be after check-in date")
        return self


class FunctionGuest(_CamelModel):
    name: str
    last_name: str
    id_number: str
    phone: str
    email: str
    age: int | None
    country: str


class FunctionBedInfo(_CamelModel):
    bed_id: uuid.UUID
    bed_number: int
    room_id: uuid.UUID
    room_name: str


class FunctionReservationView(_CamelModel):
    """Reservation as returned to the bot."""

    id: uuid.UUID
    bed_id: uuid.UUID
    check_in: date
    check_out: date
    status: ReservationStatus
    created_at: datetime
    guest: FunctionGuest
    bed_info: FunctionBedInfo

    @classmethod
    def from_reservation(cls, reservation: Reservation) -> "FunctionReservationView":
        guest = reservation.guest
        bed = reservation.bed
        return cls(
            id=reservation.id,
            bed_id=reservation.bed_id,
            check_in=reservation.check_in,
            check_out=reservation.check_out,
            status=reservation.status,
            created_at=reservation.created_at,
            guest=FunctionGuest(
                name=guest.name,
                last_name=guest.last_name,
                id_number=guest.id_number,
                phone=guest.phone,
                email=guest.email,
                age=guest.age,
                country=guest.country,
            ),
            bed_info=FunctionBedInfo(
                bed_id=bed.id,
                bed_number=bed.number,
                room_id=bed.room_id,
                room_name=bed.room.name,
            ),
        )


class FunctionResponse(_CamelModel):
    """Envelope of every function response."""

    success: bool
    message: str
    reservation: FunctionReservationView | None = None
    error: str | None = None
    missing_fields: dict[str, bool] | None = None
