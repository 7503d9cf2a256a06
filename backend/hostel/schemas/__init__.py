"""Schema exports."""

from hostel.schemas.auth import Token, UserRead
from hostel.schemas.availability import (
    AvailabilityRequest,
    AvailabilityResponse,
    CalendarRequest,
    CalendarResponse,
    StatisticsRead,
)
from hostel.schemas.functions import (
    FunctionReservationRequest,
    FunctionReservationView,
    FunctionResponse,
)
from hostel.schemas.guest import GuestCreate, GuestRead, GuestUpdate
from hostel.schemas.reservation import (
    ReservationCreate,
    ReservationRead,
    ReservationUpdate,
)
from hostel.schemas.room import BedRead, RoomCreate, RoomRead, RoomUpdate

__all__ = [
    "AvailabilityRequest",
    "AvailabilityResponse",
    "BedRead",
    "CalendarRequest",
    "CalendarResponse",
    "FunctionReservationRequest",
    "FunctionReservationView",
    "FunctionResponse",
    "GuestCreate",
    "GuestRead",
    "GuestUpdate",
    "ReservationCreate",
    "ReservationRead",
    "ReservationUpdate",
    "RoomCreate",
    "RoomRead",
    "RoomUpdate",
    "StatisticsRead",
    "Token",
    "UserRead",
]
