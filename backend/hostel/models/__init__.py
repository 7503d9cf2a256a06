"""ORM models package export."""

from hostel.models.guest import Guest
from hostel.models.reservation import Reservation, ReservationStatus
from hostel.models.room import Bed, BedType, Room, RoomType
from hostel.models.user import User

__all__ = [
    "Bed",
    "BedType",
    "Guest",
    "Reservation",
    "ReservationStatus",
    "Room",
    "RoomType",
    "User",
]
