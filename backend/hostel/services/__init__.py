"""Service layer exports."""
from hostel.services import (
    admission_service,
    auth_service,
    availability_service,
    calendar_service,
    guest_service,
    reservation_service,
    room_service,
    statistics_service,
    user_service,
)

__all__ = [
    "admission_service",
    "auth_service",
    "availability_service",
    "calendar_service",
    "guest_service",
    "reservation_service",
    "room_service",
    "statistics_service",
    "user_service",
]
