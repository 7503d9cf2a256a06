"""Domain errors raised by the reservation services."""

from __future__ import annotations


class ReservationError(Exception):
    """Base class for reservation admission failures."""


class ReservationValidationError(ReservationError, ValueError):
    """Input rejected before any store access."""


class NoBedAvailable(ReservationError):
    """Every candidate bed is occupied for the requested range."""

    def __init__(self, message: str = "No beds available for the selected dates") -> None:
        super().__init__(message)


class BookingConflict(ReservationError):
    """The chosen bed was taken by an overlapping confirmed reservation."""

    def __init__(
        self, message: str = "Bed is no longer available for these dates, please retry"
    ) -> None:
        super().__init__(message)


__all__ = [
    "BookingConflict",
    "NoBedAvailable",
    "ReservationError",
    "ReservationValidationError",
]
