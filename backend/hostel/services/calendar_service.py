"""Per-bed occupancy grid for the calendar view."""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from hostel.core.config import get_settings
from hostel.models.reservation import Reservation, ReservationStatus
from hostel.models.room import Bed, Room, RoomType
from hostel.services import availability_service, reservation_service


@dataclass(slots=True)
class CalendarCell:
    day: date
    reservation_id: uuid.UUID | None = None
    guest_name: str | None = None
    is_check_in: bool = False


@dataclass(slots=True)
class CalendarRow:
    room: Room
    bed: Bed
    cells: list[CalendarCell]


@dataclass(slots=True)
class Calendar:
    start: date
    days: list[date]
    rows: list[CalendarRow]


def _guest_label(reservation: Reservation) -> str | None:
    guest = reservation.guest
    if guest is None:
        return None
    return f"{guest.name} {guest.last_name}".strip()


def build_calendar(
    rooms: Sequence[Room],
    reservations: Iterable[Reservation],
    start: date,
    days: int,
) -> Calendar:
    """Lay out confirmed stays as one row per bed and one cell per day.

    A stay occupies day D when ``check_in <= D < check_out``.
    """
    window = [start + timedelta(days=offset) for offset in range(days)]
    end = start + timedelta(days=days)

    by_bed: dict[uuid.UUID, list[Reservation]] = {}
    for reservation in reservations:
        if reservation.status != ReservationStatus.CONFIRMED:
            continue
        if availability_service.overlaps(
            reservation.check_in, reservation.check_out, start, end
        ):
            by_bed.setdefault(reservation.bed_id, []).append(reservation)

    rows: list[CalendarRow] = []
    for room in rooms:
        for bed in room.beds:
            stays = by_bed.get(bed.id, [])
            cells = []
            for day in window:
                cell = CalendarCell(day=day)
                for stay in stays:
                    if stay.check_in <= day < stay.check_out:
                        cell.reservation_id = stay.id
                        cell.guest_name = _guest_label(stay)
                        cell.is_check_in = stay.check_in == day
                        break
                cells.append(cell)
            rows.append(CalendarRow(room=room, bed=bed, cells=cells))
    return Calendar(start=start, days=window, rows=rows)


async def get_calendar(
    session: AsyncSession,
    *,
    start: date,
    days: int,
    room_type: RoomType | None = None,
) -> Calendar:
    max_days = get_settings().calendar_max_days
    if days < 1 or days > max_days:
        raise ValueError(f"days must be between 1 and {max_days}")
    rooms = await availability_service.load_rooms(session, room_type=room_type)
    reservations = await reservation_service.list_reservations_in_range(
        session, start=start, end=start + timedelta(days=days)
    )
    return build_calendar(rooms, reservations, start, days)
