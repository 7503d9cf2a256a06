"""Bed availability: overlap checks, first-fit resolution and search."""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol, TypeVar

from sqlalchemy import Select, String, cast, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hostel.models.reservation import Reservation, ReservationStatus
from hostel.models.room import Bed, Room, RoomType
from hostel.services.errors import ReservationValidationError


class _BedLike(Protocol):
    id: uuid.UUID


class _StayLike(Protocol):
    bed_id: uuid.UUID
    check_in: date
    check_out: date
    status: ReservationStatus


BedT = TypeVar("BedT", bound=_BedLike)


@dataclass(slots=True)
class BedAvailability:
    """Availability of a single bed, with the stays blocking it if any."""

    bed: Bed
    is_available: bool
    conflicts: list[Reservation] = field(default_factory=list)


@dataclass(slots=True)
class RoomAvailability:
    """Per-room breakdown of bed availability."""

    room: Room
    beds: list[BedAvailability]

    @property
    def available_beds(self) -> int:
        return sum(1 for entry in self.beds if entry.is_available)


@dataclass(slots=True)
class AvailabilitySearch:
    """Result of an availability search over a date range."""

    check_in: date
    check_out: date
    rooms: list[RoomAvailability]

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    @property
    def total_available(self) -> int:
        return sum(room.available_beds for room in self.rooms)


def overlaps(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """Return True when half-open ranges ``[a_start, a_end)`` and ``[b_start, b_end)`` intersect.

    A stay ending on day D does not conflict with one starting on day D.
    """
    return a_start < b_end and b_start < a_end


def occupied_bed_ids(
    reservations: Iterable[_StayLike], check_in: date, check_out: date
) -> set[uuid.UUID]:
    """Return ids of beds held by a confirmed stay overlapping the range."""
    return {
        reservation.bed_id
        for reservation in reservations
        if reservation.status == ReservationStatus.CONFIRMED
        and overlaps(reservation.check_in, reservation.check_out, check_in, check_out)
    }


def find_available_bed(
    beds: Sequence[BedT],
    confirmed_reservations: Iterable[_StayLike],
    check_in: date,
    check_out: date,
) -> BedT | None:
    """Pick the first bed, in the given order, that is free for the range.

    Returns ``None`` when every bed is occupied.
    """
    occupied = occupied_bed_ids(confirmed_reservations, check_in, check_out)
    for bed in beds:
        if bed.id not in occupied:
            return bed
    return None


def search_availability(
    rooms: Sequence[Room],
    reservations: Iterable[Reservation],
    check_in: date,
    check_out: date,
    *,
    room_type: RoomType | None = None,
    room_id: uuid.UUID | None = None,
) -> AvailabilitySearch:
    """Classify every bed of the selected rooms as available or occupied.

    Unlike :func:`find_available_bed`, every conflicting stay is reported so
    operators can see who holds an occupied bed.
    """
    by_bed: dict[uuid.UUID, list[Reservation]] = {}
    for reservation in reservations:
        if reservation.status != ReservationStatus.CONFIRMED:
            continue
        if overlaps(reservation.check_in, reservation.check_out, check_in, check_out):
            by_bed.setdefault(reservation.bed_id, []).append(reservation)

    results: list[RoomAvailability] = []
    for room in rooms:
        if room_type is not None and room.room_type != room_type:
            continue
        if room_id is not None and room.id != room_id:
            continue
        beds = []
        for bed in room.beds:
            conflicts = sorted(by_bed.get(bed.id, []), key=lambda item: item.check_in)
            beds.append(
                BedAvailability(bed=bed, is_available=not conflicts, conflicts=conflicts)
            )
        results.append(RoomAvailability(room=room, beds=beds))
    return AvailabilitySearch(check_in=check_in, check_out=check_out, rooms=results)


def room_listing_order() -> tuple:
    """Rooms sort by category text then name, on every backend."""
    return (cast(Room.room_type, String), Room.name)


def _rooms_query() -> Select[tuple[Room]]:
    return (
        select(Room)
        .options(selectinload(Room.beds))
        .order_by(*room_listing_order())
    )


async def load_rooms(
    session: AsyncSession, *, room_type: RoomType | None = None
) -> list[Room]:
    """Return rooms with their beds, in listing order."""
    stmt = _rooms_query()
    if room_type is not None:
        stmt = stmt.where(Room.room_type == room_type)
    result = await session.execute(stmt)
    return list(result.scalars().unique().all())


async def load_confirmed_overlapping(
    session: AsyncSession,
    *,
    check_in: date,
    check_out: date,
    bed_ids: Sequence[uuid.UUID] | None = None,
    exclude_reservation_id: uuid.UUID | None = None,
) -> list[Reservation]:
    """Return confirmed reservations overlapping ``[check_in, check_out)``."""
    stmt = (
        select(Reservation)
        .options(selectinload(Reservation.guest))
        .where(
            Reservation.status == ReservationStatus.CONFIRMED,
            Reservation.check_in < check_out,
            Reservation.check_out > check_in,
        )
        .order_by(Reservation.check_in)
    )
    if bed_ids is not None:
        stmt = stmt.where(Reservation.bed_id.in_(bed_ids))
    if exclude_reservation_id is not None:
        stmt = stmt.where(Reservation.id != exclude_reservation_id)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def resolve_bed(
    session: AsyncSession,
    *,
    check_in: date,
    check_out: date,
    room_type: RoomType | None = None,
) -> Bed | None:
    """Load the current inventory and occupancy and pick a free bed."""
    rooms = await load_rooms(session, room_type=room_type)
    beds = [bed for room in rooms for bed in room.beds]
    if not beds:
        return None
    reservations = await load_confirmed_overlapping(
        session, check_in=check_in, check_out=check_out
    )
    return find_available_bed(beds, reservations, check_in, check_out)


async def search(
    session: AsyncSession,
    *,
    check_in: date,
    check_out: date,
    room_type: RoomType | None = None,
    room_id: uuid.UUID | None = None,
) -> AvailabilitySearch:
    """Run an availability search against the store."""
    if check_out <= check_in:
        raise ReservationValidationError("check_out must be after check_in")
    rooms = await load_rooms(session, room_type=room_type)
    reservations = await load_confirmed_overlapping(
        session, check_in=check_in, check_out=check_out
    )
    return search_availability(
        rooms,
        reservations,
        check_in,
        check_out,
        room_type=room_type,
        room_id=room_id,
    )
