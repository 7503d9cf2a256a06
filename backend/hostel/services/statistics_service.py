"""Occupancy statistics for the dashboard header."""

from __future__ import annotations

import math
import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hostel.models.reservation import Reservation, ReservationStatus
from hostel.models.room import Room, RoomType
from hostel.services import availability_service


@dataclass(slots=True, frozen=True)
class OccupancyStatistics:
    total_rooms: int
    total_beds: int
    total_guests: int
    occupancy_rate: int


def calculate_statistics(
    rooms: Sequence[Room],
    reservations: Iterable[Reservation],
    today: date,
    *,
    room_type: RoomType | None = None,
    room_id: uuid.UUID | None = None,
) -> OccupancyStatistics:
    """Count rooms, beds and guests in house today for the filtered rooms."""
    selected = [
        room
        for room in rooms
        if (room_type is None or room.room_type == room_type)
        and (room_id is None or room.id == room_id)
    ]
    bed_ids = {bed.id for room in selected for bed in room.beds}
    total_beds = sum(room.capacity for room in selected)
    guests = sum(
        1
        for reservation in reservations
        if reservation.status == ReservationStatus.CONFIRMED
        and reservation.check_in <= today < reservation.check_out
        and reservation.bed_id in bed_ids
    )
    # Half-up rounding, matching how the dashboard displays percentages.
    rate = math.floor(guests / total_beds * 100 + 0.5) if total_beds else 0
    return OccupancyStatistics(
        total_rooms=len(selected),
        total_beds=total_beds,
        total_guests=guests,
        occupancy_rate=rate,
    )


async def get_statistics(
    session: AsyncSession,
    *,
    today: date,
    room_type: RoomType | None = None,
    room_id: uuid.UUID | None = None,
) -> OccupancyStatistics:
    rooms = await availability_service.load_rooms(session)
    result = await session.execute(
        select(Reservation).where(
            Reservation.status == ReservationStatus.CONFIRMED,
            Reservation.check_in <= today,
            Reservation.check_out > today,
        )
    )
    return calculate_statistics(
        rooms,
        result.scalars().all(),
        today,
        room_type=room_type,
        room_id=room_id,
    )
