"""Room and bed inventory management."""
from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hostel.models.reservation import Reservation
from hostel.models.room import Bed, BedType, Room, RoomType
from hostel.services.availability_service import load_rooms, room_listing_order

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class RoomLayout:
    """Blueprint for seeding a room and its beds."""

    name: str
    room_type: RoomType
    bed_types: tuple[BedType, ...]


def _bunks(count: int) -> tuple[BedType, ...]:
    return (BedType.BUNK_TOP, BedType.BUNK_BOTTOM) * count


DEFAULT_LAYOUT: tuple[RoomLayout, ...] = (
    RoomLayout("Pension - Room 1", RoomType.PENSION, (BedType.SINGLE,) * 3),
    RoomLayout("Pension - Room 2", RoomType.PENSION, (BedType.SINGLE,) * 3),
    RoomLayout("Pension - Room 3", RoomType.PENSION, (BedType.DOUBLE,)),
    RoomLayout("Dorm - Room 1", RoomType.HOSTEL_DORM, _bunks(4)),
    RoomLayout("Dorm - Room 2", RoomType.HOSTEL_DORM, _bunks(4)),
    RoomLayout("Dorm - Room 3", RoomType.HOSTEL_DORM, _bunks(4)),
)


async def list_rooms_with_beds(
    session: AsyncSession, *, room_type: RoomType | None = None
) -> list[Room]:
    """Return rooms ordered by type and name with beds ordered by number."""
    return await load_rooms(session, room_type=room_type)


async def list_beds(session: AsyncSession) -> Sequence[Bed]:
    result = await session.execute(
        select(Bed).join(Bed.room).order_by(*room_listing_order(), Bed.number)
    )
    return result.scalars().all()


async def get_room(session: AsyncSession, room_id: uuid.UUID) -> Room | None:
    result = await session.execute(
        select(Room).options(selectinload(Room.beds)).where(Room.id == room_id)
    )
    return result.scalar_one_or_none()


async def _reload_room(session: AsyncSession, room_id: uuid.UUID) -> Room:
    result = await session.execute(
        select(Room)
        .options(selectinload(Room.beds))
        .where(Room.id == room_id)
        .execution_options(populate_existing=True)
    )
    room = result.scalar_one_or_none()
    if room is None:
        raise LookupError(f"Room {room_id} not found")
    return room


async def create_room(
    session: AsyncSession,
    *,
    name: str,
    room_type: RoomType,
    bed_types: Sequence[BedType],
) -> Room:
    """Create a room with beds numbered from 1; capacity follows the bed count."""
    if not bed_types:
        raise ValueError("A room needs at least one bed")
    room = Room(
        name=name,
        room_type=room_type,
        capacity=len(bed_types),
        beds=[
            Bed(number=number, bed_type=bed_type)
            for number, bed_type in enumerate(bed_types, start=1)
        ],
    )
    session.add(room)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    logger.info("Created room %s with %d bed(s)", room.id, room.capacity)
    return await _reload_room(session, room.id)


async def update_room(
    session: AsyncSession,
    *,
    room: Room,
    name: str | None = None,
    room_type: RoomType | None = None,
) -> Room:
    if name is not None:
        room.name = name
    if room_type is not None:
        room.room_type = room_type
    room_id = room.id
    await session.commit()
    logger.info("Updated room %s", room_id)
    return await _reload_room(session, room_id)


async def delete_room(session: AsyncSession, *, room: Room) -> None:
    """Delete a room and its beds unless any reservation references them."""
    booked = await session.execute(
        select(func.count())
        .select_from(Reservation)
        .join(Bed, Reservation.bed_id == Bed.id)
        .where(Bed.room_id == room.id)
    )
    if booked.scalar_one():
        raise ValueError("Room has reservations and cannot be deleted")
    await session.delete(room)
    await session.commit()
    logger.info("Deleted room %s", room.id)


async def seed_inventory(
    session: AsyncSession, layout: Sequence[RoomLayout] = DEFAULT_LAYOUT
) -> int:
    """Create the default rooms when the inventory is empty.

    Returns the number of rooms created.
    """
    existing = await session.execute(select(func.count()).select_from(Room))
    if existing.scalar_one():
        return 0
    for entry in layout:
        session.add(
            Room(
                name=entry.name,
                room_type=entry.room_type,
                capacity=len(entry.bed_types),
                beds=[
                    Bed(number=number, bed_type=bed_type)
                    for number, bed_type in enumerate(entry.bed_types, start=1)
                ],
            )
        )
    await session.commit()
    logger.info("Seeded %d room(s)", len(layout))
    return len(layout)
