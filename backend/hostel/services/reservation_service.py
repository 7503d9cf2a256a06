"""Reservation persistence: guarded writes, updates and reads."""
from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from datetime import date
from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hostel.models.guest import Guest
from hostel.models.reservation import Reservation, ReservationStatus
from hostel.models.room import Bed
from hostel.services import booking_locks
from hostel.services.availability_service import load_confirmed_overlapping
from hostel.services.errors import (
    BookingConflict,
    ReservationError,
    ReservationValidationError,
)

logger = logging.getLogger(__name__)

OVERLAP_CONSTRAINT = "ex_reservations_bed_overlap"
_EXCLUSION_VIOLATION = "23P01"

_GUEST_FIELDS = frozenset(
    {"name", "last_name", "id_number", "phone", "email", "age", "country"}
)


def _base_reservation_query() -> Select[tuple[Reservation]]:
    return select(Reservation).options(
        selectinload(Reservation.guest),
        selectinload(Reservation.bed).selectinload(Bed.room),
    )


def validate_dates(check_in: date, check_out: date) -> None:
    if check_out <= check_in:
        raise ReservationValidationError("Check-out date must be after check-in date")


def _is_overlap_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    if getattr(orig, "sqlstate", None) == _EXCLUSION_VIOLATION:
        return True
    return OVERLAP_CONSTRAINT in str(orig)


async def list_reservations(
    session: AsyncSession,
    *,
    skip: int = 0,
    limit: int = 50,
) -> Sequence[Reservation]:
    stmt = (
        _base_reservation_query()
        .order_by(Reservation.created_at.desc())
        .offset(skip)
        .limit(limit)
    )
    result = await session.execute(stmt)
    return result.scalars().unique().all()


async def list_reservations_in_range(
    session: AsyncSession,
    *,
    start: date,
    end: date,
) -> Sequence[Reservation]:
    """Return confirmed reservations overlapping ``[start, end)`` by check-in."""
    validate_dates(start, end)
    stmt = (
        _base_reservation_query()
        .where(
            Reservation.status == ReservationStatus.CONFIRMED,
            Reservation.check_in < end,
            Reservation.check_out > start,
        )
        .order_by(Reservation.check_in)
    )
    result = await session.execute(stmt)
    return result.scalars().unique().all()


async def get_reservation(
    session: AsyncSession,
    *,
    reservation_id: uuid.UUID,
) -> Reservation | None:
    stmt = _base_reservation_query().where(Reservation.id == reservation_id)
    result = await session.execute(stmt)
    return result.scalars().unique().one_or_none()


async def _reload(session: AsyncSession, reservation_id: uuid.UUID) -> Reservation:
    stmt = (
        _base_reservation_query()
        .where(Reservation.id == reservation_id)
        .execution_options(populate_existing=True)
    )
    result = await session.execute(stmt)
    reservation = result.scalars().unique().one_or_none()
    if reservation is None:
        raise LookupError(f"Reservation {reservation_id} not found")
    return reservation


async def _get_bed(session: AsyncSession, bed_id: uuid.UUID) -> Bed:
    bed = await session.get(Bed, bed_id)
    if bed is None:
        raise ReservationValidationError("Bed not found")
    return bed


async def _ensure_bed_free(
    session: AsyncSession,
    *,
    bed_id: uuid.UUID,
    check_in: date,
    check_out: date,
    exclude_reservation_id: uuid.UUID | None = None,
) -> None:
    clashes = await load_confirmed_overlapping(
        session,
        check_in=check_in,
        check_out=check_out,
        bed_ids=[bed_id],
        exclude_reservation_id=exclude_reservation_id,
    )
    if clashes:
        logger.warning(
            "Bed %s already held by reservation %s for %s..%s",
            bed_id,
            clashes[0].id,
            check_in,
            check_out,
        )
        raise BookingConflict()


async def _commit_guarded(session: AsyncSession) -> None:
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        if _is_overlap_violation(exc):
            raise BookingConflict() from exc
        raise


async def create_reservation(
    session: AsyncSession,
    *,
    bed_id: uuid.UUID,
    guest_id: uuid.UUID,
    check_in: date,
    check_out: date,
    notes: str | None = None,
) -> Reservation:
    """Insert a confirmed reservation if the bed is still free for the range.

    The overlap re-check and the insert run under the bed's lock, and the
    store's exclusion constraint backs it up across processes. Any pending
    changes in the session (e.g. an upserted guest) are committed together
    with the reservation, or rolled back with it on conflict.
    """
    validate_dates(check_in, check_out)
    await _get_bed(session, bed_id)

    async with booking_locks.bed_lock(bed_id):
        try:
            await _ensure_bed_free(
                session, bed_id=bed_id, check_in=check_in, check_out=check_out
            )
        except BookingConflict:
            await session.rollback()
            raise
        reservation = Reservation(
            bed_id=bed_id,
            guest_id=guest_id,
            check_in=check_in,
            check_out=check_out,
            status=ReservationStatus.CONFIRMED,
            notes=notes,
        )
        session.add(reservation)
        await _commit_guarded(session)

    logger.info(
        "Reservation %s confirmed on bed %s for %s..%s",
        reservation.id,
        bed_id,
        check_in,
        check_out,
    )
    return await _reload(session, reservation.id)


def _check_guest_fields(fields: dict[str, Any]) -> None:
    unknown = set(fields) - _GUEST_FIELDS
    if unknown:
        raise ReservationValidationError(
            f"Unknown guest fields: {', '.join(sorted(unknown))}"
        )


async def _write_guest_fields(
    session: AsyncSession, guest_id: uuid.UUID, fields: dict[str, Any]
) -> None:
    guest = await session.get(Guest, guest_id)
    if guest is None:
        raise ReservationValidationError("Guest not found")
    for name, value in fields.items():
        setattr(guest, name, value)


async def update_reservation(
    session: AsyncSession,
    *,
    reservation: Reservation,
    bed_id: uuid.UUID | None = None,
    check_in: date | None = None,
    check_out: date | None = None,
    status: ReservationStatus | None = None,
    notes: str | None = None,
    guest: dict[str, Any] | None = None,
) -> Reservation:
    """Apply changes to a reservation and write guest contact fields through."""
    reservation_id = reservation.id
    target_bed = bed_id if bed_id is not None else reservation.bed_id
    target_in = check_in if check_in is not None else reservation.check_in
    target_out = check_out if check_out is not None else reservation.check_out
    target_status = status if status is not None else reservation.status
    validate_dates(target_in, target_out)
    if guest:
        _check_guest_fields(guest)
    if bed_id is not None and bed_id != reservation.bed_id:
        await _get_bed(session, bed_id)

    occupancy_changed = (
        target_bed != reservation.bed_id
        or target_in != reservation.check_in
        or target_out != reservation.check_out
        or target_status != reservation.status
    )

    async with booking_locks.bed_lock(target_bed):
        try:
            if occupancy_changed and target_status == ReservationStatus.CONFIRMED:
                await _ensure_bed_free(
                    session,
                    bed_id=target_bed,
                    check_in=target_in,
                    check_out=target_out,
                    exclude_reservation_id=reservation.id,
                )
            reservation.bed_id = target_bed
            reservation.check_in = target_in
            reservation.check_out = target_out
            reservation.status = target_status
            if notes is not None:
                reservation.notes = notes
            if guest:
                await _write_guest_fields(session, reservation.guest_id, guest)
        except ReservationError:
            await session.rollback()
            raise
        session.add(reservation)
        await _commit_guarded(session)

    logger.info("Reservation %s updated", reservation_id)
    return await _reload(session, reservation_id)


async def delete_reservation(
    session: AsyncSession,
    *,
    reservation: Reservation,
) -> None:
    """Hard-delete a reservation; its bed becomes free for the range."""
    await session.delete(reservation)
    await session.commit()
    logger.info("Reservation %s deleted", reservation.id)
