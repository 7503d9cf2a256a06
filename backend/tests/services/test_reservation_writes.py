"""Admission, guarded writes and guest upserts against the store."""

from __future__ import annotations

import asyncio
import uuid
from datetime import date

import pytest
from sqlalchemy import func, select

from hostel.db.session import get_sessionmaker
from hostel.models import Guest, Reservation, ReservationStatus, RoomType
from hostel.services import (
    admission_service,
    availability_service,
    guest_service,
    reservation_service,
)
from hostel.services.errors import (
    BookingConflict,
    NoBedAvailable,
    ReservationValidationError,
)
from hostel.services.guest_service import GuestContact

pytestmark = pytest.mark.asyncio

CHECK_IN = date(2025, 6, 10)
CHECK_OUT = date(2025, 6, 15)


def _contact(name: str = "Ana", **overrides) -> GuestContact:
    values = {
        "name": name,
        "last_name": "Silva",
        "phone": "600000000",
        "email": f"{name.lower()}@example.com",
        "country": "PT",
        "age": 30,
    }
    values.update(overrides)
    return GuestContact(**values)


async def _admit(session, id_number: str, check_in=CHECK_IN, check_out=CHECK_OUT, **kwargs):
    return await admission_service.admit_reservation(
        session,
        id_number=id_number,
        contact=_contact(id_number),
        check_in=check_in,
        check_out=check_out,
        **kwargs,
    )


async def test_admission_fills_beds_in_order(inventory, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        first = await _admit(session, "A1")
        second = await _admit(session, "A2", check_in=date(2025, 6, 12), check_out=date(2025, 6, 14))
        assert first.bed_id == inventory["b1"]
        assert first.status == ReservationStatus.CONFIRMED
        assert first.bed.room.name == "Dorm - Room 1"
        assert second.bed_id == inventory["b2"]

        with pytest.raises(NoBedAvailable):
            await _admit(session, "A3", check_in=date(2025, 6, 11), check_out=date(2025, 6, 13))

        # A stay starting on a check-out day reuses the first bed.
        follow_up = await _admit(session, "A4", check_in=CHECK_OUT, check_out=date(2025, 6, 18))
        assert follow_up.bed_id == inventory["b1"]

    async with sessionmaker() as session:
        orphaned = await guest_service.get_guest_by_id_number(session, "A3")
        assert orphaned is None


async def test_admission_rejects_empty_range_before_store_access(
    inventory, db_url: str
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        with pytest.raises(ReservationValidationError):
            await _admit(session, "Z1", check_in=CHECK_IN, check_out=CHECK_IN)
        count = await session.execute(select(func.count()).select_from(Guest))
        assert count.scalar_one() == 0


async def test_room_type_restricts_candidates(inventory, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        reservation = await _admit(session, "P1", room_type=RoomType.PENSION)
        assert reservation.bed_id == inventory["b2"]
        with pytest.raises(NoBedAvailable):
            await _admit(session, "P2", room_type=RoomType.PENSION)


async def test_guest_upsert_is_keyed_by_id_number(reset_database, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        created = await guest_service.upsert_guest(
            session, id_number="ID-9", contact=_contact("Ana")
        )
        await session.commit()
        updated = await guest_service.upsert_guest(
            session,
            id_number="ID-9",
            contact=_contact("Ana", phone="611111111", age=None),
        )
        await session.commit()
        assert updated.id == created.id

    async with sessionmaker() as session:
        count = await session.execute(select(func.count()).select_from(Guest))
        assert count.scalar_one() == 1
        guest = await guest_service.get_guest_by_id_number(session, "ID-9")
        assert guest is not None
        assert guest.phone == "611111111"
        assert guest.age is None


async def test_returning_guest_keeps_one_record(inventory, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        first = await _admit(session, "R1")
        second = await _admit(session, "R1", check_in=date(2025, 7, 1), check_out=date(2025, 7, 3))
        assert first.guest_id == second.guest_id


async def test_explicit_bed_conflict_is_refused(inventory, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        await _admit(session, "E1")
        guest = await guest_service.upsert_guest(
            session, id_number="E2", contact=_contact("Eva")
        )
        with pytest.raises(BookingConflict):
            await reservation_service.create_reservation(
                session,
                bed_id=inventory["b1"],
                guest_id=guest.id,
                check_in=date(2025, 6, 14),
                check_out=date(2025, 6, 16),
            )

    async with sessionmaker() as session:
        # The guest flushed alongside the refused reservation is rolled back.
        assert await guest_service.get_guest_by_id_number(session, "E2") is None


async def test_unknown_bed_is_a_validation_error(inventory, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        guest = await guest_service.upsert_guest(
            session, id_number="U1", contact=_contact("Uma")
        )
        with pytest.raises(ReservationValidationError):
            await reservation_service.create_reservation(
                session,
                bed_id=uuid.uuid4(),
                guest_id=guest.id,
                check_in=CHECK_IN,
                check_out=CHECK_OUT,
            )


async def test_delete_frees_the_bed(inventory, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        reservation = await _admit(session, "D1")
        await reservation_service.delete_reservation(session, reservation=reservation)

    async with sessionmaker() as session:
        bed = await availability_service.resolve_bed(
            session, check_in=CHECK_IN, check_out=CHECK_OUT
        )
        assert bed is not None
        assert bed.id == inventory["b1"]


async def test_concurrent_admissions_for_the_last_bed(inventory, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        # Only the pension bed stays free.
        await _admit(
            session, "C0", check_in=date(2025, 6, 1), check_out=date(2025, 6, 30)
        )

    async def attempt(id_number: str):
        async with sessionmaker() as session:
            return await _admit(session, id_number)

    outcomes = await asyncio.gather(
        attempt("C1"), attempt("C2"), return_exceptions=True
    )
    winners = [item for item in outcomes if isinstance(item, Reservation)]
    losers = [item for item in outcomes if not isinstance(item, Reservation)]
    assert len(winners) == 1
    assert len(losers) == 1
    assert isinstance(losers[0], (BookingConflict, NoBedAvailable))

    async with sessionmaker() as session:
        stays = await availability_service.load_confirmed_overlapping(
            session, check_in=CHECK_IN, check_out=CHECK_OUT
        )
        assert sorted(stay.bed_id for stay in stays) == sorted(
            [inventory["b1"], inventory["b2"]]
        )


async def test_update_moves_dates_and_writes_guest_through(
    inventory, db_url: str
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        reservation = await _admit(session, "M1")
        updated = await reservation_service.update_reservation(
            session,
            reservation=reservation,
            check_out=date(2025, 6, 20),
            notes="Late arrival",
            guest={"phone": "699999999"},
        )
        assert updated.check_out == date(2025, 6, 20)
        assert updated.notes == "Late arrival"
        assert updated.guest.phone == "699999999"


async def test_update_onto_taken_bed_conflicts(inventory, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        first = await _admit(session, "M2")
        second = await _admit(session, "M3")
        second_id = second.id
        assert second.bed_id == inventory["b2"]
        with pytest.raises(BookingConflict):
            await reservation_service.update_reservation(
                session, reservation=second, bed_id=first.bed_id
            )

    async with sessionmaker() as session:
        unchanged = await reservation_service.get_reservation(
            session, reservation_id=second_id
        )
        assert unchanged is not None
        assert unchanged.bed_id == inventory["b2"]


async def test_cancelling_releases_the_bed(inventory, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        reservation = await _admit(session, "K1")
        cancelled = await reservation_service.update_reservation(
            session, reservation=reservation, status=ReservationStatus.CANCELLED
        )
        assert cancelled.status == ReservationStatus.CANCELLED
        replacement = await _admit(session, "K2")
        assert replacement.bed_id == inventory["b1"]


async def test_range_listing_returns_confirmed_overlaps(inventory, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        await _admit(session, "L1")
        await _admit(session, "L2", check_in=date(2025, 7, 1), check_out=date(2025, 7, 4))
        in_june = await reservation_service.list_reservations_in_range(
            session, start=date(2025, 6, 1), end=date(2025, 7, 1)
        )
        assert [item.guest.id_number for item in in_june] == ["L1"]
        with pytest.raises(ReservationValidationError):
            await reservation_service.list_reservations_in_range(
                session, start=date(2025, 7, 1), end=date(2025, 6, 1)
            )


async def test_shortening_a_stay_frees_the_remaining_nights(
    inventory, db_url: str
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        reservation = await _admit(session, "S1")
        shortened = await reservation_service.update_reservation(
            session, reservation=reservation, check_out=date(2025, 6, 12)
        )
        assert shortened.id == reservation.id
        assert shortened.check_out == date(2025, 6, 12)
        assert shortened.bed.room.name == "Dorm - Room 1"

        follower = await _admit(session, "S2", check_in=date(2025, 6, 12))
        assert follower.bed_id == inventory["b1"]


async def test_moving_beds_reloads_the_room(inventory, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        reservation = await _admit(session, "S3")
        moved = await reservation_service.update_reservation(
            session, reservation=reservation, bed_id=inventory["b2"]
        )
        assert moved.bed_id == inventory["b2"]
        assert moved.bed.room.room_type == RoomType.PENSION


async def test_update_of_a_removed_reservation_raises_lookup_error(
    inventory, db_url: str
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        reservation = await _admit(session, "S4")
        async with sessionmaker() as other:
            stale = await reservation_service.get_reservation(
                other, reservation_id=reservation.id
            )
            assert stale is not None
            await reservation_service.delete_reservation(other, reservation=stale)

        with pytest.raises(LookupError):
            await reservation_service.update_reservation(
                session, reservation=reservation
            )
