"""Overlap rule, first-fit resolution and availability search."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date

import pytest

from hostel.db.session import get_sessionmaker
from hostel.models.reservation import ReservationStatus
from hostel.models.room import RoomType
from hostel.services import admission_service, availability_service
from hostel.services.availability_service import (
    find_available_bed,
    occupied_bed_ids,
    overlaps,
)
from hostel.services.errors import ReservationValidationError
from hostel.services.guest_service import GuestContact


@dataclass
class _Bed:
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass
class _Stay:
    bed_id: uuid.UUID
    check_in: date
    check_out: date
    status: ReservationStatus = ReservationStatus.CONFIRMED


JUNE_10 = date(2025, 6, 10)
JUNE_12 = date(2025, 6, 12)
JUNE_15 = date(2025, 6, 15)


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [
        ((date(2025, 6, 1), date(2025, 6, 5)), (date(2025, 6, 5), date(2025, 6, 8)), False),
        ((date(2025, 6, 1), date(2025, 6, 5)), (date(2025, 6, 4), date(2025, 6, 6)), True),
        ((date(2025, 6, 1), date(2025, 6, 10)), (date(2025, 6, 3), date(2025, 6, 4)), True),
        ((date(2025, 6, 1), date(2025, 6, 2)), (date(2025, 6, 8), date(2025, 6, 9)), False),
    ],
)
def test_overlap_is_half_open_and_symmetric(a, b, expected) -> None:
    assert overlaps(*a, *b) is expected
    assert overlaps(*b, *a) is expected


def test_first_bed_wins_when_all_free() -> None:
    b1, b2 = _Bed(), _Bed()
    assert find_available_bed([b1, b2], [], JUNE_10, JUNE_15) is b1


def test_occupied_first_bed_is_skipped() -> None:
    b1, b2 = _Bed(), _Bed()
    stays = [_Stay(bed_id=b1.id, check_in=JUNE_10, check_out=JUNE_15)]
    assert find_available_bed([b1, b2], stays, date(2025, 6, 12), date(2025, 6, 14)) is b2


def test_back_to_back_stay_reuses_bed() -> None:
    b1, b2 = _Bed(), _Bed()
    stays = [_Stay(bed_id=b1.id, check_in=JUNE_10, check_out=JUNE_15)]
    assert find_available_bed([b1, b2], stays, JUNE_15, date(2025, 6, 18)) is b1


def test_no_bed_when_everything_is_taken() -> None:
    beds = [_Bed(), _Bed()]
    stays = [
        _Stay(bed_id=bed.id, check_in=date(2025, 6, 1), check_out=date(2025, 6, 30))
        for bed in beds
    ]
    assert find_available_bed(beds, stays, JUNE_10, JUNE_12) is None


def test_empty_inventory_has_no_bed() -> None:
    assert find_available_bed([], [], JUNE_10, JUNE_12) is None


def test_cancelled_stays_do_not_hold_beds() -> None:
    b1 = _Bed()
    stays = [
        _Stay(
            bed_id=b1.id,
            check_in=JUNE_10,
            check_out=JUNE_15,
            status=ReservationStatus.CANCELLED,
        )
    ]
    assert occupied_bed_ids(stays, JUNE_10, JUNE_15) == set()
    assert find_available_bed([b1], stays, JUNE_10, JUNE_15) is b1


async def _admit(session, id_number: str, check_in: date, check_out: date):
    return await admission_service.admit_reservation(
        session,
        id_number=id_number,
        contact=GuestContact(
            name="Ana",
            last_name="Silva",
            phone="600000000",
            email=f"{id_number}@example.com",
            country="PT",
        ),
        check_in=check_in,
        check_out=check_out,
    )


@pytest.mark.asyncio
async def test_resolve_bed_follows_listing_order(inventory, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        bed = await availability_service.resolve_bed(
            session, check_in=JUNE_10, check_out=JUNE_15
        )
        assert bed is not None
        assert bed.id == inventory["b1"]

        pension_bed = await availability_service.resolve_bed(
            session, check_in=JUNE_10, check_out=JUNE_15, room_type=RoomType.PENSION
        )
        assert pension_bed is not None
        assert pension_bed.id == inventory["b2"]


@pytest.mark.asyncio
async def test_search_reports_conflicts(inventory, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        first = await _admit(session, "X1", JUNE_10, JUNE_15)

    async with sessionmaker() as session:
        result = await availability_service.search(
            session, check_in=JUNE_12, check_out=date(2025, 6, 14)
        )
    assert result.nights == 2
    assert result.total_available == 1
    beds = {entry.bed.id: entry for room in result.rooms for entry in room.beds}
    taken = beds[inventory["b1"]]
    assert taken.is_available is False
    assert [conflict.id for conflict in taken.conflicts] == [first.id]
    assert taken.conflicts[0].guest.id_number == "X1"
    assert beds[inventory["b2"]].is_available is True


@pytest.mark.asyncio
async def test_search_filters_by_room(inventory, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        result = await availability_service.search(
            session,
            check_in=JUNE_10,
            check_out=JUNE_12,
            room_id=inventory["pension_room_id"],
        )
    assert [room.room.id for room in result.rooms] == [inventory["pension_room_id"]]


@pytest.mark.asyncio
async def test_search_rejects_empty_range(inventory, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        with pytest.raises(ReservationValidationError):
            await availability_service.search(
                session, check_in=JUNE_10, check_out=JUNE_10
            )
