"""Availability search, calendar and statistics endpoints."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from hostel.api.deps import OperatorDep, SessionDep
from hostel.models.room import RoomType
from hostel.schemas.availability import (
    AvailabilityRequest,
    AvailabilityResponse,
    BedAvailabilityRead,
    CalendarCellRead,
    CalendarRequest,
    CalendarResponse,
    CalendarRowRead,
    ConflictingReservation,
    RoomAvailabilityRead,
    StatisticsRead,
)
from hostel.services import availability_service, calendar_service, statistics_service

router = APIRouter()


def _guest_name(reservation) -> str | None:
    guest = reservation.guest
    return f"{guest.name} {guest.last_name}" if guest is not None else None


@router.get(
    "/availability",
    response_model=AvailabilityResponse,
    summary="Search bed availability for a date range",
)
async def search_availability(
    params: Annotated[AvailabilityRequest, Depends()],
    session: SessionDep,
    _: OperatorDep,
) -> AvailabilityResponse:
    try:
        result = await availability_service.search(
            session,
            check_in=params.check_in,
            check_out=params.check_out,
            room_type=params.room_type,
            room_id=params.room_id,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return AvailabilityResponse(
        check_in=result.check_in,
        check_out=result.check_out,
        nights=result.nights,
        total_available=result.total_available,
        rooms=[
            RoomAvailabilityRead(
                room_id=entry.room.id,
                name=entry.room.name,
                room_type=entry.room.room_type,
                available_beds=entry.available_beds,
                beds=[
                    BedAvailabilityRead(
                        bed_id=bed_entry.bed.id,
                        number=bed_entry.bed.number,
                        bed_type=bed_entry.bed.bed_type,
                        is_available=bed_entry.is_available,
                        conflicts=[
                            ConflictingReservation(
                                id=conflict.id,
                                check_in=conflict.check_in,
                                check_out=conflict.check_out,
                                status=conflict.status,
                                guest_name=_guest_name(conflict),
                            )
                            for conflict in bed_entry.conflicts
                        ],
                    )
                    for bed_entry in entry.beds
                ],
            )
            for entry in result.rooms
        ],
    )


@router.get(
    "/calendar",
    response_model=CalendarResponse,
    summary="Per-bed occupancy grid",
)
async def get_calendar(
    params: Annotated[CalendarRequest, Depends()],
    session: SessionDep,
    _: OperatorDep,
) -> CalendarResponse:
    try:
        calendar = await calendar_service.get_calendar(
            session,
            start=params.start,
            days=params.days,
            room_type=params.room_type,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return CalendarResponse(
        start=calendar.start,
        days=calendar.days,
        rows=[
            CalendarRowRead(
                room_id=row.room.id,
                room_name=row.room.name,
                bed_id=row.bed.id,
                bed_number=row.bed.number,
                bed_type=row.bed.bed_type,
                cells=[CalendarCellRead.model_validate(cell) for cell in row.cells],
            )
            for row in calendar.rows
        ],
    )


@router.get(
    "/statistics",
    response_model=StatisticsRead,
    summary="Occupancy statistics for today",
)
async def get_statistics(
    session: SessionDep,
    _: OperatorDep,
    room_type: RoomType | None = None,
    room_id: uuid.UUID | None = None,
    today: date | None = None,
) -> StatisticsRead:
    stats = await statistics_service.get_statistics(
        session,
        today=today or date.today(),
        room_type=room_type,
        room_id=room_id,
    )
    return StatisticsRead.model_validate(stats)
