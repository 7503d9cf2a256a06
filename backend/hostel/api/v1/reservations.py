"""Reservation management API for operators."""

from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import IntegrityError

from hostel.api.deps import OperatorDep, SessionDep
from hostel.models.reservation import Reservation
from hostel.schemas.reservation import (
    ReservationCreate,
    ReservationRead,
    ReservationUpdate,
)
from hostel.services import admission_service, guest_service, reservation_service
from hostel.services.errors import (
    BookingConflict,
    NoBedAvailable,
    ReservationValidationError,
)
from hostel.services.guest_service import GuestContact

router = APIRouter()


def _contact_from(payload: ReservationCreate) -> GuestContact:
    guest = payload.guest
    return GuestContact(
        name=guest.name,
        last_name=guest.last_name,
        phone=guest.phone,
        email=str(guest.email),
        country=guest.country,
        age=guest.age,
    )


@router.get("", response_model=list[ReservationRead], summary="List reservations")
async def list_reservations(
    session: SessionDep,
    _: OperatorDep,
    skip: int = 0,
    limit: int = 50,
) -> list[ReservationRead]:
    reservations = await reservation_service.list_reservations(
        session, skip=skip, limit=min(limit, 200)
    )
    return [ReservationRead.model_validate(obj) for obj in reservations]


@router.get(
    "/range",
    response_model=list[ReservationRead],
    summary="Confirmed reservations overlapping a date range",
)
async def list_reservations_in_range(
    start: date,
    end: date,
    session: SessionDep,
    _: OperatorDep,
) -> list[ReservationRead]:
    try:
        reservations = await reservation_service.list_reservations_in_range(
            session, start=start, end=end
        )
    except ReservationValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return [ReservationRead.model_validate(obj) for obj in reservations]


@router.post(
    "",
    response_model=ReservationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create reservation",
)
async def create_reservation(
    payload: ReservationCreate,
    session: SessionDep,
    _: OperatorDep,
) -> ReservationRead:
    contact = _contact_from(payload)
    try:
        if payload.bed_id is None:
            reservation = await admission_service.admit_reservation(
                session,
                id_number=payload.guest.id_number,
                contact=contact,
                check_in=payload.check_in,
                check_out=payload.check_out,
                room_type=payload.room_type,
                notes=payload.notes,
            )
        else:
            guest = await guest_service.upsert_guest(
                session, id_number=payload.guest.id_number, contact=contact
            )
            reservation = await reservation_service.create_reservation(
                session,
                bed_id=payload.bed_id,
                guest_id=guest.id,
                check_in=payload.check_in,
                check_out=payload.check_out,
                notes=payload.notes,
            )
    except (NoBedAvailable, BookingConflict) as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(exc)
        ) from exc
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to create reservation",
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return ReservationRead.model_validate(reservation)


async def _get_reservation_or_404(
    session: SessionDep, reservation_id: uuid.UUID
) -> Reservation:
    reservation = await reservation_service.get_reservation(
        session, reservation_id=reservation_id
    )
    if reservation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Reservation not found"
        )
    return reservation


@router.get(
    "/{reservation_id}", response_model=ReservationRead, summary="Get reservation"
)
async def get_reservation(
    reservation_id: uuid.UUID,
    session: SessionDep,
    _: OperatorDep,
) -> ReservationRead:
    reservation = await _get_reservation_or_404(session, reservation_id)
    return ReservationRead.model_validate(reservation)


@router.patch(
    "/{reservation_id}", response_model=ReservationRead, summary="Update reservation"
)
async def update_reservation(
    reservation_id: uuid.UUID,
    payload: ReservationUpdate,
    session: SessionDep,
    _: OperatorDep,
) -> ReservationRead:
    reservation = await _get_reservation_or_404(session, reservation_id)
    changes = payload.model_dump(exclude_unset=True, exclude={"guest"})
    guest_changes = (
        payload.guest.model_dump(exclude_unset=True) if payload.guest else None
    )
    if guest_changes and "email" in guest_changes:
        guest_changes["email"] = str(guest_changes["email"])
    try:
        updated = await reservation_service.update_reservation(
            session,
            reservation=reservation,
            guest=guest_changes,
            **changes,
        )
    except BookingConflict as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(exc)
        ) from exc
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to update reservation",
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return ReservationRead.model_validate(updated)


@router.delete(
    "/{reservation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete reservation",
)
async def delete_reservation(
    reservation_id: uuid.UUID,
    session: SessionDep,
    _: OperatorDep,
) -> None:
    reservation = await _get_reservation_or_404(session, reservation_id)
    await reservation_service.delete_reservation(session, reservation=reservation)
    return None
