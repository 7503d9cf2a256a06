"""Public reservation functions called by the booking automation bot.

Both entry points share one contract: JSON in, ``{success, message, ...}``
out, CORS open to any origin. ``book-bed`` additionally honours ``roomType``.
"""

from __future__ import annotations

import json
import logging
import traceback
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from hostel.api.deps import SessionDep
from hostel.core.config import get_settings
from hostel.schemas.functions import (
    FunctionReservationRequest,
    FunctionReservationView,
    FunctionResponse,
    missing_fields,
)
from hostel.services import admission_service
from hostel.services.errors import (
    BookingConflict,
    NoBedAvailable,
    ReservationValidationError,
)
from hostel.services.guest_service import GuestContact

logger = logging.getLogger(__name__)

router = APIRouter()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

_OTHER_METHODS = ["GET", "PUT", "PATCH", "DELETE"]


def _reply(status_code: int, body: FunctionResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_unset=True),
        headers=CORS_HEADERS,
    )


def _failure(status_code: int, message: str, **extra: Any) -> JSONResponse:
    fields = {key: value for key, value in extra.items() if value is not None}
    return _reply(
        status_code, FunctionResponse(success=False, message=message, **fields)
    )


def _validation_message(exc: ValidationError) -> str:
    first = exc.errors()[0]
    ctx_error = first.get("ctx", {}).get("error")
    if ctx_error is not None:
        return str(ctx_error)
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first['msg']}" if location else first["msg"]


async def _handle_create(
    request: Request, session: SessionDep, *, honour_room_type: bool
) -> JSONResponse:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _failure(status.HTTP_400_BAD_REQUEST, "Request body must be valid JSON")
    if not isinstance(body, dict):
        return _failure(
            status.HTTP_400_BAD_REQUEST, "Request body must be a JSON object"
        )

    flags = missing_fields(body)
    if any(flags.values()):
        logger.info(
            "Rejected reservation request, missing %s",
            [key for key, missing in flags.items() if missing],
        )
        return _failure(
            status.HTTP_400_BAD_REQUEST,
            "Missing required reservation fields",
            missing_fields=flags,
        )

    try:
        payload = FunctionReservationRequest.model_validate(body)
    except ValidationError as exc:
        return _failure(status.HTTP_400_BAD_REQUEST, _validation_message(exc))

    contact = GuestContact(
        name=payload.name,
        last_name=payload.last_name,
        phone=payload.phone,
        email=payload.email,
        country=payload.country,
        age=payload.age,
    )
    try:
        reservation = await admission_service.admit_reservation(
            session,
            id_number=payload.id_number,
            contact=contact,
            check_in=payload.check_in,
            check_out=payload.check_out,
            room_type=payload.room_type if honour_room_type else None,
            notes=payload.notes,
        )
    except ReservationValidationError as exc:
        return _failure(status.HTTP_400_BAD_REQUEST, str(exc))
    except (NoBedAvailable, BookingConflict) as exc:
        return _failure(status.HTTP_409_CONFLICT, str(exc))
    except SQLAlchemyError as exc:
        logger.exception("Store failure while creating reservation")
        error = traceback.format_exc() if get_settings().is_development else None
        return _failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            str(exc.orig) if getattr(exc, "orig", None) is not None else str(exc),
            error=error,
        )
    except Exception as exc:
        logger.exception("Unexpected failure while creating reservation")
        error = traceback.format_exc() if get_settings().is_development else None
        return _failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            str(exc) or "Internal server error",
            error=error,
        )

    logger.info("Reservation %s created via function", reservation.id)
    return _reply(
        status.HTTP_200_OK,
        FunctionResponse(
            success=True,
            message="Reservation created successfully",
            reservation=FunctionReservationView.from_reservation(reservation),
        ),
    )


async def _method_not_allowed() -> JSONResponse:
    return _failure(status.HTTP_405_METHOD_NOT_ALLOWED, "Method not allowed")


@router.post("/create-reservation", summary="Create reservation (automation)")
async def create_reservation(request: Request, session: SessionDep) -> JSONResponse:
    """Book the first free bed for the guest, ignoring any room preference."""
    return await _handle_create(request, session, honour_room_type=False)


@router.post("/book-bed", summary="Create reservation with room preference")
async def book_bed(request: Request, session: SessionDep) -> JSONResponse:
    """Book the first free bed, restricted to ``roomType`` when given."""
    return await _handle_create(request, session, honour_room_type=True)


for _path in ("/create-reservation", "/book-bed"):
    router.add_api_route(
        _path, _method_not_allowed, methods=_OTHER_METHODS, include_in_schema=False
    )
