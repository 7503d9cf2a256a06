"""Room and bed inventory API."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import IntegrityError

from hostel.api.deps import OperatorDep, SessionDep
from hostel.models.room import RoomType
from hostel.schemas.room import BedRead, RoomCreate, RoomRead, RoomUpdate
from hostel.services import room_service

router = APIRouter()


@router.get("", response_model=list[RoomRead], summary="List rooms with beds")
async def list_rooms(
    session: SessionDep,
    _: OperatorDep,
    room_type: RoomType | None = None,
) -> list[RoomRead]:
    rooms = await room_service.list_rooms_with_beds(session, room_type=room_type)
    return [RoomRead.model_validate(room) for room in rooms]


@router.get("/beds", response_model=list[BedRead], summary="List beds")
async def list_beds(session: SessionDep, _: OperatorDep) -> list[BedRead]:
    beds = await room_service.list_beds(session)
    return [BedRead.model_validate(bed) for bed in beds]


@router.post(
    "",
    response_model=RoomRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create room",
)
async def create_room(
    payload: RoomCreate, session: SessionDep, _: OperatorDep
) -> RoomRead:
    try:
        room = await room_service.create_room(
            session,
            name=payload.name,
            room_type=payload.room_type,
            bed_types=payload.bed_types,
        )
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Unable to create room"
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return RoomRead.model_validate(room)


async def _get_room_or_404(session: SessionDep, room_id: uuid.UUID):
    room = await room_service.get_room(session, room_id)
    if room is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Room not found"
        )
    return room


@router.patch("/{room_id}", response_model=RoomRead, summary="Update room")
async def update_room(
    room_id: uuid.UUID,
    payload: RoomUpdate,
    session: SessionDep,
    _: OperatorDep,
) -> RoomRead:
    room = await _get_room_or_404(session, room_id)
    updated = await room_service.update_room(
        session, room=room, **payload.model_dump(exclude_unset=True)
    )
    return RoomRead.model_validate(updated)


@router.delete(
    "/{room_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete room"
)
async def delete_room(
    room_id: uuid.UUID, session: SessionDep, _: OperatorDep
) -> None:
    room = await _get_room_or_404(session, room_id)
    try:
        await room_service.delete_room(session, room=room)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(exc)
        ) from exc
    return None
