"""End-to-end reservation admission: resolve a bed, upsert the guest, book."""
from __future__ import annotations

import logging
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from hostel.models.reservation import Reservation
from hostel.models.room import RoomType
from hostel.services import availability_service, guest_service, reservation_service
from hostel.services.errors import NoBedAvailable
from hostel.services.guest_service import GuestContact

logger = logging.getLogger(__name__)


async def admit_reservation(
    session: AsyncSession,
    *,
    id_number: str,
    contact: GuestContact,
    check_in: date,
    check_out: date,
    room_type: RoomType | None = None,
    notes: str | None = None,
) -> Reservation:
    """Book the first free bed for the range on behalf of a guest.

    Raises ``ReservationValidationError`` before touching the store when the
    range is empty, ``NoBedAvailable`` when every bed is taken and
    ``BookingConflict`` when another admission took the chosen bed first.
    """
    reservation_service.validate_dates(check_in, check_out)

    bed = await availability_service.resolve_bed(
        session, check_in=check_in, check_out=check_out, room_type=room_type
    )
    if bed is None:
        logger.warning("No bed available for %s..%s", check_in, check_out)
        raise NoBedAvailable()
    logger.info(
        "Resolved bed %s (room %s, number %s) for %s..%s",
        bed.id,
        bed.room_id,
        bed.number,
        check_in,
        check_out,
    )
    bed_id = bed.id

    guest = await guest_service.upsert_guest(
        session, id_number=id_number, contact=contact
    )
    return await reservation_service.create_reservation(
        session,
        bed_id=bed_id,
        guest_id=guest.id,
        check_in=check_in,
        check_out=check_out,
        notes=notes,
    )
