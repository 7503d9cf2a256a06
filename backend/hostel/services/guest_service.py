"""Guest lookup and upsert helpers."""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hostel.models.guest import Guest

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GuestContact:
    """Mutable contact attributes of a guest."""

    name: str
    last_name: str
    phone: str
    email: str
    country: str
    age: int | None = None


async def get_guest_by_id_number(session: AsyncSession, id_number: str) -> Guest | None:
    """Return the guest holding an identity document number."""
    result = await session.execute(select(Guest).where(Guest.id_number == id_number))
    return result.scalar_one_or_none()


def apply_contact(guest: Guest, contact: GuestContact) -> None:
    """Overwrite every contact field in place (last write wins)."""
    for field_name, value in asdict(contact).items():
        setattr(guest, field_name, value)


async def upsert_guest(
    session: AsyncSession,
    *,
    id_number: str,
    contact: GuestContact,
) -> Guest:
    """Find a guest by identity number and update it, or create it.

    The guest row is flushed, not committed, so the caller can commit it
    together with the reservation that references it. Call it before adding
    other pending changes to the session: losing an insert race rolls back.
    """
    guest = await get_guest_by_id_number(session, id_number)
    if guest is not None:
        apply_contact(guest, contact)
        await session.flush()
        logger.info("Updated guest %s", guest.id)
        return guest

    guest = Guest(id_number=id_number, **asdict(contact))
    session.add(guest)
    try:
        await session.flush()
    except IntegrityError:
        # A concurrent admission inserted the same identity number first.
        await session.rollback()
        guest = await get_guest_by_id_number(session, id_number)
        if guest is None:
            raise
        apply_contact(guest, contact)
        await session.flush()
        logger.info("Guest %s created concurrently, updated instead", guest.id)
        return guest
    logger.info("Created guest %s", guest.id)
    return guest
