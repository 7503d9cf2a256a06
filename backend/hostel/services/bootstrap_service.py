"""Bootstrap helpers for default data."""

from __future__ import annotations

import logging

from hostel.core.config import get_settings
from hostel.db.session import get_sessionmaker
from hostel.services import room_service, user_service

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_NAME = "Front Desk"


async def ensure_default_admin() -> None:
    """Create the configured operator account if it does not yet exist."""

    settings = get_settings()
    if not settings.default_admin_email or not settings.default_admin_password:
        return
    sessionmaker = get_sessionmaker(settings.database_url)
    async with sessionmaker() as session:
        existing = await user_service.get_user_by_email(
            session, settings.default_admin_email
        )
        if existing is not None:
            return
        await user_service.create_user(
            session,
            email=settings.default_admin_email,
            password=settings.default_admin_password,
            full_name=DEFAULT_ADMIN_NAME,
        )
        logger.info("Created default operator %s", settings.default_admin_email)


async def ensure_default_inventory() -> None:
    """Seed the default room layout when enabled and the store is empty."""

    settings = get_settings()
    if not settings.seed_inventory:
        return
    sessionmaker = get_sessionmaker(settings.database_url)
    async with sessionmaker() as session:
        await room_service.seed_inventory(session)
