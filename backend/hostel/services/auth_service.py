"""Authentication service helpers."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from hostel.core.security import create_access_token, verify_password
from hostel.models.user import User
from hostel.services import user_service


async def authenticate_user(
    session: AsyncSession, email: str, password: str
) -> User | None:
    """Validate operator credentials and return the user if correct."""
    user = await user_service.get_user_by_email(session, email=email)
    if user is None or not user.is_active:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def create_access_token_for_user(user: User) -> str:
    """Generate a JWT for an operator."""
    return create_access_token(str(user.id))
