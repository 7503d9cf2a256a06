"""Authentication schemas."""
from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict


class Token(BaseModel):
    """Response body for access tokens."""

    access_token: str
    token_type: str = "bearer"


class UserRead(BaseModel):
    """Signed-in operator."""

    id: uuid.UUID
    email: str
    full_name: str
    is_active: bool

    model_config = ConfigDict(from_attributes=True)
