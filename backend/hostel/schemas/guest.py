"""Pydantic schemas for guests."""
from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class GuestBase(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    last_name: str = Field(min_length=1, max_length=120)
    id_number: str = Field(min_length=1, max_length=64)
    phone: str = Field(min_length=1, max_length=32)
    email: EmailStr
    age: int | None = Field(default=None, ge=1, le=120)
    country: str = Field(min_length=1, max_length=120)


class GuestCreate(GuestBase):
    """Guest details supplied with a new reservation."""


class GuestUpdate(BaseModel):
    """Guest contact fields written through from a reservation update."""

    name: str | None = Field(default=None, min_length=1, max_length=120)
    last_name: str | None = Field(default=None, min_length=1, max_length=120)
    id_number: str | None = Field(default=None, min_length=1, max_length=64)
    phone: str | None = Field(default=None, min_length=1, max_length=32)
    email: EmailStr | None = None
    age: int | None = Field(default=None, ge=1, le=120)
    country: str | None = Field(default=None, min_length=1, max_length=120)


class GuestRead(GuestBase):
    id: uuid.UUID
    email: str

    model_config = ConfigDict(from_attributes=True)
