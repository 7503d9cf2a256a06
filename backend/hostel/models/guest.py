"""Guest model."""
from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostel.db.base import Base
from hostel.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from hostel.models.reservation import Reservation


class Guest(TimestampMixin, Base):
    """A person staying at the property, keyed by identity document number."""

    __tablename__ = "guests"
    __table_args__ = (
        CheckConstraint(
            "age IS NULL OR (age >= 1 AND age <= 120)", name="ck_guests_age_range"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    last_name: Mapped[str] = mapped_column(String(120), nullable=False)
    id_number: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    age: Mapped[int | None] = mapped_column(Integer)
    country: Mapped[str] = mapped_column(String(120), nullable=False)

    reservations: Mapped[list["Reservation"]] = relationship(
        "Reservation", back_populates="guest"
    )
