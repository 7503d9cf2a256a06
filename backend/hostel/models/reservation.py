"""Reservation model."""
from __future__ import annotations

import enum
import uuid
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Date, Enum, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostel.db.base import Base
from hostel.models.mixins import TimestampMixin, enum_values

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from hostel.models.guest import Guest
    from hostel.models.room import Bed


class ReservationStatus(str, enum.Enum):
    """Lifecycle states for reservations.

    Admission only ever produces ``CONFIRMED``; the other states are reserved.
    """

    CONFIRMED = "confirmed"
    PENDING = "pending"
    CANCELLED = "cancelled"


class Reservation(TimestampMixin, Base):
    """A guest's stay on one bed for ``[check_in, check_out)``."""

    __tablename__ = "reservations"
    __table_args__ = (
        CheckConstraint("check_out > check_in", name="ck_reservations_dates"),
        Index("ix_reservations_bed_dates", "bed_id", "check_in", "check_out"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    bed_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("beds.id", ondelete="RESTRICT"), nullable=False
    )
    guest_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("guests.id", ondelete="RESTRICT"), nullable=False
    )
    check_in: Mapped[date] = mapped_column(Date, nullable=False)
    check_out: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[ReservationStatus] = mapped_column(
        Enum(ReservationStatus, name="reservationstatus", values_callable=enum_values),
        default=ReservationStatus.CONFIRMED,
        nullable=False,
    )
    notes: Mapped[str | None] = mapped_column(String(1024))

    bed: Mapped["Bed"] = relationship("Bed")
    guest: Mapped["Guest"] = relationship("Guest", back_populates="reservations")
