"""Room and bed inventory models."""
from __future__ import annotations

import enum
import uuid

from sqlalchemy import Enum, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostel.db.base import Base
from hostel.models.mixins import TimestampMixin, enum_values


class RoomType(str, enum.Enum):
    """Room categories offered by the property."""

    PENSION = "pension"
    HOSTEL_DORM = "hostel_dorm"


class BedType(str, enum.Enum):
    """Bed categories."""

    SINGLE = "single"
    DOUBLE = "double"
    BUNK_TOP = "bunk_top"
    BUNK_BOTTOM = "bunk_bottom"


class Room(TimestampMixin, Base):
    """A bookable room grouping one or more beds."""

    __tablename__ = "rooms"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    room_type: Mapped[RoomType] = mapped_column(
        Enum(RoomType, name="roomtype", values_callable=enum_values),
        nullable=False,
    )
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    beds: Mapped[list["Bed"]] = relationship(
        "Bed",
        back_populates="room",
        cascade="all, delete-orphan",
        order_by="Bed.number",
        passive_deletes=True,
    )


class Bed(TimestampMixin, Base):
    """Immutable bed inventory; reservations reference beds, not the reverse."""

    __tablename__ = "beds"
    __table_args__ = (UniqueConstraint("room_id", "number", name="uq_beds_room_number"),)

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    room_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False, index=True
    )
    number: Mapped[int] = mapped_column(Integer, nullable=False)
    bed_type: Mapped[BedType] = mapped_column(
        Enum(BedType, name="bedtype", values_callable=enum_values),
        nullable=False,
    )

    room: Mapped[Room] = relationship("Room", back_populates="beds")
