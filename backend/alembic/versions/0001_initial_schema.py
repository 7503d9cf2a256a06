"""Initial hostel schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

OVERLAP_CONSTRAINT = "ex_reservations_bed_overlap"


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    room_type_enum = sa.Enum("pension", "hostel_dorm", name="roomtype")
    bed_type_enum = sa.Enum(
        "single", "double", "bunk_top", "bunk_bottom", name="bedtype"
    )
    reservation_status_enum = sa.Enum(
        "confirmed", "pending", "cancelled", name="reservationstatus"
    )

    op.create_table(
        "rooms",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("room_type", room_type_enum, nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )

    op.create_table(
        "beds",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "room_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("rooms.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("number", sa.Integer(), nullable=False),
        sa.Column("bed_type", bed_type_enum, nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("room_id", "number", name="uq_beds_room_number"),
    )
    op.create_index("ix_beds_room_id", "beds", ["room_id"])

    op.create_table(
        "guests",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("last_name", sa.String(length=120), nullable=False),
        sa.Column("id_number", sa.String(length=64), nullable=False, unique=True),
        sa.Column("phone", sa.String(length=32), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("age", sa.Integer()),
        sa.Column("country", sa.String(length=120), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "age IS NULL OR (age >= 1 AND age <= 120)", name="ck_guests_age_range"
        ),
    )

    op.create_table(
        "reservations",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "bed_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("beds.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "guest_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("guests.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("check_in", sa.Date(), nullable=False),
        sa.Column("check_out", sa.Date(), nullable=False),
        sa.Column(
            "status",
            reservation_status_enum,
            nullable=False,
            server_default="confirmed",
        ),
        sa.Column("notes", sa.String(length=1024)),
        *_timestamps(),
        sa.CheckConstraint("check_out > check_in", name="ck_reservations_dates"),
    )
    op.create_index(
        "ix_reservations_bed_dates",
        "reservations",
        ["bed_id", "check_in", "check_out"],
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=240), nullable=False),
        sa.Column(
            "is_active", sa.Boolean(), nullable=False, server_default=sa.true()
        ),
        *_timestamps(),
    )

    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        # Two confirmed stays on one bed may never share a night.
        op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")
        op.execute(
            f"""
            ALTER TABLE reservations
            ADD CONSTRAINT {OVERLAP_CONSTRAINT}
            EXCLUDE USING gist (
                bed_id WITH =,
                daterange(check_in, check_out) WITH &&
            )
            WHERE (status = 'confirmed')
            """
        )


def downgrade() -> None:
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        op.execute(
            f"ALTER TABLE reservations DROP CONSTRAINT IF EXISTS {OVERLAP_CONSTRAINT}"
        )

    op.drop_table("users")
    op.drop_index("ix_reservations_bed_dates", table_name="reservations")
    op.drop_table("reservations")
    op.drop_table("guests")
    op.drop_index("ix_beds_room_id", table_name="beds")
    op.drop_table("beds")
    op.drop_table("rooms")

    if bind.dialect.name == "postgresql":
        sa.Enum(name="reservationstatus").drop(bind, checkfirst=True)
        sa.Enum(name="bedtype").drop(bind, checkfirst=True)
        sa.Enum(name="roomtype").drop(bind, checkfirst=True)
