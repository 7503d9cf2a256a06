"""Test fixtures for the hostel backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from hostel.core.config import get_settings
from hostel.core.security import get_password_hash
from hostel.db.base import Base
from hostel.db.session import dispose_engine, get_sessionmaker
from hostel.main import app
from hostel.models import Bed, BedType, Room, RoomType, User
from hostel.services import booking_locks


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()
    booking_locks.clear()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)
    booking_locks.clear()


@pytest_asyncio.fixture()
async def inventory(reset_database: None, db_url: str) -> dict[str, object]:
    """Seed two single-bed rooms, ``B1`` (pension) then ``B2`` (dorm)."""
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        pension = Room(
            name="Pension - Room 1",
            room_type=RoomType.PENSION,
            capacity=1,
            beds=[Bed(number=1, bed_type=BedType.SINGLE)],
        )
        dorm = Room(
            name="Dorm - Room 1",
            room_type=RoomType.HOSTEL_DORM,
            capacity=1,
            beds=[Bed(number=1, bed_type=BedType.BUNK_BOTTOM)],
        )
        session.add_all([dorm, pension])
        await session.commit()
        # Dorm rooms list first, so the dorm bed is B1.
        return {
            "b1": dorm.beds[0].id,
            "b2": pension.beds[0].id,
            "dorm_room_id": dorm.id,
            "pension_room_id": pension.id,
        }


@pytest_asyncio.fixture()
async def app_context(
    inventory: dict[str, object], db_url: str
) -> AsyncIterator[dict[str, object]]:
    """Yield an async client, an operator account and the seeded beds."""
    sessionmaker = get_sessionmaker(db_url)
    operator_password = "Passw0rd!"

    async with sessionmaker() as session:
        operator = User(
            email="frontdesk@example.com",
            hashed_password=get_password_hash(operator_password),
            full_name="Front Desk",
        )
        session.add(operator)
        await session.commit()

    context = dict(inventory)
    context["operator_email"] = operator.email
    context["operator_password"] = operator_password

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context
