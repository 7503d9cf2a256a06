"""Seed the default pension and dorm rooms when the inventory is empty."""
from __future__ import annotations

import asyncio

from hostel.db.session import get_sessionmaker
from hostel.services import room_service


async def seed() -> None:
    sessionmaker = get_sessionmaker()
    async with sessionmaker() as session:
        created = await room_service.seed_inventory(session)
    if created:
        print(f"Seeded {created} room(s).")
    else:
        print("Rooms already present, nothing seeded.")


def main() -> None:
    asyncio.run(seed())


if __name__ == "__main__":
    main()
