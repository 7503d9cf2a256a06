from __future__ import annotations

import argparse
import asyncio

from hostel.core.config import get_settings
from hostel.db.session import get_sessionmaker
from hostel.services import user_service


async def create(email: str, password: str, full_name: str) -> None:
    settings = get_settings()
    sessionmaker = get_sessionmaker(settings.database_url)
    async with sessionmaker() as session:
        if await user_service.get_user_by_email(session, email) is not None:
            print(f"User {email} already exists")
            return
        await user_service.create_user(
            session, email=email, password=password, full_name=full_name
        )
    print(f"Created operator {email}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a front desk operator")
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("--full-name", default="Front Desk")
    args = parser.parse_args()
    asyncio.run(create(args.email, args.password, args.full_name))


if __name__ == "__main__":
    main()
