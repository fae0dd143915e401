"""Create demo users so simulated SMS traffic has someone to attribute to.

Usage:
    python scripts/seed_users.py [count]
"""

import asyncio
import sys

from fintrack.db.session import AsyncSessionLocal
from fintrack.models.user import User
from fintrack.repositories.user import UserRepository

DEMO_USERNAMES = ["asha", "rohan", "meera", "kabir", "zoya"]


async def seed_users(count: int = len(DEMO_USERNAMES)) -> int:
    """Insert missing demo users. Returns how many were created."""
    created = 0
    async with AsyncSessionLocal() as session:
        repo = UserRepository(session)
        for index in range(count):
            username = (
                DEMO_USERNAMES[index]
                if index < len(DEMO_USERNAMES)
                else f"demo_user_{index + 1}"
            )
            if await repo.get_by_username(username):
                continue
            await repo.create(User(username=username))
            created += 1
    return created


if __name__ == "__main__":
    count = int(sys.argv[1]) if len(sys.argv) > 1 else len(DEMO_USERNAMES)
    print("Seeding demo users...")
    created = asyncio.run(seed_users(count))
    print(f"Created {created} user(s)")
