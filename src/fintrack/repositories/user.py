"""User repository, also the identity source for simulated attribution."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.models.user import User
from fintrack.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_by_username(self, username: str) -> User | None:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_candidate_ids(self, limit: int = 50) -> list[UUID]:
        """Bounded set of active user IDs, oldest first."""
        result = await self.db.execute(
            select(User.id)
            .where(User.is_active == True, User.deleted_at.is_(None))
            .order_by(User.created_at)
            .limit(limit)
        )
        return list(result.scalars().all())
