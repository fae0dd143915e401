"""Goal repository, including the atomic running-total increment."""
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.models.goal import Goal
from fintrack.repositories.base import BaseRepository


class GoalRepository(BaseRepository[Goal]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Goal)

    async def get_by_user(self, user_id: UUID) -> list[Goal]:
        result = await self.db.execute(
            select(Goal)
            .where(Goal.user_id == user_id, Goal.deleted_at.is_(None))
            .order_by(Goal.created_at)
        )
        return list(result.scalars().all())

    async def increment_invested(self, goal_id: UUID, amount: int) -> int | None:
        """Add ``amount`` to the goal's invested total in a single UPDATE.

        Returns:
            The new total, or None when the goal does not exist. Does not commit.
        """
        result = await self.db.execute(
            update(Goal)
            .where(Goal.id == goal_id)
            .values(invested_amount=Goal.invested_amount + amount)
            .returning(Goal.invested_amount)
        )
        return result.scalar_one_or_none()
