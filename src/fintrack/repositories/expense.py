"""Expense repository with the grouped-by-category aggregate."""
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.models.expense import Expense
from fintrack.repositories.base import BaseRepository


class ExpenseRepository(BaseRepository[Expense]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Expense)

    async def get_total_spent_by_category(self, user_id: UUID) -> dict[str, int]:
        """
        Aggregate total spending by category.
        Returns dict of {category: total_amount}.
        """
        result = await self.db.execute(
            select(Expense.category, func.sum(Expense.amount).label("total"))
            .where(Expense.user_id == user_id, Expense.deleted_at.is_(None))
            .group_by(Expense.category)
        )
        return {row.category: int(row.total) for row in result}
