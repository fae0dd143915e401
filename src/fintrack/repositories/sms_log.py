"""SMS log repository: append, inspection, and the trailing-window count."""
from datetime import datetime
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.models.sms_log import SmsLog
from fintrack.repositories.base import BaseRepository


class SmsLogRepository(BaseRepository[SmsLog]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, SmsLog)

    async def count_since(self, user_id: UUID, since: datetime) -> int:
        """Count the user's logged messages created at or after ``since``.

        Runs inside a savepoint: a failed count rolls back only itself, so the
        surrounding transaction stays usable for the log write that follows.
        """
        async with self.db.begin_nested():
            result = await self.db.execute(
                select(func.count(SmsLog.id)).where(
                    SmsLog.user_id == user_id, SmsLog.created_at >= since
                )
            )
            return int(result.scalar_one())

    async def get_by_user(self, user_id: UUID, limit: int = 50) -> list[SmsLog]:
        """Most recent logs first."""
        result = await self.db.execute(
            select(SmsLog)
            .where(SmsLog.user_id == user_id)
            .order_by(SmsLog.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
