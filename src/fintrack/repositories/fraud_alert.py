"""Fraud alert repository."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.models.fraud_alert import FraudAlert
from fintrack.repositories.base import BaseRepository


class FraudAlertRepository(BaseRepository[FraudAlert]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, FraudAlert)

    async def get_by_user(self, user_id: UUID, limit: int = 50) -> list[FraudAlert]:
        result = await self.db.execute(
            select(FraudAlert)
            .where(FraudAlert.user_id == user_id)
            .order_by(FraudAlert.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
