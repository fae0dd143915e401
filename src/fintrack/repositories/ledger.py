"""Ledger repository: atomic per-period upserts and period lookups.

The period (year, month) is part of each entry's identity, enforced by the
``uq_ledger_user_kind_period`` constraint. Writes go through a single
``INSERT ... ON CONFLICT DO UPDATE`` statement, so two concurrent writers for
the same slot cannot both insert, and an accumulating update cannot lose an
increment between a read and a write.
"""
from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.models.ledger_entry import LedgerEntry, LedgerKind
from fintrack.repositories.base import BaseRepository

_CONFLICT_TARGET = ["user_id", "kind", "period_year", "period_month"]


class LedgerRepository(BaseRepository[LedgerEntry]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, LedgerEntry)

    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert(LedgerEntry)
        if dialect == "sqlite":
            return sqlite.insert(LedgerEntry)
        raise NotImplementedError(f"Ledger upsert is not supported on {dialect}")

    async def upsert_period(
        self,
        user_id: UUID,
        kind: LedgerKind,
        year: int,
        month: int,
        amount: int,
        accumulate: bool,
    ) -> LedgerEntry:
        """Insert the period slot or update it in place.

        Args:
            user_id: Owner of the slot
            kind: Ledger kind
            year: Period year
            month: Period month (1-12)
            amount: Amount in minor units
            accumulate: Add to the stored amount (True) or replace it (False)

        Returns:
            The entry as stored after the write. Does not commit.
        """
        now = datetime.now(timezone.utc)
        stmt = self._insert().values(
            id=uuid4(),
            user_id=user_id,
            kind=kind.value,
            period_year=year,
            period_month=month,
            amount=amount,
            created_at=now,
            updated_at=now,
        )
        new_amount = LedgerEntry.amount + stmt.excluded.amount if accumulate else stmt.excluded.amount
        stmt = stmt.on_conflict_do_update(
            index_elements=_CONFLICT_TARGET,
            set_={"amount": new_amount, "updated_at": now},
        ).returning(LedgerEntry)

        result = await self.db.execute(stmt, execution_options={"populate_existing": True})
        return result.scalar_one()

    async def get_for_period(
        self, user_id: UUID, kind: LedgerKind, year: int, month: int
    ) -> LedgerEntry | None:
        result = await self.db.execute(
            select(LedgerEntry).where(
                LedgerEntry.user_id == user_id,
                LedgerEntry.kind == kind.value,
                LedgerEntry.period_year == year,
                LedgerEntry.period_month == month,
            )
        )
        return result.scalar_one_or_none()

    async def get_latest(self, user_id: UUID, kind: LedgerKind) -> LedgerEntry | None:
        """Entry for the most recent period of this kind."""
        result = await self.db.execute(
            select(LedgerEntry)
            .where(LedgerEntry.user_id == user_id, LedgerEntry.kind == kind.value)
            .order_by(LedgerEntry.period_year.desc(), LedgerEntry.period_month.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()
