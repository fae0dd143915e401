"""Monthly ledger reconciliation for income and goal contributions.

Income and goal contributions share the per-period slot model but merge
differently within a period:

- income: the latest report for the month replaces the stored value
- goal contribution: each contribution is added to the month's value, and
  separately to the goal's all-time invested total

Income takes its period from the caller's observation time; goal
contributions always use the period current at call time.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.core.clock import Clock, local_now
from fintrack.core.exceptions import GoalNotFoundError, ReconciliationError, ValidationError
from fintrack.core.money import to_minor_units
from fintrack.models.ledger_entry import LedgerEntry, LedgerKind
from fintrack.repositories.goal import GoalRepository
from fintrack.repositories.ledger import LedgerRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoalContributionResult:
    goal_id: UUID
    goal_total: int
    period_year: int
    period_month: int
    period_amount: int


class LedgerReconciler:
    """Applies transactions to the period-bucketed ledgers."""

    def __init__(self, db: AsyncSession, clock: Clock | None = None):
        self.db = db
        self.clock = clock or local_now
        self.ledger_repo = LedgerRepository(db)
        self.goal_repo = GoalRepository(db)

    async def apply_income(
        self, user_id: UUID, amount: Decimal, observed_at: datetime
    ) -> LedgerEntry:
        """Record the income for the month of ``observed_at`` (replace semantics).

        Args:
            user_id: Owner of the ledger
            amount: Income amount in currency units
            observed_at: When the income was observed; selects the period

        Returns:
            The period's income entry after the write
        """
        amount_minor = self._minor_units(amount)
        try:
            entry = await self.ledger_repo.upsert_period(
                user_id=user_id,
                kind=LedgerKind.INCOME,
                year=observed_at.year,
                month=observed_at.month,
                amount=amount_minor,
                accumulate=False,
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            "Income reconciled",
            extra={
                "user_id": str(user_id),
                "period": f"{entry.period_year}-{entry.period_month:02d}",
            },
        )
        return entry

    async def apply_goal_contribution(
        self, goal_id: UUID, user_id: UUID, amount: Decimal
    ) -> GoalContributionResult:
        """Add a contribution to the goal total and to this month's entry.

        Both writes share one transaction, total first. If the monthly entry
        cannot be written the transaction is rolled back and
        ReconciliationError is raised, so the two aggregates never diverge.

        Raises:
            GoalNotFoundError: If the goal does not exist
            ReconciliationError: If the monthly entry write fails
        """
        amount_minor = self._minor_units(amount)
        now = self.clock()

        try:
            goal_total = await self.goal_repo.increment_invested(goal_id, amount_minor)
        except Exception:
            await self.db.rollback()
            raise
        if goal_total is None:
            await self.db.rollback()
            raise GoalNotFoundError("GOAL_001", {"goal_id": str(goal_id)}, http_status=404)

        try:
            entry = await self.ledger_repo.upsert_period(
                user_id=user_id,
                kind=LedgerKind.GOAL_CONTRIBUTION,
                year=now.year,
                month=now.month,
                amount=amount_minor,
                accumulate=True,
            )
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(
                "Goal contribution left unapplied: monthly entry write failed",
                extra={"user_id": str(user_id), "error_type": type(e).__name__},
            )
            raise ReconciliationError(
                "RECON_001",
                {"goal_id": str(goal_id), "stage": "monthly_entry"},
                http_status=409,
            ) from e

        logger.info(
            "Goal contribution reconciled",
            extra={"user_id": str(user_id), "period": f"{now.year}-{now.month:02d}"},
        )
        return GoalContributionResult(
            goal_id=goal_id,
            goal_total=goal_total,
            period_year=entry.period_year,
            period_month=entry.period_month,
            period_amount=entry.amount,
        )

    async def current_contribution(self, user_id: UUID) -> int:
        """This month's goal contribution total in minor units (0 when none)."""
        now = self.clock()
        entry = await self.ledger_repo.get_for_period(
            user_id, LedgerKind.GOAL_CONTRIBUTION, now.year, now.month
        )
        return entry.amount if entry else 0

    async def latest_income(self, user_id: UUID) -> LedgerEntry | None:
        return await self.ledger_repo.get_latest(user_id, LedgerKind.INCOME)

    @staticmethod
    def _minor_units(amount: Decimal) -> int:
        if amount is None or Decimal(str(amount)) < 0:
            raise ValidationError("VAL_001", {"field": "amount"}, http_status=400)
        return to_minor_units(amount)
