"""Per-user monthly ledger slots for income and goal contributions.

The period is part of the row identity: the unique constraint on
(user_id, kind, period_year, period_month) is the conflict target of the
reconciler's upsert, so a period never has more than one slot.
"""
import enum
from uuid import UUID

from sqlalchemy import BigInteger, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from fintrack.models.base import BaseModel


class LedgerKind(str, enum.Enum):
    INCOME = "income"
    GOAL_CONTRIBUTION = "goal_contribution"


class LedgerEntry(BaseModel):
    __tablename__ = "ledger_entries"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "kind", "period_year", "period_month", name="uq_ledger_user_kind_period"
        ),
    )

    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    kind: Mapped[str] = mapped_column(String(20), nullable=False)
    period_year: Mapped[int] = mapped_column(Integer, nullable=False)
    period_month: Mapped[int] = mapped_column(Integer, nullable=False)
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    def __repr__(self) -> str:
        return (
            f"<LedgerEntry(kind={self.kind}, user_id={self.user_id}, "
            f"period={self.period_year}-{self.period_month:02d}, amount={self.amount})>"
        )
