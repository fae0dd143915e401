"""Expense rows: a plain append log, grouped by category on read."""
from uuid import UUID

from sqlalchemy import BigInteger, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from fintrack.models.base import BaseModel


class Expense(BaseModel):
    __tablename__ = "expenses"

    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    sms_log_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("sms_logs.id", ondelete="SET NULL"), nullable=True
    )

    def __repr__(self) -> str:
        return f"<Expense(id={self.id}, category={self.category}, amount={self.amount})>"
