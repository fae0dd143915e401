"""Immutable record of every ingested SMS, its parsed fields and fraud verdict."""
from typing import Any
from uuid import UUID

from sqlalchemy import BigInteger, Boolean, ForeignKey, Index, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fintrack.models.base import BaseModel


class SmsLog(BaseModel):
    """One row per ingested message, written regardless of the verdict."""

    __tablename__ = "sms_logs"

    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    raw_message: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    direction: Mapped[str | None] = mapped_column(String(10), nullable=True)
    counterparty: Mapped[str | None] = mapped_column(String(255), nullable=True)
    channel: Mapped[str | None] = mapped_column(String(20), nullable=True)
    reference_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    risk_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_fraud: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    flags: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)

    # Serves the trailing-window frequency query
    __table_args__ = (Index("ix_sms_logs_user_id_created_at", "user_id", "created_at"),)

    def __repr__(self) -> str:
        return f"<SmsLog(id={self.id}, user_id={self.user_id}, risk_score={self.risk_score})>"
