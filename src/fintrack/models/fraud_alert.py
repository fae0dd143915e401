"""Fraud alert raised for an SMS log whose verdict is fraudulent."""
from typing import Any
from uuid import UUID

from sqlalchemy import ForeignKey, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from fintrack.models.base import BaseModel


class FraudAlert(BaseModel):
    __tablename__ = "fraud_alerts"

    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    sms_log_id: Mapped[UUID] = mapped_column(ForeignKey("sms_logs.id", ondelete="CASCADE"), nullable=False, index=True)
    risk_score: Mapped[int] = mapped_column(Integer, nullable=False)
    flags: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="OPEN")

    def __repr__(self) -> str:
        return f"<FraudAlert(id={self.id}, sms_log_id={self.sms_log_id}, risk_score={self.risk_score})>"
