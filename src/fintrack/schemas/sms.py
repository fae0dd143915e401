"""Request/response schemas for SMS ingestion and inspection endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SmsIngestRequest(BaseModel):
    message: str = Field(..., min_length=1, description="Raw bank SMS text")
    user_id: UUID | None = Field(
        None, description="Owner of the message; a user is selected when omitted"
    )


class SmsLogResponse(BaseModel):
    """Stored SMS log. Amounts are in minor units (paise)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    amount: int | None
    direction: str | None
    counterparty: str | None
    channel: str | None
    reference_id: str | None
    category: str
    risk_score: int
    is_fraud: bool
    flags: list[str]
    created_at: datetime


class FraudAlertResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    sms_log_id: UUID
    risk_score: int
    flags: list[str]
    status: str
    created_at: datetime
