"""Internal data schemas for parsed SMS data and pipeline verdicts.

These models represent the intermediate structures passed between the
parser, categorizer, risk scorer and the ingestion orchestrator.
"""

import enum
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from fintrack.categorization.rules import CategoryLabel


class Direction(str, enum.Enum):
    CREDIT = "credit"
    DEBIT = "debit"


class Channel(str, enum.Enum):
    UPI = "UPI"
    NEFT = "NEFT"
    IMPS = "IMPS"
    RTGS = "RTGS"
    ATM = "ATM"
    POS = "POS"
    NETBANKING = "NETBANKING"


class RiskSignal(str, enum.Enum):
    HIGH_AMOUNT = "HIGH_AMOUNT"
    UNKNOWN_MERCHANT = "UNKNOWN_MERCHANT"
    UNUSUAL_HOUR = "UNUSUAL_HOUR"
    RAPID_FREQUENCY = "RAPID_FREQUENCY"


class RoutingDecision(str, enum.Enum):
    """Where the amount of an ingested message was written."""

    INCOME = "income"
    EXPENSE = "expense"
    NONE = "none"


class ParsedTransaction(BaseModel):
    """Structured facts recovered from one bank SMS.

    Every extracted field is independently optional: a message the parser
    cannot fully understand yields a partial record, never an error.
    """

    model_config = ConfigDict(frozen=True)

    amount: Decimal | None = Field(None, ge=0, description="Amount in currency units")
    direction: Direction | None = Field(None, description="'credit' or 'debit'")
    counterparty: str | None = Field(None, description="Merchant, person or bank")
    channel: Channel | None = Field(None, description="Payment rail")
    reference_id: str | None = Field(None, description="Bank reference number")
    observed_at: datetime = Field(..., description="When the message was parsed")
    raw_text: str = Field(..., description="Original message text")


class RiskVerdict(BaseModel):
    """Additive rule-based fraud verdict for one transaction."""

    model_config = ConfigDict(frozen=True)

    is_fraud: bool
    risk_score: int = Field(..., ge=0, le=100)
    flags: list[RiskSignal] = Field(default_factory=list)


class IngestResult(BaseModel):
    """Outcome of ingesting one message.

    The SMS log write is the primary outcome: if it fails, ingest raises.
    Alert and routing failures only add entries to ``warnings``.
    """

    parsed: ParsedTransaction
    category: CategoryLabel
    user_id: UUID
    verdict: RiskVerdict
    sms_log_id: UUID
    alert_id: UUID | None = None
    routing: RoutingDecision = RoutingDecision.NONE
    warnings: list[str] = Field(default_factory=list)
