"""Request/response schemas for income and expense endpoints."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from fintrack.categorization.rules import CategoryLabel
from fintrack.schemas.common import MoneyMeta


class IncomeRequest(BaseModel):
    user_id: UUID
    amount: Decimal = Field(..., ge=0, description="Income in currency units")
    date: datetime | None = Field(None, description="Observation date; defaults to now")


class LedgerEntryResponse(BaseModel):
    """One monthly ledger slot. ``amount`` is in minor units."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    kind: str
    period_year: int
    period_month: int
    amount: int
    updated_at: datetime


class ExpenseRequest(BaseModel):
    user_id: UUID
    amount: Decimal = Field(..., ge=0, description="Expense in currency units")
    category: CategoryLabel = CategoryLabel.OTHERS


class ExpenseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    amount: int
    category: str
    created_at: datetime


class ExpenseSummaryResponse(BaseModel):
    """Spend per category in minor units."""

    totals: dict[str, int]
    money: MoneyMeta
