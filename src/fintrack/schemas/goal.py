"""Request/response schemas for saving goals and contributions."""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from fintrack.schemas.common import MoneyMeta


class GoalCreateRequest(BaseModel):
    user_id: UUID
    goal_name: str = Field(..., min_length=1, max_length=255)
    target_amount: Decimal = Field(..., gt=0, description="Target in currency units")


class GoalResponse(BaseModel):
    """Goal with amounts in minor units."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    target_amount: int
    invested_amount: int


class GoalListResult(BaseModel):
    goals: list[GoalResponse]
    money: MoneyMeta


class ContributionRequest(BaseModel):
    user_id: UUID
    amount: Decimal = Field(..., gt=0, description="Contribution in currency units")


class ContributionResponse(BaseModel):
    goal_id: UUID
    goal_total: int = Field(description="All-time invested total (minor units)")
    period_year: int
    period_month: int
    period_amount: int = Field(description="This month's contributions (minor units)")


class CurrentContributionResponse(BaseModel):
    user_id: UUID
    amount: int = Field(description="This month's contributions (minor units)")
