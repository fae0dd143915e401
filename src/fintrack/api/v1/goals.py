"""Saving goal endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.api.deps import get_reconciler
from fintrack.config import settings
from fintrack.core.money import to_minor_units
from fintrack.db.session import get_db
from fintrack.models.goal import Goal
from fintrack.repositories.goal import GoalRepository
from fintrack.schemas.common import MoneyMeta
from fintrack.schemas.goal import (
    ContributionRequest,
    ContributionResponse,
    CurrentContributionResponse,
    GoalCreateRequest,
    GoalListResult,
    GoalResponse,
)
from fintrack.services.ledger import LedgerReconciler

router = APIRouter(prefix="/goals", tags=["goals"])


@router.post("", response_model=GoalResponse, status_code=status.HTTP_201_CREATED)
async def create_goal(
    body: GoalCreateRequest,
    db: AsyncSession = Depends(get_db),
) -> GoalResponse:
    goal = Goal(
        user_id=body.user_id,
        name=body.goal_name,
        target_amount=to_minor_units(body.target_amount),
        invested_amount=0,
    )
    created = await GoalRepository(db).create(goal)
    return GoalResponse.model_validate(created)


@router.get("/contributions/current", response_model=CurrentContributionResponse)
async def get_current_contribution(
    user_id: Annotated[UUID, Query(description="User whose month to read")],
    reconciler: LedgerReconciler = Depends(get_reconciler),
) -> CurrentContributionResponse:
    """This month's goal contributions for the user (0 when none)."""
    amount = await reconciler.current_contribution(user_id)
    return CurrentContributionResponse(user_id=user_id, amount=amount)


@router.get("/{user_id}", response_model=GoalListResult)
async def list_goals(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> GoalListResult:
    goals = await GoalRepository(db).get_by_user(user_id)
    return GoalListResult(
        goals=[GoalResponse.model_validate(goal) for goal in goals],
        money=MoneyMeta(currency=settings.currency, minor_unit=settings.currency_minor_unit),
    )


@router.post(
    "/{goal_id}/contributions",
    response_model=ContributionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_contribution(
    goal_id: UUID,
    body: ContributionRequest,
    reconciler: LedgerReconciler = Depends(get_reconciler),
) -> ContributionResponse:
    """Add to the goal's total and to the user's contribution for this month."""
    result = await reconciler.apply_goal_contribution(goal_id, body.user_id, body.amount)
    return ContributionResponse(
        goal_id=result.goal_id,
        goal_total=result.goal_total,
        period_year=result.period_year,
        period_month=result.period_month,
        period_amount=result.period_amount,
    )
