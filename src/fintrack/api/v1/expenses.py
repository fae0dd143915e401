"""Expense endpoints: plain append and per-category totals."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.config import settings
from fintrack.core.money import to_minor_units
from fintrack.db.session import get_db
from fintrack.models.expense import Expense
from fintrack.repositories.expense import ExpenseRepository
from fintrack.schemas.common import MoneyMeta
from fintrack.schemas.ledger import ExpenseRequest, ExpenseResponse, ExpenseSummaryResponse

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def add_expense(
    body: ExpenseRequest,
    db: AsyncSession = Depends(get_db),
) -> ExpenseResponse:
    expense = Expense(
        user_id=body.user_id,
        amount=to_minor_units(body.amount),
        category=body.category.value,
    )
    created = await ExpenseRepository(db).create(expense)
    return ExpenseResponse.model_validate(created)


@router.get("/{user_id}", response_model=ExpenseSummaryResponse)
async def get_expenses_by_category(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ExpenseSummaryResponse:
    totals = await ExpenseRepository(db).get_total_spent_by_category(user_id)
    return ExpenseSummaryResponse(
        totals=totals,
        money=MoneyMeta(currency=settings.currency, minor_unit=settings.currency_minor_unit),
    )
