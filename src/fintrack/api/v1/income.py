"""Income ledger endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from fintrack.api.deps import get_reconciler
from fintrack.core.clock import local_now
from fintrack.schemas.ledger import IncomeRequest, LedgerEntryResponse
from fintrack.services.ledger import LedgerReconciler

router = APIRouter(prefix="/income", tags=["income"])


@router.post("", response_model=LedgerEntryResponse, status_code=status.HTTP_201_CREATED)
async def add_income(
    body: IncomeRequest,
    reconciler: LedgerReconciler = Depends(get_reconciler),
) -> LedgerEntryResponse:
    """Record income for the month of ``date``; replaces that month's value."""
    entry = await reconciler.apply_income(body.user_id, body.amount, body.date or local_now())
    return LedgerEntryResponse.model_validate(entry)


@router.get("/{user_id}", response_model=LedgerEntryResponse | None)
async def get_latest_income(
    user_id: UUID,
    reconciler: LedgerReconciler = Depends(get_reconciler),
) -> LedgerEntryResponse | None:
    """Most recent month's income entry, or null."""
    entry = await reconciler.latest_income(user_id)
    return LedgerEntryResponse.model_validate(entry) if entry else None
