"""FastAPI dependency injection for services and repositories."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.db.session import get_db
from fintrack.generators.sms import MockSmsGenerator
from fintrack.services.ingestion import SmsIngestionService
from fintrack.services.ledger import LedgerReconciler


async def get_ingestion_service(
    db: AsyncSession = Depends(get_db),
) -> SmsIngestionService:
    return SmsIngestionService(db)


async def get_reconciler(
    db: AsyncSession = Depends(get_db),
) -> LedgerReconciler:
    return LedgerReconciler(db)


def get_sms_generator() -> MockSmsGenerator:
    return MockSmsGenerator()
