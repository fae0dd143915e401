"""SMS ingestion and inspection endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.api.deps import get_ingestion_service, get_sms_generator
from fintrack.db.session import get_db
from fintrack.generators.sms import MockSmsGenerator
from fintrack.repositories.fraud_alert import FraudAlertRepository
from fintrack.repositories.sms_log import SmsLogRepository
from fintrack.schemas.internal import IngestResult
from fintrack.schemas.sms import FraudAlertResponse, SmsIngestRequest, SmsLogResponse
from fintrack.services.ingestion import SmsIngestionService

router = APIRouter(prefix="/sms", tags=["sms"])


@router.post(
    "/ingest",
    response_model=IngestResult,
    status_code=status.HTTP_201_CREATED,
    summary="Ingest a bank SMS",
)
async def ingest_sms(
    body: SmsIngestRequest,
    service: SmsIngestionService = Depends(get_ingestion_service),
) -> IngestResult:
    """Parse, categorize, score and record one message.

    Alert and ledger-routing failures do not fail the request; they are
    listed in ``warnings``.
    """
    return await service.ingest(body.message, user_id=body.user_id)


@router.post(
    "/simulate",
    response_model=IngestResult,
    status_code=status.HTTP_201_CREATED,
    summary="Generate and ingest a mock SMS",
)
async def simulate_sms(
    service: SmsIngestionService = Depends(get_ingestion_service),
    generator: MockSmsGenerator = Depends(get_sms_generator),
) -> IngestResult:
    """Ingest a generated message attributed to a randomly selected user."""
    return await service.ingest(generator.generate())


@router.get("/logs/{user_id}", response_model=list[SmsLogResponse])
async def list_sms_logs(
    user_id: UUID,
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
    db: AsyncSession = Depends(get_db),
) -> list[SmsLogResponse]:
    logs = await SmsLogRepository(db).get_by_user(user_id, limit=limit)
    return [SmsLogResponse.model_validate(log) for log in logs]


@router.get("/alerts/{user_id}", response_model=list[FraudAlertResponse])
async def list_fraud_alerts(
    user_id: UUID,
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
    db: AsyncSession = Depends(get_db),
) -> list[FraudAlertResponse]:
    alerts = await FraudAlertRepository(db).get_by_user(user_id, limit=limit)
    return [FraudAlertResponse.model_validate(alert) for alert in alerts]
