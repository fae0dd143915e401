"""SMS ingestion orchestration.

This module runs one bank SMS through the complete pipeline:
1. Parse the message into a structured transaction
2. Categorize the counterparty
3. Resolve the user (explicit, or simulated attribution)
4. Score fraud risk
5. Persist the SMS log (always; failure here fails the ingest)
6. Persist a fraud alert when the verdict is fraudulent (best-effort)
7. Route the amount: credit -> income ledger, debit -> expense append (best-effort)
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.categorization.rules import CategoryLabel, categorize
from fintrack.core.clock import Clock, local_now
from fintrack.core.exceptions import IdentityResolutionError, StoreError
from fintrack.core.money import to_minor_units
from fintrack.fraud.scorer import RiskScorer
from fintrack.models.expense import Expense
from fintrack.models.fraud_alert import FraudAlert
from fintrack.models.sms_log import SmsLog
from fintrack.parsers.sms import SmsParser
from fintrack.repositories.expense import ExpenseRepository
from fintrack.repositories.fraud_alert import FraudAlertRepository
from fintrack.repositories.sms_log import SmsLogRepository
from fintrack.repositories.user import UserRepository
from fintrack.schemas.internal import (
    Direction,
    IngestResult,
    ParsedTransaction,
    RiskVerdict,
    RoutingDecision,
)
from fintrack.services.identity import IdentityResolver, RandomUserSelector
from fintrack.services.ledger import LedgerReconciler

logger = logging.getLogger(__name__)

WARN_ALERT_NOT_RECORDED = "fraud_alert_not_recorded"
WARN_INCOME_NOT_RECONCILED = "income_not_reconciled"
WARN_EXPENSE_NOT_RECORDED = "expense_not_recorded"
WARN_AMOUNT_MISSING = "amount_missing_routing_skipped"


class SmsIngestionService:
    """Service for ingesting bank SMS messages.

    Collaborators default to the database-backed implementations built on
    ``db`` and can be replaced with test doubles.
    """

    def __init__(
        self,
        db: AsyncSession,
        identity: IdentityResolver | None = None,
        scorer: RiskScorer | None = None,
        reconciler: LedgerReconciler | None = None,
        clock: Clock | None = None,
    ):
        self.db = db
        self.clock = clock or local_now
        self.parser = SmsParser(clock=self.clock)
        self.sms_log_repo = SmsLogRepository(db)
        self.alert_repo = FraudAlertRepository(db)
        self.expense_repo = ExpenseRepository(db)
        self.identity = identity or RandomUserSelector(UserRepository(db))
        self.scorer = scorer or RiskScorer(self.sms_log_repo, clock=self.clock)
        self.reconciler = reconciler or LedgerReconciler(db, clock=self.clock)

    async def ingest(self, raw: str, user_id: UUID | None = None) -> IngestResult:
        """Ingest one raw SMS.

        Args:
            raw: Message text
            user_id: Owner of the message; when None a user is selected by the
                identity resolver

        Returns:
            IngestResult with the parsed record, verdict and routing decision

        Raises:
            IdentityResolutionError: If no user can be attributed
            StoreError: If the SMS log cannot be written
        """
        parsed = self.parser.parse(raw)
        category = categorize(parsed.counterparty)

        if user_id is None:
            user_id = await self.identity.select()
            if user_id is None:
                raise IdentityResolutionError("USER_001", http_status=409)

        verdict = await self.scorer.score(parsed, user_id)
        sms_log_id = await self._write_log(parsed, category, verdict, user_id)

        warnings: list[str] = []
        alert_id = None
        if verdict.is_fraud:
            alert_id = await self._write_alert(sms_log_id, verdict, user_id, warnings)

        routing = await self._route(parsed, category, sms_log_id, user_id, warnings)

        logger.info(
            "SMS ingested",
            extra={
                "sms_log_id": str(sms_log_id),
                "user_id": str(user_id),
                "risk_score": verdict.risk_score,
                "routing": routing.value,
            },
        )
        return IngestResult(
            parsed=parsed,
            category=category,
            user_id=user_id,
            verdict=verdict,
            sms_log_id=sms_log_id,
            alert_id=alert_id,
            routing=routing,
            warnings=warnings,
        )

    async def _write_log(
        self,
        parsed: ParsedTransaction,
        category: CategoryLabel,
        verdict: RiskVerdict,
        user_id: UUID,
    ) -> UUID:
        log = SmsLog(
            user_id=user_id,
            raw_message=parsed.raw_text,
            amount=to_minor_units(parsed.amount) if parsed.amount is not None else None,
            direction=parsed.direction.value if parsed.direction else None,
            counterparty=parsed.counterparty,
            channel=parsed.channel.value if parsed.channel else None,
            reference_id=parsed.reference_id,
            category=category.value,
            risk_score=verdict.risk_score,
            is_fraud=verdict.is_fraud,
            flags=[flag.value for flag in verdict.flags],
        )
        try:
            await self.sms_log_repo.add(log)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(
                "SMS log write failed",
                extra={"user_id": str(user_id), "error_type": type(e).__name__},
            )
            raise StoreError("DB_001", {"table": "sms_logs"}) from e
        return log.id

    async def _write_alert(
        self,
        sms_log_id: UUID,
        verdict: RiskVerdict,
        user_id: UUID,
        warnings: list[str],
    ) -> UUID | None:
        alert = FraudAlert(
            user_id=user_id,
            sms_log_id=sms_log_id,
            risk_score=verdict.risk_score,
            flags=[flag.value for flag in verdict.flags],
        )
        try:
            await self.alert_repo.add(alert)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.warning(
                "Fraud alert write failed",
                extra={"sms_log_id": str(sms_log_id), "error_type": type(e).__name__},
            )
            warnings.append(WARN_ALERT_NOT_RECORDED)
            return None
        return alert.id

    async def _route(
        self,
        parsed: ParsedTransaction,
        category: CategoryLabel,
        sms_log_id: UUID,
        user_id: UUID,
        warnings: list[str],
    ) -> RoutingDecision:
        if parsed.direction is None:
            return RoutingDecision.NONE
        if parsed.amount is None:
            warnings.append(WARN_AMOUNT_MISSING)
            return RoutingDecision.NONE

        if parsed.direction == Direction.CREDIT:
            try:
                await self.reconciler.apply_income(user_id, parsed.amount, parsed.observed_at)
            except Exception as e:
                logger.warning(
                    "Income reconciliation failed",
                    extra={"sms_log_id": str(sms_log_id), "error_type": type(e).__name__},
                )
                warnings.append(WARN_INCOME_NOT_RECONCILED)
                return RoutingDecision.NONE
            return RoutingDecision.INCOME

        expense = Expense(
            user_id=user_id,
            amount=to_minor_units(parsed.amount),
            category=category.value,
            sms_log_id=sms_log_id,
        )
        try:
            await self.expense_repo.add(expense)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.warning(
                "Expense append failed",
                extra={"sms_log_id": str(sms_log_id), "error_type": type(e).__name__},
            )
            warnings.append(WARN_EXPENSE_NOT_RECORDED)
            return RoutingDecision.NONE
        return RoutingDecision.EXPENSE
