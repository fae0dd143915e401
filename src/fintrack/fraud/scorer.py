"""Additive, rule-based fraud risk scoring for parsed SMS transactions.

Four independent binary signals each add a fixed weight; the score is capped
at 100 and a transaction is treated as fraud at 50 or above. Only the
rapid-frequency signal touches the store, and it fails open: if the history
query errors, the signal is treated as absent and scoring continues.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Protocol
from uuid import UUID

from fintrack.core.clock import Clock, local_now
from fintrack.schemas.internal import ParsedTransaction, RiskSignal, RiskVerdict

logger = logging.getLogger(__name__)


# Known/trusted counterparties (substring match, lowercase)
TRUSTED_MERCHANTS: tuple[str, ...] = (
    "swiggy",
    "amazon",
    "zomato",
    "flipkart",
    "myntra",
    "bigbasket",
    "sip investment",
    "uber",
    "ola",
    "irctc",
    "netflix",
    "hotstar",
    "spotify",
)

# Thresholds
HIGH_AMOUNT_THRESHOLD = 10000  # Rs 10,000+
UNUSUAL_HOUR_START = 1  # 01:00 local
UNUSUAL_HOUR_END = 5  # through 05:59 local
RAPID_TXN_COUNT = 3  # 3+ logged transactions
RAPID_TXN_WINDOW = timedelta(minutes=5)  # within 5 minutes
FRAUD_THRESHOLD = 50
MAX_SCORE = 100

SIGNAL_WEIGHTS: dict[RiskSignal, int] = {
    RiskSignal.HIGH_AMOUNT: 30,
    RiskSignal.UNKNOWN_MERCHANT: 25,
    RiskSignal.UNUSUAL_HOUR: 20,
    RiskSignal.RAPID_FREQUENCY: 25,
}


class TransactionHistory(Protocol):
    """Store collaborator for the rapid-frequency signal."""

    async def count_since(self, user_id: UUID, since: datetime) -> int: ...


def score_signals(signals: list[RiskSignal]) -> RiskVerdict:
    """Build a verdict from the set of active signals."""
    flags = list(dict.fromkeys(signals))
    risk_score = min(sum(SIGNAL_WEIGHTS[s] for s in flags), MAX_SCORE)
    return RiskVerdict(
        is_fraud=risk_score >= FRAUD_THRESHOLD,
        risk_score=risk_score,
        flags=flags,
    )


class RiskScorer:
    """Scores a parsed transaction for a user against the fixed rule set."""

    def __init__(self, history: TransactionHistory, clock: Clock | None = None):
        self.history = history
        self.clock = clock or local_now

    async def score(self, txn: ParsedTransaction, user_id: UUID | None) -> RiskVerdict:
        """Evaluate all signals and return a fresh verdict.

        Args:
            txn: Parsed transaction
            user_id: Attributed user; without one the frequency signal is skipped

        Returns:
            RiskVerdict with score in [0, 100]
        """
        now = self.clock()
        signals: list[RiskSignal] = []

        if self._is_high_amount(txn):
            signals.append(RiskSignal.HIGH_AMOUNT)
        if self._is_unknown_merchant(txn):
            signals.append(RiskSignal.UNKNOWN_MERCHANT)
        if self._is_unusual_hour(now):
            signals.append(RiskSignal.UNUSUAL_HOUR)
        if user_id is not None and await self._is_rapid_frequency(user_id, now):
            signals.append(RiskSignal.RAPID_FREQUENCY)

        verdict = score_signals(signals)
        logger.info(
            "Risk scored",
            extra={
                "user_id": str(user_id) if user_id else None,
                "risk_score": verdict.risk_score,
                "flags": [f.value for f in verdict.flags],
            },
        )
        return verdict

    @staticmethod
    def _is_high_amount(txn: ParsedTransaction) -> bool:
        return txn.amount is not None and txn.amount >= HIGH_AMOUNT_THRESHOLD

    @staticmethod
    def _is_unknown_merchant(txn: ParsedTransaction) -> bool:
        if not txn.counterparty:
            return False
        name = txn.counterparty.lower()
        return not any(trusted in name for trusted in TRUSTED_MERCHANTS)

    @staticmethod
    def _is_unusual_hour(now: datetime) -> bool:
        return UNUSUAL_HOUR_START <= now.hour <= UNUSUAL_HOUR_END

    async def _is_rapid_frequency(self, user_id: UUID, now: datetime) -> bool:
        window_start = now - RAPID_TXN_WINDOW
        if window_start.tzinfo is not None:
            window_start = window_start.astimezone(timezone.utc)
        try:
            recent = await self.history.count_since(user_id, window_start)
        except Exception as e:
            logger.warning(
                "Fraud check - rapid frequency query failed; signal skipped",
                extra={"user_id": str(user_id), "error_type": type(e).__name__},
            )
            return False
        return recent >= RAPID_TXN_COUNT
