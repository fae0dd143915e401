"""Unit tests for the additive fraud risk scorer."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4
from zoneinfo import ZoneInfo

import pytest

from fintrack.fraud.scorer import (
    FRAUD_THRESHOLD,
    MAX_SCORE,
    RAPID_TXN_WINDOW,
    RiskScorer,
    score_signals,
)
from fintrack.schemas.internal import Direction, ParsedTransaction, RiskSignal

IST = ZoneInfo("Asia/Kolkata")
DAYTIME = datetime(2024, 1, 1, 14, 0, tzinfo=IST)
NIGHT = datetime(2024, 1, 1, 2, 0, tzinfo=IST)


def make_txn(amount=None, counterparty=None, when=DAYTIME) -> ParsedTransaction:
    return ParsedTransaction(
        amount=Decimal(amount) if amount is not None else None,
        direction=Direction.DEBIT,
        counterparty=counterparty,
        observed_at=when,
        raw_text="test",
    )


def make_scorer(count=0, now=DAYTIME) -> tuple[RiskScorer, AsyncMock]:
    history = AsyncMock()
    history.count_since = AsyncMock(return_value=count)
    return RiskScorer(history, clock=lambda: now), history


class TestSignals:
    async def test_clean_transaction_scores_zero(self):
        scorer, _ = make_scorer()
        verdict = await scorer.score(make_txn("500", "Swiggy"), uuid4())
        assert verdict.risk_score == 0
        assert verdict.is_fraud is False
        assert verdict.flags == []

    async def test_high_amount_at_threshold(self):
        scorer, _ = make_scorer()
        verdict = await scorer.score(make_txn("10000", "Amazon"), uuid4())
        assert verdict.flags == [RiskSignal.HIGH_AMOUNT]
        assert verdict.risk_score == 30

    async def test_just_below_high_amount(self):
        scorer, _ = make_scorer()
        verdict = await scorer.score(make_txn("9999.99", "Amazon"), uuid4())
        assert RiskSignal.HIGH_AMOUNT not in verdict.flags

    async def test_unknown_merchant(self):
        scorer, _ = make_scorer()
        verdict = await scorer.score(make_txn("100", "Quick Pay Global"), uuid4())
        assert verdict.flags == [RiskSignal.UNKNOWN_MERCHANT]
        assert verdict.risk_score == 25

    async def test_trusted_merchant_substring(self):
        scorer, _ = make_scorer()
        verdict = await scorer.score(make_txn("100", "UBER INDIA SYSTEMS"), uuid4())
        assert RiskSignal.UNKNOWN_MERCHANT not in verdict.flags

    async def test_absent_counterparty_is_not_unknown(self):
        scorer, _ = make_scorer()
        verdict = await scorer.score(make_txn("100", None), uuid4())
        assert verdict.flags == []

    @pytest.mark.parametrize("hour,flagged", [(0, False), (1, True), (5, True), (6, False), (23, False)])
    async def test_unusual_hour_window(self, hour, flagged):
        scorer, _ = make_scorer(now=datetime(2024, 1, 1, hour, 30, tzinfo=IST))
        verdict = await scorer.score(make_txn("100", "Swiggy"), uuid4())
        assert (RiskSignal.UNUSUAL_HOUR in verdict.flags) is flagged

    async def test_rapid_frequency(self):
        scorer, history = make_scorer(count=3)
        user_id = uuid4()
        verdict = await scorer.score(make_txn("100", "Swiggy"), user_id)
        assert verdict.flags == [RiskSignal.RAPID_FREQUENCY]

        called_user, since = history.count_since.await_args.args
        assert called_user == user_id
        assert since == DAYTIME - RAPID_TXN_WINDOW
        assert since.utcoffset().total_seconds() == 0

    async def test_two_recent_is_not_rapid(self):
        scorer, _ = make_scorer(count=2)
        verdict = await scorer.score(make_txn("100", "Swiggy"), uuid4())
        assert verdict.flags == []

    async def test_no_user_skips_frequency_query(self):
        scorer, history = make_scorer(count=10)
        verdict = await scorer.score(make_txn("100", "Swiggy"), None)
        assert verdict.flags == []
        history.count_since.assert_not_awaited()


class TestFailOpen:
    async def test_history_error_drops_only_that_signal(self, caplog):
        history = AsyncMock()
        history.count_since = AsyncMock(side_effect=RuntimeError("db down"))
        scorer = RiskScorer(history, clock=lambda: NIGHT)

        verdict = await scorer.score(make_txn("15000", "XYZ Pvt Ltd"), uuid4())

        assert verdict.flags == [
            RiskSignal.HIGH_AMOUNT,
            RiskSignal.UNKNOWN_MERCHANT,
            RiskSignal.UNUSUAL_HOUR,
        ]
        assert verdict.risk_score == 75
        assert "rapid frequency query failed" in caplog.text


class TestScoreComposition:
    async def test_reference_scenario_scores_75(self):
        scorer, _ = make_scorer(now=NIGHT)
        verdict = await scorer.score(make_txn("15000", "XYZ Pvt Ltd", when=NIGHT), uuid4())
        assert verdict.risk_score == 75
        assert verdict.is_fraud is True

    async def test_all_signals_capped(self):
        scorer, _ = make_scorer(count=5, now=NIGHT)
        verdict = await scorer.score(make_txn("50000", "Unknown Trader"), uuid4())
        assert verdict.risk_score == MAX_SCORE
        assert len(verdict.flags) == 4

    def test_threshold_is_inclusive(self):
        verdict = score_signals([RiskSignal.UNKNOWN_MERCHANT, RiskSignal.RAPID_FREQUENCY])
        assert verdict.risk_score == FRAUD_THRESHOLD
        assert verdict.is_fraud is True

    def test_scores_around_threshold(self):
        verdict = score_signals([RiskSignal.HIGH_AMOUNT, RiskSignal.UNUSUAL_HOUR])
        assert verdict.risk_score == 50
        assert verdict.is_fraud is True
        verdict = score_signals([RiskSignal.UNKNOWN_MERCHANT, RiskSignal.UNUSUAL_HOUR])
        assert verdict.risk_score == 45
        assert verdict.is_fraud is False

    def test_adding_a_signal_never_lowers_score(self):
        signals = [
            RiskSignal.HIGH_AMOUNT,
            RiskSignal.UNKNOWN_MERCHANT,
            RiskSignal.UNUSUAL_HOUR,
            RiskSignal.RAPID_FREQUENCY,
        ]
        previous = 0
        for n in range(len(signals) + 1):
            score = score_signals(signals[:n]).risk_score
            assert score >= previous
            previous = score

    def test_duplicate_signals_count_once(self):
        verdict = score_signals([RiskSignal.HIGH_AMOUNT, RiskSignal.HIGH_AMOUNT])
        assert verdict.risk_score == 30
        assert verdict.flags == [RiskSignal.HIGH_AMOUNT]
