"""Integration tests for repository layer."""

import asyncio
import os
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.models.expense import Expense
from fintrack.models.fraud_alert import FraudAlert
from fintrack.models.ledger_entry import LedgerKind
from fintrack.models.sms_log import SmsLog
from fintrack.models.user import User
from fintrack.repositories.expense import ExpenseRepository
from fintrack.repositories.fraud_alert import FraudAlertRepository
from fintrack.repositories.ledger import LedgerRepository
from fintrack.repositories.sms_log import SmsLogRepository
from fintrack.repositories.user import UserRepository


def make_log(user: User, created_at: datetime | None = None) -> SmsLog:
    log = SmsLog(
        user_id=user.id,
        raw_message="Rs 100 debited",
        amount=10_000,
        direction="debit",
        category="OTHERS",
        risk_score=0,
        is_fraud=False,
        flags=[],
    )
    if created_at is not None:
        log.created_at = created_at
    return log


class TestUserRepository:
    async def test_get_by_username(self, db_session: AsyncSession, test_user: User):
        found = await UserRepository(db_session).get_by_username("testuser")
        assert found.id == test_user.id

    async def test_candidates_exclude_inactive(self, db_session: AsyncSession, test_user: User):
        repo = UserRepository(db_session)
        await repo.create(User(username="dormant", is_active=False))

        candidates = await repo.get_candidate_ids(limit=10)
        assert candidates == [test_user.id]

    async def test_candidates_are_bounded(self, db_session: AsyncSession):
        repo = UserRepository(db_session)
        for i in range(5):
            await repo.create(User(username=f"user{i}"))
        assert len(await repo.get_candidate_ids(limit=3)) == 3


class TestSmsLogRepository:
    async def test_count_since_uses_window(self, db_session: AsyncSession, test_user: User):
        repo = SmsLogRepository(db_session)
        now = datetime.now(timezone.utc)
        db_session.add(make_log(test_user, now - timedelta(minutes=10)))
        db_session.add(make_log(test_user, now - timedelta(minutes=2)))
        db_session.add(make_log(test_user, now - timedelta(minutes=1)))
        await db_session.commit()

        assert await repo.count_since(test_user.id, now - timedelta(minutes=5)) == 2
        assert await repo.count_since(test_user.id, now - timedelta(minutes=30)) == 3

    async def test_get_by_user_newest_first(self, db_session: AsyncSession, test_user: User):
        repo = SmsLogRepository(db_session)
        now = datetime.now(timezone.utc)
        older = make_log(test_user, now - timedelta(hours=1))
        newer = make_log(test_user, now)
        db_session.add_all([older, newer])
        await db_session.commit()

        logs = await repo.get_by_user(test_user.id, limit=1)
        assert [log.id for log in logs] == [newer.id]


class TestFraudAlertRepository:
    async def test_get_by_user(self, db_session: AsyncSession, test_user: User):
        log = await SmsLogRepository(db_session).create(make_log(test_user))
        alert = FraudAlert(user_id=test_user.id, sms_log_id=log.id, risk_score=75, flags=["HIGH_AMOUNT"])
        await FraudAlertRepository(db_session).create(alert)

        alerts = await FraudAlertRepository(db_session).get_by_user(test_user.id)
        assert len(alerts) == 1
        assert alerts[0].status == "OPEN"
        assert alerts[0].flags == ["HIGH_AMOUNT"]


class TestExpenseRepository:
    async def test_total_spent_by_category(self, db_session: AsyncSession, test_user: User):
        repo = ExpenseRepository(db_session)
        await repo.create(Expense(user_id=test_user.id, amount=10_000, category="FOOD & GROCERY"))
        await repo.create(Expense(user_id=test_user.id, amount=5_000, category="FOOD & GROCERY"))
        await repo.create(Expense(user_id=test_user.id, amount=2_500, category="TRAVEL"))

        totals = await repo.get_total_spent_by_category(test_user.id)
        assert totals == {"FOOD & GROCERY": 15_000, "TRAVEL": 2_500}

    async def test_no_expenses(self, db_session: AsyncSession, test_user: User):
        assert await ExpenseRepository(db_session).get_total_spent_by_category(test_user.id) == {}


class TestLedgerRepository:
    async def test_upsert_keeps_one_row_per_period(self, db_session: AsyncSession, test_user: User):
        repo = LedgerRepository(db_session)
        first = await repo.upsert_period(test_user.id, LedgerKind.INCOME, 2024, 1, 100, accumulate=False)
        second = await repo.upsert_period(test_user.id, LedgerKind.INCOME, 2024, 1, 300, accumulate=False)
        await db_session.commit()

        assert second.id == first.id
        assert second.amount == 300

    async def test_accumulate(self, db_session: AsyncSession, test_user: User):
        repo = LedgerRepository(db_session)
        await repo.upsert_period(test_user.id, LedgerKind.GOAL_CONTRIBUTION, 2024, 1, 100, accumulate=True)
        entry = await repo.upsert_period(
            test_user.id, LedgerKind.GOAL_CONTRIBUTION, 2024, 1, 250, accumulate=True
        )
        await db_session.commit()
        assert entry.amount == 350

    async def test_kinds_do_not_collide(self, db_session: AsyncSession, test_user: User):
        repo = LedgerRepository(db_session)
        await repo.upsert_period(test_user.id, LedgerKind.INCOME, 2024, 1, 100, accumulate=False)
        await repo.upsert_period(test_user.id, LedgerKind.GOAL_CONTRIBUTION, 2024, 1, 40, accumulate=True)
        await db_session.commit()

        income = await repo.get_for_period(test_user.id, LedgerKind.INCOME, 2024, 1)
        goal = await repo.get_for_period(test_user.id, LedgerKind.GOAL_CONTRIBUTION, 2024, 1)
        assert (income.amount, goal.amount) == (100, 40)


@pytest.mark.skipif(
    not os.getenv("TEST_DATABASE_URL", "").startswith("postgresql"),
    reason="Concurrent writers need a server database (set TEST_DATABASE_URL to Postgres)",
)
class TestLedgerConcurrency:
    async def test_concurrent_accumulate_loses_no_update(self, session_factory, test_user: User):
        user_id = test_user.id

        async def contribute(amount: int) -> None:
            async with session_factory() as session:
                await LedgerRepository(session).upsert_period(
                    user_id, LedgerKind.GOAL_CONTRIBUTION, 2024, 1, amount, accumulate=True
                )
                await session.commit()

        await asyncio.gather(*(contribute(100) for _ in range(10)))

        async with session_factory() as session:
            entry = await LedgerRepository(session).get_for_period(
                user_id, LedgerKind.GOAL_CONTRIBUTION, 2024, 1
            )
        assert entry.amount == 1_000
