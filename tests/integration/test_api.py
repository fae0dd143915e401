"""Integration tests for the v1 HTTP endpoints."""

from unittest.mock import patch
from uuid import uuid4

import pytest
from httpx import AsyncClient

from fintrack.models.user import User

CREDIT = "Rs 500 received from Rahul Sharma via UPI on 05 Feb 2024. Ref No 9999"
DEBIT = "Rs 250 debited from your SBI account via UPI to Swiggy on 05 Feb 2024. Ref No 1234"


class TestSmsEndpoints:
    @pytest.mark.asyncio
    async def test_ingest_with_user(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/sms/ingest", json={"message": DEBIT, "user_id": str(test_user.id)}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["user_id"] == str(test_user.id)
        assert data["category"] == "FOOD & GROCERY"
        assert data["routing"] == "expense"
        assert data["parsed"]["amount"] == "250"
        assert data["parsed"]["channel"] == "UPI"

    @pytest.mark.asyncio
    async def test_ingest_selects_user(self, client: AsyncClient, test_user: User):
        response = await client.post("/api/v1/sms/ingest", json={"message": CREDIT})
        assert response.status_code == 201
        assert response.json()["user_id"] == str(test_user.id)
        assert response.json()["routing"] == "income"

    @pytest.mark.asyncio
    async def test_ingest_without_users_is_conflict(self, client: AsyncClient):
        response = await client.post("/api/v1/sms/ingest", json={"message": CREDIT})
        assert response.status_code == 409
        assert response.json()["error_code"] == "USER_001"

    @pytest.mark.asyncio
    async def test_ingest_rejects_empty_message(self, client: AsyncClient):
        response = await client.post("/api/v1/sms/ingest", json={"message": ""})
        assert response.status_code == 400
        assert response.json()["error_code"] == "VAL_001"

    @pytest.mark.asyncio
    async def test_simulate(self, client: AsyncClient, test_user: User):
        response = await client.post("/api/v1/sms/simulate")
        assert response.status_code == 201
        assert response.json()["user_id"] == str(test_user.id)

    @pytest.mark.asyncio
    async def test_logs_and_alerts(self, client: AsyncClient, test_user: User):
        suspicious = (
            "Rs 15000 debited from your HDFC account via UPI to XYZ Pvt Ltd on 01 Jan 2024. "
            "Ref No 123456"
        )
        await client.post("/api/v1/sms/ingest", json={"message": DEBIT, "user_id": str(test_user.id)})
        await client.post(
            "/api/v1/sms/ingest", json={"message": suspicious, "user_id": str(test_user.id)}
        )

        logs = (await client.get(f"/api/v1/sms/logs/{test_user.id}")).json()
        assert len(logs) == 2
        assert {log["amount"] for log in logs} == {25_000, 1_500_000}

        alerts = (await client.get(f"/api/v1/sms/alerts/{test_user.id}")).json()
        # HIGH_AMOUNT + UNKNOWN_MERCHANT alone reach the threshold
        assert len(alerts) == 1
        assert "HIGH_AMOUNT" in alerts[0]["flags"]


class TestIncomeEndpoints:
    @pytest.mark.asyncio
    async def test_add_and_read_income(self, client: AsyncClient, test_user: User):
        body = {"user_id": str(test_user.id), "amount": "1200", "date": "2024-03-10T10:00:00+05:30"}
        response = await client.post("/api/v1/income", json=body)
        assert response.status_code == 201
        assert response.json()["amount"] == 120_000

        body["amount"] = "700"
        await client.post("/api/v1/income", json=body)

        latest = (await client.get(f"/api/v1/income/{test_user.id}")).json()
        assert latest["amount"] == 70_000
        assert (latest["period_year"], latest["period_month"]) == (2024, 3)

    @pytest.mark.asyncio
    async def test_no_income_is_null(self, client: AsyncClient, test_user: User):
        response = await client.get(f"/api/v1/income/{test_user.id}")
        assert response.status_code == 200
        assert response.json() is None

    @pytest.mark.asyncio
    async def test_negative_income_rejected(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/income", json={"user_id": str(test_user.id), "amount": "-5"}
        )
        assert response.status_code == 400


class TestExpenseEndpoints:
    @pytest.mark.asyncio
    async def test_add_and_group_expenses(self, client: AsyncClient, test_user: User):
        for amount, category in [("100", "TRAVEL"), ("50.50", "TRAVEL"), ("20", "HEALTHCARE")]:
            response = await client.post(
                "/api/v1/expenses",
                json={"user_id": str(test_user.id), "amount": amount, "category": category},
            )
            assert response.status_code == 201

        data = (await client.get(f"/api/v1/expenses/{test_user.id}")).json()
        assert data["totals"] == {"TRAVEL": 15_050, "HEALTHCARE": 2_000}
        assert data["money"] == {"currency": "INR", "minor_unit": 2}

    @pytest.mark.asyncio
    async def test_unknown_category_rejected(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/expenses",
            json={"user_id": str(test_user.id), "amount": "10", "category": "SHOPPING"},
        )
        assert response.status_code == 400


class TestGoalEndpoints:
    @pytest.mark.asyncio
    async def test_goal_lifecycle(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/goals",
            json={"user_id": str(test_user.id), "goal_name": "Laptop", "target_amount": "80000"},
        )
        assert response.status_code == 201
        goal = response.json()
        assert goal["invested_amount"] == 0
        assert goal["target_amount"] == 8_000_000

        for _ in range(2):
            response = await client.post(
                f"/api/v1/goals/{goal['id']}/contributions",
                json={"user_id": str(test_user.id), "amount": "100"},
            )
            assert response.status_code == 201
        assert response.json()["goal_total"] == 20_000
        assert response.json()["period_amount"] == 20_000

        listing = (await client.get(f"/api/v1/goals/{test_user.id}")).json()
        assert [g["invested_amount"] for g in listing["goals"]] == [20_000]

        current = (
            await client.get("/api/v1/goals/contributions/current", params={"user_id": str(test_user.id)})
        ).json()
        assert current["amount"] == 20_000

    @pytest.mark.asyncio
    async def test_contribution_to_missing_goal(self, client: AsyncClient, test_user: User):
        response = await client.post(
            f"/api/v1/goals/{uuid4()}/contributions",
            json={"user_id": str(test_user.id), "amount": "100"},
        )
        assert response.status_code == 404
        assert response.json()["error_code"] == "GOAL_001"

    @pytest.mark.asyncio
    async def test_reconciliation_failure_is_conflict(self, client: AsyncClient, test_user: User):
        # The rollback expires loaded instances, so keep plain values
        user_id = str(test_user.id)
        goal = (
            await client.post(
                "/api/v1/goals",
                json={"user_id": user_id, "goal_name": "Trip", "target_amount": "5000"},
            )
        ).json()

        with patch(
            "fintrack.repositories.ledger.LedgerRepository.upsert_period",
            side_effect=RuntimeError("write failed"),
        ):
            response = await client.post(
                f"/api/v1/goals/{goal['id']}/contributions",
                json={"user_id": user_id, "amount": "100"},
            )

        assert response.status_code == 409
        assert response.json()["error_code"] == "RECON_001"

        listing = (await client.get(f"/api/v1/goals/{user_id}")).json()
        assert listing["goals"][0]["invested_amount"] == 0
