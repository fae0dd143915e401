"""API version 1 routes."""

from fastapi import APIRouter

from fintrack.api.v1 import expenses, goals, income, sms

router = APIRouter(prefix="/api/v1")

router.include_router(sms.router)
router.include_router(income.router)
router.include_router(expenses.router)
router.include_router(goals.router)
