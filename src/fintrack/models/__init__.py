"""Database models."""
from fintrack.models.user import User
from fintrack.models.sms_log import SmsLog
from fintrack.models.fraud_alert import FraudAlert
from fintrack.models.expense import Expense
from fintrack.models.ledger_entry import LedgerEntry, LedgerKind
from fintrack.models.goal import Goal

__all__ = ["User", "SmsLog", "FraudAlert", "Expense", "LedgerEntry", "LedgerKind", "Goal"]
