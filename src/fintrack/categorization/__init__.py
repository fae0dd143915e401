"""Transaction categorization utilities.

Deterministic, local categorization of a counterparty name into the closed
CategoryLabel set. Rule-based (no network calls) so ingestion stays fast.
"""

from .rules import CategoryLabel, categorize

__all__ = ["CategoryLabel", "categorize"]
