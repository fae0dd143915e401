"""Custom exception classes for the ingestion and ledger pipeline.

Each exception carries an error_code that maps to the catalog in errors.py.
"""

from typing import Any


class FintrackError(Exception):
    """Base exception for all pipeline errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "DB_001")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return (default: 500)
    """

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int = 500,
    ):
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status
        super().__init__(error_code)


class StoreError(FintrackError):
    """Raised when a primary write to the store fails.

    Secondary writes (fraud alert, ledger routing) never raise this to the
    caller; they are reported as warnings on the ingest result instead.
    """

    pass


class ReconciliationError(FintrackError):
    """Raised when a goal contribution could not be applied to both aggregates.

    The goal running total and the monthly contribution entry are written in
    one transaction; when the second write fails the transaction is rolled
    back and this error is raised so the caller knows nothing was applied.
    """

    pass


class GoalNotFoundError(FintrackError):
    """Raised when a contribution targets a goal that does not exist."""

    pass


class IdentityResolutionError(FintrackError):
    """Raised when no user identity can be selected for an incoming message."""

    pass


class ValidationError(FintrackError):
    """Raised when caller-supplied data breaks a business rule."""

    pass
