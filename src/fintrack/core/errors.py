"""Error codes and user-friendly messages.

Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the caller
- retry_allowed: Whether the error is retryable
"""

ERROR_CATALOG: dict[str, dict] = {
    "DB_001": {
        "code": "DB_001",
        "message": "Database write failed while recording the SMS log",
        "user_message": "We couldn't record this message due to a database error.",
        "suggestion": "Please try again in a few moments.",
        "retry_allowed": True,
    },
    "RECON_001": {
        "code": "RECON_001",
        "message": "Goal total and monthly contribution entry could not both be written",
        "user_message": "Your contribution could not be applied.",
        "suggestion": "No changes were kept. Please try the contribution again.",
        "retry_allowed": True,
    },
    "GOAL_001": {
        "code": "GOAL_001",
        "message": "Goal not found",
        "user_message": "We couldn't find this saving goal.",
        "suggestion": "Please check the goal ID and try again.",
        "retry_allowed": False,
    },
    "USER_001": {
        "code": "USER_001",
        "message": "No user identity available for attribution",
        "user_message": "There are no users to attribute this message to.",
        "suggestion": "Create a user first, or pass a user_id explicitly.",
        "retry_allowed": False,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request data failed validation",
        "user_message": "The request data appears to be incomplete or invalid.",
        "suggestion": "Please check your input and try again.",
        "retry_allowed": False,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details (a generic entry for unknown codes)
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def get_user_message(error_code: str) -> str:
    return get_error(error_code)["user_message"]


def is_retryable(error_code: str) -> bool:
    return get_error(error_code)["retry_allowed"]
