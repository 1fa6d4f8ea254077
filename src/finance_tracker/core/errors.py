"""Error codes and user-friendly messages.

Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

ERROR_CATALOG: dict[str, dict] = {
    "AUTH_001": {
        "code": "AUTH_001",
        "message": "Missing or invalid credentials",
        "user_message": "unauthorized",
        "suggestion": "Please log in and try again.",
        "retry_allowed": False,
    },
    "AUTH_002": {
        "code": "AUTH_002",
        "message": "Login failed: unknown email or wrong password",
        "user_message": "Incorrect email or password.",
        "suggestion": "Check your credentials and try again.",
        "retry_allowed": True,
    },
    "AUTH_003": {
        "code": "AUTH_003",
        "message": "User account is deactivated",
        "user_message": "This account has been deactivated.",
        "suggestion": "Contact support to reactivate your account.",
        "retry_allowed": False,
    },
    "AUTH_004": {
        "code": "AUTH_004",
        "message": "Registration rejected: email already registered",
        "user_message": "This email is already registered.",
        "suggestion": "Log in instead, or register with a different email.",
        "retry_allowed": False,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request data failed validation",
        "user_message": "Invalid input data.",
        "suggestion": "Please check your input and try again.",
        "retry_allowed": True,
    },
    "CAT_001": {
        "code": "CAT_001",
        "message": "Category not found",
        "user_message": "We couldn't find this category.",
        "suggestion": "Please refresh and try again.",
        "retry_allowed": False,
    },
    "CAT_002": {
        "code": "CAT_002",
        "message": "Access denied: category belongs to different user",
        "user_message": "You don't have permission to use this category.",
        "suggestion": "You can only use your own categories.",
        "retry_allowed": False,
    },
    "CAT_003": {
        "code": "CAT_003",
        "message": "Category type does not match transaction or target type",
        "user_message": "The category type doesn't match.",
        "suggestion": "Choose an income category for income and an expense category for expenses.",
        "retry_allowed": False,
    },
    "CAT_004": {
        "code": "CAT_004",
        "message": "Move action requires a target category",
        "user_message": "A target category is required to move transactions.",
        "suggestion": "Pass target_category_id when using action=move.",
        "retry_allowed": False,
    },
    "CAT_005": {
        "code": "CAT_005",
        "message": "Unsupported category delete action",
        "user_message": "That delete option isn't supported.",
        "suggestion": "Use one of: nullify, move, delete.",
        "retry_allowed": False,
    },
    "CAT_006": {
        "code": "CAT_006",
        "message": "Duplicate category name for user and type",
        "user_message": "A category with this name already exists.",
        "suggestion": "Pick a different name (names are not case-sensitive).",
        "retry_allowed": False,
    },
    "TXN_001": {
        "code": "TXN_001",
        "message": "Transaction not found",
        "user_message": "We couldn't find this transaction.",
        "suggestion": "Please refresh and try again.",
        "retry_allowed": False,
    },
    "TXN_002": {
        "code": "TXN_002",
        "message": "Access denied: transaction belongs to different user",
        "user_message": "You don't have permission to access this transaction.",
        "suggestion": "You can only access your own transactions.",
        "retry_allowed": False,
    },
    "STAT_001": {
        "code": "STAT_001",
        "message": "Invalid statistics date range",
        "user_message": "The start date must not be after the end date.",
        "suggestion": "Adjust the date range and try again.",
        "retry_allowed": False,
    },
    "DB_001": {
        "code": "DB_001",
        "message": "Database operation failed",
        "user_message": "A database error occurred.",
        "suggestion": "Please try again later.",
        "retry_allowed": True,
    },
    "DB_002": {
        "code": "DB_002",
        "message": "Resource already exists",
        "user_message": "This record already exists.",
        "suggestion": "Please check if the record was already created.",
        "retry_allowed": False,
    },
    "SYS_001": {
        "code": "SYS_001",
        "message": "Internal server error",
        "user_message": "An unexpected error occurred.",
        "suggestion": "Please try again later or contact support.",
        "retry_allowed": True,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details; a generic entry for unknown codes
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
    """Get user-friendly message for an error code."""
    return get_error(error_code)["user_message"]


def is_retryable(error_code: str) -> bool:
    """Check if an error is retryable."""
    return get_error(error_code)["retry_allowed"]
