"""Custom exception classes for the finance tracker.

Each exception carries an error_code that maps to the error catalog in
errors.py and the HTTP status the API should answer with.
"""

from typing import Any


class FinanceTrackerError(Exception):
    """Base exception for all domain errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "CAT_001")
        details: Additional context about the error (for logging and field errors)
        http_status: HTTP status code to return (default: 500)
    """

    default_status: int = 500

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int | None = None,
    ):
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status or self.default_status
        super().__init__(error_code)


class AuthenticationError(FinanceTrackerError):
    """Missing, invalid or expired credentials."""

    default_status = 401


class PermissionDeniedError(FinanceTrackerError):
    """The resource exists but belongs to another user, or the account is inactive."""

    default_status = 403


class NotFoundError(FinanceTrackerError):
    """Referenced category or transaction does not exist."""

    default_status = 404


class DomainValidationError(FinanceTrackerError):
    """Input is well-formed but violates a business rule.

    Examples:
    - Category type does not match transaction type
    - Move target missing when deleting a category
    - Start date after end date
    """

    default_status = 400


class ConflictError(FinanceTrackerError):
    """A uniqueness rule would be broken (e.g., duplicate category name)."""

    default_status = 409
