"""Global error handling.

Every exception that reaches the API is converted to the error envelope
``{"success": false, "error", "errorCode", "suggestion", "retryAllowed",
"details"}`` with the HTTP status that fits it.
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from finance_tracker.config import settings
from finance_tracker.core.errors import get_error
from finance_tracker.core.exceptions import FinanceTrackerError
from finance_tracker.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

_HTTP_STATUS_CODES = {
    status.HTTP_401_UNAUTHORIZED: "AUTH_001",
    status.HTTP_403_FORBIDDEN: "AUTH_003",
}


def error_response(
    http_status: int,
    error_code: str,
    details: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build an error envelope from a catalog code."""
    error_info = get_error(error_code)
    body = ErrorResponse(
        error=error_info["user_message"],
        error_code=error_code,
        suggestion=error_info["suggestion"],
        retry_allowed=error_info["retry_allowed"],
        details=details or None,
    )
    return JSONResponse(
        status_code=http_status,
        content=body.model_dump(by_alias=True, mode="json"),
        headers=headers,
    )


async def handle_finance_error(request: Request, exc: FinanceTrackerError) -> JSONResponse:
    """Handle domain exceptions raised by services and dependencies.

    Args:
        request: The incoming request
        exc: The domain exception

    Returns:
        JSONResponse with error details from catalog
    """
    extra = {"error_code": exc.error_code, "path": request.url.path, "method": request.method}
    if settings.debug:
        extra["details"] = exc.details

    # Client errors are expected traffic; only 5xx is an error
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(f"Request rejected: {exc.error_code}", extra=extra)

    headers = None
    if exc.http_status == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return error_response(exc.http_status, exc.error_code, exc.details, headers)


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle framework HTTP errors (unknown routes, wrong methods, ...)."""
    error_code = _HTTP_STATUS_CODES.get(exc.status_code)
    if error_code is None:
        error_code = "SYS_001" if exc.status_code >= 500 else "VAL_001"

    logger.warning(
        f"HTTP {exc.status_code} on {request.url.path}",
        extra={"path": request.url.path, "method": request.method},
    )
    return error_response(
        exc.status_code,
        error_code,
        {"reason": exc.detail} if exc.detail else None,
        getattr(exc, "headers", None),
    )


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors.

    Args:
        request: The incoming request
        exc: The validation error

    Returns:
        JSONResponse with field-level messages in ``details``
    """
    errors = exc.errors()
    field_errors = {}

    for error in errors:
        # Drop the "body"/"query" prefix so keys are plain field names
        loc = [str(x) for x in error.get("loc", [])]
        field = ".".join(loc[1:] if len(loc) > 1 else loc)
        field_errors[field] = error.get("msg", "Invalid value")

    extra = {"path": request.url.path, "method": request.method}
    if settings.debug:
        extra["errors"] = field_errors
    logger.warning(f"Validation error on {request.url.path}", extra=extra)

    return error_response(status.HTTP_400_BAD_REQUEST, "VAL_001", {"fields": field_errors})


async def handle_integrity_error(
    request: Request, exc: IntegrityError
) -> JSONResponse:
    """Handle database integrity errors.

    Args:
        request: The incoming request
        exc: The integrity error

    Returns:
        409 for unique violations, 500 otherwise
    """
    # Do not log str(exc): it can include SQL + bound parameters.
    if settings.debug:
        logger.exception(
            f"Database integrity error on {request.url.path}",
            extra={"path": request.url.path, "method": request.method},
        )
    else:
        logger.error(
            f"Database integrity error on {request.url.path}",
            extra={"path": request.url.path, "method": request.method},
        )

    error_msg = str(exc).lower()
    if "unique" in error_msg or "duplicate" in error_msg:
        return error_response(status.HTTP_409_CONFLICT, "DB_002")

    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "DB_001")


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions.

    Args:
        request: The incoming request
        exc: The unexpected exception

    Returns:
        JSONResponse with generic error message
    """
    # In non-debug: do not log str(exc) or traceback (may include sensitive data).
    if settings.debug:
        logger.exception(
            f"Unexpected error on {request.url.path}",
            extra={
                "error_type": type(exc).__name__,
                "path": request.url.path,
                "method": request.method,
            },
        )
    else:
        logger.error(
            f"Unexpected error on {request.url.path}",
            extra={
                "error_type": type(exc).__name__,
                "path": request.url.path,
                "method": request.method,
            },
        )

    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "SYS_001")
