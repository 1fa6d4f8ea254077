"""Request logging middleware with PII filtering.

This module provides structured logging for all API requests with:
- Request IDs for tracing (taken from X-Request-ID or generated)
- Request duration tracking
- User context (when authenticated)
- PII filtering to prevent sensitive data leaks
"""

import json
import logging
import re
import sys
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


# PII patterns to filter from logs. Order matters: the 18-character ID number
# must be replaced before the generic digit runs that would match part of it.
PII_PATTERNS = [
    # Email addresses
    (re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b'), '[EMAIL]'),
    # PRC resident ID numbers (18 characters, last may be X)
    (re.compile(r'(?<!\d)[1-9]\d{5}(?:19|20)\d{2}(?:0[1-9]|1[0-2])(?:0[1-9]|[12]\d|3[01])\d{3}[\dXx](?!\d)'), '[ID]'),
    # Bank card numbers (13-19 digits, with or without spaces/dashes)
    (re.compile(r'(?<!\d)\d{4}[\s-]?\d{4}[\s-]?\d{4}[\s-]?\d{1,7}(?!\d)'), '[CARD]'),
    # Mainland mobile numbers, optionally with +86
    (re.compile(r'(?<!\d)(?:\+?86[\s-]?)?1[3-9]\d[\s-]?\d{4}[\s-]?\d{4}(?!\d)'), '[PHONE]'),
    # International phone numbers
    (re.compile(r'\+\d{1,3}[-.\s]?\(?\d{2,4}\)?[-.\s]?\d{3,4}[-.\s]?\d{4,5}'), '[PHONE]'),
]


def filter_pii(text: str) -> str:
    """Remove PII from text using regex patterns.

    Args:
        text: Input text that may contain PII

    Returns:
        Text with PII replaced by placeholders
    """
    if not text:
        return text

    filtered = text
    for pattern, replacement in PII_PATTERNS:
        filtered = pattern.sub(replacement, filtered)

    return filtered


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all HTTP requests with PII filtering."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and log details.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware or route handler

        Returns:
            HTTP response
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()
        path = filter_pii(str(request.url.path))

        logger.info(
            "Request started",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": path,
                "client_ip": request.client.host if request.client else None,
            },
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = int((time.time() - start_time) * 1000)
            logger.error(
                "Request failed",
                extra={
                    "request_id": request_id,
                    "user_id": getattr(request.state, "user_id", None),
                    "method": request.method,
                    "path": path,
                    "duration_ms": duration_ms,
                    "error": filter_pii(str(exc)),
                },
            )
            raise

        duration_ms = int((time.time() - start_time) * 1000)
        response.headers[REQUEST_ID_HEADER] = request_id

        # user_id is set by the auth dependency once the token is verified
        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "user_id": getattr(request.state, "user_id", None),
                "method": request.method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )

        return response


class JSONLogFormatter(logging.Formatter):
    """Format log records as JSON for structured logging."""

    EXTRA_FIELDS = (
        "request_id",
        "user_id",
        "method",
        "path",
        "status_code",
        "duration_ms",
        "error_code",
        "error_type",
        "client_ip",
    )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": filter_pii(record.getMessage()),
        }

        for field in self.EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value

        if record.exc_info:
            log_data["exception"] = filter_pii(self.formatException(record.exc_info))

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Configure the root logger once at startup."""
    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level.upper())
