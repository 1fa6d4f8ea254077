"""Unit tests for error handling middleware and PII filtering."""

import json
import logging
from unittest.mock import Mock

import pytest
from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from finance_tracker.api.middleware.error_handler import (
    handle_finance_error,
    handle_generic_error,
    handle_http_exception,
    handle_integrity_error,
    handle_validation_error,
)
from finance_tracker.api.middleware.logging import JSONLogFormatter, filter_pii
from finance_tracker.core.errors import ERROR_CATALOG, get_error, is_retryable
from finance_tracker.core.exceptions import (
    AuthenticationError,
    ConflictError,
    DomainValidationError,
    FinanceTrackerError,
    NotFoundError,
)


def _request(path: str = "/test", method: str = "GET") -> Mock:
    request = Mock(spec=Request)
    request.url.path = path
    request.method = method
    return request


def _body(response: JSONResponse) -> dict:
    return json.loads(response.body.decode())


class TestFinanceErrorHandler:
    """Test domain exception handling."""

    @pytest.mark.asyncio
    async def test_not_found_error(self):
        """Test NotFoundError maps to 404 with catalog message."""
        exc = NotFoundError("CAT_001", {"category_id": "abc"})

        response = await handle_finance_error(_request("/api/v1/categories/abc", "PUT"), exc)

        assert isinstance(response, JSONResponse)
        assert response.status_code == 404
        content = _body(response)
        assert content["success"] is False
        assert content["errorCode"] == "CAT_001"
        assert content["error"] == ERROR_CATALOG["CAT_001"]["user_message"]
        assert content["details"] == {"category_id": "abc"}

    @pytest.mark.asyncio
    async def test_authentication_error_is_unauthorized(self):
        """Test missing credentials answer 401 "unauthorized" with a Bearer challenge."""
        response = await handle_finance_error(_request(), AuthenticationError("AUTH_001"))

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        assert _body(response)["error"] == "unauthorized"

    @pytest.mark.asyncio
    async def test_explicit_status_overrides_default(self):
        """Test http_status passed to the exception wins over the class default."""
        exc = FinanceTrackerError("SYS_001", http_status=503)

        response = await handle_finance_error(_request(), exc)

        assert response.status_code == 503

    @pytest.mark.parametrize(
        "exc_class,expected",
        [
            (DomainValidationError, 400),
            (NotFoundError, 404),
            (ConflictError, 409),
            (FinanceTrackerError, 500),
        ],
    )
    def test_default_statuses(self, exc_class, expected):
        """Test each exception class carries its HTTP status."""
        assert exc_class("SYS_001").http_status == expected

    @pytest.mark.asyncio
    async def test_error_includes_all_fields(self):
        """Test error response includes all envelope fields."""
        response = await handle_finance_error(_request(), ConflictError("CAT_006"))

        content = _body(response)
        for field in ["success", "error", "errorCode", "suggestion", "retryAllowed", "details"]:
            assert field in content, f"Missing required field: {field}"
        assert len(content["suggestion"]) > 0


class TestHTTPExceptionHandler:
    """Test framework HTTP errors use the envelope."""

    @pytest.mark.asyncio
    async def test_not_found_route(self):
        """Test a plain 404 keeps its status and reason."""
        response = await handle_http_exception(
            _request(), HTTPException(status_code=404, detail="Not Found")
        )

        assert response.status_code == 404
        content = _body(response)
        assert content["success"] is False
        assert content["details"] == {"reason": "Not Found"}

    @pytest.mark.asyncio
    async def test_unauthorized(self):
        """Test a 401 maps to the auth error code."""
        response = await handle_http_exception(
            _request(), HTTPException(status_code=401, detail="Not authenticated")
        )

        assert response.status_code == 401
        assert _body(response)["errorCode"] == "AUTH_001"


class TestValidationErrorHandler:
    """Test validation error handling."""

    @pytest.mark.asyncio
    async def test_handle_validation_error(self):
        """Test handling of RequestValidationError."""
        exc = RequestValidationError(
            errors=[
                {
                    "loc": ("query", "monthly_budget"),
                    "msg": "Input should be greater than 0",
                    "type": "greater_than",
                }
            ]
        )

        response = await handle_validation_error(_request("/api/v1/statistics"), exc)

        assert response.status_code == 400
        content = _body(response)
        assert content["errorCode"] == "VAL_001"
        assert "monthly_budget" in content["details"]["fields"]

    @pytest.mark.asyncio
    async def test_validation_error_multiple_fields(self):
        """Test validation error with multiple field errors."""
        exc = RequestValidationError(
            errors=[
                {"loc": ("body", "name"), "msg": "too long", "type": "value_error"},
                {"loc": ("body", "type"), "msg": "invalid", "type": "value_error"},
            ]
        )

        response = await handle_validation_error(_request(method="POST"), exc)

        fields = _body(response)["details"]["fields"]
        assert fields == {"name": "too long", "type": "invalid"}


class TestIntegrityErrorHandler:
    """Test database integrity error handling."""

    @pytest.mark.asyncio
    async def test_handle_duplicate_key_error(self):
        """Test handling of duplicate key database error."""
        exc = IntegrityError("statement", "params", "UNIQUE constraint failed")

        response = await handle_integrity_error(_request(method="POST"), exc)

        assert response.status_code == 409
        assert _body(response)["errorCode"] == "DB_002"

    @pytest.mark.asyncio
    async def test_handle_generic_db_error(self):
        """Test handling of generic database error."""
        exc = IntegrityError("statement", "params", "Foreign key constraint failed")

        response = await handle_integrity_error(_request(method="POST"), exc)

        assert response.status_code == 500
        assert _body(response)["errorCode"] == "DB_001"


class TestGenericErrorHandler:
    """Test generic exception handling."""

    @pytest.mark.asyncio
    async def test_5xx_errors_dont_expose_internals(self):
        """Test 5xx errors don't expose internal details."""
        exc = Exception("Database connection failed: host=localhost port=5432")

        response = await handle_generic_error(_request(), exc)

        assert response.status_code == 500
        content = _body(response)
        assert content["errorCode"] == "SYS_001"
        assert content["error"] == "An unexpected error occurred."
        assert "localhost" not in json.dumps(content)


class TestErrorCatalog:
    """Test catalog lookups."""

    def test_unknown_code_falls_back(self):
        assert get_error("NOPE_999")["code"] == "UNKNOWN"

    def test_retryable_flags(self):
        assert is_retryable("DB_001") is True
        assert is_retryable("CAT_006") is False

    def test_every_entry_is_complete(self):
        for code, entry in ERROR_CATALOG.items():
            assert entry["code"] == code
            assert entry["user_message"]
            assert entry["suggestion"]


class TestPIIFiltering:
    """Test PII filtering functionality."""

    def test_filter_bank_card(self):
        """Test filtering of bank card numbers."""
        text = "Card number 6222021234567890123 was used"
        filtered = filter_pii(text)
        assert "6222021234567890123" not in filtered
        assert "[CARD]" in filtered

    def test_filter_spaced_card(self):
        filtered = filter_pii("card 4532 0151 1283 0366")
        assert "4532 0151" not in filtered
        assert "[CARD]" in filtered

    def test_filter_email(self):
        """Test filtering of email addresses."""
        filtered = filter_pii("Contact john.doe@example.com for help")
        assert "john.doe@example.com" not in filtered
        assert "[EMAIL]" in filtered

    def test_filter_mobile_number(self):
        """Test filtering of mainland mobile numbers."""
        filtered = filter_pii("手机 13812345678 已绑定")
        assert "13812345678" not in filtered
        assert "[PHONE]" in filtered

    def test_filter_international_phone(self):
        filtered = filter_pii("Call us at +1-555-123-4567")
        assert "555-123-4567" not in filtered
        assert "[PHONE]" in filtered

    def test_filter_resident_id(self):
        """Test filtering of PRC resident ID numbers."""
        filtered = filter_pii("身份证 11010119900307123X")
        assert "11010119900307123X" not in filtered
        assert "[ID]" in filtered

    def test_filter_preserves_non_pii(self):
        """Test that amounts and merchants are preserved."""
        text = "Transaction for 50.00 at 星巴克 on 2024-01-15"
        assert filter_pii(text) == text

    def test_filter_empty_string(self):
        assert filter_pii("") == ""

    def test_filter_none(self):
        assert filter_pii(None) is None


class TestLoggingBehavior:
    """Test logging behavior of error handlers."""

    @pytest.mark.asyncio
    async def test_server_errors_are_logged_as_error(self, caplog):
        """Test that 5xx domain errors are logged with context."""
        exc = FinanceTrackerError("DB_001", details={"table": "categories"})

        with caplog.at_level(logging.ERROR):
            await handle_finance_error(_request("/api/v1/categories", "POST"), exc)

        assert len(caplog.records) > 0
        assert "DB_001" in caplog.text

    @pytest.mark.asyncio
    async def test_client_errors_logged_as_warning(self, caplog):
        """Test 4xx errors are logged at WARNING level."""
        with caplog.at_level(logging.WARNING):
            await handle_finance_error(_request(), NotFoundError("TXN_001"))

        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_json_formatter_filters_pii(self):
        """Test the JSON formatter scrubs messages and keeps extra fields."""
        record = logging.LogRecord(
            "test", logging.INFO, __file__, 1, "login for a@b.com", None, None
        )
        record.request_id = "req-1"

        output = json.loads(JSONLogFormatter().format(record))

        assert output["message"] == "login for [EMAIL]"
        assert output["request_id"] == "req-1"
        assert output["level"] == "INFO"
