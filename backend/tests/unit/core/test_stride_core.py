"""
Unit Tests for core modules
Tests for: JWT tokens, admin checks, rate limit keys, error mapping, logging, engine options
"""
import json
import logging
import sys
from datetime import timedelta

import pytest
from fastapi import HTTPException
from jose import jwt
from sqlalchemy.pool import NullPool
from starlette.requests import Request

from stride.core.config import settings
from stride.core.database import engine_options, normalize_database_url
from stride.core.exceptions import (
    CalendarNotFoundError,
    ContributionAlreadyReviewedError,
    InvalidFileTypeError,
    InvalidMarksError,
    InvalidTargetError,
    StrideError,
    UnreadableReportError,
    error_response,
)
from stride.core.logging_config import (
    JSONFormatter,
    clear_log_context,
    log_context,
    set_request_id,
    set_user_email,
)
from stride.core.middleware import request_log_fields, should_skip_logging
from stride.core.rate_limiter import get_user_identifier
from stride.core.security import create_access_token, decode_token, is_admin_email
from stride.main import status_code_for


class TestTokens:
    """Test JWT access tokens"""

    def test_roundtrip_claims(self):
        token = create_access_token("24BCE167@nirmauni.ac.in")
        payload = decode_token(token)

        assert payload["sub"] == "24BCE167@nirmauni.ac.in"
        assert payload["email"] == "24bce167@nirmauni.ac.in"
        assert payload["type"] == "access"
        assert "exp" in payload

    def test_extra_claims(self):
        token = create_access_token("a@b.c", extra_claims={"cycle": "A"})
        assert decode_token(token)["cycle"] == "A"

    def test_expired_token(self):
        token = create_access_token("a@b.c", expires_delta=timedelta(minutes=-5))
        with pytest.raises(HTTPException) as exc_info:
            decode_token(token)
        assert exc_info.value.status_code == 401

    def test_foreign_signature(self):
        token = jwt.encode({"sub": "a@b.c", "type": "access"}, "some-other-secret", algorithm="HS256")
        with pytest.raises(HTTPException):
            decode_token(token)

    def test_admin_email(self):
        assert is_admin_email(settings.ADMIN_EMAIL)
        assert is_admin_email(f"  {settings.ADMIN_EMAIL.upper()} ")
        assert not is_admin_email("24bce167@nirmauni.ac.in")
        assert not is_admin_email(None)


def make_request(host: str = "10.1.2.3") -> Request:
    return Request({
        "type": "http",
        "method": "POST",
        "path": "/api/v1/attendance/import",
        "headers": [],
        "client": (host, 52100),
    })


class TestRateLimitKey:
    """Test rate limit identifiers"""

    def test_anonymous_uses_ip(self):
        set_user_email("")
        assert get_user_identifier(make_request()) == "ip:10.1.2.3"

    def test_authenticated_uses_email(self):
        set_user_email("24bce167@nirmauni.ac.in")
        try:
            assert get_user_identifier(make_request()) == "user:24bce167@nirmauni.ac.in"
        finally:
            set_user_email("")


class TestExceptions:
    """Test error payloads and status mapping"""

    def test_error_response(self):
        error = InvalidTargetError(150)
        body = error_response(error)

        assert body["success"] is False
        assert body["error"]["code"] == "INVALID_TARGET"
        assert body["error"]["details"] == {"field": "target"}

    def test_unreadable_report_details(self):
        error = UnreadableReportError("pdf", reason="x" * 1000)
        assert error.details["source"] == "pdf"
        assert len(error.details["reason"]) == 500

    def test_invalid_marks_details(self):
        error = InvalidMarksError("SEE", 120, 100)
        assert error.details == {"field": "marks", "component": "SEE", "scored": 120, "max_marks": 100}

    @pytest.mark.parametrize("error,status_code", [
        (CalendarNotFoundError("Civil Engineering", 3), 404),
        (UnreadableReportError("html"), 422),
        (InvalidFileTypeError("docx", ["pdf", "html"]), 400),
        (InvalidTargetError(0), 400),
        (ContributionAlreadyReviewedError("c-1", "APPROVED"), 400),
        (StrideError("boom"), 400),
    ])
    def test_status_codes(self, error, status_code):
        assert status_code_for(error) == status_code


class TestLogging:
    """Test structured logging helpers"""

    def test_skip_paths(self):
        assert should_skip_logging("/api/v1/health")
        assert should_skip_logging("/static/app.js")
        assert not should_skip_logging("/api/v1/attendance/import")

    def test_json_formatter_context(self):
        set_request_id("abc12345")
        try:
            record = logging.LogRecord("stride", logging.INFO, __file__, 10, "Imported %d rows", (4,), None)
            record.event_type = "report_import"
            data = json.loads(JSONFormatter().format(record))
        finally:
            set_request_id("")

        assert data["message"] == "Imported 4 rows"
        assert data["request_id"] == "abc12345"
        assert data["event_type"] == "report_import"
        assert data["level"] == "INFO"

    def test_report_upload_fields(self):
        request = Request({
            "type": "http",
            "method": "POST",
            "path": "/api/v1/attendance/import",
            "headers": [(b"content-length", b"2048")],
            "client": ("10.1.2.3", 52100),
        })
        fields = request_log_fields(request)

        assert fields["event_type"] == "report_upload"
        assert fields["upload_bytes"] == 2048
        assert fields["client_ip"] == "10.1.2.3"

    def test_catalogue_request_fields(self):
        request = Request({
            "type": "http",
            "method": "GET",
            "path": "/api/v1/subjects",
            "headers": [],
            "client": None,
        })
        fields = request_log_fields(request)

        assert fields["event_type"] == "http_request"
        assert fields["client_ip"] == "unknown"
        assert "upload_bytes" not in fields


class TestDatabase:
    """Test engine configuration helpers"""

    @pytest.mark.parametrize("url,expected", [
        ("postgresql://u:p@db/stride", "postgresql+asyncpg://u:p@db/stride"),
        ("postgres://u:p@db/stride", "postgresql+asyncpg://u:p@db/stride"),
        ("sqlite:///./stride.db", "sqlite+aiosqlite:///./stride.db"),
        ("sqlite+aiosqlite:///./stride.db", "sqlite+aiosqlite:///./stride.db"),
    ])
    def test_async_driver(self, url, expected):
        assert normalize_database_url(url) == expected

    def test_sqlite_uses_null_pool(self):
        options = engine_options("sqlite+aiosqlite:///./stride.db")

        assert options["poolclass"] is NullPool
        assert options["connect_args"] == {"check_same_thread": False}

    def test_production_postgres_pools(self, monkeypatch):
        monkeypatch.setattr(settings, "ENVIRONMENT", "production")
        options = engine_options("postgresql+asyncpg://u:p@db/stride")

        assert "poolclass" not in options
        assert options["pool_pre_ping"] is True


class TestLogContext:
    """Test request/user log context"""

    def test_context_drops_empty_values(self):
        clear_log_context()
        set_request_id("req-1")
        try:
            assert log_context() == {"request_id": "req-1"}
            set_user_email("24bce167@nirmauni.ac.in")
            assert log_context() == {"request_id": "req-1", "user_email": "24bce167@nirmauni.ac.in"}
        finally:
            clear_log_context()

        assert log_context() == {}

    def test_json_formatter_exception(self):
        try:
            raise ValueError("bad row")
        except ValueError:
            record = logging.LogRecord("stride", logging.ERROR, __file__, 10, "failed", (), sys.exc_info())
        data = json.loads(JSONFormatter().format(record))

        assert data["exception"]["type"] == "ValueError"
        assert data["exception"]["message"] == "bad row"
        assert "request_id" not in data
