"""
Stride - HTTP Middleware

Every request gets a correlation id and one access log line. Report uploads
are tagged so their size and latency can be followed separately from the
catalogue reads that make up the rest of the traffic. Upload size itself is
enforced by the import endpoint against MAX_UPLOAD_SIZE.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from stride.core.logging_config import (
    logger,
    set_request_id,
    clear_log_context,
    generate_request_id,
)


QUIET_PATHS = frozenset({"/", "/favicon.ico", "/docs", "/redoc", "/openapi.json"})
HEALTH_SUFFIXES = ("/health", "/health/ready")
REPORT_UPLOAD_SUFFIX = "/attendance/import"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


def should_skip_logging(path: str) -> bool:
    """Docs, health probes and static assets are not access-logged"""
    if path in QUIET_PATHS or path.startswith("/static/"):
        return True
    return path.rstrip("/").endswith(HEALTH_SUFFIXES)


def is_report_upload(request: Request) -> bool:
    return request.method == "POST" and request.url.path.rstrip("/").endswith(REPORT_UPLOAD_SUFFIX)


def request_log_fields(request: Request) -> Dict[str, Any]:
    """Structured fields attached to the access log line of a request"""
    fields: Dict[str, Any] = {
        "event_type": "http_request",
        "http_method": request.method,
        "http_path": request.url.path,
        "client_ip": request.client.host if request.client else "unknown",
    }
    if is_report_upload(request):
        length: Optional[str] = request.headers.get("content-length")
        fields["event_type"] = "report_upload"
        fields["upload_bytes"] = int(length) if length and length.isdigit() else None
    return fields


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Sets the request id context, times the request and writes the access log.

    Responses carry X-Request-ID and X-Response-Time. 4xx and slow requests
    log at WARNING, 5xx at ERROR.
    """

    def __init__(self, app: ASGIApp, slow_request_ms: float = 1000):
        super().__init__(app)
        self.slow_request_ms = slow_request_ms

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        set_request_id(request_id)
        fields = request_log_fields(request)
        quiet = should_skip_logging(request.url.path)
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"{request.method} {request.url.path} raised {type(exc).__name__} ({duration_ms:.2f}ms)",
                exc_info=True,
                extra={**fields, "duration_ms": duration_ms, "error_type": type(exc).__name__},
            )
            clear_log_context()
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"

        if not quiet:
            slow = duration_ms > self.slow_request_ms
            if response.status_code >= 500:
                level = logging.ERROR
            elif response.status_code >= 400 or slow:
                level = logging.WARNING
            else:
                level = logging.INFO
            logger.log(
                level,
                f"{request.method} {request.url.path} - {response.status_code} ({duration_ms:.2f}ms)",
                extra={**fields, "http_status": response.status_code, "duration_ms": duration_ms, "slow": slow},
            )

        clear_log_context()
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response


__all__ = [
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
    "request_log_fields",
    "should_skip_logging",
]
