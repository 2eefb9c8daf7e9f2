"""
Rate Limiting for the Stride API
================================
Implements rate limiting using slowapi.

Storage comes from RATE_LIMIT_STORAGE_URI ("memory://" by default, a
redis:// URL in multi-worker deployments).

Special endpoints have their own limits:
- /attendance/import: REPORT_IMPORT_RATE_LIMIT (report parsing is the
  only CPU-heavy operation)
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from stride.core.config import settings
from stride.core.logging_config import logger, get_user_email


def get_user_identifier(request: Request) -> str:
    """
    Get rate limit key.

    Priority:
    1. Authenticated email (set by the auth dependency)
    2. IP address (for anonymous users)
    """
    email = get_user_email()
    if email:
        return f"user:{email}"
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(
    key_func=get_user_identifier,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Return a JSON 429 with a Retry-After header"""
    retry_after = "60"

    logger.warning(
        f"[RateLimit] Exceeded for {get_user_identifier(request)}: {exc.detail}"
    )

    return JSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "message": "Too many requests. Please slow down.",
            "detail": str(exc.detail),
            "retry_after_seconds": int(retry_after),
        },
        headers={
            "Retry-After": retry_after,
            "X-RateLimit-Limit": str(settings.RATE_LIMIT_PER_MINUTE),
        }
    )


def report_import_rate_limit():
    """Rate limit for report uploads"""
    return limiter.limit(settings.REPORT_IMPORT_RATE_LIMIT, key_func=get_user_identifier)
