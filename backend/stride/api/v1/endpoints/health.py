"""
Health Check Endpoints

- /health        - Basic liveness (app is running)
- /health/ready  - Readiness check (database, and Redis when caching is on)
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from datetime import datetime
from typing import Dict, Any
import time

from stride.core.config import settings
from stride.core.logging_config import logger


router = APIRouter(prefix="/health", tags=["Health Checks"])


async def check_database() -> Dict[str, Any]:
    """Check database connectivity"""
    start = time.time()
    try:
        from stride.core.database import session_factory
        from sqlalchemy import text

        async with session_factory()() as session:
            await session.execute(text("SELECT 1"))

        return {"status": "healthy", "latency_ms": round((time.time() - start) * 1000, 2)}
    except Exception as e:
        logger.error(f"[HealthCheck] Database check failed: {e}")
        return {
            "status": "unhealthy",
            "latency_ms": round((time.time() - start) * 1000, 2),
            "error": str(e),
        }


async def check_redis() -> Dict[str, Any]:
    """Check Redis connectivity; skipped when the cache is disabled"""
    if not settings.CACHE_ENABLED:
        return {"status": "skipped"}

    start = time.time()
    try:
        import redis.asyncio as redis

        client = redis.from_url(settings.REDIS_URL, decode_responses=True)
        try:
            await client.ping()
        finally:
            await client.close()
        return {"status": "healthy", "latency_ms": round((time.time() - start) * 1000, 2)}
    except Exception as e:
        # Redis only backs the cache; never fails readiness
        logger.warning(f"[HealthCheck] Redis check failed: {e}")
        return {"status": "degraded", "error": str(e)}


@router.get("")
async def health_check():
    """Simple liveness check"""
    return {"status": "healthy", "service": "stride-backend", "version": settings.API_VERSION}


@router.get("/ready")
async def readiness_check():
    database = await check_database()
    redis_status = await check_redis()
    healthy = database["status"] == "healthy"

    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ready" if healthy else "not_ready",
            "timestamp": datetime.utcnow().isoformat(),
            "checks": {"database": database, "redis": redis_status},
        },
    )
