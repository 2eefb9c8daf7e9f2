from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from stride.core.config import settings
from stride.core.database import init_db, close_db
from stride.core.exceptions import (
    StrideError,
    AuthenticationError,
    AuthorizationError,
    ResourceNotFoundError,
    ReportParseError,
    error_response,
)
from stride.core.logging_config import logger
from stride.core.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from stride.core.rate_limiter import limiter, rate_limit_exceeded_handler
from stride.api.v1.router import api_router
from stride.services.cache_service import cache_service
from slowapi.errors import RateLimitExceeded


async def validate_critical_config():
    """Validate critical configuration at startup - fail fast if missing"""
    errors = []
    warnings = []

    if not settings.DATABASE_URL:
        errors.append("DATABASE_URL is not set")

    if not settings.JWT_SECRET_KEY or settings.JWT_SECRET_KEY == "CHANGE_ME":
        if not settings.is_dev_mode():
            errors.append("JWT_SECRET_KEY is not set or using default value")
        else:
            warnings.append("JWT_SECRET_KEY is using the default value")

    if settings.CACHE_ENABLED and not settings.REDIS_URL:
        warnings.append("REDIS_URL not set - caching disabled")

    if errors:
        for err in errors:
            logger.critical(f"[Startup] CRITICAL: {err}")
        raise RuntimeError(f"Missing critical configuration: {', '.join(errors)}")

    for warn in warnings:
        logger.warning(f"[Startup] WARNING: {warn}")

    logger.info("[Startup] ✓ Critical configuration validated")
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    logger.info("=" * 60)
    logger.info(f"Starting {settings.APP_NAME}...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"API Version: {settings.API_VERSION}")
    logger.info("=" * 60)

    await validate_critical_config()

    try:
        await init_db()
        logger.info("[Startup] Database tables ready")
    except Exception as e:
        logger.error(f"[Startup] Failed to prepare database: {e}")

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")
    await cache_service.close()
    await close_db()


app = FastAPI(
    title=settings.APP_NAME,
    description="Student academic dashboard: attendance planning, grades and holiday-aware leave suggestions",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    redirect_slashes=False,
)

# Add rate limiter state and exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Add middleware (order matters - last added runs first)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Response-Time"],
)


def status_code_for(exc: StrideError) -> int:
    if isinstance(exc, ResourceNotFoundError):
        return 404
    if isinstance(exc, ReportParseError):
        return 422
    if isinstance(exc, AuthenticationError):
        return 401
    if isinstance(exc, AuthorizationError):
        return 403
    return 400


# Exception handlers
@app.exception_handler(StrideError)
async def stride_exception_handler(request: Request, exc: StrideError):
    status_code = status_code_for(exc)
    logger.warning(f"{request.method} {request.url.path} -> {status_code} {exc.code}: {exc.message}")
    return JSONResponse(status_code=status_code, content=error_response(exc))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.log_error_with_context(exc, context=f"{request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "message": str(exc) if settings.DEBUG else "An error occurred"
        }
    )


# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": "1.0.0",
        "docs": "/docs",
        "health": f"/api/{settings.API_VERSION}/health"
    }


# Include API router
app.include_router(api_router, prefix=f"/api/{settings.API_VERSION}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "stride.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG
    )
