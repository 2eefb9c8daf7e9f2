"""
Database engine and sessions

The engine is created on first use so importing models never opens a
connection. SQLite (local runs and tests) always uses NullPool; PostgreSQL
gets a pre-pinged connection pool outside development.
"""
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, AsyncIterator, Dict, Optional

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker, AsyncEngine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from stride.core.config import settings
from stride.core.logging_config import logger

Base = declarative_base()

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None

ASYNC_DRIVERS = {
    "postgresql://": "postgresql+asyncpg://",
    "postgres://": "postgresql+asyncpg://",
    "sqlite://": "sqlite+aiosqlite://",
}


def normalize_database_url(url: str) -> str:
    """Swap sync driver prefixes for their async counterparts"""
    for prefix, async_prefix in ASYNC_DRIVERS.items():
        if url.startswith(prefix):
            return async_prefix + url[len(prefix):]
    return url


def engine_options(url: str) -> Dict[str, Any]:
    """Keyword arguments for create_async_engine for the given database URL"""
    options: Dict[str, Any] = {"echo": settings.DB_ECHO}
    if url.startswith("sqlite"):
        options.update(connect_args={"check_same_thread": False}, poolclass=NullPool)
    elif settings.is_dev_mode():
        options["poolclass"] = NullPool
    else:
        # Catalogue reads are short; a small pool covers the dashboard
        options.update(pool_size=5, max_overflow=10, pool_recycle=1800, pool_pre_ping=True)
    return options


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        url = normalize_database_url(settings.DATABASE_URL)
        _engine = create_async_engine(url, **engine_options(url))
        logger.debug(f"Database engine created for {url.split('://')[0]}")
    return _engine


def session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped session.

    Services flush their writes, so the transaction is committed once the
    endpoint returns and rolled back when it raises.
    """
    async with session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Standalone transaction for scripts and seeding"""
    async with session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db():
    """Create the catalogue, holiday and resource tables"""
    import stride.models  # noqa: F401  (register models on the metadata)

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db():
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None
