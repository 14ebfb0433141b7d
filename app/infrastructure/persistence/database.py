"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Schema is managed by Alembic migrations (app/infrastructure/persistence/migrations).

Engine and session factory are created lazily on first use (get_db /
get_session_factory) so import does not trigger Settings validation.

Every store command is bounded by asyncpg's command_timeout
(DB_COMMAND_TIMEOUT). Connection-level failures are converted to
StoreUnavailableException so callers see a generic 500.
"""

import logging
from collections.abc import AsyncIterator
from typing import Any

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import get_settings
from app.domain.exceptions import StoreUnavailableException

logger = logging.getLogger(__name__)

# Set by _ensure_engine() on first use; avoids get_settings() at import time.
engine: AsyncEngine | None = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


def _ensure_engine() -> async_sessionmaker[AsyncSession]:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return AsyncSessionLocal
    settings = get_settings()
    pool_size = settings.db_pool_size if settings.db_pool_size is not None else 10
    max_overflow = (
        settings.db_max_overflow if settings.db_max_overflow is not None else 20
    )
    connect_args: dict[str, Any] = {}
    if "postgresql" in settings.database_url:
        connect_args["command_timeout"] = settings.db_command_timeout
    engine = create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_pre_ping=True,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_recycle=3600,
        pool_timeout=settings.db_command_timeout,
        connect_args=connect_args,
    )
    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )
    return AsyncSessionLocal


async def dispose_engine() -> None:
    """Dispose the engine (lifespan shutdown). No-op if it was never created."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
    engine = None
    AsyncSessionLocal = None


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


async def get_db() -> AsyncIterator[AsyncSession]:
    """Database session dependency.

    Does not commit; repositories commit their own write units so that a
    committed provisioning is durable before notifications go out.
    Yields a session and closes it on exit.

    Raises:
        StoreUnavailableException: If the database cannot be reached or times out.
    """
    session_factory = _ensure_engine()
    async with session_factory() as session:
        try:
            yield session
        except (OperationalError, InterfaceError) as e:
            logger.error("Store unavailable: %s", type(e).__name__)
            raise StoreUnavailableException(type(e).__name__) from e


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Process-wide session factory, for units that must not share the request session."""
    return _ensure_engine()
