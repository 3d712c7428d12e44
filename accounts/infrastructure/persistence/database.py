"""Persistence: async engine, session factory, transaction scope and Base.

The engine and session factory are built explicitly (by the lifespan, or by
tests) rather than at import time, so import does not trigger Settings
validation. Each transaction scope owns one pooled connection from checkout
until commit/rollback; concurrent requests never share a session.

SQLite URLs (sqlite+aiosqlite://) are supported for development and tests:
foreign keys are switched on per connection, and in-memory databases use a
single static connection so every session sees the same schema.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from accounts.core.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _is_in_memory_sqlite(url: str) -> bool:
    return _is_sqlite(url) and (url.endswith("://") or ":memory:" in url)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
    """SQLite ignores FOREIGN KEY / ON DELETE CASCADE unless asked per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(
    database_url: str,
    *,
    echo: bool = False,
    pool_size: int | None = None,
    max_overflow: int | None = None,
) -> AsyncEngine:
    """Create the async engine for database_url.

    Args:
        database_url: SQLAlchemy async URL.
        echo: Log SQL statements.
        pool_size: Pool size override (server databases only; default 10).
        max_overflow: Overflow override (server databases only; default 20).
    """
    kwargs: dict[str, Any] = {"echo": echo}
    if _is_in_memory_sqlite(database_url):
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    elif not _is_sqlite(database_url):
        kwargs["pool_pre_ping"] = True
        kwargs["pool_size"] = pool_size if pool_size is not None else 10
        kwargs["max_overflow"] = max_overflow if max_overflow is not None else 20
        kwargs["pool_recycle"] = 3600
    engine = create_async_engine(database_url, **kwargs)
    if _is_sqlite(database_url):
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Create the async engine from application settings."""
    return create_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return the session factory used for every transaction scope."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables from ORM metadata (development and tests only)."""
    # Register models on Base.metadata before create_all.
    from accounts.infrastructure.persistence import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")


@asynccontextmanager
async def transactional_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Yield a session inside one transaction.

    Commits on normal exit, rolls back on any exception (including
    cancellation), then returns the connection to the pool.
    """
    async with session_factory() as session:
        async with session.begin():
            yield session
