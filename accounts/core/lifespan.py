"""Application lifespan: startup and shutdown.

Wiring only: logging, the database engine and the process-wide
SqlAlchemyAppContext stored on app.state.app_context.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from accounts.core.config import get_settings
from accounts.infrastructure.app_context import SqlAlchemyAppContext
from accounts.infrastructure.persistence.database import (
    create_engine_from_settings,
    create_session_factory,
    create_tables,
)
from accounts.infrastructure.security.password import BcryptPasswordHasher
from accounts.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the engine and app context, yield, then dispose the engine."""
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    engine = create_engine_from_settings(settings)
    if settings.database_create_tables:
        await create_tables(engine)
    app.state.engine = engine
    app.state.app_context = SqlAlchemyAppContext(
        session_factory=create_session_factory(engine),
        password_hasher=BcryptPasswordHasher(rounds=settings.bcrypt_rounds),
    )
    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    # ---- Shutdown ----
    app.state.app_context = None
    await engine.dispose()
    app.state.engine = None
    logger.info("Database engine disposed")
