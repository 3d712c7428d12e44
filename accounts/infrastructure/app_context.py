"""SQLAlchemy-backed AppContext: one session per transaction scope."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from accounts.application.context import Context
from accounts.application.interfaces.repositories import RepositoryBundle
from accounts.application.interfaces.services import IPasswordHasher
from accounts.infrastructure.persistence.database import transactional_session
from accounts.infrastructure.persistence.repositories.user_repo import UserRepository


class SqlAlchemyAppContext:
    """Process-wide collaborators; built once by the lifespan (or tests)."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        password_hasher: IPasswordHasher,
        logger: logging.Logger | None = None,
    ) -> None:
        self.session_factory = session_factory
        self.password_hasher = password_hasher
        self.logger = logger or logging.getLogger("accounts.requests")

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[RepositoryBundle]:
        async with transactional_session(self.session_factory) as session:
            yield RepositoryBundle(users=UserRepository(session))

    def create_request_context(self, request_id: str) -> Context:
        return Context(self, request_id)
