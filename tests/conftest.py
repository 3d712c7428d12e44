"""Pytest configuration and fixtures for accounts.

Every test gets its own in-memory SQLite database (aiosqlite). Environment
is set before accounts.main is imported so Settings validate at import.
"""

import dataclasses
import logging
import os
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any
from unittest.mock import AsyncMock

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_ACCESS_SECRET"] = "test-access-secret"
os.environ["JWT_REFRESH_SECRET"] = "test-refresh-secret"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine  # noqa: E402

from accounts.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from accounts.application.context import Context  # noqa: E402
from accounts.application.interfaces.repositories import RepositoryBundle  # noqa: E402
from accounts.core.limiter import limiter  # noqa: E402
from accounts.domain.entities import User  # noqa: E402
from accounts.infrastructure.app_context import SqlAlchemyAppContext  # noqa: E402
from accounts.infrastructure.persistence.database import (  # noqa: E402
    create_engine,
    create_session_factory,
    create_tables,
)
from accounts.infrastructure.security.jwt import TokenService  # noqa: E402
from accounts.infrastructure.security.password import (  # noqa: E402
    BcryptPasswordHasher,
)
from accounts.main import app  # noqa: E402

STRONG_PASSWORD = "Str0ngPassw0rd"


class FakeAppContext:
    """AppContext whose repositories and hasher are AsyncMocks (no database)."""

    def __init__(self) -> None:
        self.users = AsyncMock()
        self.password_hasher = AsyncMock()
        self.logger = logging.getLogger("tests.accounts")
        self.transactions_opened = 0

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[RepositoryBundle]:
        self.transactions_opened += 1
        yield RepositoryBundle(users=self.users)

    def create_request_context(self, request_id: str) -> Context:
        return Context(self, request_id)


@pytest.fixture
def fake_app() -> FakeAppContext:
    return FakeAppContext()


@pytest.fixture
def make_user() -> Callable[..., User]:
    """Factory for persisted-looking User entities."""

    def _make(**overrides: Any) -> User:
        fields: dict[str, Any] = {
            "id": "user-1",
            "email": "ada@example.com",
            "first_name": "Ada",
            "last_name": "Lovelace",
            "is_active": True,
            "is_admin": False,
        }
        fields.update(overrides)
        return User.from_data(**fields)

    return _make


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """Fresh in-memory database with the schema created."""
    db_engine = create_engine("sqlite+aiosqlite://")
    await create_tables(db_engine)
    yield db_engine
    await db_engine.dispose()


@pytest.fixture
def app_context(engine: AsyncEngine) -> SqlAlchemyAppContext:
    return SqlAlchemyAppContext(
        session_factory=create_session_factory(engine),
        password_hasher=BcryptPasswordHasher(rounds=4),
    )


@pytest.fixture
def make_context(app_context: SqlAlchemyAppContext) -> Callable[..., Context]:
    """Factory for request Contexts, optionally with a user attached."""

    def _make(user_id: str | None = None, request_id: str = "test-request") -> Context:
        context = app_context.create_request_context(request_id)
        if user_id:
            context.attach_user(user_id)
        return context

    return _make


@pytest.fixture
def promote_to_admin(app_context: SqlAlchemyAppContext):
    """Return an async helper that sets is_admin on an existing user."""

    async def _promote(user_id: str) -> None:
        async with app_context.transaction() as repositories:
            user = await repositories.users.find_by_id(user_id)
            assert user is not None
            await repositories.users.update(dataclasses.replace(user, is_admin=True))

    return _promote


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(get_settings())


@pytest.fixture
async def client(app_context: SqlAlchemyAppContext) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI), backed by the test database.

    ASGITransport does not run the lifespan, so the app context is installed
    directly. Rate-limit counters are reset per test.
    """
    limiter.reset()
    app.state.app_context = app_context
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.state.app_context = None


@pytest.fixture
def register(client: AsyncClient):
    """Return an async helper that registers a user through the API."""

    async def _register(
        email: str,
        password: str = STRONG_PASSWORD,
        first_name: str = "Ada",
        last_name: str = "Lovelace",
    ) -> dict[str, Any]:
        response = await client.post(
            "/api/auth/register",
            json={
                "email": email,
                "firstName": first_name,
                "lastName": last_name,
                "password": password,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers() -> Callable[[str], dict[str, str]]:
    return bearer
