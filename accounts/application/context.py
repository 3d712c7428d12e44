"""Per-request Context and the process-wide AppContext port.

A Context is created fresh for every inbound request by the web boundary.
It carries the caller identity (user_id, None until authentication
succeeds), a fixed request id and a handle to process-wide collaborators.
Use cases reach repositories only through context.repositories, which is
bound for the duration of one transactionally() scope.

Usage:
    context = app_context.create_request_context(request_id="abc")
    context.attach_user(user_id)
    result = await context.transactionally(lambda repos: ...)
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, MutableMapping
from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol, TypeVar

from accounts.application.interfaces.repositories import RepositoryBundle
from accounts.application.interfaces.services import IPasswordHasher
from accounts.domain.exceptions import SystemDomainError

T = TypeVar("T")


class AppContext(Protocol):
    """Process-wide collaborators shared by every request."""

    password_hasher: IPasswordHasher
    logger: logging.Logger

    def transaction(self) -> AbstractAsyncContextManager[RepositoryBundle]:
        """Open one atomic scope; yield repositories bound to it.

        Commits when the block exits normally, rolls back on any exception.
        """

    def create_request_context(self, request_id: str) -> Context:
        """Return a fresh Context for one inbound request."""


class RequestLoggerAdapter(logging.LoggerAdapter):
    """Prefix every message with the request id (and user id once known)."""

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        context: Context = self.extra["context"]  # type: ignore[index]
        prefix = f"[{context.request_id}]"
        if context.user_id:
            prefix += f" [user={context.user_id}]"
        return f"{prefix} {msg}", kwargs


class Context:
    """Identity + dependency envelope handed to every use case."""

    def __init__(self, app: AppContext, request_id: str) -> None:
        self._app = app
        self._request_id = request_id
        self._user_id: str | None = None
        self._repositories: RepositoryBundle | None = None
        self._logger = RequestLoggerAdapter(app.logger, {"context": self})

    @property
    def app(self) -> AppContext:
        return self._app

    @property
    def request_id(self) -> str:
        return self._request_id

    @property
    def user_id(self) -> str | None:
        return self._user_id

    @property
    def logger(self) -> logging.LoggerAdapter:
        return self._logger

    def attach_user(self, user_id: str) -> None:
        """Attach the authenticated caller. Call once, after token verification."""
        if not user_id:
            raise ValueError("user_id is required")
        if self._user_id is not None and self._user_id != user_id:
            raise ValueError("A different user is already attached to this context")
        self._user_id = user_id

    @property
    def in_transaction(self) -> bool:
        return self._repositories is not None

    @property
    def repositories(self) -> RepositoryBundle:
        """Repositories of the open transaction scope.

        Raises:
            SystemDomainError: If accessed outside transactionally().
        """
        if self._repositories is None:
            raise SystemDomainError("Repositories accessed outside a transaction")
        return self._repositories

    async def transactionally(
        self, callback: Callable[[RepositoryBundle], Awaitable[T]]
    ) -> T:
        """Run callback inside one atomic scope and return its result.

        When a scope is already open on this context (a use case invoking
        another), the callback joins it instead of opening a second one.
        """
        if self._repositories is not None:
            return await callback(self._repositories)
        async with self._app.transaction() as repositories:
            self._repositories = repositories
            try:
                return await callback(repositories)
            finally:
                self._repositories = None
