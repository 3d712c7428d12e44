"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
Every method returns domain entities or PaginatedResults of entities, never
raw rows; storage errors are translated to domain errors by implementations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from accounts.application.dtos.pagination import PaginatedResults, PaginationParams
    from accounts.domain.entities import User, UserAuthentication


@dataclass(frozen=True)
class UserWithAuthentication:
    """Result of the combined user + authentication fetch used by login."""

    user: User
    authentication: UserAuthentication


class IUserRepository(Protocol):
    """Protocol for user and user-authentication persistence (DIP)."""

    # Users

    async def find_by_id(self, user_id: str) -> User | None:
        """Return user by ID."""

    async def find_by_email(self, email: str) -> User | None:
        """Return user by email (case-insensitive)."""

    async def create(self, user: User) -> User:
        """Persist a new user; raise ConflictDomainError if the email is taken."""

    async def update(self, user: User) -> User | None:
        """Update user; return None if it no longer exists."""

    async def delete(self, user_id: str) -> None:
        """Delete user by ID; no-op when absent."""

    async def find_many(self, pagination: PaginationParams) -> PaginatedResults[User]:
        """Return one page of users (newest first)."""

    # Authentications

    async def find_authentication_by_user_id(
        self,
        user_id: str,
        provider: str | None = None,
        pagination: PaginationParams | None = None,
    ) -> PaginatedResults[UserAuthentication]:
        """Return one page of the user's authentications, optionally for one provider."""

    async def find_authentication_by_provider(
        self, provider: str, provider_id: str
    ) -> UserAuthentication | None:
        """Return the authentication for (provider, provider_id)."""

    async def create_authentication(
        self, authentication: UserAuthentication
    ) -> UserAuthentication:
        """Persist a new authentication; raise ConflictDomainError on duplicates."""

    async def update_authentication(
        self, authentication: UserAuthentication
    ) -> UserAuthentication | None:
        """Update authentication; return None if it no longer exists."""

    async def delete_authentication(self, authentication_id: str) -> None:
        """Delete authentication by ID; no-op when absent."""

    async def find_user_with_authentication(
        self, email: str, provider: str
    ) -> UserWithAuthentication | None:
        """Return user and its authentication for (provider, email) in one fetch."""


@dataclass(frozen=True)
class RepositoryBundle:
    """Repositories bound to one open transaction scope."""

    users: IUserRepository
