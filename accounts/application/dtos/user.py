"""DTOs for user use cases (no dependency on ORM or entities).

Commands and queries carry a subset of entity fields; responses are built
field by field from entities so undeclared attributes never leak in or out.
"""

from __future__ import annotations

from dataclasses import dataclass

from accounts.application.dtos.pagination import (
    DEFAULT_PAGE_SIZE,
    PaginationMeta,
    PaginationParams,
)
from accounts.domain.entities import User


@dataclass(frozen=True)
class UserDto:
    """User read-model. No credentials."""

    id: str
    email: str
    first_name: str
    last_name: str
    is_active: bool
    is_admin: bool
    created_at: str | None = None
    updated_at: str | None = None


def user_to_dto(user: User) -> UserDto:
    """Map a persisted User entity to UserDto (explicit field copy)."""
    if user.id is None:
        raise ValueError("Cannot map an unsaved user to UserDto")
    return UserDto(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        is_active=user.is_active,
        is_admin=user.is_admin,
        created_at=user.created_at.isoformat() if user.created_at else None,
        updated_at=user.updated_at.isoformat() if user.updated_at else None,
    )


@dataclass(frozen=True)
class RegisterUserCommand:
    email: str | None
    first_name: str | None
    last_name: str | None
    password: str | None


@dataclass(frozen=True)
class RegisterUserResponse:
    message: str
    user: UserDto


@dataclass(frozen=True)
class LoginUserCommand:
    email: str | None
    password: str | None


@dataclass(frozen=True)
class LoginUserResponse:
    message: str
    user: UserDto


@dataclass(frozen=True)
class GetUserProfileQuery:
    user_id: str | None


@dataclass(frozen=True)
class GetUserProfileResponse:
    user: UserDto


@dataclass(frozen=True)
class DeleteUserCommand:
    user_id: str | None


@dataclass(frozen=True)
class DeleteUserResponse:
    message: str


@dataclass(frozen=True)
class ListUsersQuery:
    pagination: PaginationParams = PaginationParams(1, DEFAULT_PAGE_SIZE)


@dataclass(frozen=True)
class ListUsersResponse:
    users: list[UserDto]
    meta: PaginationMeta
