"""Application DTOs (commands, queries, responses, pagination)."""

from accounts.application.dtos.pagination import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    PaginatedResults,
    PaginationMeta,
    PaginationParams,
)
from accounts.application.dtos.user import (
    DeleteUserCommand,
    DeleteUserResponse,
    GetUserProfileQuery,
    GetUserProfileResponse,
    ListUsersQuery,
    ListUsersResponse,
    LoginUserCommand,
    LoginUserResponse,
    RegisterUserCommand,
    RegisterUserResponse,
    UserDto,
    user_to_dto,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "DeleteUserCommand",
    "DeleteUserResponse",
    "GetUserProfileQuery",
    "GetUserProfileResponse",
    "ListUsersQuery",
    "ListUsersResponse",
    "LoginUserCommand",
    "LoginUserResponse",
    "PaginatedResults",
    "PaginationMeta",
    "PaginationParams",
    "RegisterUserCommand",
    "RegisterUserResponse",
    "UserDto",
    "user_to_dto",
]
