"""API request/response schemas (camelCase on the wire)."""

from accounts.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenPairResponse,
)
from accounts.schemas.health import HealthResponse
from accounts.schemas.user import (
    ListUsersResponse,
    MessageResponse,
    PaginationMetaResponse,
    ProfileResponse,
    UserResponse,
)

__all__ = [
    "AuthResponse",
    "HealthResponse",
    "ListUsersResponse",
    "LoginRequest",
    "MessageResponse",
    "PaginationMetaResponse",
    "ProfileResponse",
    "RefreshRequest",
    "RegisterRequest",
    "TokenPairResponse",
    "UserResponse",
]
