"""User API schemas."""

from pydantic import Field

from accounts.schemas.base import CamelModel


class UserResponse(CamelModel):
    """User as returned by the API (no credentials)."""

    id: str
    email: str
    first_name: str
    last_name: str
    is_active: bool
    is_admin: bool
    created_at: str | None = None
    updated_at: str | None = None


class ProfileResponse(CamelModel):
    """Response for GET /auth/profile."""

    user: UserResponse


class PaginationMetaResponse(CamelModel):
    total: int
    page: int
    page_size: int
    total_pages: int
    has_next: bool
    has_prev: bool


class ListUsersResponse(CamelModel):
    """Response for GET /users."""

    users: list[UserResponse] = Field(default_factory=list)
    meta: PaginationMetaResponse


class MessageResponse(CamelModel):
    message: str
