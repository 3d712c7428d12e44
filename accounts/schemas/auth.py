"""Auth API schemas.

Request fields are optional strings: presence, format and strength rules
are enforced by the use cases so clients get one consistent set of field
errors. Only wrong JSON types are rejected here.
"""

from pydantic import Field

from accounts.schemas.base import CamelModel
from accounts.schemas.user import UserResponse


class RegisterRequest(CamelModel):
    """Request body for POST /auth/register."""

    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    password: str | None = None


class LoginRequest(CamelModel):
    """Request body for POST /auth/login."""

    email: str | None = None
    password: str | None = None


class RefreshRequest(CamelModel):
    """Request body for POST /auth/refresh."""

    refresh_token: str | None = None


class AuthResponse(CamelModel):
    """Register/login response: the user plus a fresh token pair."""

    message: str
    user: UserResponse
    access_token: str
    refresh_token: str
    token_type: str = Field(default="bearer")


class TokenPairResponse(CamelModel):
    """Response for POST /auth/refresh."""

    message: str = "Token refreshed successfully"
    access_token: str
    refresh_token: str
    token_type: str = Field(default="bearer")
