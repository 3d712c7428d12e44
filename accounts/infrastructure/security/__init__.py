"""Security adapters: password hashing and JWT tokens."""

from accounts.infrastructure.security.jwt import TokenClaims, TokenPair, TokenService
from accounts.infrastructure.security.password import (
    BcryptPasswordHasher,
    get_password_hash,
    verify_password,
)

__all__ = [
    "BcryptPasswordHasher",
    "TokenClaims",
    "TokenPair",
    "TokenService",
    "get_password_hash",
    "verify_password",
]
