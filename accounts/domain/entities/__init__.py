"""Domain entities (business concepts independent of persistence)."""

from accounts.domain.entities.base import Entity
from accounts.domain.entities.user import User
from accounts.domain.entities.user_authentication import UserAuthentication

__all__ = [
    "Entity",
    "User",
    "UserAuthentication",
]
