"""Persistence repositories. Re-exports for dependency injection."""

from accounts.infrastructure.persistence.repositories.base import BaseRepository
from accounts.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
]
