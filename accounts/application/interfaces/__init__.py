"""Application ports: repository and service protocols."""

from accounts.application.interfaces.repositories import (
    IUserRepository,
    RepositoryBundle,
    UserWithAuthentication,
)
from accounts.application.interfaces.services import IPasswordHasher

__all__ = [
    "IPasswordHasher",
    "IUserRepository",
    "RepositoryBundle",
    "UserWithAuthentication",
]
