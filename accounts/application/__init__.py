"""Application layer: context, interfaces, DTOs, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repository, password hasher).
"""

from accounts.application.context import AppContext, Context
from accounts.application.interfaces import (
    IPasswordHasher,
    IUserRepository,
    RepositoryBundle,
)
from accounts.application.use_cases import (
    DeleteUserUseCase,
    GetUserProfileUseCase,
    ListUsersUseCase,
    LoginUserUseCase,
    RegisterUserUseCase,
    execute_use_case,
)

__all__ = [
    "AppContext",
    "Context",
    "DeleteUserUseCase",
    "GetUserProfileUseCase",
    "IPasswordHasher",
    "IUserRepository",
    "ListUsersUseCase",
    "LoginUserUseCase",
    "RegisterUserUseCase",
    "RepositoryBundle",
    "execute_use_case",
]
