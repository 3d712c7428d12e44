"""Use cases: one class per operation, each with a static descriptor."""

from accounts.application.use_cases.base import (
    UseCase,
    UseCaseDescriptor,
    UseCaseKind,
    Visibility,
    execute_use_case,
)
from accounts.application.use_cases.delete_user import DeleteUserUseCase
from accounts.application.use_cases.get_user_profile import GetUserProfileUseCase
from accounts.application.use_cases.list_users import ListUsersUseCase
from accounts.application.use_cases.login_user import LoginUserUseCase
from accounts.application.use_cases.register_user import RegisterUserUseCase

__all__ = [
    "DeleteUserUseCase",
    "GetUserProfileUseCase",
    "ListUsersUseCase",
    "LoginUserUseCase",
    "RegisterUserUseCase",
    "UseCase",
    "UseCaseDescriptor",
    "UseCaseKind",
    "Visibility",
    "execute_use_case",
]
