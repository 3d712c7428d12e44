"""Register user use case: validate, check uniqueness, create user + email login."""

from __future__ import annotations

import re
from typing import ClassVar

from accounts.application.context import Context
from accounts.application.dtos.user import (
    RegisterUserCommand,
    RegisterUserResponse,
    user_to_dto,
)
from accounts.application.use_cases.base import (
    UseCaseDescriptor,
    UseCaseKind,
    Visibility,
    is_blank,
    raise_if_invalid,
)
from accounts.domain.entities import User, UserAuthentication
from accounts.domain.entities.user import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH
from accounts.domain.exceptions import ConflictDomainError, ValidationDomainError
from accounts.domain.validation import FieldError, is_valid_email

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128

_UPPER = re.compile(r"[A-Z]")
_LOWER = re.compile(r"[a-z]")
_DIGIT = re.compile(r"\d")


def validate_password_strength(password: object) -> list[FieldError]:
    """Return every strength violation for password (empty list when strong)."""
    if not isinstance(password, str) or not password:
        return [FieldError("password", "Password is required")]
    errors: list[FieldError] = []
    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(
            FieldError(
                "password",
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
            )
        )
    if len(password) > PASSWORD_MAX_LENGTH:
        errors.append(
            FieldError(
                "password",
                f"Password must not exceed {PASSWORD_MAX_LENGTH} characters",
            )
        )
    if not _UPPER.search(password):
        errors.append(
            FieldError("password", "Password must contain at least one uppercase letter")
        )
    if not _LOWER.search(password):
        errors.append(
            FieldError("password", "Password must contain at least one lowercase letter")
        )
    if not _DIGIT.search(password):
        errors.append(FieldError("password", "Password must contain at least one digit"))
    return errors


def validate_register_command(command: RegisterUserCommand) -> list[FieldError]:
    """Stateless validation of a registration command."""
    errors: list[FieldError] = []

    if is_blank(command.email):
        errors.append(FieldError("email", "Email is required"))
    elif len(command.email) > EMAIL_MAX_LENGTH:
        errors.append(
            FieldError("email", f"Email must not exceed {EMAIL_MAX_LENGTH} characters")
        )
    elif not is_valid_email(command.email.strip()):
        errors.append(FieldError("email", "Email format is invalid"))

    for field_name, label, value in (
        ("first_name", "First name", command.first_name),
        ("last_name", "Last name", command.last_name),
    ):
        if is_blank(value):
            errors.append(FieldError(field_name, f"{label} is required"))
        elif len(value) > NAME_MAX_LENGTH:
            errors.append(
                FieldError(
                    field_name, f"{label} must not exceed {NAME_MAX_LENGTH} characters"
                )
            )

    errors.extend(validate_password_strength(command.password))
    return errors


class RegisterUserUseCase:
    """Creates a user and its email/password authentication in one transaction."""

    descriptor: ClassVar[UseCaseDescriptor] = UseCaseDescriptor(
        kind=UseCaseKind.WRITE, visibility=Visibility.PUBLIC
    )

    async def execute(
        self, context: Context, command: RegisterUserCommand
    ) -> RegisterUserResponse:
        """Register a new user.

        Raises:
            ValidationDomainError: Command or entity validation failed.
            ConflictDomainError: Email (case-insensitive) is already registered.
        """
        raise_if_invalid(
            "Invalid registration command", validate_register_command(command)
        )
        users = context.repositories.users
        email = command.email.strip().lower()

        if await users.find_by_email(email) is not None:
            raise ConflictDomainError("User with this email already exists")

        user = User.create(
            email=email,
            first_name=command.first_name.strip(),
            last_name=command.last_name.strip(),
        )
        user_validation = user.validate()
        if not user_validation.valid:
            raise ValidationDomainError(
                "User entity validation failed", user_validation.errors
            )
        hashed_password = await context.app.password_hasher.hash(command.password)
        created = await users.create(user)

        authentication = UserAuthentication.create_email_auth(
            user_id=created.id, email=email, hashed_password=hashed_password
        )
        auth_validation = authentication.validate()
        if not auth_validation.valid:
            # Rolls back the user row created above.
            raise ValidationDomainError(
                "User authentication validation failed", auth_validation.errors
            )
        await users.create_authentication(authentication)

        context.logger.info("Registered user %s", created.id)
        return RegisterUserResponse(
            message="User registered successfully",
            user=user_to_dto(created),
        )
