"""Login user use case: verify email/password with a generic failure message.

All credential failures (unknown email, inactive account, missing hash,
wrong password) raise the same AuthenticationDomainError so responses never
reveal which accounts exist. The specific reason is logged at debug level.
"""

from __future__ import annotations

from typing import ClassVar

from accounts.application.context import Context
from accounts.application.dtos.user import (
    LoginUserCommand,
    LoginUserResponse,
    user_to_dto,
)
from accounts.application.use_cases.base import (
    UseCaseDescriptor,
    UseCaseKind,
    Visibility,
    is_blank,
    raise_if_invalid,
)
from accounts.domain.enums import AuthProvider
from accounts.domain.exceptions import AuthenticationDomainError
from accounts.domain.validation import FieldError, is_valid_email

LOGIN_EMAIL_MAX_LENGTH = 320
LOGIN_PASSWORD_MAX_LENGTH = 128
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def validate_login_command(command: LoginUserCommand) -> list[FieldError]:
    """Stateless validation of a login command."""
    errors: list[FieldError] = []

    if is_blank(command.email):
        errors.append(FieldError("email", "Email is required"))
    else:
        if len(command.email) > LOGIN_EMAIL_MAX_LENGTH:
            errors.append(FieldError("email", "Email is too long"))
        if not is_valid_email(command.email.strip()):
            errors.append(FieldError("email", "Invalid email format"))

    if not isinstance(command.password, str) or not command.password:
        errors.append(FieldError("password", "Password is required"))
    elif len(command.password) > LOGIN_PASSWORD_MAX_LENGTH:
        errors.append(FieldError("password", "Password is too long"))

    return errors


class LoginUserUseCase:
    """Authenticates email/password credentials.

    Classified as WRITE: login attempts are rate-limited and logged even
    though no persisted state changes.
    """

    descriptor: ClassVar[UseCaseDescriptor] = UseCaseDescriptor(
        kind=UseCaseKind.WRITE, visibility=Visibility.PUBLIC
    )

    async def execute(
        self, context: Context, command: LoginUserCommand
    ) -> LoginUserResponse:
        """Verify credentials and return the user.

        Raises:
            ValidationDomainError: Malformed email or missing password.
            AuthenticationDomainError: Credentials rejected (generic message).
        """
        raise_if_invalid("Invalid login command", validate_login_command(command))
        hasher = context.app.password_hasher

        found = await context.repositories.users.find_user_with_authentication(
            command.email.strip().lower(), AuthProvider.EMAIL.value
        )
        if found is None:
            await hasher.verify_dummy(command.password)
            context.logger.debug("Login rejected: no email authentication")
            raise AuthenticationDomainError(INVALID_CREDENTIALS_MESSAGE)

        user, authentication = found.user, found.authentication
        if not user.is_active or not authentication.is_active:
            await hasher.verify_dummy(command.password)
            context.logger.debug("Login rejected: account inactive")
            raise AuthenticationDomainError(INVALID_CREDENTIALS_MESSAGE)
        if not authentication.hashed_password:
            await hasher.verify_dummy(command.password)
            context.logger.debug("Login rejected: no password set")
            raise AuthenticationDomainError(INVALID_CREDENTIALS_MESSAGE)
        if not await hasher.verify(command.password, authentication.hashed_password):
            context.logger.debug("Login rejected: password mismatch")
            raise AuthenticationDomainError(INVALID_CREDENTIALS_MESSAGE)

        return LoginUserResponse(message="Login successful", user=user_to_dto(user))
