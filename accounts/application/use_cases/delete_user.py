"""Delete user use case: self-service or admin deletion."""

from __future__ import annotations

from typing import ClassVar

from accounts.application.context import Context
from accounts.application.dtos.pagination import MAX_PAGE_SIZE, PaginationParams
from accounts.application.dtos.user import DeleteUserCommand, DeleteUserResponse
from accounts.application.interfaces.repositories import IUserRepository
from accounts.application.use_cases.base import (
    UseCaseDescriptor,
    UseCaseKind,
    Visibility,
    is_blank,
    raise_if_invalid,
    require_identity,
)
from accounts.domain.exceptions import (
    AuthenticationDomainError,
    AuthorizationDomainError,
    NotFoundDomainError,
)
from accounts.domain.validation import FieldError


def validate_delete_command(command: DeleteUserCommand) -> list[FieldError]:
    if is_blank(command.user_id):
        return [FieldError("user_id", "User ID is required")]
    return []


async def _delete_authentications(users: IUserRepository, user_id: str) -> int:
    """Delete every authentication of user_id, page by page. Returns count."""
    deleted = 0
    first_page = PaginationParams(page=1, page_size=MAX_PAGE_SIZE)
    while True:
        page = await users.find_authentication_by_user_id(
            user_id, pagination=first_page
        )
        if not page.data:
            return deleted
        for authentication in page.data:
            await users.delete_authentication(authentication.id)
            deleted += 1


class DeleteUserUseCase:
    """Deletes a user and all of its authentications.

    Callers may delete themselves; admins may delete anyone.
    """

    descriptor: ClassVar[UseCaseDescriptor] = UseCaseDescriptor(
        kind=UseCaseKind.WRITE, visibility=Visibility.PRIVATE
    )

    async def execute(
        self, context: Context, command: DeleteUserCommand
    ) -> DeleteUserResponse:
        """Delete command.user_id.

        Raises:
            AuthenticationDomainError: No identity, or caller no longer exists.
            ValidationDomainError: user_id missing.
            NotFoundDomainError: Target user does not exist.
            AuthorizationDomainError: Caller is neither the target nor an admin.
        """
        caller_id = require_identity(context)
        raise_if_invalid(
            "Invalid delete user command", validate_delete_command(command)
        )
        users = context.repositories.users

        caller = await users.find_by_id(caller_id)
        if caller is None:
            raise AuthenticationDomainError("Invalid user session")

        target = await users.find_by_id(command.user_id)
        if target is None:
            raise NotFoundDomainError("User not found")

        if caller_id != command.user_id and not caller.is_admin:
            raise AuthorizationDomainError(
                "You do not have permission to delete this user"
            )

        # Authentications first, then the user row.
        removed = await _delete_authentications(users, command.user_id)
        await users.delete(command.user_id)

        context.logger.info(
            "Deleted user %s (%d authentications)", command.user_id, removed
        )
        return DeleteUserResponse(message="User deleted successfully")
