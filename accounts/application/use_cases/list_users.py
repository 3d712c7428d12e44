"""List users use case (active admins only, paginated)."""

from __future__ import annotations

from typing import ClassVar

from accounts.application.context import Context
from accounts.application.dtos.pagination import MAX_PAGE_SIZE, PaginationParams
from accounts.application.dtos.user import (
    ListUsersQuery,
    ListUsersResponse,
    user_to_dto,
)
from accounts.application.use_cases.base import (
    UseCaseDescriptor,
    UseCaseKind,
    Visibility,
    raise_if_invalid,
    require_identity,
)
from accounts.domain.exceptions import (
    AuthenticationDomainError,
    AuthorizationDomainError,
)
from accounts.domain.validation import FieldError


def validate_pagination(pagination: PaginationParams) -> list[FieldError]:
    """Reject out-of-range pagination instead of clamping it."""
    errors: list[FieldError] = []
    page, page_size = pagination.page, pagination.page_size
    if not isinstance(page, int) or isinstance(page, bool) or page < 1:
        errors.append(FieldError("page", "Page must be a positive number"))
    if (
        not isinstance(page_size, int)
        or isinstance(page_size, bool)
        or not 1 <= page_size <= MAX_PAGE_SIZE
    ):
        errors.append(
            FieldError(
                "page_size", f"Page size must be a number between 1 and {MAX_PAGE_SIZE}"
            )
        )
    return errors


class ListUsersUseCase:
    """Returns one page of all users for an administrator."""

    descriptor: ClassVar[UseCaseDescriptor] = UseCaseDescriptor(
        kind=UseCaseKind.READ, visibility=Visibility.PRIVATE
    )

    async def execute(
        self, context: Context, query: ListUsersQuery
    ) -> ListUsersResponse:
        """List users.

        Raises:
            AuthenticationDomainError: No identity, or caller no longer exists.
            ValidationDomainError: page < 1 or page_size outside [1, 500].
            AuthorizationDomainError: Caller inactive or not an admin.
        """
        caller_id = require_identity(context)
        raise_if_invalid(
            "Invalid pagination parameters", validate_pagination(query.pagination)
        )
        users = context.repositories.users

        caller = await users.find_by_id(caller_id)
        if caller is None:
            raise AuthenticationDomainError("Invalid user session")
        if not caller.is_active:
            raise AuthorizationDomainError("Account is not active")
        if not caller.is_admin:
            raise AuthorizationDomainError("Access denied - admin privileges required")

        page = await users.find_many(query.pagination)
        return ListUsersResponse(
            users=[user_to_dto(user) for user in page.data],
            meta=page.meta,
        )
