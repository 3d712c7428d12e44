"""Get user profile use case (caller may only read their own profile)."""

from __future__ import annotations

from typing import ClassVar

from accounts.application.context import Context
from accounts.application.dtos.user import (
    GetUserProfileQuery,
    GetUserProfileResponse,
    user_to_dto,
)
from accounts.application.use_cases.base import (
    UseCaseDescriptor,
    UseCaseKind,
    Visibility,
    is_blank,
    raise_if_invalid,
    require_identity,
)
from accounts.domain.exceptions import AuthorizationDomainError, NotFoundDomainError
from accounts.domain.validation import FieldError


def validate_profile_query(query: GetUserProfileQuery) -> list[FieldError]:
    if is_blank(query.user_id):
        return [FieldError("user_id", "User ID is required")]
    return []


class GetUserProfileUseCase:
    """Returns the caller's own profile."""

    descriptor: ClassVar[UseCaseDescriptor] = UseCaseDescriptor(
        kind=UseCaseKind.READ, visibility=Visibility.PRIVATE
    )

    async def execute(
        self, context: Context, query: GetUserProfileQuery
    ) -> GetUserProfileResponse:
        """Return the profile of query.user_id.

        The ownership check needs no entity, so it runs before the lookup;
        callers cannot probe other ids for existence.

        Raises:
            AuthenticationDomainError: No caller identity.
            ValidationDomainError: user_id missing.
            AuthorizationDomainError: Not the caller's profile, or account inactive.
            NotFoundDomainError: User no longer exists.
        """
        caller_id = require_identity(context)
        raise_if_invalid("Invalid get profile query", validate_profile_query(query))

        if caller_id != query.user_id:
            raise AuthorizationDomainError("Access denied - can only access own profile")

        user = await context.repositories.users.find_by_id(query.user_id)
        if user is None:
            raise NotFoundDomainError("User not found")
        if not user.is_active:
            raise AuthorizationDomainError("Account is not active")

        return GetUserProfileResponse(user=user_to_dto(user))
