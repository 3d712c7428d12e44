"""Users API: paginated listing for administrators."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from accounts.api.v1.dependencies import context_dependency_for
from accounts.api.v1.endpoints.auth import to_user_response
from accounts.api.v1.routing import use_case_route
from accounts.application.context import Context
from accounts.application.dtos.pagination import DEFAULT_PAGE_SIZE, PaginationParams
from accounts.application.dtos.user import ListUsersQuery
from accounts.application.use_cases import ListUsersUseCase, execute_use_case
from accounts.schemas.user import ListUsersResponse, PaginationMetaResponse

router = APIRouter()


@use_case_route(router, "", ListUsersUseCase, response_model=ListUsersResponse)
async def list_users(
    context: Annotated[Context, Depends(context_dependency_for(ListUsersUseCase))],
    page: Annotated[int, Query()] = 1,
    page_size: Annotated[int, Query(alias="pageSize")] = DEFAULT_PAGE_SIZE,
) -> ListUsersResponse:
    """List users, newest first. Admin only."""
    result = await execute_use_case(
        ListUsersUseCase(),
        context,
        ListUsersQuery(pagination=PaginationParams(page=page, page_size=page_size)),
    )
    meta = result.meta
    return ListUsersResponse(
        users=[to_user_response(user) for user in result.users],
        meta=PaginationMetaResponse(
            total=meta.total,
            page=meta.page,
            page_size=meta.page_size,
            total_pages=meta.total_pages,
            has_next=meta.has_next,
            has_prev=meta.has_prev,
        ),
    )
