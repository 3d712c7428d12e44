"""Auth API: register, login, profile, delete, token refresh and logout.

Each use-case route builds its command field by field from the request,
runs it through execute_use_case and maps the response DTO back out.
Tokens are issued here, after the use case has succeeded.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from accounts.api.v1.dependencies import (
    AuthenticatedContext,
    Tokens,
    context_dependency_for,
)
from accounts.api.v1.routing import use_case_route
from accounts.application.context import Context
from accounts.application.dtos.user import (
    DeleteUserCommand,
    GetUserProfileQuery,
    LoginUserCommand,
    RegisterUserCommand,
    UserDto,
)
from accounts.application.use_cases import (
    DeleteUserUseCase,
    GetUserProfileUseCase,
    LoginUserUseCase,
    RegisterUserUseCase,
    execute_use_case,
)
from accounts.core.limiter import limit_auth, limit_writes
from accounts.domain.exceptions import AuthenticationDomainError
from accounts.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenPairResponse,
)
from accounts.schemas.user import MessageResponse, ProfileResponse, UserResponse

router = APIRouter()


def to_user_response(user: UserDto) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        is_active=user.is_active,
        is_admin=user.is_admin,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def _auth_response(message: str, user: UserDto, tokens: Tokens) -> AuthResponse:
    pair = tokens.create_token_pair(user.id, user.email)
    return AuthResponse(
        message=message,
        user=to_user_response(user),
        access_token=pair.access_token,
        refresh_token=pair.refresh_token,
    )


@use_case_route(
    router, "/register", RegisterUserUseCase, response_model=AuthResponse, status_code=201
)
@limit_auth
async def register(
    request: Request,
    body: RegisterRequest,
    context: Annotated[Context, Depends(context_dependency_for(RegisterUserUseCase))],
    tokens: Tokens,
) -> AuthResponse:
    """Create an account with email and password (public)."""
    result = await execute_use_case(
        RegisterUserUseCase(),
        context,
        RegisterUserCommand(
            email=body.email,
            first_name=body.first_name,
            last_name=body.last_name,
            password=body.password,
        ),
    )
    return _auth_response(result.message, result.user, tokens)


@use_case_route(router, "/login", LoginUserUseCase, response_model=AuthResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    context: Annotated[Context, Depends(context_dependency_for(LoginUserUseCase))],
    tokens: Tokens,
) -> AuthResponse:
    """Authenticate with email and password; return the user and a token pair."""
    result = await execute_use_case(
        LoginUserUseCase(),
        context,
        LoginUserCommand(email=body.email, password=body.password),
    )
    return _auth_response(result.message, result.user, tokens)


@use_case_route(
    router, "/profile", GetUserProfileUseCase, response_model=ProfileResponse
)
async def get_profile(
    context: Annotated[Context, Depends(context_dependency_for(GetUserProfileUseCase))],
) -> ProfileResponse:
    """Return the caller's own profile. Requires Authorization: Bearer <token>."""
    result = await execute_use_case(
        GetUserProfileUseCase(),
        context,
        GetUserProfileQuery(user_id=context.user_id),
    )
    return ProfileResponse(user=to_user_response(result.user))


@use_case_route(
    router,
    "/users/{user_id}",
    DeleteUserUseCase,
    method="DELETE",
    response_model=MessageResponse,
)
@limit_writes
async def delete_user(
    request: Request,
    user_id: str,
    context: Annotated[Context, Depends(context_dependency_for(DeleteUserUseCase))],
) -> MessageResponse:
    """Delete a user (self or, for admins, anyone) with all its authentications."""
    result = await execute_use_case(
        DeleteUserUseCase(), context, DeleteUserCommand(user_id=user_id)
    )
    return MessageResponse(message=result.message)


@router.post("/refresh", response_model=TokenPairResponse)
@limit_auth
async def refresh(
    request: Request,
    body: RefreshRequest,
    tokens: Tokens,
) -> TokenPairResponse:
    """Exchange a valid refresh token for a new token pair."""
    if not body.refresh_token:
        raise AuthenticationDomainError("Missing refresh token")
    try:
        claims = tokens.verify_refresh_token(body.refresh_token)
    except ValueError:
        raise AuthenticationDomainError("Invalid or expired refresh token") from None
    pair = tokens.create_token_pair(claims.user_id, claims.email)
    return TokenPairResponse(
        access_token=pair.access_token, refresh_token=pair.refresh_token
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(context: AuthenticatedContext) -> MessageResponse:
    """Stateless logout: tokens are not tracked, the client discards them."""
    context.logger.info("Logout")
    return MessageResponse(message="Logout successful")
