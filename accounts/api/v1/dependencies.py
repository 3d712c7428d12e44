"""Presentation-layer dependency injection (composition root).

Builds the per-request Context from app.state.app_context. Bearer-token
parsing happens here and only here: use cases see an attached user id,
never a token.
"""

import uuid
from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from accounts.application.context import AppContext, Context
from accounts.application.use_cases.base import UseCaseDescriptor
from accounts.core.config import get_settings
from accounts.domain.exceptions import AuthenticationDomainError, SystemDomainError
from accounts.infrastructure.security.jwt import TokenService

AUTHENTICATION_REQUIRED_MESSAGE = "Authentication required"
INVALID_TOKEN_MESSAGE = "Invalid or expired token"

_http_bearer = HTTPBearer(auto_error=False)


def get_app_context(request: Request) -> AppContext:
    """Return the process-wide AppContext built by the lifespan."""
    app_context = getattr(request.app.state, "app_context", None)
    if app_context is None:
        raise SystemDomainError("Application context is not initialized")
    return app_context


def get_token_service() -> TokenService:
    return TokenService(get_settings())


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or str(uuid.uuid4())


async def get_request_context(
    request: Request,
    app_context: Annotated[AppContext, Depends(get_app_context)],
) -> Context:
    """Fresh anonymous Context for public routes."""
    return app_context.create_request_context(_request_id(request))


async def get_authenticated_context(
    context: Annotated[Context, Depends(get_request_context)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> Context:
    """Context with the bearer token's user attached; 401 when missing or invalid."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationDomainError(AUTHENTICATION_REQUIRED_MESSAGE)
    try:
        claims = tokens.verify_access_token(credentials.credentials)
    except ValueError:
        raise AuthenticationDomainError(INVALID_TOKEN_MESSAGE) from None
    context.attach_user(claims.user_id)
    return context


def context_dependency_for(
    use_case: type | object,
) -> Callable[..., object]:
    """Pick the Context dependency from the use case's static descriptor."""
    descriptor: UseCaseDescriptor = use_case.descriptor  # type: ignore[union-attr]
    if descriptor.is_public:
        return get_request_context
    return get_authenticated_context


AuthenticatedContext = Annotated[Context, Depends(get_authenticated_context)]
Tokens = Annotated[TokenService, Depends(get_token_service)]
