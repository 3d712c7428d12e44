"""Route registration driven by UseCase.descriptor.

READ use cases are served with GET, WRITE use cases with POST unless the
route overrides the verb (e.g. DELETE /auth/users/{user_id}).
"""

from collections.abc import Callable
from typing import Any

from fastapi import APIRouter

from accounts.application.use_cases.base import UseCaseDescriptor


def method_for(descriptor: UseCaseDescriptor) -> str:
    return "GET" if descriptor.is_read else "POST"


def use_case_route(
    router: APIRouter,
    path: str,
    use_case: type | object,
    *,
    method: str | None = None,
    **kwargs: Any,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator registering an endpoint for use_case on router."""
    descriptor: UseCaseDescriptor = use_case.descriptor  # type: ignore[union-attr]
    return router.api_route(path, methods=[method or method_for(descriptor)], **kwargs)
