"""Use-case contract: static descriptor plus a single execute() entry point.

The web boundary reads UseCase.descriptor once, at route registration, to
pick the HTTP verb (READ -> GET, WRITE -> POST) and whether a resolved
identity is required. Every top-level invocation goes through
execute_use_case(), which runs the use case inside exactly one transaction.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Protocol, TypeVar

from accounts.application.context import Context
from accounts.domain.exceptions import (
    AuthenticationDomainError,
    DomainError,
    ValidationDomainError,
)
from accounts.domain.validation import FieldError

CommandT = TypeVar("CommandT")
ResponseT = TypeVar("ResponseT")


class UseCaseKind(str, Enum):
    READ = "read"
    WRITE = "write"


class Visibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


@dataclass(frozen=True)
class UseCaseDescriptor:
    """Static routing facts about a use case."""

    kind: UseCaseKind
    visibility: Visibility

    @property
    def is_read(self) -> bool:
        return self.kind is UseCaseKind.READ

    @property
    def is_public(self) -> bool:
        return self.visibility is Visibility.PUBLIC


class UseCase(Protocol[CommandT, ResponseT]):
    """Structural type of every use case."""

    descriptor: ClassVar[UseCaseDescriptor]

    async def execute(self, context: Context, command: CommandT) -> ResponseT: ...


def require_identity(context: Context) -> str:
    """Return context.user_id or raise AuthenticationDomainError."""
    if not context.user_id:
        raise AuthenticationDomainError("Authentication required")
    return context.user_id


def raise_if_invalid(message: str, errors: list[FieldError]) -> None:
    """Raise ValidationDomainError carrying every error when errors is non-empty."""
    if errors:
        raise ValidationDomainError(message, errors)


def is_blank(value: Any) -> bool:
    """True when value is not a string or is empty/whitespace."""
    return not isinstance(value, str) or not value.strip()


async def execute_use_case(
    use_case: UseCase[CommandT, ResponseT],
    context: Context,
    command: CommandT,
) -> ResponseT:
    """Run use_case inside one transaction scope and log the outcome.

    Domain errors propagate unchanged (the boundary maps them by code);
    the transaction is rolled back for any exception.
    """
    name = type(use_case).__name__
    started = time.perf_counter()
    context.logger.debug("%s started", name)
    try:
        result = await context.transactionally(
            lambda _repositories: use_case.execute(context, command)
        )
    except DomainError as exc:
        context.logger.info("%s failed: %s (%s)", name, exc.code.value, exc.message)
        raise
    elapsed_ms = (time.perf_counter() - started) * 1000
    context.logger.debug("%s completed in %.1f ms", name, elapsed_ms)
    return result
