"""Domain exceptions for the accounts service.

Defines the closed taxonomy of domain errors. Every error carries an
immutable DomainErrorCode; the presentation layer maps that code (and only
that code) to an HTTP response in the exception handlers.
"""

from typing import Any

from pydantic.alias_generators import to_camel

from accounts.domain.enums import DomainErrorCode
from accounts.domain.validation import FieldError


class DomainError(Exception):
    """Base exception for all domain errors.

    Attributes:
        code: Machine-readable DomainErrorCode (read-only).
        message: Human-readable error description.
        details: Additional structured context (may be empty).
    """

    def __init__(
        self,
        code: DomainErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            code: Error code from the closed DomainErrorCode set.
            message: Human-readable error description.
            details: Optional dict of extra context.
        """
        self._code = code
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def code(self) -> DomainErrorCode:
        return self._code

    def to_dict(self) -> dict[str, Any]:
        """Return the wire envelope: error, code and (when present) details."""
        body: dict[str, Any] = {"error": self.message, "code": self.code.value}
        if self.details:
            body["details"] = self.details
        return body


class ValidationDomainError(DomainError):
    """Raised when a command or entity fails validation.

    Carries the full list of field errors so clients can render per-field
    feedback. Field names are Python attribute names; on the wire they are
    camelCased to match the request bodies.
    """

    def __init__(
        self,
        message: str,
        field_errors: list[FieldError],
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(DomainErrorCode.VALIDATION, message, details)
        self.field_errors = list(field_errors)

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body["fieldErrors"] = [
            {"field": to_camel(error.field), "message": error.message}
            for error in self.field_errors
        ]
        return body


class AuthenticationDomainError(DomainError):
    """Raised when identity is missing/invalid or credentials are rejected."""

    def __init__(
        self,
        message: str = "Authentication failed",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(DomainErrorCode.AUTHENTICATION, message, details)


class AuthorizationDomainError(DomainError):
    """Raised when the caller is known but lacks the required privilege."""

    def __init__(
        self,
        message: str = "Access denied",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(DomainErrorCode.AUTHORIZATION, message, details)


class NotFoundDomainError(DomainError):
    """Raised when a referenced entity does not exist."""

    def __init__(
        self,
        message: str = "Resource not found",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(DomainErrorCode.NOT_FOUND, message, details)


class ConflictDomainError(DomainError):
    """Raised when a write would violate a uniqueness invariant."""

    def __init__(
        self,
        message: str = "Resource conflict",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(DomainErrorCode.CONFLICT, message, details)


class SystemDomainError(DomainError):
    """Raised for unanticipated failures (storage outage, programming defect)."""

    def __init__(
        self,
        message: str = "Internal system error",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(DomainErrorCode.SYSTEM, message, details)
