"""Domain layer: entities, enums, validation primitives and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from accounts.domain.entities import Entity, User, UserAuthentication
from accounts.domain.enums import AuthProvider, DomainErrorCode
from accounts.domain.exceptions import (
    AuthenticationDomainError,
    AuthorizationDomainError,
    ConflictDomainError,
    DomainError,
    NotFoundDomainError,
    SystemDomainError,
    ValidationDomainError,
)
from accounts.domain.validation import FieldError, ValidationResult

__all__ = [
    # Entities
    "Entity",
    "User",
    "UserAuthentication",
    # Enums
    "AuthProvider",
    "DomainErrorCode",
    # Exceptions
    "AuthenticationDomainError",
    "AuthorizationDomainError",
    "ConflictDomainError",
    "DomainError",
    "NotFoundDomainError",
    "SystemDomainError",
    "ValidationDomainError",
    # Validation
    "FieldError",
    "ValidationResult",
]
