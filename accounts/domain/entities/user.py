"""User domain entity.

Represents an account holder, independent of persistence.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from accounts.domain.entities.base import Entity
from accounts.domain.validation import FieldError, ValidationResult, is_valid_email

EMAIL_MAX_LENGTH = 255
NAME_MAX_LENGTH = 100


def _check_name(field_name: str, label: str, value: object) -> FieldError | None:
    if not value or not isinstance(value, str):
        return FieldError(field_name, f"{label} is required")
    if len(value) > NAME_MAX_LENGTH:
        return FieldError(
            field_name, f"{label} must not exceed {NAME_MAX_LENGTH} characters"
        )
    if not value.strip():
        return FieldError(field_name, f"{label} cannot be empty")
    return None


@dataclass(frozen=True)
class User(Entity):
    """Domain entity for a user account.

    id is None until the repository has persisted the user; created_at and
    updated_at are assigned by the database and never by callers.
    """

    id: str | None
    email: str
    first_name: str
    last_name: str
    is_active: bool = True
    is_admin: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def validate(self) -> ValidationResult:
        """Validate identity, field lengths/format and flag types.

        Returns:
            ValidationResult with every violation found.
        """
        errors: list[FieldError] = []

        if self.id is not None and not self.has_valid_id():
            errors.append(FieldError("id", "ID must be a non-empty string when provided"))

        if not self.email or not isinstance(self.email, str):
            errors.append(FieldError("email", "Email is required"))
        else:
            if len(self.email) > EMAIL_MAX_LENGTH:
                errors.append(
                    FieldError(
                        "email", f"Email must not exceed {EMAIL_MAX_LENGTH} characters"
                    )
                )
            if not is_valid_email(self.email):
                errors.append(FieldError("email", "Email format is invalid"))

        for field_name, label, value in (
            ("first_name", "First name", self.first_name),
            ("last_name", "Last name", self.last_name),
        ):
            error = _check_name(field_name, label, value)
            if error:
                errors.append(error)

        if not isinstance(self.is_active, bool):
            errors.append(FieldError("is_active", "is_active must be a boolean value"))
        if not isinstance(self.is_admin, bool):
            errors.append(FieldError("is_admin", "is_admin must be a boolean value"))

        return ValidationResult.from_errors(errors)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def create(
        cls,
        email: str,
        first_name: str,
        last_name: str,
        is_admin: bool = False,
    ) -> User:
        """Build a new, active, not-yet-persisted user."""
        return cls(
            id=None,
            email=email,
            first_name=first_name,
            last_name=last_name,
            is_active=True,
            is_admin=is_admin,
        )

    @classmethod
    def from_data(
        cls,
        *,
        id: str,
        email: str,
        first_name: str,
        last_name: str,
        is_active: bool,
        is_admin: bool,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> User:
        """Rehydrate a persisted user."""
        return cls(
            id=id,
            email=email,
            first_name=first_name,
            last_name=last_name,
            is_active=is_active,
            is_admin=is_admin,
            created_at=created_at,
            updated_at=updated_at,
        )
