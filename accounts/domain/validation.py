"""Validation primitives shared by entities and command validators.

Validators are pure functions returning a ValidationResult (or a list of
FieldError); they never perform I/O and never raise for invalid input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

# Shape check only: local@domain.tld.
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(value: str) -> bool:
    """Return True if value has the shape of an email address."""
    return bool(EMAIL_PATTERN.match(value))


@dataclass(frozen=True)
class FieldError:
    """A single constraint violation on one field."""

    field: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    """Aggregate outcome of a validation pass.

    Attributes:
        valid: True when no constraint was violated.
        errors: Every FieldError found (never only the first).
    """

    valid: bool = True
    errors: list[FieldError] = field(default_factory=list)

    @classmethod
    def success(cls) -> ValidationResult:
        return cls(True, [])

    @classmethod
    def failure(cls, errors: FieldError | list[FieldError]) -> ValidationResult:
        if isinstance(errors, FieldError):
            errors = [errors]
        return cls(False, list(errors))

    @classmethod
    def from_errors(cls, errors: list[FieldError]) -> ValidationResult:
        """Return success when errors is empty, failure otherwise."""
        return cls.failure(errors) if errors else cls.success()

    @classmethod
    def combine(cls, *results: ValidationResult) -> ValidationResult:
        """AND validity and concatenate errors of several sub-checks."""
        errors = [error for result in results for error in result.errors]
        return cls(all(result.valid for result in results), errors)
