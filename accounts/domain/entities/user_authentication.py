"""UserAuthentication domain entity (weak entity owned by a User)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from accounts.domain.entities.base import Entity
from accounts.domain.enums import AuthProvider
from accounts.domain.validation import FieldError, ValidationResult, is_valid_email

PROVIDER_MAX_LENGTH = 50
PROVIDER_ID_MAX_LENGTH = 255
HASHED_PASSWORD_MIN_LENGTH = 10


@dataclass(frozen=True)
class UserAuthentication(Entity):
    """One way of signing in as a user.

    Cannot exist without user_id. For the email provider provider_id is the
    lower-cased email and hashed_password is required; for every other
    provider provider_id is the external account id and hashed_password
    must be None.
    """

    id: str | None
    user_id: str
    provider: str
    provider_id: str
    hashed_password: str | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def validate(self) -> ValidationResult:
        """Validate fields and relational constraints.

        Returns:
            ValidationResult with every violation found.
        """
        errors: list[FieldError] = []

        if self.id is not None and not self.has_valid_id():
            errors.append(FieldError("id", "ID must be a non-empty string when provided"))

        if (
            not self.user_id
            or not isinstance(self.user_id, str)
            or not self.user_id.strip()
        ):
            errors.append(
                FieldError("user_id", "User ID is required (weak entity constraint)")
            )

        if not self.provider or not isinstance(self.provider, str):
            errors.append(FieldError("provider", "Provider is required"))
        else:
            if len(self.provider) > PROVIDER_MAX_LENGTH:
                errors.append(
                    FieldError(
                        "provider",
                        f"Provider must not exceed {PROVIDER_MAX_LENGTH} characters",
                    )
                )
            if self.provider.lower() not in AuthProvider.values():
                errors.append(
                    FieldError(
                        "provider",
                        "Provider must be one of: " + ", ".join(AuthProvider.values()),
                    )
                )

        if not self.provider_id or not isinstance(self.provider_id, str):
            errors.append(FieldError("provider_id", "Provider ID is required"))
        elif len(self.provider_id) > PROVIDER_ID_MAX_LENGTH:
            errors.append(
                FieldError(
                    "provider_id",
                    f"Provider ID must not exceed {PROVIDER_ID_MAX_LENGTH} characters",
                )
            )
        elif self.is_email_provider() and not is_valid_email(self.provider_id):
            errors.append(
                FieldError(
                    "provider_id",
                    "Provider ID must be a valid email for email provider",
                )
            )

        if self.is_email_provider():
            if not self.hashed_password or not isinstance(self.hashed_password, str):
                errors.append(
                    FieldError(
                        "hashed_password",
                        "Hashed password is required for email provider",
                    )
                )
            elif len(self.hashed_password) < HASHED_PASSWORD_MIN_LENGTH:
                errors.append(
                    FieldError("hashed_password", "Hashed password appears to be invalid")
                )
        elif self.hashed_password is not None:
            errors.append(
                FieldError(
                    "hashed_password",
                    "Hashed password should be null for non-email providers",
                )
            )

        if not isinstance(self.is_active, bool):
            errors.append(FieldError("is_active", "is_active must be a boolean value"))

        return ValidationResult.from_errors(errors)

    def is_email_provider(self) -> bool:
        return self.provider == AuthProvider.EMAIL.value

    def is_social_provider(self) -> bool:
        return not self.is_email_provider()

    @classmethod
    def create_email_auth(
        cls, user_id: str, email: str, hashed_password: str
    ) -> UserAuthentication:
        """Build a new email/password authentication for user_id."""
        return cls(
            id=None,
            user_id=user_id,
            provider=AuthProvider.EMAIL.value,
            provider_id=email.lower(),
            hashed_password=hashed_password,
        )

    @classmethod
    def create_social_auth(
        cls, user_id: str, provider: str, provider_id: str
    ) -> UserAuthentication:
        """Build a new external-provider authentication (no password)."""
        return cls(
            id=None,
            user_id=user_id,
            provider=provider,
            provider_id=provider_id,
            hashed_password=None,
        )

    @classmethod
    def from_data(
        cls,
        *,
        id: str,
        user_id: str,
        provider: str,
        provider_id: str,
        hashed_password: str | None,
        is_active: bool,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> UserAuthentication:
        """Rehydrate a persisted authentication."""
        return cls(
            id=id,
            user_id=user_id,
            provider=provider,
            provider_id=provider_id,
            hashed_password=hashed_password,
            is_active=is_active,
            created_at=created_at,
            updated_at=updated_at,
        )
