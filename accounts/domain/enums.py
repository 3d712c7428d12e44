"""Domain enumerations for the accounts service.

Enums represent fixed sets of domain values (error codes, auth providers).
"""

from enum import Enum


class DomainErrorCode(str, Enum):
    """Stable machine-readable discriminator carried by every domain error.

    The web boundary maps these to HTTP status codes; nothing else about an
    error (class, message) is consulted for that mapping.
    """

    VALIDATION = "VALIDATION"
    AUTHENTICATION = "AUTHENTICATION"
    AUTHORIZATION = "AUTHORIZATION"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    SYSTEM = "SYSTEM"


class AuthProvider(str, Enum):
    """Identity providers a UserAuthentication row may belong to."""

    EMAIL = "email"
    GOOGLE = "google"
    GITHUB = "github"
    FACEBOOK = "facebook"
    APPLE = "apple"
    MICROSOFT = "microsoft"

    @classmethod
    def values(cls) -> list[str]:
        """Return all provider values as strings.

        Returns:
            List of enum value strings (e.g. for validation messages).
        """
        return [provider.value for provider in cls]
