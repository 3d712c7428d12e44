"""Base entity: identity plus a validate() contract."""

from abc import ABC, abstractmethod

from accounts.domain.validation import ValidationResult


class Entity(ABC):
    """Abstract base for domain entities.

    Subclasses own a validate() that returns every constraint violation at
    once and never raises.
    """

    id: str | None

    @abstractmethod
    def validate(self) -> ValidationResult:
        """Check all field and relational constraints."""

    def has_valid_id(self) -> bool:
        """Return True when id is a non-empty string."""
        return isinstance(self.id, str) and len(self.id) > 0
