"""Service interfaces (ports) for the application layer."""

from typing import Protocol


class IPasswordHasher(Protocol):
    """Slow password hash primitive. Both methods may suspend (thread offload)."""

    async def hash(self, password: str) -> str:
        """Return a salted hash of password."""

    async def verify(self, password: str, hashed_password: str) -> bool:
        """Return True if password matches hashed_password."""

    async def verify_dummy(self, password: str) -> None:
        """Spend the same time as verify() against a throwaway hash."""
