"""Password hashing (bcrypt with SHA-256 pre-hash).

Bcrypt truncates inputs at 72 bytes; pre-hashing with SHA-256 gives a
fixed-length input so long passwords are compared in full. bcrypt calls
block, so the async hasher runs them in a worker thread.
"""

import asyncio
import base64
import hashlib

import bcrypt

_DUMMY_PASSWORD = "dummy-password-for-timing"


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches hashed_password.

    A malformed stored hash counts as a mismatch.
    """
    try:
        return bool(
            bcrypt.checkpw(_prehash(plain_password), hashed_password.encode("utf-8"))
        )
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str, rounds: int = 12) -> str:
    """Return a salted bcrypt hash of password."""
    hashed = bcrypt.hashpw(_prehash(password), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


class BcryptPasswordHasher:
    """Async password hasher backed by bcrypt (implements IPasswordHasher)."""

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds
        self._dummy_hash: str | None = None

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(get_password_hash, password, self._rounds)

    async def verify(self, password: str, hashed_password: str) -> bool:
        return await asyncio.to_thread(verify_password, password, hashed_password)

    async def verify_dummy(self, password: str) -> None:
        """Burn one verify() worth of time for unknown accounts (timing-attack mitigation)."""
        if self._dummy_hash is None:
            self._dummy_hash = await self.hash(_DUMMY_PASSWORD)
        await asyncio.to_thread(verify_password, password, self._dummy_hash)
