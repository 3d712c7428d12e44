"""Primary key generation for persisted rows."""

from cuid2 import Cuid

ID_LENGTH = 25

_id_generator = Cuid(length=ID_LENGTH)


def generate_id() -> str:
    """Return a new opaque, collision-resistant id (CUID2)."""
    return _id_generator.generate()
