"""Persistence models: ORM entities and mixins."""

from accounts.infrastructure.persistence.models.mixins import (
    EntityModel,
    IdMixin,
    TimestampMixin,
)
from accounts.infrastructure.persistence.models.user import (
    UserAuthenticationModel,
    UserModel,
)

__all__ = [
    "EntityModel",
    "IdMixin",
    "TimestampMixin",
    "UserAuthenticationModel",
    "UserModel",
]
