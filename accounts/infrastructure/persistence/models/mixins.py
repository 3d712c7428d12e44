"""SQLAlchemy mixins for common model patterns.

Provides: IdMixin, TimestampMixin and the combined EntityModel.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from accounts.shared.utils.generators import generate_id


class IdMixin:
    """Mixin for models keyed by an opaque server-generated string id."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_id)


class TimestampMixin:
    """Mixin for created_at and updated_at (database-assigned, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class EntityModel(IdMixin, TimestampMixin):
    """Combined mixin: id + created_at/updated_at."""

    __abstract__ = True
