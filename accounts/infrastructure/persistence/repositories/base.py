"""Base repository: generic row access, pagination and storage-error translation."""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from accounts.application.dtos.pagination import (
    PaginatedResults,
    PaginationMeta,
    PaginationParams,
)
from accounts.domain.exceptions import SystemDomainError
from accounts.infrastructure.persistence.database import Base

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)
EntityT = TypeVar("EntityT")


@contextmanager
def translate_storage_errors(operation: str) -> Iterator[None]:
    """Turn raw SQLAlchemy errors into SystemDomainError.

    Callers catch and translate IntegrityError themselves first; anything
    left is unanticipated and must not leak past the repository.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("Database error during %s", operation)
        raise SystemDomainError(
            f"Unexpected database error during {operation}"
        ) from exc


def is_foreign_key_violation(exc: SQLAlchemyError) -> bool:
    """True when exc reports a foreign-key failure (Postgres or SQLite wording)."""
    text = str(getattr(exc, "orig", exc)).lower()
    return "foreign key" in text


class BaseRepository(Generic[ModelType]):
    """Base repository bound to one session (one transaction scope).

    Instances are cheap and created per scope; never share one across
    requests.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single row by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def add(self, obj: ModelType) -> ModelType:
        """Insert a row and reload server-assigned columns."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def save(self, obj: ModelType) -> ModelType:
        """Flush pending changes on an attached row and reload it."""
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def paginate(
        self,
        stmt: Select[Any],
        pagination: PaginationParams,
        to_entity: Callable[[ModelType], EntityT],
    ) -> PaginatedResults[EntityT]:
        """Run stmt for one page and count the full result set."""
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = (await self.db.execute(count_stmt)).scalar_one()
        rows = await self.db.execute(
            stmt.offset(pagination.offset).limit(pagination.page_size)
        )
        return PaginatedResults(
            data=[to_entity(row) for row in rows.scalars().all()],
            meta=PaginationMeta(
                total=total, page=pagination.page, page_size=pagination.page_size
            ),
        )
