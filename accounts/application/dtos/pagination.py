"""Pagination DTOs shared by repositories and list use cases."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 500

T = TypeVar("T")


@dataclass(frozen=True)
class PaginationParams:
    """Requested page. Not clamped here: list use cases validate the values."""

    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass(frozen=True)
class PaginationMeta:
    """Page metadata; total_pages, has_next and has_prev are derived."""

    total: int
    page: int
    page_size: int
    total_pages: int = field(init=False)
    has_next: bool = field(init=False)
    has_prev: bool = field(init=False)

    def __post_init__(self) -> None:
        total_pages = math.ceil(self.total / self.page_size) if self.page_size else 0
        object.__setattr__(self, "total_pages", total_pages)
        object.__setattr__(self, "has_next", self.page < total_pages)
        object.__setattr__(self, "has_prev", self.page > 1)


@dataclass(frozen=True)
class PaginatedResults(Generic[T]):
    """One page of entities plus its metadata."""

    data: list[T]
    meta: PaginationMeta
