"""Offset/limit paging for repository queries."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, List, TypeVar

from sqlalchemy.orm import Query

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 200


@dataclass
class Page(Generic[T]):
    items: List[T]
    total_items: int
    skip: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.limit) if self.total_items else 0

    @property
    def has_next(self) -> bool:
        return self.skip + len(self.items) < self.total_items


def paginate(query: Query, skip: int = 0, limit: int = DEFAULT_PAGE_SIZE) -> Page:
    """Count ``query`` and return the ``[skip, skip + limit)`` slice of it.

    The query must already carry its ORDER BY so slices are stable.
    """
    if skip < 0:
        raise ValueError("skip must be >= 0")
    if limit <= 0 or limit > MAX_PAGE_SIZE:
        raise ValueError(f"limit must be between 1 and {MAX_PAGE_SIZE}")
    total = query.order_by(None).count()
    items = query.offset(skip).limit(limit).all()
    return Page(items=items, total_items=total, skip=skip, limit=limit)
