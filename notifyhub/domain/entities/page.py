"""Generic pagination container."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of an ordered result set."""

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    per_page: int = 20

    @property
    def last_page(self) -> int:
        if self.total <= 0:
            return 1
        return math.ceil(self.total / self.per_page)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


def normalize_page(page: int | None) -> int:
    """Clamp ``page`` to a valid 1-based page number."""

    if page is None or page < 1:
        return 1
    return page


__all__ = ["Page", "normalize_page"]
