"""Model – PaginationState."""
from __future__ import annotations

import dataclasses
import math
from typing import Any


@dataclasses.dataclass(frozen=True, slots=True)
class PaginationState:
    """Offset-based pagination with computed navigation properties.

    No validation happens here: callers are responsible for passing a
    ``page`` and ``page_size`` of at least 1.
    """

    page: int = 1
    page_size: int = 10
    total: int = 0

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0 or self.total <= 0:
            return 0
        return math.ceil(self.total / self.page_size)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    def to_dict(self) -> dict[str, Any]:
        return {"page": self.page, "page_size": self.page_size, "total": self.total}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PaginationState:
        return cls(
            page=int(data.get("page", 1)),
            page_size=int(data.get("page_size", 10)),
            total=int(data.get("total", 0)),
        )


__all__ = ["PaginationState"]
