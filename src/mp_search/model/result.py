"""Model – SearchResult, SearchResponse, aggregations and suggestions."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")

__all__ = [
    "AggregationBucket",
    "AggregationKind",
    "AggregationResult",
    "AggregationStats",
    "SearchResponse",
    "SearchResult",
    "Suggestion",
]


@dataclass(frozen=True)
class SearchResult(Generic[T]):
    """A single hit; ``data`` is whatever document type the backend returns."""

    id: str
    data: T
    score: float | None = None
    highlights: dict[str, list[str]] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def has_highlights(self) -> bool:
        return bool(self.highlights)

    def first_highlight(self, field_name: str) -> str | None:
        snippets = self.highlights.get(field_name)
        return snippets[0] if snippets else None

    def get_field(self, path: str) -> Any:
        """Resolve a dotted *path* (``"user.name"``) against ``data``.

        Works for nested mappings and plain attributes; returns ``None`` as
        soon as a segment is missing.
        """
        current: Any = self.data
        for key in path.split("."):
            if current is None:
                return None
            if isinstance(current, dict):
                current = current.get(key)
            else:
                current = getattr(current, key, None)
        return current

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "data": self.data,
            "score": self.score,
            "highlights": {k: list(v) for k, v in self.highlights.items()},
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SearchResult[Any]:
        return cls(
            id=str(data["id"]),
            data=data.get("data"),
            score=data.get("score"),
            highlights={k: list(v) for k, v in (data.get("highlights") or {}).items()},
            metadata=dict(data.get("metadata") or {}),
        )


class AggregationKind(str, Enum):
    TERMS = "terms"
    RANGE = "range"
    HISTOGRAM = "histogram"
    STATS = "stats"
    CUSTOM = "custom"


@dataclass(frozen=True)
class AggregationBucket:
    key: str | int | float
    count: int


@dataclass(frozen=True)
class AggregationStats:
    min: float
    max: float
    avg: float
    sum: float
    count: int


@dataclass(frozen=True)
class AggregationResult:
    kind: AggregationKind
    buckets: tuple[AggregationBucket, ...] | None = None
    stats: AggregationStats | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "buckets": (
                [{"key": b.key, "count": b.count} for b in self.buckets]
                if self.buckets is not None
                else None
            ),
            "stats": (
                {
                    "min": self.stats.min,
                    "max": self.stats.max,
                    "avg": self.stats.avg,
                    "sum": self.stats.sum,
                    "count": self.stats.count,
                }
                if self.stats is not None
                else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AggregationResult:
        buckets = data.get("buckets")
        stats = data.get("stats")
        return cls(
            kind=AggregationKind(data.get("kind", "terms")),
            buckets=(
                tuple(AggregationBucket(key=b["key"], count=int(b["count"])) for b in buckets)
                if buckets is not None
                else None
            ),
            stats=AggregationStats(**stats) if stats is not None else None,
        )


@dataclass(frozen=True)
class Suggestion:
    text: str
    id: str | None = None
    score: float | None = None
    count: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "id": self.id,
            "score": self.score,
            "count": self.count,
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Suggestion:
        return cls(
            text=data["text"],
            id=data.get("id"),
            score=data.get("score"),
            count=data.get("count"),
            metadata=dict(data.get("metadata") or {}),
        )


@dataclass(frozen=True)
class SearchResponse(Generic[T]):
    results: list[SearchResult[T]]
    total: int
    took: float | None = None
    aggregations: dict[str, AggregationResult] | None = None
    suggestions: list[Suggestion] | None = None
