"""State – StateSnapshot, the serialisable copy of a container.

Used to hand a search over a process boundary (render on a server, continue
on a client). There is deliberately no schema version field; evolving the
format is up to the integrator.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from mp_search.kernel.errors import SearchError
from mp_search.model import (
    AggregationResult,
    FilterSpec,
    PaginationState,
    SearchResult,
    SortSpec,
    Suggestion,
)


@dataclass(frozen=True)
class StateSnapshot:
    query: str = ""
    results: tuple[SearchResult[Any], ...] = ()
    loading: bool = False
    error: BaseException | None = None
    total: int = 0
    filters: tuple[tuple[str, FilterSpec], ...] = ()
    sort: tuple[SortSpec, ...] = ()
    pagination: PaginationState = field(default_factory=PaginationState)
    aggregations: dict[str, AggregationResult] = field(default_factory=dict)
    suggestions: tuple[Suggestion, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Plain, JSON-compatible structure (as long as result ``data`` is)."""
        return {
            "query": self.query,
            "results": [r.to_dict() for r in self.results],
            "loading": self.loading,
            "error": SearchError.wrap(self.error).to_dict() if self.error is not None else None,
            "total": self.total,
            "filters": [[name, spec.to_dict()] for name, spec in self.filters],
            "sort": [s.to_dict() for s in self.sort],
            "pagination": self.pagination.to_dict(),
            "aggregations": {name: agg.to_dict() for name, agg in self.aggregations.items()},
            "suggestions": [s.to_dict() for s in self.suggestions],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StateSnapshot:
        error = data.get("error")
        return cls(
            query=data.get("query", ""),
            results=tuple(SearchResult.from_dict(r) for r in data.get("results", [])),
            loading=bool(data.get("loading", False)),
            error=SearchError.from_dict(error) if error is not None else None,
            total=int(data.get("total", 0)),
            filters=tuple((name, FilterSpec.from_dict(spec)) for name, spec in data.get("filters", [])),
            sort=tuple(SortSpec.from_dict(s) for s in data.get("sort", [])),
            pagination=PaginationState.from_dict(data.get("pagination") or {}),
            aggregations={
                name: AggregationResult.from_dict(agg)
                for name, agg in (data.get("aggregations") or {}).items()
            },
            suggestions=tuple(Suggestion.from_dict(s) for s in data.get("suggestions", [])),
        )


__all__ = ["StateSnapshot"]
