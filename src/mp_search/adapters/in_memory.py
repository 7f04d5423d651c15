"""Adapters – InMemorySearchAdapter, a reference backend over a list of documents."""
from __future__ import annotations

import asyncio
import time
from collections import Counter
from typing import Any, Callable, Generic, Iterable, TypeVar

from mp_search.adapters.ports import SuggestOptions
from mp_search.model import (
    AggregationBucket,
    AggregationKind,
    AggregationResult,
    FilterKind,
    FilterOperator,
    FilterSpec,
    SearchQuery,
    SearchResponse,
    SearchResult,
    SortOrder,
    Suggestion,
)

T = TypeVar("T")

__all__ = ["InMemorySearchAdapter"]


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def _sort_key(value: Any) -> tuple[bool, Any]:
    # missing values sort last ascending
    return (value is None, value if value is not None else 0)


class InMemorySearchAdapter(Generic[T]):
    """Case-insensitive substring search over dict-like documents.

    Intended for tests and demos. Supports every :class:`FilterKind`,
    multi-field sorting, offset pagination, ``terms`` aggregations for the
    configured ``facet_fields`` and suggestions drawn from document values.

    Args:
        documents: The corpus; dicts or objects exposing ``__dict__``.
        id_field: Field holding the document id.
        facet_fields: Fields to aggregate on every search.
        suggestion_fields: Fields suggestions are drawn from (all string
            fields when empty).
        latency_ms: Simulated backend latency for every call.
        key_fn: Override for turning a document into a field mapping.
    """

    def __init__(
        self,
        documents: Iterable[T],
        *,
        id_field: str = "id",
        facet_fields: Iterable[str] = (),
        suggestion_fields: Iterable[str] = (),
        latency_ms: float = 0,
        key_fn: Callable[[T], dict[str, Any]] | None = None,
    ) -> None:
        self._documents = list(documents)
        self._id_field = id_field
        self._facet_fields = tuple(facet_fields)
        self._suggestion_fields = tuple(suggestion_fields)
        self._latency_ms = latency_ms
        self._key_fn: Callable[[T], dict[str, Any]] = key_fn or (
            lambda x: x if isinstance(x, dict) else x.__dict__
        )
        self.search_calls = 0
        self.destroyed = False

    async def _simulate_latency(self) -> None:
        if self._latency_ms > 0:
            await asyncio.sleep(self._latency_ms / 1000)

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def _matches_text(self, doc: dict[str, Any], query: SearchQuery) -> bool:
        if not query.has_text:
            return True
        needle = query.text.strip().lower()
        values = [doc.get(f) for f in query.fields] if query.fields else list(doc.values())
        return any(needle in str(v).lower() for v in values if v is not None)

    def _matches_filter(self, doc: dict[str, Any], spec: FilterSpec) -> bool:
        val = doc.get(spec.field)
        match spec.kind:
            case FilterKind.TERM:
                return spec.value in val if isinstance(val, (list, tuple, set)) else val == spec.value
            case FilterKind.TERMS:
                wanted = _as_list(spec.value)
                present = set(_as_list(val))
                hits = [w in present for w in wanted]
                match spec.operator:
                    case FilterOperator.AND:
                        return all(hits)
                    case FilterOperator.NOT:
                        return not any(hits)
                    case _:
                        return any(hits)
            case FilterKind.RANGE:
                if val is None:
                    return False
                bounds = spec.value or {}
                if "gte" in bounds and val < bounds["gte"]:
                    return False
                if "gt" in bounds and val <= bounds["gt"]:
                    return False
                if "lte" in bounds and val > bounds["lte"]:
                    return False
                if "lt" in bounds and val >= bounds["lt"]:
                    return False
                return True
            case FilterKind.MATCH:
                return str(spec.value).lower() in str(val or "").lower()
            case FilterKind.EXISTS:
                expected = True if spec.value is None else bool(spec.value)
                return (val is not None) == expected
            case FilterKind.CUSTOM:
                return bool(spec.value(doc)) if callable(spec.value) else True
            case _:
                return True

    # ------------------------------------------------------------------
    # Adapter protocol
    # ------------------------------------------------------------------

    async def search(self, query: SearchQuery) -> SearchResponse[T]:
        self.search_calls += 1
        t0 = time.monotonic()
        await self._simulate_latency()

        matched: list[T] = []
        for item in self._documents:
            d = self._key_fn(item)
            if not self._matches_text(d, query):
                continue
            if not all(self._matches_filter(d, f) for f in query.filters):
                continue
            matched.append(item)

        # stable sorts applied last-key-first give multi-field ordering
        for spec in reversed(query.sort):
            matched.sort(
                key=lambda x, f=spec.field: _sort_key(self._key_fn(x).get(f)),
                reverse=(spec.order == SortOrder.DESC),
            )

        total = len(matched)
        page = matched[query.offset: query.offset + query.size]
        results = [
            SearchResult(id=str(self._key_fn(item).get(self._id_field)), data=item, score=1.0)
            for item in page
        ]
        took_ms = (time.monotonic() - t0) * 1000
        return SearchResponse(
            results=results,
            total=total,
            took=took_ms,
            aggregations=self._aggregate(matched) if self._facet_fields else None,
        )

    def _aggregate(self, matched: list[T]) -> dict[str, AggregationResult]:
        out: dict[str, AggregationResult] = {}
        for field_name in self._facet_fields:
            counts: Counter[Any] = Counter()
            for item in matched:
                for value in _as_list(self._key_fn(item).get(field_name)):
                    counts[value] += 1
            out[field_name] = AggregationResult(
                kind=AggregationKind.TERMS,
                buckets=tuple(AggregationBucket(key=k, count=c) for k, c in counts.most_common()),
            )
        return out

    async def suggest(self, text: str, options: SuggestOptions) -> list[Suggestion]:
        await self._simulate_latency()
        needle = text.strip().lower()
        if not needle:
            return []
        fields = options.fields or self._suggestion_fields
        counts: Counter[str] = Counter()
        for item in self._documents:
            d = self._key_fn(item)
            for name in fields or d.keys():
                for value in _as_list(d.get(name)):
                    if not isinstance(value, str):
                        continue
                    candidate = value.lower()
                    hit = needle in candidate if options.fuzzy else candidate.startswith(needle)
                    if hit:
                        counts[value] += 1
        return [
            Suggestion(text=value, count=count)
            for value, count in counts.most_common(options.max_suggestions)
        ]

    async def get_by_id(self, id: str) -> T | None:
        await self._simulate_latency()
        for item in self._documents:
            if str(self._key_fn(item).get(self._id_field)) == id:
                return item
        return None

    async def is_ready(self) -> bool:
        return not self.destroyed

    def destroy(self) -> None:
        self.destroyed = True
