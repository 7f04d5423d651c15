"""Facets – helpers for building and presenting facet values."""
from __future__ import annotations

from typing import Iterable, Sequence, TypeVar

from mp_search.facets.models import FacetConfig, FacetKey, FacetOption, FacetSort, FacetValue
from mp_search.model import AggregationResult

V = TypeVar("V", FacetValue, FacetOption)

__all__ = [
    "clamp_number",
    "facet_summary",
    "filter_facet_values",
    "is_within_range",
    "selected_count_text",
    "sort_facet_values",
    "toggle_selection",
    "values_from_aggregation",
]


def filter_facet_values(values: Iterable[V], query: str) -> list[V]:
    """Keep values whose label contains *query* (case-insensitive)."""
    needle = (query or "").strip().casefold()
    if not needle:
        return list(values)
    return [v for v in values if needle in v.label.casefold()]


def sort_facet_values(values: Iterable[FacetValue], sort_by: FacetSort = FacetSort.COUNT) -> list[FacetValue]:
    ordered = list(values)
    match FacetSort(sort_by):
        case FacetSort.COUNT:
            ordered.sort(key=lambda v: v.count, reverse=True)
        case FacetSort.KEY:
            ordered.sort(key=lambda v: v.label.casefold())
        case FacetSort.CUSTOM:
            pass
    return ordered


def values_from_aggregation(
    aggregation: AggregationResult,
    config: FacetConfig,
    selected: Sequence[FacetKey] = (),
) -> tuple[FacetValue, ...]:
    """Turn aggregation buckets into sorted, truncated facet values.

    Selection flags come from *selected*; keys without a bucket are never
    added. An aggregation without buckets yields no values.
    """
    if not aggregation.buckets:
        return ()
    chosen = set(selected)
    values = [
        FacetValue(
            key=bucket.key,
            label=str(bucket.key),
            count=bucket.count,
            selected=bucket.key in chosen,
            disabled=bucket.count == 0,
        )
        for bucket in aggregation.buckets
    ]
    values = sort_facet_values(values, config.sort_by)
    if config.max_values is not None:
        values = values[: config.max_values]
    return tuple(values)


def toggle_selection(
    selected: Sequence[FacetKey], key: FacetKey, multi_select: bool = True
) -> tuple[FacetKey, ...]:
    """Return the selection with *key* toggled.

    With ``multi_select=False`` the result holds at most *key*.
    """
    if not multi_select:
        return () if key in selected else (key,)
    if key in selected:
        return tuple(k for k in selected if k != key)
    return (*selected, key)


def selected_count_text(count: int) -> str:
    if count <= 0:
        return ""
    return f"({count} selected)"


def facet_summary(config: FacetConfig, selected_count: int) -> str:
    if selected_count <= 0:
        return config.label
    return f"{config.label} {selected_count_text(selected_count)}"


def is_within_range(value: float, minimum: float | None = None, maximum: float | None = None) -> bool:
    if minimum is not None and value < minimum:
        return False
    if maximum is not None and value > maximum:
        return False
    return True


def clamp_number(value: float, minimum: float | None = None, maximum: float | None = None) -> float:
    if minimum is not None:
        value = max(minimum, value)
    if maximum is not None:
        value = min(maximum, value)
    return value
