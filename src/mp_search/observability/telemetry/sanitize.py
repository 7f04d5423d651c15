"""Observability – reduce event payloads to telemetry-safe context."""
from __future__ import annotations

from typing import Any

from mp_search.model import SearchEventKind
from mp_search.observability.telemetry.ports import TelemetryCategory

_CATEGORIES: dict[SearchEventKind, TelemetryCategory] = {
    SearchEventKind.SEARCH_STARTED: TelemetryCategory.SEARCH,
    SearchEventKind.SEARCH_COMPLETED: TelemetryCategory.SEARCH,
    SearchEventKind.SEARCH_FAILED: TelemetryCategory.SEARCH,
    SearchEventKind.SUGGESTIONS_REQUESTED: TelemetryCategory.SUGGESTIONS,
    SearchEventKind.SUGGESTIONS_RECEIVED: TelemetryCategory.SUGGESTIONS,
    SearchEventKind.SUGGESTIONS_CLEARED: TelemetryCategory.SUGGESTIONS,
    SearchEventKind.SUGGESTIONS_FAILED: TelemetryCategory.SUGGESTIONS,
    SearchEventKind.SUGGESTION_SELECTED: TelemetryCategory.SUGGESTIONS,
    SearchEventKind.FILTER_ADDED: TelemetryCategory.FACETS,
    SearchEventKind.FILTER_REMOVED: TelemetryCategory.FACETS,
    SearchEventKind.FILTER_CLEARED: TelemetryCategory.FACETS,
    SearchEventKind.RESULT_CLICKED: TelemetryCategory.RESULTS,
    SearchEventKind.PAGE_CHANGED: TelemetryCategory.PAGINATION,
}


def category_for(kind: SearchEventKind) -> TelemetryCategory:
    return _CATEGORIES.get(kind, TelemetryCategory.CUSTOM)


def _query_text(value: Any) -> str:
    # payloads carry either a SearchQuery or the raw text
    if value is None:
        return ""
    return getattr(value, "text", value)


def _filter_count(value: Any) -> int:
    return len(getattr(value, "filters", ()) or ())


def sanitize_event_payload(
    kind: SearchEventKind, payload: dict[str, Any] | None
) -> dict[str, Any] | None:
    """Keep only counts, ids and query text; drop documents and raw objects."""
    if not payload:
        return None

    match kind:
        case SearchEventKind.QUERY_CHANGED:
            return {"length": len(payload.get("query") or "")}
        case SearchEventKind.SEARCH_STARTED:
            return {
                "query": _query_text(payload.get("query")),
                "filters": _filter_count(payload.get("query")),
            }
        case SearchEventKind.SEARCH_COMPLETED:
            return {
                "query": _query_text(payload.get("query")),
                "total": payload.get("total"),
                "took": payload.get("took"),
            }
        case SearchEventKind.SEARCH_FAILED:
            return {
                "query": _query_text(payload.get("query")),
                "message": payload.get("message"),
            }
        case SearchEventKind.SUGGESTIONS_REQUESTED:
            return {"query": payload.get("query")}
        case SearchEventKind.SUGGESTIONS_RECEIVED:
            return {"count": payload.get("count")}
        case SearchEventKind.SUGGESTIONS_FAILED:
            return {"query": payload.get("query"), "message": payload.get("message")}
        case SearchEventKind.SUGGESTION_SELECTED:
            suggestion = payload.get("suggestion")
            return {
                "suggestion": getattr(suggestion, "text", None),
                "id": getattr(suggestion, "id", None),
                "index": payload.get("index"),
                "origin": payload.get("origin"),
            }
        case SearchEventKind.RESULT_CLICKED:
            result = payload.get("result")
            return {
                "id": getattr(result, "id", None),
                "score": getattr(result, "score", None),
                "index": payload.get("index"),
                "origin": payload.get("origin"),
            }
        case SearchEventKind.FILTER_ADDED:
            spec = payload.get("filter")
            kind_value = getattr(spec, "kind", None)
            return {
                "field": getattr(spec, "field", None),
                "kind": getattr(kind_value, "value", kind_value),
            }
        case SearchEventKind.FILTER_REMOVED:
            return {"field": payload.get("field")}
        case SearchEventKind.PAGE_CHANGED:
            return {"page": payload.get("page"), "page_size": payload.get("page_size")}
        case _:
            return None


__all__ = ["category_for", "sanitize_event_payload"]
