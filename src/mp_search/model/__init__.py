"""Model – immutable value types exchanged by the state, coordinator and facets."""
from mp_search.model.events import SearchEvent, SearchEventKind
from mp_search.model.pagination import PaginationState
from mp_search.model.query import (
    FilterKind,
    FilterOperator,
    FilterSpec,
    SearchQuery,
    SortOrder,
    SortSpec,
)
from mp_search.model.result import (
    AggregationBucket,
    AggregationKind,
    AggregationResult,
    AggregationStats,
    SearchResponse,
    SearchResult,
    Suggestion,
)

from mp_search.model.text import (
    HighlightOptions,
    extract_snippet,
    highlight_boundaries,
    highlight_terms,
    highlight_text,
    is_empty_query,
    sanitize_query,
    strip_highlight,
)
__all__ = [
    "AggregationBucket",
    "AggregationKind",
    "AggregationResult",
    "AggregationStats",
    "FilterKind",
    "FilterOperator",
    "FilterSpec",
    "HighlightOptions",
    "PaginationState",
    "SearchEvent",
    "SearchEventKind",
    "SearchQuery",
    "SearchResponse",
    "SearchResult",
    "SortOrder",
    "SortSpec",
    "Suggestion",
    "extract_snippet",
    "highlight_boundaries",
    "highlight_terms",
    "highlight_text",
    "is_empty_query",
    "sanitize_query",
    "strip_highlight",
]
