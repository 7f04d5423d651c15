"""Facets – facet models, selection strategies, manager and helpers."""
from mp_search.facets.manager import FacetChangeListener, FacetManager
from mp_search.facets.models import (
    DEFAULT_VISIBLE_COUNT,
    FacetChangeEvent,
    FacetConfig,
    FacetKey,
    FacetKind,
    FacetOption,
    FacetSort,
    FacetState,
    FacetValue,
)
from mp_search.facets.strategies import (
    FilterStrategy,
    FilterStrategyRegistry,
    default_filter,
    first_value_term,
    range_filter,
    term_or_terms,
)
from mp_search.facets.utils import (
    clamp_number,
    facet_summary,
    filter_facet_values,
    is_within_range,
    selected_count_text,
    sort_facet_values,
    toggle_selection,
    values_from_aggregation,
)

__all__ = [
    "DEFAULT_VISIBLE_COUNT",
    "FacetChangeEvent",
    "FacetChangeListener",
    "FacetConfig",
    "FacetKey",
    "FacetKind",
    "FacetManager",
    "FacetOption",
    "FacetSort",
    "FacetState",
    "FacetValue",
    "FilterStrategy",
    "FilterStrategyRegistry",
    "clamp_number",
    "default_filter",
    "facet_summary",
    "filter_facet_values",
    "first_value_term",
    "is_within_range",
    "range_filter",
    "selected_count_text",
    "sort_facet_values",
    "term_or_terms",
    "toggle_selection",
    "values_from_aggregation",
]
