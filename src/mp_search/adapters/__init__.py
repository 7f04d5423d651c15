"""Adapters – backend ports and the in-memory reference adapter."""
from mp_search.adapters.in_memory import InMemorySearchAdapter
from mp_search.adapters.ports import (
    SearchAdapter,
    SuggestOptions,
    SupportsDestroy,
    SupportsGetById,
    SupportsReadiness,
    SupportsSuggest,
)

__all__ = [
    "InMemorySearchAdapter",
    "SearchAdapter",
    "SuggestOptions",
    "SupportsDestroy",
    "SupportsGetById",
    "SupportsReadiness",
    "SupportsSuggest",
]
