"""Adapters – backend adapter ports.

Only :meth:`SearchAdapter.search` is required. The optional capabilities are
separate runtime-checkable protocols so the coordinator can check an adapter
with ``isinstance`` instead of relying on its class hierarchy.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar, runtime_checkable

from mp_search.model import SearchQuery, SearchResponse, Suggestion

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

__all__ = [
    "SearchAdapter",
    "SuggestOptions",
    "SupportsDestroy",
    "SupportsGetById",
    "SupportsReadiness",
    "SupportsSuggest",
]


@dataclass(frozen=True)
class SuggestOptions:
    max_suggestions: int = 10
    fuzzy: bool = True
    fields: tuple[str, ...] = ()
    extra: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class SearchAdapter(Protocol[T_co]):
    async def search(self, query: SearchQuery) -> SearchResponse[T_co]: ...


@runtime_checkable
class SupportsSuggest(Protocol):
    async def suggest(self, text: str, options: SuggestOptions) -> list[Suggestion]: ...


@runtime_checkable
class SupportsGetById(Protocol[T_co]):
    async def get_by_id(self, id: str) -> T_co | None: ...


@runtime_checkable
class SupportsReadiness(Protocol):
    async def is_ready(self) -> bool: ...


@runtime_checkable
class SupportsDestroy(Protocol):
    def destroy(self) -> None: ...
