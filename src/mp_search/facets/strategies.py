"""Facets – selection → FilterSpec strategies keyed by facet kind.

Each strategy receives the facet config and a non-empty, ordered selection
and returns the :class:`FilterSpec` to push into the search state. Kinds
without a registered strategy fall back to :func:`default_filter`.

Usage::

    registry = FilterStrategyRegistry()
    registry.register("geo", lambda cfg, keys: FilterSpec(cfg.field, FilterKind.CUSTOM, keys))
    registry.to_filter(config, ("a", "b"))
"""
from __future__ import annotations

from typing import Callable, Iterator, Mapping

from mp_search.facets.models import FacetConfig, FacetKey, FacetKind
from mp_search.model import FilterKind, FilterSpec
from mp_search.observability.logging import NOOP_LOGGER, SearchLogger

__all__ = [
    "FilterStrategy",
    "FilterStrategyRegistry",
    "default_filter",
    "first_value_term",
    "range_filter",
    "term_or_terms",
]

FilterStrategy = Callable[[FacetConfig, tuple[FacetKey, ...]], FilterSpec]


def term_or_terms(config: FacetConfig, values: tuple[FacetKey, ...]) -> FilterSpec:
    if len(values) == 1:
        return FilterSpec(field=config.field, kind=FilterKind.TERM, value=values[0])
    return FilterSpec(
        field=config.field, kind=FilterKind.TERMS, value=list(values), operator=config.operator
    )


def first_value_term(config: FacetConfig, values: tuple[FacetKey, ...]) -> FilterSpec:
    return FilterSpec(field=config.field, kind=FilterKind.TERM, value=values[0])


def range_filter(config: FacetConfig, values: tuple[FacetKey, ...]) -> FilterSpec:
    upper = values[1] if len(values) > 1 else values[0]
    return FilterSpec(field=config.field, kind=FilterKind.RANGE, value={"gte": values[0], "lte": upper})


def default_filter(config: FacetConfig, values: tuple[FacetKey, ...]) -> FilterSpec:
    if len(values) == 1:
        return FilterSpec(field=config.field, kind=FilterKind.TERM, value=values[0])
    return FilterSpec(field=config.field, kind=FilterKind.TERMS, value=list(values))


_BUILTIN: dict[str, FilterStrategy] = {
    FacetKind.TEXT.value: term_or_terms,
    FacetKind.TEXT_TYPEAHEAD.value: term_or_terms,
    FacetKind.CHECKBOX.value: term_or_terms,
    FacetKind.RADIO.value: term_or_terms,
    FacetKind.TOGGLE.value: term_or_terms,
    FacetKind.NUMBER.value: first_value_term,
    FacetKind.NUMBER_RANGE.value: range_filter,
    FacetKind.RANGE.value: range_filter,
    FacetKind.SLIDER.value: range_filter,
}


class FilterStrategyRegistry:
    """Mutable map from facet kind to :data:`FilterStrategy`.

    Registering a kind that already has a strategy replaces it and logs a
    warning, so integrators can override built-ins deliberately.
    """

    def __init__(
        self,
        strategies: Mapping[str, FilterStrategy] | None = None,
        *,
        fallback: FilterStrategy = default_filter,
        logger: SearchLogger | None = None,
    ) -> None:
        self._strategies: dict[str, FilterStrategy] = dict(_BUILTIN)
        self._fallback = fallback
        self._logger = logger or NOOP_LOGGER
        for kind, strategy in (strategies or {}).items():
            self.register(kind, strategy)

    def register(self, kind: str, strategy: FilterStrategy) -> None:
        key = _kind_key(kind)
        if key in self._strategies:
            self._logger.warning("facets.strategy_replaced", kind=key)
        self._strategies[key] = strategy

    def unregister(self, kind: str) -> None:
        self._strategies.pop(_kind_key(kind), None)

    def get(self, kind: str) -> FilterStrategy:
        return self._strategies.get(_kind_key(kind), self._fallback)

    def to_filter(self, config: FacetConfig, values: tuple[FacetKey, ...]) -> FilterSpec | None:
        """Derive the filter for *values*; ``None`` for an empty selection."""
        if not values:
            return None
        return self.get(config.kind)(config, tuple(values))

    def __contains__(self, kind: object) -> bool:
        return isinstance(kind, str) and _kind_key(kind) in self._strategies

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._strategies))


def _kind_key(kind: str) -> str:
    return kind.value if isinstance(kind, FacetKind) else str(kind)
