"""Facets – FacetManager, the registry of facets and their selections.

The manager never touches the search state. Callers push the derived
filters themselves, typically from a subscriber::

    def on_change(event: FacetChangeEvent) -> None:
        if event.derived_filter is None:
            state.remove_filter(event.config.field)
        else:
            state.add_filter(event.derived_filter)

    facets.subscribe(on_change)
"""
from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterable, Mapping

from mp_search.facets.models import (
    DEFAULT_VISIBLE_COUNT,
    FacetChangeEvent,
    FacetConfig,
    FacetKey,
    FacetState,
    FacetValue,
)
from mp_search.facets.strategies import FilterStrategyRegistry
from mp_search.facets.utils import values_from_aggregation
from mp_search.model import AggregationResult, FilterSpec
from mp_search.observability.logging import NOOP_LOGGER, SearchLogger

__all__ = ["FacetChangeListener", "FacetManager"]

FacetChangeListener = Callable[[FacetChangeEvent], None]


class FacetManager:
    """Own facet configs, displayed values and selections.

    Operations on an unknown facet id log a warning and do nothing.
    """

    def __init__(
        self,
        configs: Iterable[FacetConfig] = (),
        *,
        strategies: FilterStrategyRegistry | None = None,
        logger: SearchLogger | None = None,
    ) -> None:
        self._logger = logger or NOOP_LOGGER
        self._strategies = strategies or FilterStrategyRegistry(logger=self._logger)
        self._facets: dict[str, FacetState] = {}
        self._last_change: FacetChangeEvent | None = None
        self._listeners: list[FacetChangeListener] = []
        self.add_facets(configs)

    @property
    def strategies(self) -> FilterStrategyRegistry:
        return self._strategies

    def _get(self, facet_id: str, operation: str) -> FacetState | None:
        state = self._facets.get(facet_id)
        if state is None:
            self._logger.warning("facets.unknown_facet", facet_id=facet_id, operation=operation)
        return state

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_facet(self, config: FacetConfig) -> FacetState:
        """Register or replace a facet; existing selections carry over."""
        existing = self._facets.get(config.id)
        selected = existing.selected_values if existing is not None else ()
        values = tuple(
            FacetValue(
                key=option.key,
                label=option.label,
                count=option.count,
                selected=option.key in selected,
                disabled=option.disabled,
            )
            for option in config.static_options
        )
        state = FacetState(
            config=config,
            values=values,
            selected_values=selected,
            collapsed=config.collapsed,
            loading=False,
            visible_count=config.max_values or DEFAULT_VISIBLE_COUNT,
        )
        self._facets[config.id] = state
        return state

    def add_facets(self, configs: Iterable[FacetConfig]) -> None:
        for config in configs:
            self.add_facet(config)

    def remove_facet(self, facet_id: str) -> None:
        if self._get(facet_id, "remove_facet") is not None:
            del self._facets[facet_id]

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def update_selection(self, facet_id: str, keys: Iterable[FacetKey]) -> FacetChangeEvent | None:
        """Replace the selection of *facet_id* and notify subscribers.

        Returns the change event, or ``None`` for an unknown facet.
        """
        state = self._get(facet_id, "update_selection")
        if state is None:
            return None
        selected = tuple(dict.fromkeys(keys))
        chosen = set(selected)
        updated = replace(
            state,
            selected_values=selected,
            values=tuple(replace(v, selected=v.key in chosen) for v in state.values),
        )
        self._facets[facet_id] = updated
        event = FacetChangeEvent(
            facet_id=facet_id,
            selected_values=selected,
            previous_values=state.selected_values,
            config=state.config,
            derived_filter=self._strategies.to_filter(state.config, selected),
        )
        self._last_change = event
        self._notify(event)
        return event

    def clear_facet(self, facet_id: str) -> FacetChangeEvent | None:
        return self.update_selection(facet_id, ())

    def clear_all_facets(self) -> list[FacetChangeEvent]:
        events = [self.clear_facet(facet_id) for facet_id in list(self._facets)]
        return [e for e in events if e is not None]

    def subscribe(self, listener: FacetChangeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: FacetChangeEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as exc:  # noqa: BLE001
                self._logger.error("facets.listener_failed", facet_id=event.facet_id, error=repr(exc))

    # ------------------------------------------------------------------
    # Presentation state
    # ------------------------------------------------------------------

    def toggle_collapsed(self, facet_id: str) -> None:
        state = self._get(facet_id, "toggle_collapsed")
        if state is not None:
            self._facets[facet_id] = replace(state, collapsed=not state.collapsed)

    def set_loading(self, facet_id: str, loading: bool) -> None:
        state = self._get(facet_id, "set_loading")
        if state is not None:
            self._facets[facet_id] = replace(state, loading=loading)

    def update_values_from_aggregation(self, facet_id: str, aggregation: AggregationResult) -> None:
        """Rebuild displayed values from *aggregation*; the selection is kept."""
        state = self._get(facet_id, "update_values_from_aggregation")
        if state is None:
            return
        self._facets[facet_id] = replace(
            state,
            values=values_from_aggregation(aggregation, state.config, state.selected_values),
            stats=aggregation.stats,
            loading=False,
        )

    def update_all_from_aggregations(self, aggregations: Mapping[str, AggregationResult]) -> None:
        """Apply a backend aggregation map keyed by field (or facet id)."""
        for key, aggregation in aggregations.items():
            state = self.find_facet_by_field(key) or self._facets.get(key)
            if state is not None:
                self.update_values_from_aggregation(state.config.id, aggregation)

    # ------------------------------------------------------------------
    # Read views
    # ------------------------------------------------------------------

    def applied_filters(self) -> list[FilterSpec]:
        """Every non-empty derived filter, in registration order."""
        filters: list[FilterSpec] = []
        for state in self._facets.values():
            spec = self._strategies.to_filter(state.config, state.selected_values)
            if spec is not None:
                filters.append(spec)
        return filters

    def get_facet(self, facet_id: str) -> FacetState | None:
        return self._facets.get(facet_id)

    def find_facet_by_field(self, field: str) -> FacetState | None:
        for state in self._facets.values():
            if state.config.field == field:
                return state
        return None

    @property
    def facets(self) -> tuple[FacetState, ...]:
        return tuple(self._facets.values())

    @property
    def last_change(self) -> FacetChangeEvent | None:
        return self._last_change

    def has_active_selections(self) -> bool:
        return any(state.selected_values for state in self._facets.values())

    def active_selection_count(self) -> int:
        return sum(len(state.selected_values) for state in self._facets.values())

    def reset(self) -> None:
        """Drop every facet and the last change; subscribers stay registered."""
        self._facets = {}
        self._last_change = None
