"""State – SearchStateContainer, the single source of truth for one search.

Every mutation is synchronous, bumps :attr:`SearchStateContainer.version`
and notifies subscribers with a :class:`StateChange`. A mutation made from
inside a listener is queued and delivered after the current change, so every
subscriber sees versions in increasing order. Events are appended to
a bounded :class:`~mp_search.state.history.EventHistory` and forwarded to the
telemetry dispatcher.

Usage::

    state = SearchStateContainer(page_size=20)
    unsubscribe = state.subscribe(lambda change: print(change.fields))
    state.set_query("laptop")
    state.add_filter(FilterSpec("brand", FilterKind.TERM, "acme"))
    state.search_query  # SearchQuery(text="laptop", size=20, offset=0, ...)
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Generic, Iterable, Mapping, Sequence, TypeVar

from mp_search.config import DEFAULT_EVENT_HISTORY_LIMIT
from mp_search.kernel.time import Clock, SystemClock
from mp_search.model import (
    AggregationResult,
    FilterSpec,
    PaginationState,
    SearchEvent,
    SearchEventKind,
    SearchQuery,
    SearchResult,
    SortSpec,
    Suggestion,
    is_empty_query,
)
from mp_search.observability.logging import NOOP_LOGGER, SearchLogger
from mp_search.observability.telemetry import TelemetryDispatcher
from mp_search.state.history import EventHistory
from mp_search.state.snapshot import StateSnapshot

T = TypeVar("T")


@dataclass(frozen=True)
class StateChange:
    """Delivered to subscribers after each mutation."""

    version: int
    fields: frozenset[str]


StateListener = Callable[[StateChange], None]


def _error_message(error: BaseException) -> str:
    return getattr(error, "message", None) or str(error)


class SearchStateContainer(Generic[T]):
    """Canonical state of an in-progress search.

    Mutations never validate or clamp their input: the container stores what
    it is given. Only query, filter and sort changes reset the page to 1.
    """

    def __init__(
        self,
        *,
        page_size: int = 10,
        event_history_limit: int | None = DEFAULT_EVENT_HISTORY_LIMIT,
        search_fields: Sequence[str] = (),
        telemetry: TelemetryDispatcher | None = None,
        logger: SearchLogger | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._default_page_size = page_size
        self._search_fields = tuple(search_fields)
        self._telemetry = telemetry or TelemetryDispatcher()
        self._logger = logger or NOOP_LOGGER
        self._clock = clock or SystemClock()
        self._history = EventHistory(event_history_limit)
        self._listeners: list[StateListener] = []
        self._pending: deque[StateChange] = deque()
        self._notifying = False
        self._version = 0
        self._init_fields()

    def _init_fields(self) -> None:
        self._query = ""
        self._results: tuple[SearchResult[T], ...] = ()
        self._loading = False
        self._loading_suggestions = False
        self._error: BaseException | None = None
        self._total = 0
        self._filters: dict[str, FilterSpec] = {}
        self._sort: tuple[SortSpec, ...] = ()
        self._pagination = PaginationState(page=1, page_size=self._default_page_size, total=0)
        self._aggregations: dict[str, AggregationResult] = {}
        self._suggestions: tuple[Suggestion, ...] = ()

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, *fields: str) -> None:
        self._version += 1
        self._pending.append(StateChange(version=self._version, fields=frozenset(fields)))
        if self._notifying:
            # a listener mutated state; the outer loop delivers this change in order
            return
        self._notifying = True
        try:
            while self._pending:
                change = self._pending.popleft()
                for listener in list(self._listeners):
                    try:
                        listener(change)
                    except Exception as exc:  # noqa: BLE001
                        self._logger.error("state.listener_failed", listener=repr(listener), error=repr(exc))
        finally:
            self._notifying = False

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def _emit(self, kind: SearchEventKind, payload: dict[str, Any] | None = None) -> None:
        event = SearchEvent(kind=kind, timestamp=self._clock.now(), payload=payload)
        self._history.append(event)
        self._telemetry.record_event(event)

    def get_recent_events(self, count: int = 10) -> list[SearchEvent]:
        return self._history.recent(count)

    def clear_events(self) -> None:
        self._history.clear()

    def set_event_history_limit(self, limit: int | None = DEFAULT_EVENT_HISTORY_LIMIT) -> None:
        """Bound the history; ``None`` is unbounded and ``0`` disables it."""
        self._history.set_limit(limit)

    @property
    def event_history_limit(self) -> int | None:
        return self._history.limit

    @property
    def events(self) -> tuple[SearchEvent, ...]:
        return self._history.snapshot()

    @property
    def telemetry(self) -> TelemetryDispatcher:
        return self._telemetry

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _reset_page(self) -> None:
        self._pagination = PaginationState(
            page=1, page_size=self._pagination.page_size, total=self._pagination.total
        )

    def set_query(self, text: str) -> None:
        self._query = text
        self._reset_page()
        self._emit(SearchEventKind.QUERY_CHANGED, {"query": text})
        self._commit("query", "pagination")

    def add_filter(self, spec: FilterSpec) -> None:
        self._filters[spec.field] = spec
        self._reset_page()
        self._emit(SearchEventKind.FILTER_ADDED, {"filter": spec})
        self._commit("filters", "pagination")

    def remove_filter(self, field: str) -> None:
        self._filters.pop(field, None)
        self._reset_page()
        self._emit(SearchEventKind.FILTER_REMOVED, {"field": field})
        self._commit("filters", "pagination")

    def clear_filters(self) -> None:
        self._filters = {}
        self._reset_page()
        self._emit(SearchEventKind.FILTER_CLEARED)
        self._commit("filters", "pagination")

    def update_filter(self, field: str, value: Any) -> None:
        """Replace the value of an existing filter; unknown fields are ignored."""
        current = self._filters.get(field)
        if current is None:
            return
        self._filters[field] = FilterSpec(
            field=current.field, kind=current.kind, value=value, operator=current.operator
        )
        self._reset_page()
        self._commit("filters", "pagination")

    def set_sort(self, specs: Iterable[SortSpec]) -> None:
        self._sort = tuple(specs)
        self._reset_page()
        self._commit("sort", "pagination")

    def set_pagination(self, page: int, page_size: int | None = None) -> None:
        size = self._pagination.page_size if page_size is None else page_size
        self._pagination = PaginationState(page=page, page_size=size, total=self._pagination.total)
        self._emit(SearchEventKind.PAGE_CHANGED, {"page": page, "page_size": size})
        self._commit("pagination")

    def next_page(self) -> None:
        if self._pagination.has_next:
            self.set_pagination(self._pagination.page + 1)

    def prev_page(self) -> None:
        if self._pagination.has_previous:
            self.set_pagination(self._pagination.page - 1)

    def set_results(self, results: Iterable[SearchResult[T]], total: int) -> None:
        """Write results, ``total`` and ``pagination.total`` in one step."""
        self._results = tuple(results)
        self._total = total
        self._pagination = PaginationState(
            page=self._pagination.page, page_size=self._pagination.page_size, total=total
        )
        self._commit("results", "total", "pagination")

    def set_loading(self, flag: bool) -> None:
        self._loading = flag
        if flag:
            self._error = None
            self._commit("loading", "error")
        else:
            self._commit("loading")

    def set_loading_suggestions(self, flag: bool) -> None:
        self._loading_suggestions = flag
        self._commit("loading_suggestions")

    def set_error(self, error: BaseException | None) -> None:
        self._error = error
        if error is not None:
            self._loading = False
            self._commit("error", "loading")
        else:
            self._commit("error")

    def set_aggregations(self, aggregations: Mapping[str, AggregationResult]) -> None:
        self._aggregations = dict(aggregations)
        self._commit("aggregations")

    def set_suggestions(self, suggestions: Iterable[Suggestion]) -> None:
        self._suggestions = tuple(suggestions)
        self._emit(SearchEventKind.SUGGESTIONS_RECEIVED, {"count": len(self._suggestions)})
        self._commit("suggestions")

    def clear_suggestions(self) -> None:
        self._suggestions = ()
        self._emit(SearchEventKind.SUGGESTIONS_CLEARED)
        self._commit("suggestions")

    def reset(self) -> None:
        """Return every field to its default; the event history is kept."""
        self._init_fields()
        self._commit(*_ALL_FIELDS)

    def restore_snapshot(self, snapshot: StateSnapshot) -> None:
        self._query = snapshot.query
        self._results = tuple(snapshot.results)
        self._loading = snapshot.loading
        self._error = snapshot.error
        self._total = snapshot.total
        self._filters = dict(snapshot.filters)
        self._sort = tuple(snapshot.sort)
        self._pagination = snapshot.pagination
        self._aggregations = dict(snapshot.aggregations)
        self._suggestions = tuple(snapshot.suggestions)
        self._commit(*_ALL_FIELDS)

    def get_snapshot(self) -> StateSnapshot:
        return StateSnapshot(
            query=self._query,
            results=self._results,
            loading=self._loading,
            error=self._error,
            total=self._total,
            filters=tuple(self._filters.items()),
            sort=self._sort,
            pagination=self._pagination,
            aggregations=dict(self._aggregations),
            suggestions=self._suggestions,
        )

    # ------------------------------------------------------------------
    # Tracking markers (events only, no state change)
    # ------------------------------------------------------------------

    def mark_search_started(self, query: SearchQuery) -> None:
        self._emit(SearchEventKind.SEARCH_STARTED, {"query": query})

    def mark_search_completed(self, query: SearchQuery, total: int, took: float | None) -> None:
        self._emit(SearchEventKind.SEARCH_COMPLETED, {"query": query, "total": total, "took": took})

    def mark_search_failed(self, error: BaseException, query: SearchQuery) -> None:
        self._emit(SearchEventKind.SEARCH_FAILED, {"query": query, "message": _error_message(error)})

    def mark_suggestions_requested(self, text: str) -> None:
        self._emit(SearchEventKind.SUGGESTIONS_REQUESTED, {"query": text})

    def mark_suggestions_failed(self, error: BaseException, text: str) -> None:
        self._emit(SearchEventKind.SUGGESTIONS_FAILED, {"query": text, "message": _error_message(error)})

    def mark_suggestion_selected(
        self, suggestion: Suggestion, index: int | None = None, origin: str | None = None
    ) -> None:
        self._emit(
            SearchEventKind.SUGGESTION_SELECTED,
            {"suggestion": suggestion, "index": index, "origin": origin},
        )

    def mark_result_clicked(
        self, result: SearchResult[T], index: int | None = None, origin: str | None = None
    ) -> None:
        self._emit(SearchEventKind.RESULT_CLICKED, {"result": result, "index": index, "origin": origin})

    # ------------------------------------------------------------------
    # Read views
    # ------------------------------------------------------------------

    @property
    def version(self) -> int:
        return self._version

    @property
    def query(self) -> str:
        return self._query

    @property
    def results(self) -> tuple[SearchResult[T], ...]:
        return self._results

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def loading_suggestions(self) -> bool:
        return self._loading_suggestions

    @property
    def error(self) -> BaseException | None:
        return self._error

    @property
    def total(self) -> int:
        return self._total

    @property
    def filters(self) -> Mapping[str, FilterSpec]:
        return MappingProxyType(dict(self._filters))

    @property
    def sort(self) -> tuple[SortSpec, ...]:
        return self._sort

    @property
    def pagination(self) -> PaginationState:
        return self._pagination

    @property
    def aggregations(self) -> Mapping[str, AggregationResult]:
        return MappingProxyType(dict(self._aggregations))

    @property
    def suggestions(self) -> tuple[Suggestion, ...]:
        return self._suggestions

    @property
    def search_fields(self) -> tuple[str, ...]:
        return self._search_fields

    # derived

    @property
    def has_query(self) -> bool:
        return not is_empty_query(self._query)

    @property
    def has_results(self) -> bool:
        return bool(self._results)

    @property
    def has_error(self) -> bool:
        return self._error is not None

    @property
    def has_filters(self) -> bool:
        return bool(self._filters)

    @property
    def has_suggestions(self) -> bool:
        return bool(self._suggestions)

    @property
    def is_empty(self) -> bool:
        """A finished search for a real query that found nothing."""
        return not self._loading and not self._results and self.has_query

    @property
    def is_initial(self) -> bool:
        return not self._loading and not self.has_query and not self._results

    @property
    def current_page(self) -> int:
        return self._pagination.page

    @property
    def page_size(self) -> int:
        return self._pagination.page_size

    @property
    def total_pages(self) -> int:
        return self._pagination.total_pages

    @property
    def has_next_page(self) -> bool:
        return self._pagination.has_next

    @property
    def has_prev_page(self) -> bool:
        return self._pagination.has_previous

    @property
    def search_query(self) -> SearchQuery:
        """The backend query composed from the current state."""
        return SearchQuery(
            text=self._query,
            size=self._pagination.page_size,
            offset=self._pagination.offset,
            sort=self._sort,
            filters=tuple(self._filters.values()),
            fields=self._search_fields,
        )


_ALL_FIELDS = (
    "query",
    "results",
    "loading",
    "loading_suggestions",
    "error",
    "total",
    "filters",
    "sort",
    "pagination",
    "aggregations",
    "suggestions",
)

__all__ = ["SearchStateContainer", "StateChange", "StateListener"]
