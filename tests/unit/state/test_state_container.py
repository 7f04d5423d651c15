"""Unit tests for SearchStateContainer."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mp_search.kernel.errors import SearchBackendError
from mp_search.model import (
    AggregationBucket,
    AggregationKind,
    AggregationResult,
    FilterKind,
    FilterSpec,
    SearchEventKind,
    SearchQuery,
    SearchResult,
    SortOrder,
    SortSpec,
    Suggestion,
)
from mp_search.observability.telemetry import TelemetryDispatcher
from mp_search.state import SearchStateContainer, StateChange
from mp_search.testing import FakeClock, RecordingLogger, RecordingTelemetryClient


def _result(id: str) -> SearchResult[dict]:
    return SearchResult(id=id, data={"id": id})


def _kinds(state: SearchStateContainer) -> list[SearchEventKind]:
    return [e.kind for e in state.events]


# ---------------------------------------------------------------------------
# Page reset
# ---------------------------------------------------------------------------

_RESETTING_MUTATIONS = {
    "set_query": lambda s: s.set_query("shoes"),
    "add_filter": lambda s: s.add_filter(FilterSpec("brand", FilterKind.TERM, "acme")),
    "remove_filter": lambda s: s.remove_filter("brand"),
    "clear_filters": lambda s: s.clear_filters(),
    "set_sort": lambda s: s.set_sort([SortSpec("price", SortOrder.DESC)]),
}


class TestPageReset:
    @given(page=st.integers(min_value=1, max_value=500), mutation=st.sampled_from(sorted(_RESETTING_MUTATIONS)))
    def test_query_filter_and_sort_changes_reset_page(self, page: int, mutation: str) -> None:
        state = SearchStateContainer()
        state.set_pagination(page)
        _RESETTING_MUTATIONS[mutation](state)
        assert state.current_page == 1

    def test_update_filter_resets_page(self) -> None:
        state = SearchStateContainer()
        state.add_filter(FilterSpec("price", FilterKind.RANGE, {"gte": 1}))
        state.set_pagination(4)
        state.update_filter("price", {"gte": 10})
        assert state.current_page == 1

    def test_set_pagination_does_not_reset_itself(self) -> None:
        state = SearchStateContainer()
        state.set_pagination(7, 25)
        assert (state.current_page, state.page_size) == (7, 25)

    def test_set_results_does_not_reset_page(self) -> None:
        state = SearchStateContainer()
        state.set_pagination(3)
        state.set_results([_result("1")], 100)
        assert state.current_page == 3

    def test_reset_keeps_page_size_default(self) -> None:
        state = SearchStateContainer(page_size=25)
        state.set_pagination(3, 50)
        state.reset()
        assert state.pagination.page == 1
        assert state.pagination.page_size == 25


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


class TestFilters:
    def test_readding_a_field_replaces_it(self) -> None:
        state = SearchStateContainer()
        state.add_filter(FilterSpec("brand", FilterKind.TERM, "acme"))
        state.add_filter(FilterSpec("brand", FilterKind.TERMS, ["acme", "globex"]))
        assert len(state.filters) == 1
        assert state.filters["brand"].value == ["acme", "globex"]

    def test_filters_view_is_read_only(self) -> None:
        state = SearchStateContainer()
        state.add_filter(FilterSpec("brand", FilterKind.TERM, "acme"))
        with pytest.raises(TypeError):
            state.filters["other"] = FilterSpec("other", FilterKind.TERM, 1)  # type: ignore[index]

    def test_remove_unknown_field_is_harmless(self) -> None:
        state = SearchStateContainer()
        state.remove_filter("missing")
        assert not state.has_filters

    def test_update_filter_ignores_unknown_field(self) -> None:
        state = SearchStateContainer()
        state.update_filter("missing", 1)
        assert "missing" not in state.filters

    def test_update_filter_keeps_kind_and_operator(self) -> None:
        state = SearchStateContainer()
        state.add_filter(FilterSpec("tags", FilterKind.TERMS, ["a"]))
        state.update_filter("tags", ["a", "b"])
        assert state.filters["tags"] == FilterSpec("tags", FilterKind.TERMS, ["a", "b"])

    def test_clear_filters(self) -> None:
        state = SearchStateContainer()
        state.add_filter(FilterSpec("a", FilterKind.TERM, 1))
        state.add_filter(FilterSpec("b", FilterKind.TERM, 2))
        state.clear_filters()
        assert state.filters == {}


# ---------------------------------------------------------------------------
# Derived query
# ---------------------------------------------------------------------------


class TestSearchQuery:
    def test_composed_from_state(self) -> None:
        state = SearchStateContainer(page_size=20, search_fields=("title",))
        state.set_query("laptop")
        state.add_filter(FilterSpec("brand", FilterKind.TERM, "acme"))
        state.set_sort([SortSpec("price")])
        state.set_pagination(3)
        assert state.search_query == SearchQuery(
            text="laptop",
            size=20,
            offset=40,
            sort=(SortSpec("price"),),
            filters=(FilterSpec("brand", FilterKind.TERM, "acme"),),
            fields=("title",),
        )

    def test_filters_keep_insertion_order(self) -> None:
        state = SearchStateContainer()
        state.add_filter(FilterSpec("b", FilterKind.TERM, 1))
        state.add_filter(FilterSpec("a", FilterKind.TERM, 2))
        assert [f.field for f in state.search_query.filters] == ["b", "a"]


# ---------------------------------------------------------------------------
# Loading / error / results
# ---------------------------------------------------------------------------


class TestLoadingAndError:
    def test_loading_clears_error(self) -> None:
        state = SearchStateContainer()
        state.set_error(SearchBackendError("down"))
        state.set_loading(True)
        assert state.loading
        assert state.error is None

    def test_error_clears_loading(self) -> None:
        state = SearchStateContainer()
        state.set_loading(True)
        state.set_error(SearchBackendError("down"))
        assert not state.loading
        assert state.has_error

    def test_clearing_error_leaves_loading(self) -> None:
        state = SearchStateContainer()
        state.set_loading(True)
        state.set_error(None)
        assert state.loading

    def test_results_and_totals_written_together(self) -> None:
        state = SearchStateContainer()
        state.set_results([_result("1"), _result("2")], 42)
        assert state.total == 42
        assert state.pagination.total == 42
        assert state.total_pages == 5

    def test_next_and_prev_page(self) -> None:
        state = SearchStateContainer(page_size=10)
        state.set_results([_result("1")], 25)
        state.next_page()
        state.next_page()
        state.next_page()
        assert state.current_page == 3
        assert not state.has_next_page
        state.prev_page()
        assert state.current_page == 2
        assert state.has_prev_page

    def test_prev_page_on_first_page_is_noop(self) -> None:
        state = SearchStateContainer()
        state.prev_page()
        assert state.current_page == 1
        assert SearchEventKind.PAGE_CHANGED not in _kinds(state)

    def test_no_clamping(self) -> None:
        state = SearchStateContainer()
        state.set_pagination(99)
        assert state.current_page == 99


class TestDerivedFlags:
    def test_end_to_end_empty_state_flags(self) -> None:
        state = SearchStateContainer()
        assert state.is_initial

        state.set_query("angular")
        assert state.has_query
        assert not state.is_initial

        state.set_loading(True)
        assert not state.is_empty

        state.set_results([], 0)
        state.set_loading(False)
        assert state.is_empty

    def test_whitespace_query_is_not_a_query(self) -> None:
        state = SearchStateContainer()
        state.set_query("   ")
        assert not state.has_query
        assert state.is_initial

    def test_suggestion_flags(self) -> None:
        state = SearchStateContainer()
        state.set_suggestions([Suggestion("a")])
        assert state.has_suggestions
        state.clear_suggestions()
        assert not state.has_suggestions

    def test_loading_suggestions_flag(self) -> None:
        state = SearchStateContainer()
        state.set_loading_suggestions(True)
        assert state.loading_suggestions
        assert not state.loading


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


class TestEvents:
    def test_mutations_record_events(self) -> None:
        state = SearchStateContainer()
        state.set_query("x")
        state.add_filter(FilterSpec("a", FilterKind.TERM, 1))
        state.remove_filter("a")
        state.clear_filters()
        state.set_pagination(2)
        state.set_suggestions([Suggestion("x")])
        state.clear_suggestions()
        assert _kinds(state) == [
            SearchEventKind.QUERY_CHANGED,
            SearchEventKind.FILTER_ADDED,
            SearchEventKind.FILTER_REMOVED,
            SearchEventKind.FILTER_CLEARED,
            SearchEventKind.PAGE_CHANGED,
            SearchEventKind.SUGGESTIONS_RECEIVED,
            SearchEventKind.SUGGESTIONS_CLEARED,
        ]

    def test_silent_mutations(self) -> None:
        state = SearchStateContainer()
        state.set_sort([SortSpec("a")])
        state.set_results([], 0)
        state.set_loading(True)
        state.set_error(None)
        state.set_aggregations({})
        assert state.events == ()

    def test_markers_only_record_events(self) -> None:
        state = SearchStateContainer()
        query = SearchQuery(text="x")
        version = state.version
        state.mark_search_started(query)
        state.mark_search_completed(query, 3, 12.0)
        state.mark_search_failed(SearchBackendError("down"), query)
        state.mark_suggestions_requested("x")
        state.mark_suggestions_failed(RuntimeError("nope"), "x")
        state.mark_suggestion_selected(Suggestion("xy"), index=0, origin="dropdown")
        state.mark_result_clicked(_result("1"), index=2)
        assert state.version == version
        assert _kinds(state) == [
            SearchEventKind.SEARCH_STARTED,
            SearchEventKind.SEARCH_COMPLETED,
            SearchEventKind.SEARCH_FAILED,
            SearchEventKind.SUGGESTIONS_REQUESTED,
            SearchEventKind.SUGGESTIONS_FAILED,
            SearchEventKind.SUGGESTION_SELECTED,
            SearchEventKind.RESULT_CLICKED,
        ]

    def test_failure_payload_carries_plain_message(self) -> None:
        state = SearchStateContainer()
        state.mark_search_failed(SearchBackendError("backend down"), SearchQuery())
        assert state.events[-1].payload["message"] == "backend down"

    def test_timestamps_come_from_clock(self) -> None:
        clock = FakeClock()
        state = SearchStateContainer(clock=clock)
        state.set_query("x")
        assert state.events[0].timestamp == clock.now()

    def test_history_limit(self) -> None:
        state = SearchStateContainer(event_history_limit=2)
        for text in ("a", "b", "c"):
            state.set_query(text)
        assert [e.payload["query"] for e in state.events] == ["b", "c"]

    def test_set_limit_without_argument_restores_default(self) -> None:
        state = SearchStateContainer(event_history_limit=0)
        state.set_event_history_limit()
        assert state.event_history_limit == 100

    def test_disabled_history_records_nothing(self) -> None:
        state = SearchStateContainer(event_history_limit=0)
        state.set_query("x")
        assert state.get_recent_events() == []

    def test_recent_and_clear(self) -> None:
        state = SearchStateContainer()
        for text in ("a", "b", "c"):
            state.set_query(text)
        assert [e.payload["query"] for e in state.get_recent_events(2)] == ["b", "c"]
        state.clear_events()
        assert state.events == ()

    def test_reset_keeps_history(self) -> None:
        state = SearchStateContainer()
        state.set_query("x")
        state.reset()
        assert state.query == ""
        assert len(state.events) == 1

    def test_events_forwarded_to_telemetry(self) -> None:
        client = RecordingTelemetryClient()
        state = SearchStateContainer(telemetry=TelemetryDispatcher([client]))
        state.set_query("secret words")
        assert client.kinds() == [SearchEventKind.QUERY_CHANGED]
        assert client.events[0].context == {"length": 12}


# ---------------------------------------------------------------------------
# Subscription
# ---------------------------------------------------------------------------


class TestSubscription:
    def test_listener_receives_changed_fields(self) -> None:
        state = SearchStateContainer()
        changes: list[StateChange] = []
        state.subscribe(changes.append)
        state.set_query("x")
        state.set_results([], 0)
        assert changes[0] == StateChange(version=1, fields=frozenset({"query", "pagination"}))
        assert changes[1].version == 2
        assert "total" in changes[1].fields

    def test_every_mutation_bumps_version(self) -> None:
        state = SearchStateContainer()
        state.set_loading(True)
        state.set_loading(True)
        assert state.version == 2

    def test_unsubscribe(self) -> None:
        state = SearchStateContainer()
        changes: list[StateChange] = []
        unsubscribe = state.subscribe(changes.append)
        unsubscribe()
        unsubscribe()
        state.set_query("x")
        assert changes == []

    def test_failing_listener_is_logged_and_others_still_run(self) -> None:
        logger = RecordingLogger()
        state = SearchStateContainer(logger=logger)
        seen: list[int] = []

        def broken(change: StateChange) -> None:
            raise RuntimeError("listener bug")

        state.subscribe(broken)
        state.subscribe(lambda change: seen.append(change.version))
        state.set_query("x")
        assert seen == [1]
        assert logger.events("error") == ["state.listener_failed"]

    def test_mutation_from_listener_is_delivered_after_current_change(self) -> None:
        state = SearchStateContainer()
        first: list[int] = []
        second: list[tuple[int, frozenset[str]]] = []

        def start_loading(change: StateChange) -> None:
            first.append(change.version)
            if "query" in change.fields:
                state.set_loading(True)

        state.subscribe(start_loading)
        state.subscribe(lambda change: second.append((change.version, change.fields)))
        state.set_query("laptop")

        assert first == [1, 2]
        assert second == [
            (1, frozenset({"query", "pagination"})),
            (2, frozenset({"loading", "error"})),
        ]
        assert state.loading
        assert state.version == 2

    def test_notification_continues_after_listener_failure_in_nested_change(self) -> None:
        logger = RecordingLogger()
        state = SearchStateContainer(logger=logger)
        seen: list[int] = []

        def mutate_then_fail(change: StateChange) -> None:
            if change.version == 1:
                state.set_loading(True)
                raise RuntimeError("listener bug")

        state.subscribe(mutate_then_fail)
        state.subscribe(lambda change: seen.append(change.version))
        state.set_query("x")
        state.set_loading(False)
        assert seen == [1, 2, 3]
        assert logger.events("error") == ["state.listener_failed"]

    def test_aggregations_view(self) -> None:
        state = SearchStateContainer()
        agg = AggregationResult(AggregationKind.TERMS, buckets=(AggregationBucket("a", 1),))
        state.set_aggregations({"brand": agg})
        assert state.aggregations["brand"] == agg
