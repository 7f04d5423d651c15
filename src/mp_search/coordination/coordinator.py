"""Coordination – SearchCoordinator, the async pipeline between state and backend.

Usage::

    state = SearchStateContainer()
    async with SearchCoordinator(state, adapter=InMemorySearchAdapter(docs)) as coordinator:
        state.set_query("laptop")          # auto-search schedules a pipeline
        await coordinator.wait_until_idle()
        state.results
"""
from __future__ import annotations

import asyncio
from typing import Any, Generic, TypeVar

from mp_search.adapters.ports import (
    SearchAdapter,
    SuggestOptions,
    SupportsDestroy,
    SupportsGetById,
    SupportsReadiness,
    SupportsSuggest,
)
from mp_search.config import SearchConfig
from mp_search.coordination.generation import GenerationGuard
from mp_search.kernel.errors import SearchBackendError
from mp_search.kernel.time import Clock, SystemClock
from mp_search.model import SearchQuery, SearchResponse
from mp_search.observability.logging import NOOP_LOGGER, SearchLogger
from mp_search.observability.telemetry import TelemetryDispatcher
from mp_search.state import SearchStateContainer, StateChange

T = TypeVar("T")

__all__ = ["SearchCoordinator"]


class SearchCoordinator(Generic[T]):
    """Drive searches and suggestions against a pluggable adapter.

    Searches and suggestions run in independent pipelines, each guarded by
    its own :class:`GenerationGuard`: only the most recently started pipeline
    may write to the state. A pipeline superseded during its debounce never
    reaches the adapter; one superseded while the adapter call is in flight
    runs to completion and its outcome is dropped.

    ``search`` and ``suggest`` must be called from inside a running event
    loop. Both return the scheduled :class:`asyncio.Task` (or ``None`` when
    nothing was scheduled) so callers may await a specific pipeline.
    """

    def __init__(
        self,
        state: SearchStateContainer[T],
        *,
        adapter: SearchAdapter[T] | None = None,
        config: SearchConfig | None = None,
        telemetry: TelemetryDispatcher | None = None,
        logger: SearchLogger | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._state = state
        self._adapter = adapter
        self._config = config or SearchConfig()
        self._telemetry = telemetry or state.telemetry
        self._logger = logger or NOOP_LOGGER
        self._clock = clock or SystemClock()
        self._search_guard = GenerationGuard()
        self._suggest_guard = GenerationGuard()
        self._tasks: set[asyncio.Task[None]] = set()
        self._last_auto_query: SearchQuery | None = None
        self._closed = False
        state.set_event_history_limit(self._config.event_history_limit)
        self._unsubscribe = state.subscribe(self._on_state_change)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def state(self) -> SearchStateContainer[T]:
        return self._state

    @property
    def adapter(self) -> SearchAdapter[T] | None:
        return self._adapter

    @property
    def config(self) -> SearchConfig:
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    def set_adapter(self, adapter: SearchAdapter[T]) -> None:
        """Install *adapter*; pending suggestion work is superseded."""
        self._adapter = adapter
        self._suggest_guard.advance()
        if self._state.loading_suggestions:
            self._state.set_loading_suggestions(False)
        self._logger.debug("coordinator.adapter_set", adapter=type(adapter).__name__)

    def set_config(self, **overrides: Any) -> SearchConfig:
        """Merge *overrides* into the current config and re-check auto-search.

        Raises:
            ConfigError: For unknown fields or invalid values; the previous
                config stays in effect.
        """
        self._config = self._config.merge(**overrides)
        self._state.set_event_history_limit(self._config.event_history_limit)
        self._evaluate_auto_search()
        return self._config

    # ------------------------------------------------------------------
    # Auto-search
    # ------------------------------------------------------------------

    def _on_state_change(self, change: StateChange) -> None:
        if self._closed:
            return
        self._evaluate_auto_search()

    def _evaluate_auto_search(self) -> None:
        if not self._config.auto_search:
            self._last_auto_query = None
            return
        query = self._state.search_query
        if len(query.text.strip()) < self._config.min_query_length and not query.filters:
            self._last_auto_query = None
            return
        if query == self._last_auto_query:
            return
        # held while search() runs so its own state changes do not re-trigger it
        self._last_auto_query = query
        if self.search(query) is None:
            self._last_auto_query = None

    # ------------------------------------------------------------------
    # Search pipeline
    # ------------------------------------------------------------------

    def _running_loop(self, operation: str) -> asyncio.AbstractEventLoop | None:
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            self._logger.error("coordinator.no_running_loop", operation=operation)
            return None

    def _track(self, task: asyncio.Task[None]) -> None:
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def search(self, query: SearchQuery | None = None) -> asyncio.Task[None] | None:
        """Start a search for *query* (defaults to the state's composed query)."""
        if self._closed:
            self._logger.warning("coordinator.closed", operation="search")
            return None
        adapter = self._adapter
        if adapter is None:
            self._logger.error("coordinator.no_adapter", operation="search")
            return None
        query = query if query is not None else self._state.search_query
        text = query.text.strip()
        if text and len(text) < self._config.min_query_length:
            return None
        loop = self._running_loop("search")
        if loop is None:
            return None

        token = self._search_guard.advance()
        self._state.mark_search_started(query)
        self._state.set_loading(True)
        task = loop.create_task(self._run_search(token, adapter, query))
        self._track(task)
        return task

    async def _run_search(self, token: int, adapter: SearchAdapter[T], query: SearchQuery) -> None:
        started = self._clock.monotonic_ms()
        try:
            if self._config.debounce_ms > 0:
                await asyncio.sleep(self._config.debounce_seconds)
            if not self._search_guard.is_current(token):
                return
            response = await adapter.search(query)
            if not self._search_guard.is_current(token):
                self._logger.debug("search.discarded", query=query.text)
                return
            self._apply_response(query, response, self._clock.monotonic_ms() - started)
        except asyncio.CancelledError:
            raise
        except Exception as exc:  # noqa: BLE001
            if not self._search_guard.is_current(token):
                return
            error = SearchBackendError.from_exception(exc, source="search")
            self._logger.warning("search.failed", query=query.text, error=repr(exc))
            self._state.set_error(error)
            self._state.mark_search_failed(error, query)
            self._telemetry.record_error(error, "search", {"query": query.text})
        finally:
            if self._search_guard.is_current(token):
                self._state.set_loading(False)

    def _apply_response(self, query: SearchQuery, response: SearchResponse[T], elapsed_ms: float) -> None:
        self._state.set_results(response.results, response.total)
        if response.aggregations:
            self._state.set_aggregations(response.aggregations)
        if response.suggestions:
            self._state.set_suggestions(response.suggestions)
        took = response.took if response.took is not None else elapsed_ms
        self._state.mark_search_completed(query, response.total, took)
        self._telemetry.record_timing(
            "search", elapsed_ms, {"query": query.text, "total": response.total}
        )

    def cancel(self) -> None:
        """Supersede the running search pipeline and clear the loading flag."""
        self._search_guard.advance()
        self._state.set_loading(False)

    # ------------------------------------------------------------------
    # Suggestion pipeline
    # ------------------------------------------------------------------

    def suggest(self, text: str) -> asyncio.Task[None] | None:
        if self._closed:
            self._logger.warning("coordinator.closed", operation="suggest")
            return None
        adapter = self._adapter
        if not self._config.enable_suggestions or not isinstance(adapter, SupportsSuggest):
            return None
        if len(text.strip()) < self._config.min_query_length:
            self._suggest_guard.advance()
            self._state.clear_suggestions()
            if self._state.loading_suggestions:
                self._state.set_loading_suggestions(False)
            return None
        loop = self._running_loop("suggest")
        if loop is None:
            return None

        token = self._suggest_guard.advance()
        self._state.mark_suggestions_requested(text)
        self._state.set_loading_suggestions(True)
        task = loop.create_task(self._run_suggest(token, adapter, text))
        self._track(task)
        return task

    async def _run_suggest(self, token: int, adapter: SupportsSuggest, text: str) -> None:
        started = self._clock.monotonic_ms()
        try:
            if self._config.debounce_ms > 0:
                await asyncio.sleep(self._config.debounce_seconds)
            if not self._suggest_guard.is_current(token):
                return
            options = SuggestOptions(
                max_suggestions=self._config.max_suggestions,
                fuzzy=self._config.fuzzy_suggestions,
            )
            suggestions = await adapter.suggest(text, options)
            if not self._suggest_guard.is_current(token):
                return
            self._state.set_suggestions(suggestions)
            if suggestions:
                self._telemetry.record_timing(
                    "suggestions",
                    self._clock.monotonic_ms() - started,
                    {"query": text, "count": len(suggestions)},
                )
        except asyncio.CancelledError:
            raise
        except Exception as exc:  # noqa: BLE001
            if not self._suggest_guard.is_current(token):
                return
            error = SearchBackendError.from_exception(exc, source="suggestions")
            self._logger.error("suggest.failed", query=text, error=repr(exc))
            self._state.mark_suggestions_failed(error, text)
            self._telemetry.record_error(error, "suggestions", {"query": text})
            self._state.set_suggestions([])
        finally:
            if self._suggest_guard.is_current(token):
                self._state.set_loading_suggestions(False)

    # ------------------------------------------------------------------
    # Pass-through capabilities
    # ------------------------------------------------------------------

    async def get_by_id(self, id: str) -> T | None:
        adapter = self._adapter
        if not isinstance(adapter, SupportsGetById):
            return None
        return await adapter.get_by_id(id)

    async def is_ready(self) -> bool:
        adapter = self._adapter
        if adapter is None:
            return False
        if not isinstance(adapter, SupportsReadiness):
            return True
        return await adapter.is_ready()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def wait_until_idle(self) -> None:
        """Wait for every scheduled pipeline, including ones started meanwhile."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        """Supersede both pipelines, stop pending tasks and release the adapter."""
        if self._closed:
            return
        self._closed = True
        self._search_guard.advance()
        self._suggest_guard.advance()
        pending = list(self._tasks)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._unsubscribe()
        if isinstance(self._adapter, SupportsDestroy):
            self._adapter.destroy()
        self._logger.debug("coordinator.closed")

    async def __aenter__(self) -> SearchCoordinator[T]:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
