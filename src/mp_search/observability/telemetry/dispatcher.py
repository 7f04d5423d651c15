"""Observability – TelemetryDispatcher.

Fans telemetry out to zero or more :class:`TelemetryClient` instances. With
no clients registered every ``record_*`` call is a cheap no-op, which keeps
the engine backend-agnostic.
"""
from __future__ import annotations

from typing import Any, Iterable

from mp_search.kernel.errors import ErrorSource
from mp_search.model import SearchEvent
from mp_search.observability.logging import NOOP_LOGGER, SearchLogger
from mp_search.observability.telemetry.ports import (
    TelemetryClient,
    TelemetryError,
    TelemetryEvent,
    TelemetryTiming,
)
from mp_search.observability.telemetry.sanitize import category_for, sanitize_event_payload


class TelemetryDispatcher:
    """Deliver events, timings and errors to every registered client.

    A client that raises is logged and skipped; the remaining clients still
    receive the record and the caller never sees the exception.
    """

    def __init__(
        self,
        clients: Iterable[TelemetryClient] = (),
        logger: SearchLogger | None = None,
    ) -> None:
        self._clients: list[TelemetryClient] = list(clients)
        self._logger = logger or NOOP_LOGGER

    @property
    def clients(self) -> list[TelemetryClient]:
        return list(self._clients)

    def add_client(self, client: TelemetryClient) -> None:
        self._clients.append(client)

    def remove_client(self, client: TelemetryClient) -> None:
        if client in self._clients:
            self._clients.remove(client)

    def record_event(self, event: SearchEvent) -> None:
        if not self._clients:
            return
        telemetry_event = TelemetryEvent(
            kind=event.kind,
            timestamp=event.timestamp,
            category=category_for(event.kind),
            context=sanitize_event_payload(event.kind, event.payload),
        )
        for client in self._clients:
            try:
                client.track_event(telemetry_event)
            except Exception as exc:  # noqa: BLE001
                self._logger.error("telemetry.track_event_failed", client=type(client).__name__, error=repr(exc))

    def record_timing(self, name: str, duration_ms: float, metadata: dict[str, Any] | None = None) -> None:
        if not self._clients:
            return
        timing = TelemetryTiming(name=name, duration_ms=duration_ms, metadata=metadata or {})
        for client in self._clients:
            track = getattr(client, "track_timing", None)
            if track is None:
                continue
            try:
                track(timing)
            except Exception as exc:  # noqa: BLE001
                self._logger.error("telemetry.track_timing_failed", client=type(client).__name__, error=repr(exc))

    def record_error(
        self,
        error: BaseException,
        source: ErrorSource,
        context: dict[str, Any] | None = None,
    ) -> None:
        if not self._clients:
            return
        record = TelemetryError(error=error, source=source, context=context or {})
        for client in self._clients:
            track = getattr(client, "track_error", None)
            if track is None:
                continue
            try:
                track(record)
            except Exception as exc:  # noqa: BLE001
                self._logger.error("telemetry.track_error_failed", client=type(client).__name__, error=repr(exc))


__all__ = ["TelemetryDispatcher"]
