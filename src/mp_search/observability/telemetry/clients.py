"""Observability – ready-made telemetry clients."""
from __future__ import annotations

from typing import Any

from mp_search.observability.logging import get_logger
from mp_search.observability.metrics import Metrics, NoopMetrics
from mp_search.observability.telemetry.ports import TelemetryError, TelemetryEvent, TelemetryTiming


class StructlogTelemetryClient:
    """Writes every telemetry record as a structured log line.

    Events go out at ``info``, timings at ``debug`` and errors at ``warning``
    (the error itself was already surfaced through the state container).
    """

    def __init__(self, logger: Any = None) -> None:
        self._log = logger if logger is not None else get_logger("mp_search.telemetry")

    def track_event(self, event: TelemetryEvent) -> None:
        self._log.info(
            f"search.{event.kind.value}",
            category=event.category.value,
            timestamp=event.timestamp.isoformat(),
            **(event.context or {}),
        )

    def track_timing(self, timing: TelemetryTiming) -> None:
        self._log.debug(
            f"search.timing.{timing.name}",
            duration_ms=round(timing.duration_ms, 2),
            **timing.metadata,
        )

    def track_error(self, error: TelemetryError) -> None:
        self._log.warning(
            f"search.error.{error.source}",
            error=str(error.error),
            error_type=type(error.error).__name__,
            **error.context,
        )


class MetricsTelemetryClient:
    """Maps telemetry onto the :class:`Metrics` port.

    * ``search_events_total`` counter, labelled by ``kind`` and ``category``
    * ``search_duration_ms`` histogram, labelled by timing ``name``
    * ``search_errors_total`` counter, labelled by ``source``
    """

    def __init__(self, metrics: Metrics | None = None) -> None:
        metrics = metrics or NoopMetrics()
        self._events = metrics.counter("search_events_total", "Search engine events")
        self._durations = metrics.histogram("search_duration_ms", "Search pipeline durations")
        self._errors = metrics.counter("search_errors_total", "Search pipeline errors")

    def track_event(self, event: TelemetryEvent) -> None:
        self._events.add(1, {"kind": event.kind.value, "category": event.category.value})

    def track_timing(self, timing: TelemetryTiming) -> None:
        self._durations.record(timing.duration_ms, {"name": timing.name})

    def track_error(self, error: TelemetryError) -> None:
        self._errors.add(1, {"source": error.source})


__all__ = ["MetricsTelemetryClient", "StructlogTelemetryClient"]
