"""Observability – telemetry client port and the records it receives.

Telemetry is a fire-and-forget side channel: clients get sanitised copies of
state-container events plus coordinator timings and errors. Nothing a client
does (including raising) can influence the search pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from mp_search.kernel.errors import ErrorSource
from mp_search.model import SearchEventKind


class TelemetryCategory(str, Enum):
    """High level grouping used to route events downstream."""

    SEARCH = "search"
    SUGGESTIONS = "suggestions"
    FACETS = "facets"
    RESULTS = "results"
    PAGINATION = "pagination"
    CUSTOM = "custom"


@dataclass(frozen=True)
class TelemetryEvent:
    kind: SearchEventKind
    timestamp: datetime
    category: TelemetryCategory
    context: dict[str, Any] | None = None


@dataclass(frozen=True)
class TelemetryTiming:
    name: str
    duration_ms: float
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TelemetryError:
    error: BaseException
    source: ErrorSource
    context: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class TelemetryClient(Protocol):
    """Required surface of a telemetry client.

    ``track_timing(timing)`` and ``track_error(error)`` are optional; the
    dispatcher only calls them on clients that define them.
    """

    def track_event(self, event: TelemetryEvent) -> None: ...


__all__ = [
    "TelemetryCategory",
    "TelemetryClient",
    "TelemetryError",
    "TelemetryEvent",
    "TelemetryTiming",
]
