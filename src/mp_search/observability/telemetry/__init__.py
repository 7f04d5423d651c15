"""Observability – telemetry side channel."""
from mp_search.observability.telemetry.clients import MetricsTelemetryClient, StructlogTelemetryClient
from mp_search.observability.telemetry.dispatcher import TelemetryDispatcher
from mp_search.observability.telemetry.ports import (
    TelemetryCategory,
    TelemetryClient,
    TelemetryError,
    TelemetryEvent,
    TelemetryTiming,
)
from mp_search.observability.telemetry.sanitize import category_for, sanitize_event_payload

__all__ = [
    "MetricsTelemetryClient",
    "StructlogTelemetryClient",
    "TelemetryCategory",
    "TelemetryClient",
    "TelemetryDispatcher",
    "TelemetryError",
    "TelemetryEvent",
    "TelemetryTiming",
    "category_for",
    "sanitize_event_payload",
]
