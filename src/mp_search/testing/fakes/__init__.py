"""Testing fakes – in-memory doubles for adapters, telemetry, logging, metrics and time."""
from mp_search.testing.fakes.adapter import PendingCall, ScriptedSearchAdapter
from mp_search.testing.fakes.clock import FakeClock
from mp_search.testing.fakes.metrics import FakeMetricsRegistry
from mp_search.testing.fakes.telemetry import RecordingLogger, RecordingTelemetryClient
from mp_search.kernel.time import FrozenClock

__all__ = [
    "FakeClock",
    "FakeMetricsRegistry",
    "FrozenClock",
    "PendingCall",
    "RecordingLogger",
    "RecordingTelemetryClient",
    "ScriptedSearchAdapter",
]
