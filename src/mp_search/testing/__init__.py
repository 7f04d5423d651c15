"""Testing support – fakes for tests and integrators.

Usage::

    from mp_search.testing import ScriptedSearchAdapter, RecordingTelemetryClient
"""

from mp_search.testing.fakes import (
    FakeClock,
    FakeMetricsRegistry,
    FrozenClock,
    PendingCall,
    RecordingLogger,
    RecordingTelemetryClient,
    ScriptedSearchAdapter,
)

__all__ = [
    "FakeClock",
    "FakeMetricsRegistry",
    "FrozenClock",
    "PendingCall",
    "RecordingLogger",
    "RecordingTelemetryClient",
    "ScriptedSearchAdapter",
]
