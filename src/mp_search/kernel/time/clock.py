"""Kernel time – Clock protocol + implementations."""
from __future__ import annotations

import time
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Port: wall clock for event timestamps, monotonic clock for durations."""

    def now(self) -> datetime: ...
    def monotonic_ms(self) -> float: ...


class SystemClock:
    """Production clock backed by ``datetime.now(UTC)`` and ``time.monotonic``."""

    def now(self) -> datetime:
        return datetime.now(UTC)

    def monotonic_ms(self) -> float:
        return time.monotonic() * 1000.0


class FrozenClock:
    """Test clock pinned to a fixed point in time.

    Both the wall clock and the monotonic reading move only through
    :meth:`advance`, so elapsed durations are fully deterministic.
    """

    def __init__(self, fixed: datetime) -> None:
        self._fixed = fixed
        self._monotonic_ms = 0.0

    def now(self) -> datetime:
        return self._fixed

    def monotonic_ms(self) -> float:
        return self._monotonic_ms

    def advance(self, **kwargs: int | float) -> None:
        """Advance the frozen time by the given ``timedelta`` kwargs."""
        delta = timedelta(**kwargs)
        self._fixed += delta
        self._monotonic_ms += delta.total_seconds() * 1000.0


__all__ = ["Clock", "FrozenClock", "SystemClock"]
