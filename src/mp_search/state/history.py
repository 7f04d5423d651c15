"""State – bounded, insertion-ordered event history."""
from __future__ import annotations

from collections import deque
from typing import Iterator

from mp_search.config import DEFAULT_EVENT_HISTORY_LIMIT
from mp_search.model import SearchEvent


class EventHistory:
    """Ring buffer of :class:`SearchEvent` trimmed from the oldest end.

    ``limit=None`` keeps everything, ``limit=0`` keeps nothing.
    """

    def __init__(self, limit: int | None = DEFAULT_EVENT_HISTORY_LIMIT) -> None:
        self._limit = self._normalize(limit)
        self._events: deque[SearchEvent] = deque(maxlen=self._limit)

    @staticmethod
    def _normalize(limit: int | None) -> int | None:
        if limit is None:
            return None
        return max(0, int(limit))

    @property
    def limit(self) -> int | None:
        return self._limit

    def set_limit(self, limit: int | None) -> None:
        self._limit = self._normalize(limit)
        # rebuilding with a smaller maxlen keeps the newest entries
        self._events = deque(self._events, maxlen=self._limit)

    def append(self, event: SearchEvent) -> None:
        self._events.append(event)

    def recent(self, count: int = 10) -> list[SearchEvent]:
        if count <= 0:
            return []
        return list(self._events)[-count:]

    def clear(self) -> None:
        self._events.clear()

    def snapshot(self) -> tuple[SearchEvent, ...]:
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[SearchEvent]:
        return iter(tuple(self._events))


__all__ = ["EventHistory"]
