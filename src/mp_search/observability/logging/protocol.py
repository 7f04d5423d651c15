"""Observability – SearchLogger protocol and the silent default."""
from __future__ import annotations

from typing import Any, Protocol


class SearchLogger(Protocol):
    """Minimal logger protocol – satisfied by structlog bound loggers."""

    def debug(self, event: str, **kw: Any) -> None: ...
    def info(self, event: str, **kw: Any) -> None: ...
    def warning(self, event: str, **kw: Any) -> None: ...
    def error(self, event: str, **kw: Any) -> None: ...


class NoopLogger:
    """Discards everything; the library stays silent unless a logger is injected."""

    def debug(self, event: str, **kw: Any) -> None:
        pass

    def info(self, event: str, **kw: Any) -> None:
        pass

    def warning(self, event: str, **kw: Any) -> None:
        pass

    def error(self, event: str, **kw: Any) -> None:
        pass


NOOP_LOGGER = NoopLogger()

__all__ = ["NOOP_LOGGER", "NoopLogger", "SearchLogger"]
