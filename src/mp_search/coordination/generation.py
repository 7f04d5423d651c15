"""Coordination – GenerationGuard for cancel-superseded pipelines."""
from __future__ import annotations


class GenerationGuard:
    """Monotonic token source.

    Each pipeline captures the token returned by :meth:`advance`; when it
    completes it applies its outcome only if :meth:`is_current` still holds.
    Starting a newer pipeline (or cancelling) advances the counter, which
    silently invalidates every older token.
    """

    def __init__(self) -> None:
        self._current = 0

    @property
    def current(self) -> int:
        return self._current

    def advance(self) -> int:
        self._current += 1
        return self._current

    def is_current(self, token: int) -> bool:
        return token == self._current


__all__ = ["GenerationGuard"]
