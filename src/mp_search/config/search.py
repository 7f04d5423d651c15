"""Config – SearchConfig, the coordinator's tunables."""
from __future__ import annotations

import dataclasses

from mp_search.config.settings.base import Settings
from mp_search.config.validation import InvalidSettingValueError

DEFAULT_EVENT_HISTORY_LIMIT = 100


@dataclasses.dataclass(frozen=True)
class SearchConfig(Settings):
    """Coordinator configuration.

    ``event_history_limit`` of ``None`` keeps every event, ``0`` disables the
    history. Loaded from ``SEARCH_*`` environment variables by
    :class:`~mp_search.config.settings.EnvSettingsLoader`.
    """

    _prefix = "SEARCH"

    debounce_ms: int = 300
    min_query_length: int = 1
    auto_search: bool = True
    enable_suggestions: bool = True
    max_suggestions: int = 10
    fuzzy_suggestions: bool = True
    event_history_limit: int | None = DEFAULT_EVENT_HISTORY_LIMIT

    def _validate(self) -> None:
        if self.debounce_ms < 0:
            raise InvalidSettingValueError("debounce_ms", self.debounce_ms, "must be non-negative")
        if self.min_query_length < 0:
            raise InvalidSettingValueError("min_query_length", self.min_query_length, "must be non-negative")
        if self.max_suggestions < 1:
            raise InvalidSettingValueError("max_suggestions", self.max_suggestions, "must be at least 1")
        if self.event_history_limit is not None and self.event_history_limit < 0:
            raise InvalidSettingValueError(
                "event_history_limit", self.event_history_limit, "must be non-negative or None"
            )

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0


__all__ = ["DEFAULT_EVENT_HISTORY_LIMIT", "SearchConfig"]
