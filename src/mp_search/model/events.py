"""Model – SearchEvent and its kinds."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

__all__ = ["SearchEvent", "SearchEventKind"]


class SearchEventKind(str, Enum):
    QUERY_CHANGED = "query_changed"
    SEARCH_STARTED = "search_started"
    SEARCH_COMPLETED = "search_completed"
    SEARCH_FAILED = "search_failed"
    FILTER_ADDED = "filter_added"
    FILTER_REMOVED = "filter_removed"
    FILTER_CLEARED = "filter_cleared"
    PAGE_CHANGED = "page_changed"
    SUGGESTIONS_REQUESTED = "suggestions_requested"
    SUGGESTIONS_RECEIVED = "suggestions_received"
    SUGGESTIONS_FAILED = "suggestions_failed"
    SUGGESTIONS_CLEARED = "suggestions_cleared"
    SUGGESTION_SELECTED = "suggestion_selected"
    RESULT_CLICKED = "result_clicked"


@dataclass(frozen=True)
class SearchEvent:
    kind: SearchEventKind
    timestamp: datetime
    payload: dict[str, Any] | None = None
