"""State – search state container, event history and snapshots."""
from mp_search.state.container import SearchStateContainer, StateChange, StateListener
from mp_search.state.history import EventHistory
from mp_search.state.snapshot import StateSnapshot

__all__ = [
    "EventHistory",
    "SearchStateContainer",
    "StateChange",
    "StateListener",
    "StateSnapshot",
]
