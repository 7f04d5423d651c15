"""Kernel time – clock port and implementations."""
from mp_search.kernel.time.clock import Clock, FrozenClock, SystemClock

__all__ = ["Clock", "FrozenClock", "SystemClock"]
