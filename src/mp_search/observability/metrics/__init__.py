"""Observability – metrics ports and the no-op backend."""
from mp_search.observability.metrics.noop import NoopMetrics
from mp_search.observability.metrics.ports import Counter, Histogram, Metrics

__all__ = ["Counter", "Histogram", "Metrics", "NoopMetrics"]
