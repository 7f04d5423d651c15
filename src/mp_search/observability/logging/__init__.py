"""Observability – logger port, no-op default and structlog helper."""
from mp_search.observability.logging.protocol import NOOP_LOGGER, NoopLogger, SearchLogger
from mp_search.observability.logging.structured import get_logger

__all__ = [
    "NOOP_LOGGER",
    "NoopLogger",
    "SearchLogger",
    "get_logger",
]
