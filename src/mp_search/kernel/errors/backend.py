"""Backend errors – failures raised by search adapters."""

from __future__ import annotations

from typing import Any, Literal

from mp_search.kernel.errors.base import SearchError

ErrorSource = Literal["search", "suggestions", "facets", "results", "custom"]


class SearchBackendError(SearchError):
    """An adapter call failed.

    ``source`` tags which pipeline the failure came from so observers can
    route search and suggestion failures separately.
    """

    default_code = "search_backend_error"

    def __init__(
        self,
        message: str,
        *,
        source: ErrorSource = "search",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.source = source

    @classmethod
    def from_exception(cls, exc: BaseException, *, source: ErrorSource) -> SearchBackendError:
        message = str(exc) or type(exc).__name__
        return cls(
            message,
            source=source,
            detail={"source": source, "exception_type": type(exc).__name__},
            cause=exc,
        )


__all__ = ["ErrorSource", "SearchBackendError"]
