"""Root error class for the mp-search error hierarchy."""

from __future__ import annotations

import json
from typing import Any


class SearchError(Exception):
    """Root of the error hierarchy.

    Args:
        message: Human-readable description.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Arbitrary extra context (serialisable dict).
        cause: Original exception that triggered this error.
    """

    default_code: str = "search_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        """Return a JSON-serialisable single-line string representation."""
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict (safe for logging and state snapshots)."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SearchError:
        """Rebuild an error from :meth:`to_dict` output.

        The original cause cannot cross a process boundary, so its ``repr``
        is folded into ``detail`` instead.
        """
        detail = dict(data.get("detail") or {})
        if "cause" in data:
            detail.setdefault("cause", data["cause"])
        return cls(
            str(data.get("message", "")),
            code=data.get("code"),
            detail=detail,
        )

    @classmethod
    def wrap(cls, exc: BaseException) -> SearchError:
        """Return *exc* unchanged when it already is a :class:`SearchError`."""
        if isinstance(exc, SearchError):
            return exc
        return cls(str(exc) or type(exc).__name__, code="unknown_error", cause=exc)


__all__ = ["SearchError"]
