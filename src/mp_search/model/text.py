"""Model – query text normalisation and highlight helpers.

Plain string helpers for integrators that render results; nothing in the
pipeline depends on the markup they produce.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

__all__ = [
    "HighlightOptions",
    "extract_snippet",
    "highlight_boundaries",
    "highlight_terms",
    "highlight_text",
    "is_empty_query",
    "sanitize_query",
    "strip_highlight",
]

_WHITESPACE_RE = re.compile(r"\s+")
_MARK_TAG_RE = re.compile(r"</?mark[^>]*>")
_ELLIPSIS = "..."


@dataclass(frozen=True)
class HighlightOptions:
    class_name: str = "highlight"
    pre_tag: str | None = None
    post_tag: str = "</mark>"
    case_sensitive: bool = False

    @property
    def opening_tag(self) -> str:
        if self.pre_tag is not None:
            return self.pre_tag
        return f'<mark class="{self.class_name}">'


_DEFAULT_OPTIONS = HighlightOptions()


def is_empty_query(text: str | None) -> bool:
    return not text or not text.strip()


def sanitize_query(text: str) -> str:
    """Trim *text* and collapse inner whitespace runs to a single space."""
    return _WHITESPACE_RE.sub(" ", text.strip())


def highlight_text(text: str, query: str, options: HighlightOptions = _DEFAULT_OPTIONS) -> str:
    """Wrap every occurrence of *query* in *text* with the highlight tags.

    *query* is matched literally; regex metacharacters carry no meaning.
    """
    if not text or not query:
        return text
    flags = 0 if options.case_sensitive else re.IGNORECASE
    pattern = re.compile(re.escape(query), flags)
    opening, closing = options.opening_tag, options.post_tag
    return pattern.sub(lambda match: f"{opening}{match.group(0)}{closing}", text)


def highlight_terms(text: str, terms: Iterable[str], options: HighlightOptions = _DEFAULT_OPTIONS) -> str:
    for term in terms:
        text = highlight_text(text, term, options)
    return text


def extract_snippet(
    text: str,
    query: str,
    max_length: int = 200,
    options: HighlightOptions = _DEFAULT_OPTIONS,
) -> str:
    """Return up to *max_length* characters of *text* centred on the first match.

    Cut ends are marked with ``...`` and the match is highlighted. Without a
    match the head of *text* is returned.
    """
    if not text or not query:
        return text[:max_length]

    haystack = text if options.case_sensitive else text.lower()
    needle = query if options.case_sensitive else query.lower()
    index = haystack.find(needle)
    if index == -1:
        return text[:max_length] + (_ELLIPSIS if len(text) > max_length else "")

    start = max(0, index - (max_length - len(query)) // 2)
    end = min(len(text), start + max_length)
    snippet = text[start:end]
    if start > 0:
        snippet = _ELLIPSIS + snippet
    if end < len(text):
        snippet += _ELLIPSIS
    return highlight_text(snippet, query, options)


def strip_highlight(text: str) -> str:
    """Remove ``<mark>`` tags, keeping the highlighted text."""
    return _MARK_TAG_RE.sub("", text)


def highlight_boundaries(text: str, query: str, case_sensitive: bool = False) -> list[tuple[int, int]]:
    """``(start, end)`` offsets of every non-overlapping occurrence of *query*."""
    if not text or not query:
        return []
    haystack = text if case_sensitive else text.lower()
    needle = query if case_sensitive else query.lower()
    boundaries: list[tuple[int, int]] = []
    index = haystack.find(needle)
    while index != -1:
        boundaries.append((index, index + len(query)))
        index = haystack.find(needle, index + len(query))
    return boundaries
