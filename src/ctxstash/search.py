"""Literal, case-insensitive search over stored entries.

No index is kept: every call re-reads every entry. Each entry contributes
at most one hit, its first matching line with surrounding whitespace
trimmed. An empty query matches the first line of every entry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ctxstash.models import SearchResult

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from ctxstash.models import ContextEntry


def first_match(content: str, query: str) -> str | None:
    """Return the first line of content containing query (case-insensitive), trimmed."""
    needle = query.lower()
    for line in content.split("\n"):
        if needle in line.lower():
            return line.strip()
    return None


def search_entries(
    entries: Iterable[tuple[ContextEntry, str]],
    query: str,
) -> Iterator[SearchResult]:
    """Yield one SearchResult per (entry, content) pair that matches query."""
    for entry, content in entries:
        snippet = first_match(content, query)
        if snippet is not None:
            yield SearchResult(ref=entry.ref, file=entry.file, snippet=snippet)
