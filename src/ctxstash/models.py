"""Data models for context entries and search hits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ContextEntry:
    """One stored entry: the decoded ref and the on-disk filename."""

    ref: str
    file: str

    def to_dict(self) -> dict[str, Any]:
        return {"ref": self.ref, "file": self.file}


@dataclass(frozen=True)
class SearchResult:
    """First matching line of an entry, trimmed."""

    ref: str
    file: str
    snippet: str

    def to_dict(self) -> dict[str, Any]:
        return {"ref": self.ref, "file": self.file, "snippet": self.snippet}
