"""Error taxonomy for context-stash operations.

Every error is terminal for the single requested operation. Nothing here
retries; the CLI and the MCP transport surface ``str(exc)`` to their caller.
"""

from __future__ import annotations


class StashError(Exception):
    """Base class for all context-stash failures."""


class ConfigMissing(StashError):
    """No .context/config.json in the workspace."""


class InvalidConfig(StashError):
    """config.json exists but cannot be parsed or holds out-of-range values."""


class LineLimitExceeded(StashError):
    def __init__(self, limit: int, count: int) -> None:
        self.limit = limit
        self.count = count
        super().__init__(f"Markdown exceeds maximum of {limit} lines (got {count} lines)")


class EntryCollision(StashError):
    def __init__(self, ref: str) -> None:
        self.ref = ref
        super().__init__(f"Context entry '{ref}' already exists (concurrent create?); retry")


class EntryNotFound(StashError):
    def __init__(self, ref: str) -> None:
        self.ref = ref
        super().__init__(f"Context entry '{ref}' not found")


class PathTraversal(StashError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__("Path traversal detected")


class StorageIO(StashError):
    """Filesystem failure not covered by a more specific error."""
