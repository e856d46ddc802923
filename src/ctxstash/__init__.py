"""context-stash: append-only, human-readable context entries for coding agents.

Layout (inside a workspace root):
    .context/
        config.json       # {maxLines, startIndex, leadingZeros, filePrefix, fileSuffix}
        00001.md          # one immutable markdown file per entry
    agents.md             # usage guide, scaffolded once

Entries are write-once. The directory listing is the database: the next
index is max(existing) + 1, and a create that loses a race for that index
fails with EntryCollision instead of overwriting.
"""

__version__ = "0.1.0"

from ctxstash.config import StashConfig, Workspace, load_config, save_config  # noqa: E402
from ctxstash.errors import (  # noqa: E402
    ConfigMissing,
    EntryCollision,
    EntryNotFound,
    InvalidConfig,
    LineLimitExceeded,
    PathTraversal,
    StashError,
    StorageIO,
)
from ctxstash.models import ContextEntry, SearchResult  # noqa: E402
from ctxstash.store import EntryStore  # noqa: E402

__all__ = [
    "ConfigMissing",
    "ContextEntry",
    "EntryCollision",
    "EntryNotFound",
    "EntryStore",
    "InvalidConfig",
    "LineLimitExceeded",
    "PathTraversal",
    "SearchResult",
    "StashConfig",
    "StashError",
    "StorageIO",
    "Workspace",
    "load_config",
    "save_config",
]
