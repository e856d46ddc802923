"""EntryStore: create / get / list / search for immutable context entries.

    store = EntryStore("/path/to/workspace")
    entry = store.create("# Why the retry loop exists\n...")
    store.get(entry.ref)
    store.list()
    store.search("retry")

The files in .context/ are the database. Config is re-read on every call
and nothing is cached, so uniqueness and ordering are recomputed from the
directory listing each time.

Write path (create):
    1. write the body to .context/.staging/<random>.tmp
    2. os.link() it to the final entry name; link() fails if the name exists
    3. unlink the staging file

Readers therefore never see a partially written entry, and an existing
entry is never overwritten. Two creates racing for the same index both
compute it, one link() wins and the other raises EntryCollision.
"""

from __future__ import annotations

import contextlib
import logging
import os
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

from ctxstash.allocator import iter_entry_files, next_index
from ctxstash.config import Workspace, load_config
from ctxstash.errors import EntryCollision, EntryNotFound, LineLimitExceeded, StorageIO
from ctxstash.models import ContextEntry
from ctxstash.naming import filename_for_ref, pad_index, ref_index
from ctxstash.paths import validate_path
from ctxstash.search import search_entries

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ctxstash.models import SearchResult

logger = logging.getLogger("ctxstash.store")


def count_lines(markdown: str) -> int:
    """Number of '\\n'-separated segments. A trailing newline adds an empty segment."""
    return len(markdown.split("\n"))


def _sort_key(entry: ContextEntry) -> tuple[int, int, str]:
    # Numeric refs by value; non-numeric refs after them, lexicographically.
    idx = ref_index(entry.ref)
    if idx is None:
        return (1, 0, entry.ref)
    return (0, idx, entry.ref)


def _read_text(path: Path) -> str:
    with path.open(encoding="utf-8", errors="replace", newline="") as f:
        return f.read()


class EntryStore:
    """Filesystem-backed store of write-once markdown entries."""

    def __init__(self, root: Path | str) -> None:
        self.workspace = Workspace.at(root)

    @property
    def root(self) -> Path:
        return self.workspace.root

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def create(self, markdown: str) -> ContextEntry:
        """Store markdown as a new entry and return its ref.

        Raises LineLimitExceeded before touching the disk, EntryCollision if
        the allocated name was claimed in the meantime.
        """
        config = load_config(self.root)

        count = count_lines(markdown)
        if count > config.max_lines:
            raise LineLimitExceeded(config.max_lines, count)

        ref = pad_index(next_index(self.root, config), config)
        filename = filename_for_ref(ref, config)
        path = validate_path(self.workspace.context_dir / filename, self.root)

        self._write_once(path, markdown, ref=ref)
        logger.info("created entry %s (%d lines)", filename, count)
        return ContextEntry(ref=ref, file=filename)

    def _write_once(self, path: Path, content: str, *, ref: str) -> None:
        staging = self.workspace.staging_dir
        try:
            staging.mkdir(parents=True, exist_ok=True)
            tmp = staging / f"{uuid.uuid4().hex}.tmp"
            fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o666)
        except OSError as exc:
            msg = f"Failed to stage entry {ref}: {exc}"
            raise StorageIO(msg) from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            try:
                os.link(tmp, path)
            except FileExistsError as exc:
                logger.warning("collision on %s; another writer claimed it", path.name)
                raise EntryCollision(ref) from exc
        except OSError as exc:
            msg = f"Failed to write entry {ref}: {exc}"
            raise StorageIO(msg) from exc
        finally:
            with contextlib.suppress(OSError):
                tmp.unlink()

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get(self, ref: str) -> str:
        """Return the raw content of the entry named by ref.

        ref is used literally (no numeric check); the path guard runs before
        any filesystem access.
        """
        config = load_config(self.root)
        filename = filename_for_ref(ref, config)
        path = validate_path(self.workspace.context_dir / filename, self.root)
        try:
            return _read_text(path)
        except (OSError, ValueError) as exc:
            raise EntryNotFound(ref) from exc

    def list(self) -> list[ContextEntry]:
        """All entries, ascending by numeric ref."""
        config = load_config(self.root)
        entries = [ContextEntry(ref=ref, file=name) for ref, name in iter_entry_files(self.root, config)]
        entries.sort(key=_sort_key)
        return entries

    def iter_contents(self) -> Iterator[tuple[ContextEntry, str]]:
        """Yield (entry, content) in list order. Entries deleted mid-scan are skipped."""
        for entry in self.list():
            path = self.workspace.context_dir / entry.file
            try:
                content = _read_text(path)
            except FileNotFoundError:
                logger.debug("entry vanished during scan: %s", entry.file)
                continue
            except OSError as exc:
                msg = f"Failed to read {entry.file}: {exc}"
                raise StorageIO(msg) from exc
            yield entry, content

    def search(self, query: str) -> list[SearchResult]:
        """First matching line per entry, case-insensitive literal match."""
        return list(search_entries(self.iter_contents(), query))
