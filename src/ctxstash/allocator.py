"""Index allocation: next free index = highest existing index + 1.

The directory listing is the only state. Files that do not decode, or whose
ref is not a base-10 number, are foreign and ignored. Deleting the highest
entry out-of-band frees its index for the next create.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ctxstash.config import Workspace
from ctxstash.errors import StorageIO
from ctxstash.naming import decode_ref, is_entry_filename, ref_index

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from ctxstash.config import StashConfig

logger = logging.getLogger("ctxstash.allocator")


def iter_entry_files(
    root: Path | str,
    config: StashConfig,
    *,
    files_only: bool = True,
) -> Iterator[tuple[str, str]]:
    """Yield (ref, filename) for every name in .context/ that is ours.

    With files_only, directories, dangling symlinks and other non-regular
    entries are skipped. A missing .context/ directory yields nothing.
    """
    context_dir = Workspace.at(root).context_dir
    try:
        children = list(context_dir.iterdir())
    except FileNotFoundError:
        return
    except OSError as exc:
        msg = f"Failed to list {context_dir}: {exc}"
        raise StorageIO(msg) from exc

    for child in children:
        name = child.name
        if not is_entry_filename(name, config):
            logger.debug("skipping foreign file: %s", name)
            continue
        if files_only and not child.is_file():
            continue
        ref = decode_ref(name, config)
        if ref is not None:
            yield ref, name


def existing_indices(root: Path | str, config: StashConfig) -> list[int]:
    """Numeric indices of every entry-shaped name, whatever its file type.

    A directory or dangling symlink named like an entry still occupies that
    name, so it counts.
    """
    indices: list[int] = []
    for ref, _ in iter_entry_files(root, config, files_only=False):
        idx = ref_index(ref)
        if idx is not None:
            indices.append(idx)
    return indices


def next_index(root: Path | str, config: StashConfig) -> int:
    """Return max(existing) + 1, or config.start_index for an empty store."""
    indices = existing_indices(root, config)
    if not indices:
        return config.start_index
    return max(indices) + 1
