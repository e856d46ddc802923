"""Path guard: every path built from caller data must stay inside the workspace.

The check is lexical. It normalises ``.``/``..`` segments without touching
the filesystem, so a rejected path is never opened, stat'ed or listed.

The boundary is the workspace root, not .context/: a ref such as
"../docs/notes" reads docs/notes.md from the repository.
"""

from __future__ import annotations

import os
from pathlib import Path

from ctxstash.errors import PathTraversal


def validate_path(candidate: Path | str, root: Path | str) -> Path:
    """Return the normalised absolute candidate, or raise PathTraversal.

    Relative candidates are taken relative to root. Containment is decided
    per path component: ``/ws2/x`` is outside ``/ws``.
    """
    candidate_str = os.fspath(candidate)
    root_str = os.fspath(root)
    if "\0" in candidate_str or "\0" in root_str:
        raise PathTraversal(candidate_str)

    resolved_root = os.path.abspath(root_str)
    resolved = os.path.abspath(os.path.join(resolved_root, candidate_str))

    if resolved != resolved_root and not resolved.startswith(resolved_root.rstrip(os.sep) + os.sep):
        raise PathTraversal(candidate_str)
    return Path(resolved)
