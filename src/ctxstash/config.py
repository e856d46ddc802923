"""StashConfig: per-workspace naming parameters for context entries.

Layout (all relative to the workspace root):

    .context/
        config.json       # naming parameters (git-tracked)
        .staging/         # transient files used while writing an entry
        00001.md          # one file per entry: <filePrefix><padded index><fileSuffix>
    agents.md             # usage guide for agents, written once by `context-stash init`

config.json example (the defaults):

    {
      "maxLines": 50,
      "startIndex": 1,
      "leadingZeros": 5,
      "filePrefix": "",
      "fileSuffix": ".md"
    }

The config is read fresh on every operation, so edits take effect on the
next call without restarting the server.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ctxstash.errors import ConfigMissing, InvalidConfig, StorageIO

logger = logging.getLogger("ctxstash.config")

CONTEXT_DIR = ".context"
CONFIG_FILENAME = "config.json"
AGENTS_FILENAME = "agents.md"
STAGING_DIR = ".staging"

# JSON key -> (attribute, type, minimum)
_FIELDS: dict[str, tuple[str, type, int | None]] = {
    "maxLines": ("max_lines", int, 1),
    "startIndex": ("start_index", int, 0),
    "leadingZeros": ("leading_zeros", int, 0),
    "filePrefix": ("file_prefix", str, None),
    "fileSuffix": ("file_suffix", str, None),
}


@dataclass(frozen=True)
class StashConfig:
    """Naming parameters loaded from .context/config.json."""

    max_lines: int = 50
    start_index: int = 1
    leading_zeros: int = 5
    file_prefix: str = ""
    file_suffix: str = ".md"

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> StashConfig:
        """Overlay known keys from d onto the defaults. Unknown keys are ignored."""
        values: dict[str, Any] = {}
        for key, (attr, typ, minimum) in _FIELDS.items():
            if key not in d:
                continue
            value = d[key]
            # bool is an int subclass; reject it explicitly
            if not isinstance(value, typ) or isinstance(value, bool):
                msg = f"config.json: {key} must be {'an integer' if typ is int else 'a string'}"
                raise InvalidConfig(msg)
            if minimum is not None and value < minimum:
                msg = f"config.json: {key} must be >= {minimum} (got {value})"
                raise InvalidConfig(msg)
            values[attr] = value
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return {key: getattr(self, attr) for key, (attr, _, _) in _FIELDS.items()}


@dataclass(frozen=True)
class Workspace:
    """Paths derived from a workspace root. The root is always explicit."""

    root: Path

    @classmethod
    def at(cls, root: Path | str) -> Workspace:
        return cls(Path(root).absolute())

    @property
    def context_dir(self) -> Path:
        return self.root / CONTEXT_DIR

    @property
    def config_path(self) -> Path:
        return self.context_dir / CONFIG_FILENAME

    @property
    def staging_dir(self) -> Path:
        return self.context_dir / STAGING_DIR

    @property
    def agents_path(self) -> Path:
        return self.root / AGENTS_FILENAME


def load_config(root: Path | str) -> StashConfig:
    """Load .context/config.json under root, filling missing keys with defaults."""
    path = Workspace.at(root).config_path
    try:
        with path.open(encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as exc:
        msg = f"No {CONTEXT_DIR}/{CONFIG_FILENAME} in {root}. Run 'context-stash init' first."
        raise ConfigMissing(msg) from exc
    except json.JSONDecodeError as exc:
        msg = f"Malformed {path}: {exc}"
        raise InvalidConfig(msg) from exc
    except OSError as exc:
        msg = f"Failed to read {path}: {exc}"
        raise StorageIO(msg) from exc

    if not isinstance(raw, dict):
        msg = f"{path} must contain a JSON object"
        raise InvalidConfig(msg)
    return StashConfig.from_dict(raw)


def save_config(root: Path | str, config: StashConfig) -> Path:
    """Write config.json (2-space indent). Creates .context/ if needed."""
    ws = Workspace.at(root)
    try:
        ws.context_dir.mkdir(parents=True, exist_ok=True)
        ws.config_path.write_text(json.dumps(config.to_dict(), indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        msg = f"Failed to write {ws.config_path}: {exc}"
        raise StorageIO(msg) from exc
    logger.debug("wrote %s", ws.config_path)
    return ws.config_path


def find_workspace_root(start: Path | str) -> Path:
    """Walk upward from start looking for .context/config.json."""
    start_path = Path(start).absolute()
    for directory in (start_path, *start_path.parents):
        if (directory / CONTEXT_DIR / CONFIG_FILENAME).is_file():
            return directory
    return start_path
