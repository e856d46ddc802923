"""Bootstrap: scaffold .context/, config.json and agents.md on `context-stash init`.

Each item is created only if absent. An existing config or guide is never
overwritten, so re-running init is safe.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path

from ctxstash.config import StashConfig, Workspace, save_config
from ctxstash.errors import StorageIO

logger = logging.getLogger("ctxstash.bootstrap")


@dataclass
class InitReport:
    """What init_workspace created and what was already there."""

    workspace: Workspace
    created: list[Path] = field(default_factory=list)
    existing: list[Path] = field(default_factory=list)

    def _record(self, path: Path, *, made: bool) -> None:
        (self.created if made else self.existing).append(path)


def agents_template() -> str:
    """Return the bundled agents.md text."""
    try:
        return (resources.files("ctxstash") / "templates" / "agents.md").read_text(encoding="utf-8")
    except (FileNotFoundError, ModuleNotFoundError):
        return (Path(__file__).parent / "templates" / "agents.md").read_text(encoding="utf-8")


def init_workspace(root: Path | str) -> InitReport:
    ws = Workspace.at(root)
    report = InitReport(workspace=ws)

    made_dir = not ws.context_dir.is_dir()
    try:
        ws.context_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Failed to create {ws.context_dir}: {exc}"
        raise StorageIO(msg) from exc
    report._record(ws.context_dir, made=made_dir)

    if ws.config_path.exists():
        report._record(ws.config_path, made=False)
    else:
        save_config(ws.root, StashConfig())
        report._record(ws.config_path, made=True)

    if ws.agents_path.exists():
        report._record(ws.agents_path, made=False)
    else:
        try:
            with ws.agents_path.open("x", encoding="utf-8") as f:
                f.write(agents_template())
        except FileExistsError:
            report._record(ws.agents_path, made=False)
        except OSError as exc:
            msg = f"Failed to write {ws.agents_path}: {exc}"
            raise StorageIO(msg) from exc
        else:
            report._record(ws.agents_path, made=True)

    logger.info("initialized %s (created %d, existing %d)", ws.root, len(report.created), len(report.existing))
    return report
