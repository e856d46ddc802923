"""Shared fixtures: an initialised workspace in a temp dir."""

from __future__ import annotations

from pathlib import Path

import pytest

from ctxstash.bootstrap import init_workspace
from ctxstash.config import StashConfig, save_config
from ctxstash.store import EntryStore


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    root = tmp_path / "ws"
    root.mkdir()
    init_workspace(root)
    return root


@pytest.fixture
def store(workspace: Path) -> EntryStore:
    return EntryStore(workspace)


@pytest.fixture
def configure(workspace: Path):
    """Overwrite config.json with the given fields (on top of defaults)."""

    def _configure(**kwargs) -> StashConfig:
        cfg = StashConfig(**kwargs)
        save_config(workspace, cfg)
        return cfg

    return _configure
