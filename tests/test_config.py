"""Tests for config loading and workspace discovery."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from ctxstash.config import StashConfig, Workspace, find_workspace_root, load_config, save_config
from ctxstash.errors import ConfigMissing, InvalidConfig


def _write(root: Path, data) -> None:
    ctx = root / ".context"
    ctx.mkdir(parents=True, exist_ok=True)
    (ctx / "config.json").write_text(json.dumps(data), encoding="utf-8")


class TestLoadConfig:
    def test_missing(self, tmp_path: Path):
        with pytest.raises(ConfigMissing) as exc_info:
            load_config(tmp_path)
        assert "context-stash init" in str(exc_info.value)

    def test_defaults(self, tmp_path: Path):
        _write(tmp_path, {})
        cfg = load_config(tmp_path)
        assert cfg == StashConfig(max_lines=50, start_index=1, leading_zeros=5, file_prefix="", file_suffix=".md")

    def test_partial_overrides_merge_with_defaults(self, tmp_path: Path):
        _write(tmp_path, {"maxLines": 10, "filePrefix": "ctx-", "unknown": True})
        cfg = load_config(tmp_path)
        assert cfg.max_lines == 10
        assert cfg.file_prefix == "ctx-"
        assert cfg.leading_zeros == 5

    def test_malformed_json(self, tmp_path: Path):
        (tmp_path / ".context").mkdir()
        (tmp_path / ".context" / "config.json").write_text("{nope", encoding="utf-8")
        with pytest.raises(InvalidConfig):
            load_config(tmp_path)

    def test_not_an_object(self, tmp_path: Path):
        _write(tmp_path, [1, 2])
        with pytest.raises(InvalidConfig):
            load_config(tmp_path)

    @pytest.mark.parametrize(
        "data",
        [
            {"maxLines": 0},
            {"startIndex": -1},
            {"leadingZeros": -2},
            {"maxLines": "50"},
            {"maxLines": True},
            {"filePrefix": 3},
            {"fileSuffix": None},
        ],
    )
    def test_invalid_values(self, tmp_path: Path, data):
        _write(tmp_path, data)
        with pytest.raises(InvalidConfig):
            load_config(tmp_path)


class TestSaveConfig:
    def test_camel_case_keys(self, tmp_path: Path):
        path = save_config(tmp_path, StashConfig(max_lines=20))
        assert path == tmp_path / ".context" / "config.json"
        assert json.loads(path.read_text(encoding="utf-8")) == {
            "maxLines": 20,
            "startIndex": 1,
            "leadingZeros": 5,
            "filePrefix": "",
            "fileSuffix": ".md",
        }

    def test_save_then_load(self, tmp_path: Path):
        cfg = StashConfig(max_lines=7, start_index=3, leading_zeros=2, file_prefix="p", file_suffix=".txt")
        save_config(tmp_path, cfg)
        assert load_config(tmp_path) == cfg


class TestWorkspace:
    def test_paths(self, tmp_path: Path):
        ws = Workspace.at(tmp_path)
        assert ws.context_dir == tmp_path / ".context"
        assert ws.config_path == tmp_path / ".context" / "config.json"
        assert ws.agents_path == tmp_path / "agents.md"

    def test_find_root_walks_upward(self, tmp_path: Path):
        save_config(tmp_path, StashConfig())
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_workspace_root(nested) == tmp_path

    def test_find_root_falls_back_to_start(self, tmp_path: Path):
        assert find_workspace_root(tmp_path) == tmp_path
