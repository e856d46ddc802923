"""Tests for workspace initialisation."""

from __future__ import annotations

import json
from pathlib import Path

from ctxstash.bootstrap import agents_template, init_workspace


class TestInitWorkspace:
    def test_creates_layout(self, tmp_path: Path):
        report = init_workspace(tmp_path)
        assert (tmp_path / ".context").is_dir()
        assert json.loads((tmp_path / ".context" / "config.json").read_text(encoding="utf-8"))["maxLines"] == 50
        assert (tmp_path / "agents.md").read_text(encoding="utf-8") == agents_template()
        assert len(report.created) == 3
        assert report.existing == []

    def test_idempotent(self, tmp_path: Path):
        init_workspace(tmp_path)
        report = init_workspace(tmp_path)
        assert report.created == []
        assert len(report.existing) == 3

    def test_never_overwrites(self, tmp_path: Path):
        (tmp_path / ".context").mkdir()
        (tmp_path / ".context" / "config.json").write_text('{"maxLines": 9}', encoding="utf-8")
        (tmp_path / "agents.md").write_text("custom guide", encoding="utf-8")

        report = init_workspace(tmp_path)

        assert (tmp_path / ".context" / "config.json").read_text(encoding="utf-8") == '{"maxLines": 9}'
        assert (tmp_path / "agents.md").read_text(encoding="utf-8") == "custom guide"
        assert report.created == []

    def test_template_mentions_tools(self):
        text = agents_template()
        for tool in ("context.create", "context.get", "context.list", "context.search"):
            assert tool in text
