"""Tests for the paths command."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from flexlayout.cli import cli


def _write_config(root: Path) -> None:
    (root / "flexlayout.toml").write_text(
        '[[search_paths]]\npath = "/widgets"\nkey = "widget"\n'
        '[[search_paths]]\npath = "/shared"\n',
        encoding="utf-8",
    )


class TestPaths:
    def test_lists_key_and_default(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        _write_config(tmp_path)
        result = cli_runner.invoke(cli, ["--json", "paths", "widget"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)["data"]
        assert data == {"key": "widget", "paths": ["/widgets", "/shared"], "count": 2}

    def test_no_default(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        _write_config(tmp_path)
        result = cli_runner.invoke(cli, ["--json", "paths", "widget", "--no-default"])
        assert json.loads(result.stdout)["data"]["paths"] == ["/widgets"]

    def test_human_output(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        _write_config(tmp_path)
        result = cli_runner.invoke(cli, ["paths", "widget"])
        assert result.exit_code == 0
        assert result.stdout.splitlines()[:4] == [
            "OK: paths",
            "  key: widget",
            "  paths: (2)",
            "    /widgets",
        ]

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["paths", "--examples"])
        assert result.exit_code == 0
        assert "flexlayout paths widget --no-default" in result.output
