"""Tests for the candidates command."""

from __future__ import annotations

import json

from click.testing import CliRunner

from flexlayout.cli import cli


class TestCandidates:
    def test_default_names(self, cli_runner: CliRunner, root_args: list[str]) -> None:
        result = cli_runner.invoke(
            cli, [*root_args, "--json", "candidates", "hero", "-b", "widget"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)["data"]
        assert data["names"] == ["widget-hero.php", "widget.php"]
        assert data["entries"] == ["widget-hero.php", "widget.php"]

    def test_prefix_flag(self, cli_runner: CliRunner, root_args: list[str]) -> None:
        result = cli_runner.invoke(
            cli, [*root_args, "--prefix", "t-", "--json", "candidates", "hero", "--base", "widget"]
        )
        data = json.loads(result.stdout)["data"]
        assert data["names"] == ["t-widget-hero.php", "t-widget.php"]

    def test_default_base(self, cli_runner: CliRunner, root_args: list[str]) -> None:
        result = cli_runner.invoke(cli, [*root_args, "--json", "candidates", "hero"])
        assert json.loads(result.stdout)["data"]["layout_base"] == "acf-flex-layout"
