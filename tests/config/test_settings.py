"""Tests for FlexLayoutSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from flexlayout.config.discovery import CONFIG_ENV_VAR
from flexlayout.config.settings import FlexLayoutSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv("FLEXLAYOUT_TEMPLATES__PREFIX", raising=False)
    monkeypatch.delenv("FLEXLAYOUT_VERBOSE", raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = FlexLayoutSettings.from_cli(start=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.verbose is False
        assert settings.log_json is False
        assert settings.templates.default_base == "acf-flex-layout"
        assert settings.search_paths == []

    def test_frozen(self, tmp_path: Path) -> None:
        settings = FlexLayoutSettings.from_cli(start=tmp_path)
        with pytest.raises(Exception):
            settings.verbose = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "flexlayout.toml"
        toml.write_text(
            '[templates]\nprefix = "t-"\n[[search_paths]]\npath = "/templates"\nkey = "widget"\n'
        )
        settings = FlexLayoutSettings.from_cli(start=tmp_path)
        assert settings.config_path == toml.resolve()
        assert settings.templates.prefix == "t-"
        assert settings.templates.extension == ".php"
        assert settings.search_paths[0].key == "widget"

    def test_roots_relative_to_config(self, tmp_path: Path) -> None:
        (tmp_path / "flexlayout.toml").write_text('[roots]\noverride = "child"\nbase = "parent"\n')
        settings = FlexLayoutSettings.from_cli(start=tmp_path)
        assert settings.roots.override == tmp_path.resolve() / "child"
        assert settings.roots.base == tmp_path.resolve() / "parent"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[templates]\nlayout_key = "acf_fc_layout"\n')
        settings = FlexLayoutSettings.from_cli(config_path=str(custom), start=tmp_path)
        assert settings.templates.layout_key == "acf_fc_layout"
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "flexlayout.toml").write_text("[templates\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            FlexLayoutSettings.from_cli(start=tmp_path)


class TestCliFlags:
    def test_flags_override(self, tmp_path: Path) -> None:
        settings = FlexLayoutSettings.from_cli(
            start=tmp_path, json_output=True, verbose=True, log_json=None
        )
        assert settings.json_output is True
        assert settings.verbose is True
        assert settings.log_json is False

    def test_root_flags_merge_with_toml(self, tmp_path: Path) -> None:
        (tmp_path / "flexlayout.toml").write_text('[roots]\nbase = "parent"\n')
        settings = FlexLayoutSettings.from_cli(start=tmp_path, override_root=tmp_path / "cli")
        assert settings.roots.override == tmp_path / "cli"
        assert settings.roots.base == tmp_path.resolve() / "parent"

    def test_prefix_flag_merges_with_toml(self, tmp_path: Path) -> None:
        (tmp_path / "flexlayout.toml").write_text('[templates]\nextension = ".html"\n')
        settings = FlexLayoutSettings.from_cli(start=tmp_path, prefix="cli-")
        assert settings.templates.prefix == "cli-"
        assert settings.templates.extension == ".html"


class TestEnvVars:
    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FLEXLAYOUT_VERBOSE", "true")
        assert FlexLayoutSettings.from_cli(start=tmp_path).verbose is True

    def test_nested_prefix_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FLEXLAYOUT_TEMPLATES__PREFIX", "env-")
        (tmp_path / "flexlayout.toml").write_text('[templates]\nprefix = "toml-"\n')
        assert FlexLayoutSettings.from_cli(start=tmp_path).templates.prefix == "env-"

    def test_to_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FLEXLAYOUT_TEMPLATES__PREFIX", "env-")
        config = FlexLayoutSettings.from_cli(start=tmp_path).to_config()
        assert config.templates.prefix == "env-"
