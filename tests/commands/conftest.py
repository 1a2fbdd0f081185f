"""Fixtures for CLI command tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from flexlayout.config.discovery import CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep config discovery inside the test's temporary directory."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv("FLEXLAYOUT_TEMPLATES__PREFIX", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def root_args(theme: tuple[Path, Path]) -> list[str]:
    """Global CLI flags pointing at the temporary theme roots."""
    override_root, base_root = theme
    return ["--override-root", str(override_root), "--base-root", str(base_root)]
