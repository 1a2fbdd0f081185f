"""Shared pytest fixtures and test helpers for flexlayout tests."""

from __future__ import annotations

from io import StringIO
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from flexlayout.config.models import FlexLayoutConfig, RootsConfig, TemplatesConfig
from flexlayout.services.layouts import LayoutService


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def theme(tmp_path: Path) -> tuple[Path, Path]:
    """Override (child) and base (parent) theme roots, both empty.

    This is the single source of truth for the two-root layout; every
    service fixture builds on it.
    """
    override_root = tmp_path / "child"
    base_root = tmp_path / "parent"
    override_root.mkdir()
    base_root.mkdir()
    return override_root, base_root


@pytest.fixture
def override_root(theme: tuple[Path, Path]) -> Path:
    return theme[0]


@pytest.fixture
def base_root(theme: tuple[Path, Path]) -> Path:
    return theme[1]


@pytest.fixture
def output() -> StringIO:
    """Sink for rendered text when not capturing."""
    return StringIO()


@pytest.fixture
def make_service(theme: tuple[Path, Path], output: StringIO) -> Any:
    """Factory for a LayoutService over the temporary theme roots."""

    def _make(**templates: Any) -> LayoutService:
        override, base = theme
        config = FlexLayoutConfig(
            roots=RootsConfig(override=override, base=base),
            templates=TemplatesConfig(**templates),
        )
        return LayoutService(config, output=output)

    return _make


@pytest.fixture
def service(make_service: Any) -> LayoutService:
    """LayoutService with default template settings."""
    return make_service()


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_template(root: Path, relative: str, body: str = "") -> Path:
    """Create a template file under *root*, including parent directories."""
    path = root / relative.lstrip("/")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body or relative, encoding="utf-8")
    return path
