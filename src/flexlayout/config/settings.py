"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``FLEXLAYOUT_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``flexlayout.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

``FLEXLAYOUT_TEMPLATES__PREFIX`` is the process-wide filename prefix.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from flexlayout.config.discovery import find_config, read_config_data
from flexlayout.config.models import (
    FlexLayoutConfig,
    PluginsConfig,
    RootsConfig,
    SearchPathConfig,
    TemplatesConfig,
)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``flexlayout.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = read_config_data(toml_path)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class FlexLayoutSettings(BaseSettings):
    """Unified settings for the layout environment and the CLI.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "FLEXLAYOUT_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    roots: RootsConfig = Field(default_factory=RootsConfig)
    templates: TemplatesConfig = Field(default_factory=TemplatesConfig)
    search_paths: list[SearchPathConfig] = Field(default_factory=list)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        override_root: Path | None = None,
        base_root: Path | None = None,
        prefix: str | None = None,
        **cli_flags: Any,
    ) -> FlexLayoutSettings:
        """Construct settings from a CLI invocation.

        Discovers ``flexlayout.toml`` via walk-up from *start* (or uses an
        explicit *config_path*) and merges CLI flags as highest-priority
        overrides. Flags passed as ``None`` are treated as unset; root and
        prefix flags are merged into their sections, not replacing them.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        overrides: dict[str, Any] = {k: v for k, v in cli_flags.items() if v is not None}
        roots = {
            name: value
            for name, value in (("override", override_root), ("base", base_root))
            if value is not None
        }
        if roots:
            overrides["roots"] = roots
        if prefix is not None:
            overrides["templates"] = {"prefix": prefix}

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None

    def to_config(self) -> FlexLayoutConfig:
        """The TOML-shaped part of the settings."""
        return FlexLayoutConfig(
            roots=self.roots,
            templates=self.templates,
            search_paths=self.search_paths,
            plugins=self.plugins,
        )
