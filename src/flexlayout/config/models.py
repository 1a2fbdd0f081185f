"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, flexlayout.toml only contains
overrides. A theme needs at most ``[roots]`` and a few ``[[search_paths]]``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class RootsConfig(BaseModel):
    """[roots] section — the two physical template roots."""

    model_config = {"frozen": True}

    override: Path | None = None
    base: Path | None = None


class TemplatesConfig(BaseModel):
    """[templates] section."""

    model_config = {"frozen": True}

    prefix: str = ""
    default_base: str = "acf-flex-layout"
    extension: str = ".php"
    layout_key: str = "type"
    include_base_as_subdir: bool = False
    exclude_base_as_root_fallback: bool = True

    @field_validator("default_base", "layout_key")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        if not value:
            msg = "must not be empty"
            raise ValueError(msg)
        return value


class SearchPathConfig(BaseModel):
    """One ``[[search_paths]]`` entry."""

    model_config = {"frozen": True}

    path: str
    key: str | None = None
    priority: int | str = 10


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    entry_points: bool = True
    local_dir: Path | None = None


class FlexLayoutConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    roots: RootsConfig = Field(default_factory=RootsConfig)
    templates: TemplatesConfig = Field(default_factory=TemplatesConfig)
    search_paths: list[SearchPathConfig] = Field(default_factory=list)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
