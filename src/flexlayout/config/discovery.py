"""Config file discovery and loading.

Walk-up finder locates flexlayout.toml, similar to how git finds .git/.
Supports FLEXLAYOUT_CONFIG env var and --config CLI flag overrides.
Relative directories in the file are relative to the file itself, so a
theme can ship its config next to its templates.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from flexlayout.config.models import FlexLayoutConfig

CONFIG_FILENAME = "flexlayout.toml"
CONFIG_ENV_VAR = "FLEXLAYOUT_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for flexlayout.toml.

    FLEXLAYOUT_CONFIG wins when set; a dangling value means no config.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def anchor_paths(data: dict[str, Any], config_dir: Path) -> dict[str, Any]:
    """Make ``[roots]`` and ``[plugins].local_dir`` absolute against *config_dir*.

    Search paths are left untouched: they are root-relative by contract.
    """
    roots = data.get("roots")
    if isinstance(roots, dict):
        data["roots"] = {
            name: _anchor(value, config_dir) if name in ("override", "base") else value
            for name, value in roots.items()
        }

    plugins = data.get("plugins")
    if isinstance(plugins, dict) and "local_dir" in plugins:
        data["plugins"] = {**plugins, "local_dir": _anchor(plugins["local_dir"], config_dir)}
    return data


def _anchor(value: Any, config_dir: Path) -> Any:
    if not isinstance(value, str) or not value:
        return value
    path = Path(value).expanduser()
    return str(path if path.is_absolute() else config_dir / path)


def read_config_data(path: Path) -> dict[str, Any]:
    """Parse *path* and anchor its relative directories."""
    raw = path.read_text(encoding="utf-8")
    return anchor_paths(tomllib.loads(raw), path.parent.resolve())


def load_config(path: Path | None = None, cwd: Path | None = None) -> FlexLayoutConfig:
    """Load and validate config from a TOML file.

    If *path* is None, uses find_config(*cwd*) to discover the file.
    Returns default FlexLayoutConfig if no file is found.
    """
    if path is None:
        path = find_config(cwd)

    if path is None:
        return FlexLayoutConfig()

    return FlexLayoutConfig.model_validate(read_config_data(path))
