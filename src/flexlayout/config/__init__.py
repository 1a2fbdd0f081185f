"""Configuration — TOML models, discovery, unified settings, logging."""

from flexlayout.config.models import FlexLayoutConfig
from flexlayout.config.settings import FlexLayoutSettings

__all__ = ["FlexLayoutConfig", "FlexLayoutSettings"]
