"""Pluggy hook specifications for flexlayout setup extensions and events.

Three setup-time hooks let plugins contribute search paths, extension
callbacks and override loaders to a layout environment. One notification
hook reports every template lookup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from pathlib import Path

    from flexlayout.domain.extensions import ExtensionPoints
    from flexlayout.domain.loader import LoaderRegistry
    from flexlayout.domain.registry import PathRegistry

hookspec = pluggy.HookspecMarker("flexlayout")


class FlexLayoutHookSpec:
    """Hook specifications for the flexlayout plugin system."""

    @hookspec
    def register_search_paths(self, registry: PathRegistry) -> None:
        """Register template search paths on *registry*."""

    @hookspec
    def register_extensions(self, extensions: ExtensionPoints) -> None:
        """Add extension-point callbacks."""

    @hookspec
    def register_loaders(self, loaders: LoaderRegistry) -> None:
        """Register ``(base, name)`` override load handlers."""

    @hookspec
    def post_locate(
        self,
        layout_name: str,
        layout_base: str,
        located: Path | None,
    ) -> None:
        """Called after each layout template lookup, hit or miss."""
