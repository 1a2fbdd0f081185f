"""Built-in plugin that registers the ``[[search_paths]]`` of the config."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from collections.abc import Sequence

    from flexlayout.config.models import SearchPathConfig
    from flexlayout.domain.registry import PathRegistry

hookimpl = pluggy.HookimplMarker("flexlayout")


class ConfigSearchPathsPlugin:
    """Feeds configured search paths into the registry at setup time."""

    def __init__(self, search_paths: Sequence[SearchPathConfig]) -> None:
        self._search_paths = tuple(search_paths)

    @hookimpl
    def register_search_paths(self, registry: PathRegistry) -> None:
        for entry in self._search_paths:
            registry.register(entry.path, entry.key, entry.priority)
