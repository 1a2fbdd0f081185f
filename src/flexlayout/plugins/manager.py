"""Plugin discovery, loading, and setup-hook dispatch.

Discovery: ``flexlayout.plugins`` entry points (pip-installed) via pluggy,
plus single-file plugins from a local directory.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from typing import TYPE_CHECKING

import pluggy

from flexlayout.plugins.hookspecs import FlexLayoutHookSpec

if TYPE_CHECKING:
    from pathlib import Path

    from flexlayout.domain.extensions import ExtensionPoints
    from flexlayout.domain.loader import LoaderRegistry
    from flexlayout.domain.registry import PathRegistry

PROJECT_NAME = "flexlayout"
ENTRY_POINT_GROUP = "flexlayout.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(FlexLayoutHookSpec)
        self._loaded: bool = False

    def discover_and_load(
        self,
        *,
        entry_points: bool = True,
        local_dir: Path | None = None,
    ) -> list[str]:
        """Discover plugins from entry points and an optional local directory.

        Returns a list of loaded plugin names.
        """
        if entry_points:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
            self._instantiate_class_plugins()
        if local_dir is not None:
            self._discover_local(local_dir)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly (e.g. built-in plugins)."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object | None = None, name: str | None = None) -> None:
        """Unregister a plugin by instance or by name."""
        self._pm.unregister(plugin, name=name)

    def has_plugin(self, name: str) -> bool:
        return self._pm.has_plugin(name)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay for dispatching events."""
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Setup hooks
    # ------------------------------------------------------------------

    def configure(
        self,
        registry: PathRegistry,
        extensions: ExtensionPoints,
        loaders: LoaderRegistry,
    ) -> None:
        """Let every plugin contribute search paths, extensions and loaders.

        A plugin that fails during setup is logged and skipped; the others
        still run.
        """
        for plugin in self._pm.get_plugins():
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            for hook_name, arg in (
                ("register_search_paths", registry),
                ("register_extensions", extensions),
                ("register_loaders", loaders),
            ):
                impl = getattr(plugin, hook_name, None)
                if impl is None or not getattr(impl, f"{PROJECT_NAME}_impl", None):
                    continue
                try:
                    impl(arg)
                except Exception:
                    logger.warning(
                        "Plugin %s failed in %s", plugin_name, hook_name, exc_info=True
                    )

    def notify_located(self, layout_name: str, layout_base: str, located: Path | None) -> None:
        """Dispatch ``post_locate``. Plugin failures are warnings, never errors."""
        try:
            self._pm.hook.post_locate(
                layout_name=layout_name, layout_base=layout_base, located=located
            )
        except Exception:
            logger.warning(
                "post_locate hook failed for %s/%s", layout_base, layout_name, exc_info=True
            )

    # ------------------------------------------------------------------
    # Local directory discovery
    # ------------------------------------------------------------------

    def _discover_local(self, local_dir: Path) -> None:
        """Scan *local_dir* for single-file Python plugins.

        Each ``*.py`` file (excluding ``_``-prefixed names) is loaded as a
        module. Classes defined there with ``@hookimpl`` methods are
        instantiated and registered. Broken files are logged and skipped.
        """
        if not local_dir.is_dir():
            return

        for py_file in sorted(local_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            module_name = f"flexlayout_local_plugin_{py_file.stem}"
            try:
                spec = importlib.util.spec_from_file_location(module_name, py_file)
                if spec is None or spec.loader is None:
                    logger.warning("Could not create module spec for %s", py_file)
                    continue
                module = importlib.util.module_from_spec(spec)
                sys.modules[module_name] = module
                spec.loader.exec_module(module)
            except Exception:
                logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
                sys.modules.pop(module_name, None)
                continue

            for _attr_name, obj in inspect.getmembers(module, inspect.isclass):
                if obj.__module__ != module_name or not self._has_hook_impls(obj):
                    continue
                try:
                    self.register_plugin(obj(), name=f"{module_name}.{obj.__name__}")
                except Exception:
                    logger.warning(
                        "Failed to instantiate plugin class %s from %s",
                        obj.__name__,
                        py_file,
                        exc_info=True,
                    )

    def _instantiate_class_plugins(self) -> None:
        """Replace entry-point plugin classes with instances.

        Hook dispatch against a class object leaves ``self`` unbound.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin) or not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s", plugin_name, exc_info=True
                )
                continue
            self._pm.register(instance, name=plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Whether *cls* has any ``@hookimpl``-decorated public methods."""
        marker = f"{PROJECT_NAME}_impl"
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, marker, None):
                return True
        return False
