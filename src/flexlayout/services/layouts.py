"""LayoutService — the layout environment every resolution call goes through.

One instance owns the search path registry, the extension points, the
override loaders, the lazily read filename prefix and the output sink.
Nothing is module-global: create one service per theme (or per test) and
pass it where layouts are rendered.

Typical flow::

    service = LayoutService.from_settings(FlexLayoutSettings.from_cli())
    service.register_path(theme_dir / "templates", "widget")
    service.render_layouts(records, "widget")
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from contextlib import contextmanager
from io import StringIO
from typing import TYPE_CHECKING, Any

from flexlayout.config.models import FlexLayoutConfig
from flexlayout.domain.candidates import CandidateNameBuilder, CandidateNames, LazyPrefix
from flexlayout.domain.extensions import ExtensionPoints, as_name_list
from flexlayout.domain.loader import HostContext, LoaderRegistry, TemplateLoader
from flexlayout.domain.locator import TemplateLocator
from flexlayout.domain.registry import DEFAULT_PRIORITY, PathRegistry
from flexlayout.infrastructure.templates import JinjaLayoutRenderer
from flexlayout.plugins.builtins.config_paths import ConfigSearchPathsPlugin
from flexlayout.plugins.manager import PluginManager

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator, Sequence
    from pathlib import Path
    from typing import TextIO

    from flexlayout.config.settings import FlexLayoutSettings
    from flexlayout.domain.extensions import ExtensionCallback, ExtensionPoint
    from flexlayout.domain.loader import LoadHandler

CONFIG_PLUGIN_NAME = "config-search-paths"

logger = logging.getLogger(__name__)


class LayoutService:
    """Registration, lookup and rendering of layout templates.

    Parameters:
        config: Roots, template naming and preconfigured search paths.
        plugins: Plugin manager whose plugins configure this service.
            A private, empty manager is used when omitted.
        host: Ambient host bindings for the default loader.
        output: Stream for rendered text when not capturing
            (``sys.stdout`` at write time when omitted).
        prefix_source: Supplier of the filename prefix, called at most
            once. Defaults to ``config.templates.prefix``.
    """

    def __init__(
        self,
        config: FlexLayoutConfig | None = None,
        *,
        plugins: PluginManager | None = None,
        host: HostContext | None = None,
        output: TextIO | None = None,
        prefix_source: Callable[[], str | None] | None = None,
    ) -> None:
        self.config = config or FlexLayoutConfig()
        templates = self.config.templates
        roots = self.config.roots

        self.registry = PathRegistry((roots.override, roots.base))
        self.extensions = ExtensionPoints()
        self.loaders = LoaderRegistry()
        self._prefix = LazyPrefix(prefix_source or (lambda: templates.prefix))

        self.builder = CandidateNameBuilder(
            self.extensions,
            self._prefix,
            default_base=templates.default_base,
            extension=templates.extension,
            include_base_as_subdir=templates.include_base_as_subdir,
        )
        self.locator = TemplateLocator(
            roots.override,
            roots.base,
            self.extensions,
            default_base=templates.default_base,
            exclude_base_as_root_fallback=templates.exclude_base_as_root_fallback,
        )
        self.loader = TemplateLoader(
            self.loaders, JinjaLayoutRenderer(self.locator.roots), host=host
        )

        self._output = output
        self._sinks: list[TextIO] = []
        self.current_layout: Mapping[str, Any] | None = None

        self.plugins = plugins if plugins is not None else PluginManager()
        if self.plugins.has_plugin(CONFIG_PLUGIN_NAME):
            self.plugins.unregister(name=CONFIG_PLUGIN_NAME)
        self.plugins.register_plugin(
            ConfigSearchPathsPlugin(self.config.search_paths), name=CONFIG_PLUGIN_NAME
        )
        self.plugins.configure(self.registry, self.extensions, self.loaders)

    @classmethod
    def from_settings(
        cls,
        settings: FlexLayoutSettings,
        *,
        host: HostContext | None = None,
        output: TextIO | None = None,
    ) -> LayoutService:
        """Build a service from settings, discovering plugins as configured."""
        plugins = PluginManager()
        names = plugins.discover_and_load(
            entry_points=settings.plugins.entry_points,
            local_dir=settings.plugins.local_dir,
        )
        logger.debug("Loaded plugins: %s", names)
        return cls(settings.to_config(), plugins=plugins, host=host, output=output)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_path(
        self, path: Path | str, key: str | None = None, priority: Any = DEFAULT_PRIORITY
    ) -> None:
        """Add a search path for layouts of base *key* (all bases if empty)."""
        self.registry.register(path, key, priority)

    def register_path_with_priority(self, path: Path | str, key: str | None, priority: Any) -> None:
        self.registry.register(path, key, priority)

    def register_override(self, base: str, name: str | None, handler: LoadHandler) -> None:
        self.loaders.register_override(base, name, handler)

    def add_extension(
        self,
        point: ExtensionPoint | str,
        callback: ExtensionCallback,
        *,
        base: str | None = None,
        name: str | None = None,
    ) -> None:
        self.extensions.add(point, callback, base=base, name=name)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def prefix(self) -> str:
        """The filename prefix; read from its source on first access only."""
        return self._prefix.get()

    def get_search_paths(self, key: str | None, include_default: bool = True) -> list[str]:
        return self.registry.get_search_paths(key, include_default)

    def candidate_names(self, layout_name: object, layout_base: object = None) -> CandidateNames:
        return self.builder.build(layout_name, layout_base)

    def candidate_paths(self, layout_name: object, layout_base: object = None) -> list[str]:
        """The ordered entries :meth:`locate_template` checks under each root."""
        return self.resolve(layout_name, layout_base)[1]

    def resolve(
        self, layout_name: object, layout_base: object = None
    ) -> tuple[CandidateNames, list[str]]:
        """Candidate names and the ordered entry list, built in one pass."""
        candidates = self.builder.build(layout_name, layout_base)
        search_paths = self.registry.get_search_paths(candidates.layout_base)
        entries = self.locator.candidate_paths(candidates, search_paths, self.prefix)
        return candidates, entries

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def locate_template(self, layout_name: object, layout_base: object = None) -> Path | None:
        """Find and load the template for one layout.

        The template is loaded on every call (never once-only); its output
        goes to the current sink. Returns the located path, or ``None``.
        """
        candidates, entries = self.resolve(layout_name, layout_base)
        located = self.find_template(
            entries,
            load=True,
            require_single_load=False,
            layout_name=candidates.layout_name,
            layout_base=candidates.layout_base,
        )
        self.plugins.notify_located(candidates.layout_name, candidates.layout_base, located)
        return located

    def find_template(
        self,
        candidate_names: str | Sequence[str] | None,
        load: bool = False,
        require_single_load: bool = True,
        layout_name: str | None = None,
        layout_base: str | None = None,
    ) -> Path | None:
        """Return the first candidate existing under the override or base root.

        With *load*, the hit is handed to the matching loader and its output
        written to the current sink.
        """
        located = self.locator.locate(as_name_list(candidate_names))
        if load and located is not None:
            text = self.loader.load(
                located, require_single_load, layout_name, layout_base, self.current_layout
            )
            if text:
                self._write(text)
        return located

    def render_layouts(
        self,
        layout_records: Iterable[Any],
        layout_base: object = None,
        capture: bool = False,
    ) -> dict[str, str]:
        """Render every record carrying a layout key.

        With *capture*, each record's output is returned under its layout
        type, ``_`` appended until the key is unique. Otherwise output goes
        to the output stream and the result is empty.
        """
        layout_key = self.config.templates.layout_key
        result: dict[str, str] = {}

        for record in layout_records:
            if not isinstance(record, Mapping) or record.get(layout_key) is None:
                continue
            key = str(record[layout_key])

            with self._layout(record):
                if capture:
                    with self._capture() as buffer:
                        self.locate_template(key, layout_base)
                else:
                    self.locate_template(key, layout_base)

            if capture:
                while key in result:
                    key += "_"
                result[key] = buffer.getvalue()

        return result

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _write(self, text: str) -> None:
        if self._sinks:
            sink = self._sinks[-1]
        else:
            sink = self._output if self._output is not None else sys.stdout
        sink.write(text)

    @contextmanager
    def _capture(self) -> Iterator[StringIO]:
        buffer = StringIO()
        self._sinks.append(buffer)
        try:
            yield buffer
        finally:
            self._sinks.pop()

    @contextmanager
    def _layout(self, record: Mapping[str, Any]) -> Iterator[None]:
        previous = self.current_layout
        self.current_layout = record
        try:
            yield
        finally:
            self.current_layout = previous
