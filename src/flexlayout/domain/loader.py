"""Template loading contract — override dispatch and the template context.

A located template is handed to the most specific registered handler:
``(base, name)``, then ``(base, None)``, then the default loader. The
default loader receives an explicit :class:`TemplateContext` instead of
names injected into its scope.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# Host-provided ambient names, always bound from the host context.
HOST_BINDINGS: tuple[str, ...] = (
    "posts",
    "post",
    "did_header",
    "query",
    "rewrite",
    "db",
    "version",
    "request",
    "id",
    "comment",
    "user_id",
)

# Names a layout option can never bind. Still reachable through ``layout``.
RESERVED_BINDINGS: frozenset[str] = frozenset(
    {
        "template_file",
        "require_once",
        "layout_name",
        "layout_base",
        "layout",
        *HOST_BINDINGS,
    }
)


@dataclass(frozen=True)
class HostContext:
    """Ambient request state supplied by the host environment.

    Attributes:
        bindings: Values for the names in :data:`HOST_BINDINGS`.
        query_vars: Request query variables, bound after layout options
            wherever the name is still free.
    """

    bindings: Mapping[str, Any] = field(default_factory=dict)
    query_vars: Mapping[str, Any] = field(default_factory=dict)


class TemplateContext(dict[str, Any]):
    """Ordered bindings exposed to a loaded template."""

    @classmethod
    def build(
        cls,
        template_file: Path,
        *,
        require_once: bool,
        layout_name: str | None,
        layout_base: str | None,
        layout: Mapping[str, Any] | None = None,
        host: HostContext | None = None,
    ) -> TemplateContext:
        host = host or HostContext()
        options = dict(layout) if isinstance(layout, Mapping) else {}

        ctx = cls(
            template_file=template_file,
            require_once=require_once,
            layout_name=layout_name,
            layout_base=layout_base,
            layout=options,
        )
        for name in HOST_BINDINGS:
            ctx[name] = host.bindings.get(name)

        for key, value in options.items():
            if isinstance(key, str) and key not in RESERVED_BINDINGS:
                ctx.setdefault(key, value)
        for key, value in host.query_vars.items():
            if isinstance(key, str):
                ctx.setdefault(key, value)
        return ctx


LoadHandler = Callable[[Path, bool, str | None, str | None, TemplateContext], str | None]


class LoaderRegistry:
    """Explicit override handlers keyed by ``(base, name)``."""

    def __init__(self) -> None:
        self._handlers: dict[tuple[str, str | None], LoadHandler] = {}
        self._lock = threading.Lock()

    def register_override(self, base: str, name: str | None, handler: LoadHandler) -> None:
        """Route layouts of *base* (and *name*, if given) to *handler*.

        A later registration for the same key replaces the earlier one.
        """
        if not base:
            msg = "Override handlers need a non-empty layout base"
            raise ValueError(msg)
        with self._lock:
            self._handlers[(base, name or None)] = handler

    def resolve(self, layout_base: str | None, layout_name: str | None) -> LoadHandler | None:
        """Return the most specific override, or ``None`` for the default loader."""
        if not layout_base:
            return None
        with self._lock:
            if layout_name:
                handler = self._handlers.get((layout_base, layout_name))
                if handler is not None:
                    return handler
            return self._handlers.get((layout_base, None))


class TemplateLoader:
    """Dispatches a located template to an override or the default loader.

    Parameters:
        overrides: Registered override handlers.
        default: Handler used when no override matches.
        host: Ambient host context placed in every template context.
    """

    def __init__(
        self,
        overrides: LoaderRegistry,
        default: LoadHandler,
        *,
        host: HostContext | None = None,
    ) -> None:
        self.overrides = overrides
        self._default = default
        self.host = host or HostContext()

    def load(
        self,
        located: Path | None,
        require_single_load: bool = True,
        layout_name: str | None = None,
        layout_base: str | None = None,
        layout: Mapping[str, Any] | None = None,
    ) -> str | None:
        """Load *located*, returning the emitted text (``None`` if nothing ran)."""
        if located is None:
            return None

        context = TemplateContext.build(
            located,
            require_once=require_single_load,
            layout_name=layout_name,
            layout_base=layout_base,
            layout=layout,
            host=self.host,
        )
        handler = self.overrides.resolve(layout_base, layout_name) or self._default
        return handler(located, require_single_load, layout_name, layout_base, context)
