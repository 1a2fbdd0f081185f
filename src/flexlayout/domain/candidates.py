"""Candidate filename construction for a layout.

For layout ``hero`` in base ``widget`` the names are, in order:

- ``{prefix}widget/hero{ext}`` (only when the subdirectory form is enabled),
- ``{prefix}widget-hero{ext}``,
- ``{prefix}widget{ext}`` (the root-fallback candidate).

Extension points may rewrite the layout name, toggle the subdirectory form,
and replace the whole list.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass

from flexlayout.domain.extensions import ExtensionPoint, ExtensionPoints

DEFAULT_LAYOUT_BASE = "acf-flex-layout"
DEFAULT_EXTENSION = ".php"


class LazyPrefix:
    """Filename prefix read at most once, on first use."""

    def __init__(self, source: Callable[[], str | None]) -> None:
        self._source = source
        self._value: str | None = None
        self._lock = threading.Lock()

    def get(self) -> str:
        if self._value is None:
            with self._lock:
                if self._value is None:
                    self._value = str(self._source() or "")
        return self._value


@dataclass(frozen=True)
class CandidateNames:
    """Ordered candidate filenames for one layout instance.

    Attributes:
        names: Candidate filenames, most specific first.
        root_fallback: The base-only filename (``{prefix}{base}{ext}``),
            which the locator treats specially for bare root lookups.
        layout_name: Layout name after extension rewrites.
        layout_base: Resolved layout base (never empty).
    """

    names: tuple[str, ...]
    root_fallback: str
    layout_name: str
    layout_base: str


class CandidateNameBuilder:
    """Builds :class:`CandidateNames` for a layout name and base."""

    def __init__(
        self,
        extensions: ExtensionPoints,
        prefix: LazyPrefix,
        *,
        default_base: str = DEFAULT_LAYOUT_BASE,
        extension: str = DEFAULT_EXTENSION,
        include_base_as_subdir: bool = False,
    ) -> None:
        self._extensions = extensions
        self._prefix = prefix
        self.default_base = default_base
        self.extension = extension
        self._include_base_as_subdir = include_base_as_subdir

    @property
    def prefix(self) -> str:
        return self._prefix.get()

    def resolve_base(self, layout_base: object) -> str:
        """Coerce *layout_base* to a string, falling back to the default base."""
        base = "" if layout_base is None else str(layout_base)
        return base or self.default_base

    def build(self, layout_name: object, layout_base: object = None) -> CandidateNames:
        base = self.resolve_base(layout_base)
        raw_name = "" if layout_name is None else str(layout_name)

        name = str(self._extensions.apply(ExtensionPoint.LAYOUT_NAME, raw_name, raw_name, base))

        use_subdir = bool(
            self._extensions.apply(
                ExtensionPoint.INCLUDE_BASE_AS_SUBDIR, self._include_base_as_subdir, name, base
            )
        )

        prefix = self.prefix
        ext = self.extension
        names: list[str] = []
        if use_subdir:
            names.append(f"{prefix}{base}/{name}{ext}")
        names.append(f"{prefix}{base}-{name}{ext}")
        root_fallback = f"{prefix}{base}{ext}"
        names.append(root_fallback)

        names = self._extensions.apply_names(ExtensionPoint.BASE_NAMES, names, name, base)

        return CandidateNames(
            names=tuple(names),
            root_fallback=root_fallback,
            layout_name=name,
            layout_base=base,
        )

