"""Extension points — ordered, optional callback slots.

Every extension point is a chain: callbacks receive the current value plus
``(layout_name, layout_base)`` and return the replacement value. Slots run
from most to least specific:

- ``(base, name)`` slots (three-level points only),
- ``(base, None)`` slots,
- general slots.

Within a slot, callbacks run in registration order. An empty chain is the
identity.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from enum import StrEnum
from typing import Any

ExtensionCallback = Callable[[Any, str, str], Any]


class ExtensionPoint(StrEnum):
    """Named extension points of the resolution pipeline."""

    LAYOUT_NAME = "layout_name"
    INCLUDE_BASE_AS_SUBDIR = "include_base_as_subdir"
    BASE_NAMES = "base_names"
    EXCLUDE_BASE_AS_ROOT_FALLBACK = "exclude_base_as_root_fallback"
    LOCATE = "locate"


# Points that accept a (base, name)-specific slot.
THREE_LEVEL_POINTS = frozenset({ExtensionPoint.BASE_NAMES, ExtensionPoint.LOCATE})

_SlotKey = tuple[str | None, str | None]


class ExtensionPoints:
    """Registry of extension callbacks for one layout environment."""

    def __init__(self) -> None:
        self._slots: dict[ExtensionPoint, dict[_SlotKey, list[ExtensionCallback]]] = {}
        self._lock = threading.Lock()

    def add(
        self,
        point: ExtensionPoint | str,
        callback: ExtensionCallback,
        *,
        base: str | None = None,
        name: str | None = None,
    ) -> None:
        """Register *callback* on *point*.

        ``base`` restricts the callback to one layout base; ``name``
        additionally restricts it to one layout name and requires ``base``.

        Raises:
            ValueError: For an unknown point, a name without a base, or a
                name-specific slot on a two-level point.
        """
        point = ExtensionPoint(point)
        if name is not None:
            if base is None:
                msg = "A name-specific extension callback also needs a base"
                raise ValueError(msg)
            if point not in THREE_LEVEL_POINTS:
                msg = f"Extension point {point.value!r} has no name-specific slot"
                raise ValueError(msg)
        with self._lock:
            slots = self._slots.setdefault(point, {})
            slots.setdefault((base, name), []).append(callback)

    def callbacks(
        self, point: ExtensionPoint | str, layout_name: str, layout_base: str
    ) -> list[ExtensionCallback]:
        """Return the callbacks that apply, in invocation order."""
        point = ExtensionPoint(point)
        with self._lock:
            slots = self._slots.get(point, {})
            ordered: list[ExtensionCallback] = []
            if point in THREE_LEVEL_POINTS:
                ordered.extend(slots.get((layout_base, layout_name), ()))
            ordered.extend(slots.get((layout_base, None), ()))
            ordered.extend(slots.get((None, None), ()))
            return ordered

    def apply(
        self, point: ExtensionPoint | str, value: Any, layout_name: str, layout_base: str
    ) -> Any:
        """Run *value* through every applicable callback of *point*."""
        for callback in self.callbacks(point, layout_name, layout_base):
            value = callback(value, layout_name, layout_base)
        return value

    def apply_names(
        self, point: ExtensionPoint | str, names: list[str], layout_name: str, layout_base: str
    ) -> list[str]:
        """Like :meth:`apply`, coercing every intermediate result to a list."""
        for callback in self.callbacks(point, layout_name, layout_base):
            names = as_name_list(callback(names, layout_name, layout_base))
        return names

    def clear(self) -> None:
        with self._lock:
            self._slots.clear()


def as_name_list(value: Any) -> list[str]:
    """Coerce an extension result into a list of strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]
