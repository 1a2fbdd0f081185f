"""Search path registry — prioritized, per-key template directories.

Paths are stored relative to the two physical roots: a path that starts
with the override root or the base root has that prefix stripped, so the
same directory registered from either theme resolves identically.

INVARIANT: Priorities flatten ascending (natural order), registration order
within a priority. ``_default`` paths are appended, never prepended.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

DEFAULT_KEY = "_default"
DEFAULT_PRIORITY = 10

_DIGITS_RE = re.compile(r"(\d+)")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchPathEntry:
    """A single registered search path."""

    key: str
    priority: Any
    path: str


def normalize_key(key: object) -> str:
    """Map ``None``, non-string and empty keys to :data:`DEFAULT_KEY`."""
    if not isinstance(key, str) or not key:
        return DEFAULT_KEY
    return key


def natural_sort_key(priority: object) -> tuple[tuple[int, int | str], ...]:
    """Sort key that compares numeric runs numerically (``"2" < "10"``)."""
    if isinstance(priority, bool):
        priority = int(priority)
    if isinstance(priority, int):
        return ((0, priority),)
    parts: list[tuple[int, int | str]] = []
    for chunk in _DIGITS_RE.split(str(priority)):
        if not chunk:
            continue
        if chunk.isdigit():
            parts.append((0, int(chunk)))
        else:
            parts.append((1, chunk.lower()))
    return tuple(parts)


class PathRegistry:
    """Process-lifetime store of search paths keyed by layout base.

    Parameters:
        roots: Physical root directories whose prefixes are stripped from
            registered paths. ``None`` entries are ignored.
    """

    def __init__(self, roots: Iterable[Path | str | None] = ()) -> None:
        self._roots = tuple(str(r) for r in roots if r is not None and str(r))
        self._paths: dict[str, dict[Any, list[str]]] = {}
        self._lock = threading.RLock()

    @property
    def roots(self) -> tuple[str, ...]:
        return self._roots

    def normalize_path(self, path: Path | str) -> str:
        """Strip either root prefix from *path*. Idempotent."""
        text = str(path)
        for root in self._roots:
            text = text.removeprefix(root)
        return text

    def register(
        self,
        path: Path | str,
        key: object = None,
        priority: Any = DEFAULT_PRIORITY,
    ) -> None:
        """Add *path* under *key* at *priority*.

        A path that normalizes to an empty string (one of the roots itself)
        is ignored.
        """
        normalized = self.normalize_path(path)
        if not normalized:
            logger.debug("Ignoring search path %s: it is a template root", path)
            return

        bucket_key = normalize_key(key)
        with self._lock:
            priorities = self._paths.setdefault(bucket_key, {})
            priorities.setdefault(priority, []).append(normalized)
        logger.debug(
            "Registered search path %s (key=%s, priority=%s)", normalized, bucket_key, priority
        )

    def paths_for_key(self, key: object) -> list[str]:
        """Return all paths of a single *key*, flattened by ascending priority."""
        with self._lock:
            priorities = self._paths.get(normalize_key(key))
            if not priorities:
                return []
            ordered = sorted(priorities, key=natural_sort_key)
            result: list[str] = []
            for priority in ordered:
                result.extend(priorities[priority])
            return result

    def get_search_paths(self, key: object, include_default: bool = True) -> list[str]:
        """Paths for *key*, followed by the ``_default`` paths when requested.

        No de-duplication: a path registered under both keys appears twice.
        """
        paths = self.paths_for_key(key)
        if include_default:
            paths.extend(self.paths_for_key(DEFAULT_KEY))
        return paths

    def entries(self) -> list[SearchPathEntry]:
        """Snapshot of every registered entry, in flattening order per key."""
        with self._lock:
            result: list[SearchPathEntry] = []
            for key, priorities in self._paths.items():
                for priority in sorted(priorities, key=natural_sort_key):
                    result.extend(
                        SearchPathEntry(key=key, priority=priority, path=p)
                        for p in priorities[priority]
                    )
            return result

    def clear(self) -> None:
        """Drop every registered path."""
        with self._lock:
            self._paths.clear()
