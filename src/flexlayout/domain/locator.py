"""Template location across search paths and the two physical roots.

Lookup order is candidate-major: every candidate entry is checked under the
override root, then the base root, before the next entry is considered.

INVARIANT: Exhausting every candidate is a normal outcome (``None``),
never an error.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from flexlayout.domain.extensions import ExtensionPoint, ExtensionPoints

if TYPE_CHECKING:
    from collections.abc import Sequence

    from flexlayout.domain.candidates import CandidateNames

logger = logging.getLogger(__name__)


class TemplateLocator:
    """Combines candidate names with search paths and checks the roots.

    Parameters:
        override_root: Directory searched first (child theme).
        base_root: Directory searched second (parent theme).
        extensions: Extension points for root-fallback and final list rewrites.
        default_base: The default layout base token; root fallbacks are
            never added for it.
        exclude_base_as_root_fallback: Initial value of the exclusion flag.
    """

    def __init__(
        self,
        override_root: Path | None,
        base_root: Path | None,
        extensions: ExtensionPoints,
        *,
        default_base: str,
        exclude_base_as_root_fallback: bool = True,
    ) -> None:
        self.override_root = override_root
        self.base_root = base_root
        self._extensions = extensions
        self._default_base = default_base
        self._exclude_base_as_root_fallback = exclude_base_as_root_fallback

    @property
    def roots(self) -> tuple[Path, ...]:
        return tuple(r for r in (self.override_root, self.base_root) if r is not None)

    def candidate_paths(
        self,
        candidates: CandidateNames,
        search_paths: Sequence[str],
        prefix: str,
    ) -> list[str]:
        """Assemble the ordered list of root-relative entries to check."""
        name, base = candidates.layout_name, candidates.layout_base
        entries = list(candidates.names)

        if search_paths:
            paths = [f"{path}/{entry}" for path in search_paths for entry in entries]

            if not prefix and base != self._default_base:
                exclude = bool(
                    self._extensions.apply(
                        ExtensionPoint.EXCLUDE_BASE_AS_ROOT_FALLBACK,
                        self._exclude_base_as_root_fallback,
                        name,
                        base,
                    )
                )
                skipped = candidates.root_fallback if exclude else None
                paths.extend(entry for entry in entries if entry != skipped)

            entries = paths

        return self._extensions.apply_names(ExtensionPoint.LOCATE, entries, name, base)

    def locate(self, entries: Sequence[str]) -> Path | None:
        """Return the first entry that exists as a file under a root."""
        roots = self.roots
        for entry in entries:
            if not entry:
                continue
            relative = entry.lstrip("/")
            if not relative:
                continue
            for root in roots:
                candidate = root / relative
                if candidate.is_file():
                    logger.debug("Located template %s", candidate)
                    return candidate
        logger.debug("No template found among %d candidates", len(entries))
        return None
