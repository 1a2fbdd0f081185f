"""Exception hierarchy.

Resolution never raises: "nothing matched" is ``None``. Only the load step
has fatal failures.
"""

from __future__ import annotations


class FlexLayoutError(Exception):
    """Base class for all flexlayout errors."""


class TemplateLoadError(FlexLayoutError):
    """A located template could not be loaded or rendered."""

    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load template {path}: {reason}")
