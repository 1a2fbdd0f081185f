"""ResolutionService — CLI-facing wrappers around a LayoutService.

Four surfaces, each returning a ServiceResult:
- paths: registered search paths for a key
- candidates: the ordered entries a layout lookup checks
- locate: find-only lookup of one layout's template
- render: render a batch of layout records
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from flexlayout.domain.errors import TemplateLoadError
from flexlayout.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from collections.abc import Iterable

    from flexlayout.services.layouts import LayoutService


class ResolutionService:
    """Reports resolution state for a layout environment."""

    def __init__(self, layouts: LayoutService) -> None:
        self._layouts = layouts

    def paths(self, key: str | None, *, include_default: bool = True) -> ServiceResult:
        paths = self._layouts.get_search_paths(key, include_default)
        return ServiceResult(
            ok=True,
            op="paths",
            data={"key": key or "_default", "paths": paths, "count": len(paths)},
        )

    def candidates(self, layout_name: str, layout_base: str | None = None) -> ServiceResult:
        names, entries = self._layouts.resolve(layout_name, layout_base)
        return ServiceResult(
            ok=True,
            op="candidates",
            data={
                "layout_name": names.layout_name,
                "layout_base": names.layout_base,
                "names": list(names.names),
                "entries": entries,
            },
        )

    def locate(self, layout_name: str, layout_base: str | None = None) -> ServiceResult:
        """Find the template for a layout without loading it."""
        names, entries = self._layouts.resolve(layout_name, layout_base)
        located = self._layouts.find_template(entries)
        if located is None:
            return ServiceResult(
                ok=False,
                op="locate",
                error=ServiceError(
                    code="NOT_FOUND",
                    message=(
                        f"No template found for layout '{names.layout_name}' "
                        f"in base '{names.layout_base}'"
                    ),
                    detail={"checked": len(entries)},
                ),
            )
        return ServiceResult(
            ok=True,
            op="locate",
            data={
                "layout_name": names.layout_name,
                "layout_base": names.layout_base,
                "path": str(located),
            },
        )

    def render(
        self,
        records: Iterable[Any],
        layout_base: str | None = None,
        *,
        capture: bool = False,
    ) -> ServiceResult:
        """Render *records*; captured output lands in ``data["layouts"]``."""
        records = list(records)
        try:
            rendered = self._layouts.render_layouts(records, layout_base, capture)
        except TemplateLoadError as exc:
            return ServiceResult(
                ok=False,
                op="render",
                error=ServiceError(
                    code="LOAD_FAILED",
                    message=str(exc),
                    detail={"path": str(exc.path)},
                ),
            )

        layout_key = self._layouts.config.templates.layout_key
        warnings = [
            f"Record {index} has no '{layout_key}' field"
            for index, record in enumerate(records)
            if not isinstance(record, Mapping) or record.get(layout_key) is None
        ]
        return ServiceResult(
            ok=True,
            op="render",
            data={"count": len(records) - len(warnings), "layouts": rendered},
            warnings=warnings,
        )
