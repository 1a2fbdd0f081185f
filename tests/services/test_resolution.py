"""Tests for ResolutionService — the CLI-facing ServiceResult wrappers."""

from __future__ import annotations

import json
from pathlib import Path
from types import MappingProxyType

import pytest

from flexlayout.domain.extensions import ExtensionPoint
from flexlayout.services.layouts import LayoutService
from flexlayout.services.resolution import ResolutionService
from flexlayout.services.result import ServiceError, ServiceResult
from tests.conftest import write_template


@pytest.fixture
def resolution(service: LayoutService) -> ResolutionService:
    return ResolutionService(service)


class TestServiceResult:
    def test_defaults(self) -> None:
        result = ServiceResult(ok=True, op="paths")
        assert result.data == {}
        assert result.warnings == []
        assert result.error is None

    def test_json_serialization(self) -> None:
        error = ServiceError(code="NOT_FOUND", message="missing", detail={"checked": 2})
        parsed = json.loads(ServiceResult(ok=False, op="locate", error=error).model_dump_json())
        assert parsed["error"]["code"] == "NOT_FOUND"
        assert parsed["error"]["detail"] == {"checked": 2}

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="paths")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]


class TestPaths:
    def test_lists_paths_with_default(
        self, service: LayoutService, resolution: ResolutionService
    ) -> None:
        service.register_path("/widgets", "widget")
        service.register_path("/shared")
        result = resolution.paths("widget")
        assert result.ok
        assert result.data == {"key": "widget", "paths": ["/widgets", "/shared"], "count": 2}

    def test_without_default(self, service: LayoutService, resolution: ResolutionService) -> None:
        service.register_path("/shared")
        assert resolution.paths("widget", include_default=False).data["paths"] == []

    def test_empty_key_reports_default(self, resolution: ResolutionService) -> None:
        assert resolution.paths("").data["key"] == "_default"


class TestCandidates:
    def test_reports_names_and_entries(
        self, service: LayoutService, resolution: ResolutionService
    ) -> None:
        service.register_path("/t", "widget")
        data = resolution.candidates("hero", "widget").data
        assert data["layout_name"] == "hero"
        assert data["layout_base"] == "widget"
        assert data["names"] == ["widget-hero.php", "widget.php"]
        assert data["entries"] == ["/t/widget-hero.php", "/t/widget.php", "widget-hero.php"]

    def test_default_base(self, resolution: ResolutionService) -> None:
        assert resolution.candidates("hero").data["layout_base"] == "acf-flex-layout"


class TestLocate:
    def test_found(self, resolution: ResolutionService, base_root: Path) -> None:
        write_template(base_root, "widget-hero.php")
        result = resolution.locate("hero", "widget")
        assert result.ok
        assert result.data["path"] == str(base_root / "widget-hero.php")

    def test_not_found(self, resolution: ResolutionService) -> None:
        result = resolution.locate("hero", "widget")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert result.error.detail == {"checked": 2}

    def test_does_not_render(
        self, resolution: ResolutionService, override_root: Path, output
    ) -> None:
        write_template(override_root, "widget-hero.php", "body")
        resolution.locate("hero", "widget")
        assert output.getvalue() == ""


class TestRender:
    def test_captured_layouts_in_data(
        self, resolution: ResolutionService, override_root: Path
    ) -> None:
        write_template(override_root, "widget-hero.php", "{{ title }}")
        records = [{"type": "hero", "title": "a"}, {"title": "untyped"}]
        result = resolution.render(records, "widget", capture=True)
        assert result.ok
        assert result.data == {"count": 1, "layouts": {"hero": "a"}}
        assert result.warnings == ["Record 1 has no 'type' field"]

    def test_load_failure(self, resolution: ResolutionService, override_root: Path) -> None:
        write_template(override_root, "widget-hero.php", "{% if %}")
        result = resolution.render([{"type": "hero"}], "widget", capture=True)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "LOAD_FAILED"
        assert result.error.detail["path"] == str(override_root / "widget-hero.php")

    def test_non_dict_mapping_records_counted(
        self, resolution: ResolutionService, override_root: Path
    ) -> None:
        write_template(override_root, "widget-hero.php", "H")
        records = [MappingProxyType({"type": "hero"})]
        result = resolution.render(records, "widget", capture=True)
        assert result.data == {"count": 1, "layouts": {"hero": "H"}}
        assert result.warnings == []


class TestSinglePass:
    @pytest.fixture
    def calls(self, service: LayoutService) -> list[str]:
        seen: list[str] = []
        service.add_extension(ExtensionPoint.LAYOUT_NAME, lambda v, n, b: seen.append(v) or v)
        return seen

    def test_candidates_builds_once(
        self, resolution: ResolutionService, calls: list[str]
    ) -> None:
        resolution.candidates("hero", "widget")
        assert calls == ["hero"]

    def test_locate_builds_once(self, resolution: ResolutionService, calls: list[str]) -> None:
        resolution.locate("hero", "widget")
        assert calls == ["hero"]
