"""Jinja2 rendering of located layout templates with override-root precedence."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import Environment, FileSystemLoader, TemplateError, TemplateNotFound

from flexlayout.domain.errors import TemplateLoadError

if TYPE_CHECKING:
    from jinja2 import Template

    from flexlayout.domain.loader import TemplateContext

logger = logging.getLogger(__name__)


def build_template_environment(roots: tuple[Path, ...]) -> Environment:
    """Build a Jinja2 environment searching the override root before the base root.

    Includes and ``{% extends %}`` inside a layout template therefore follow
    the same child-before-parent precedence as layout lookup itself.
    """
    return Environment(
        loader=FileSystemLoader([str(root) for root in roots]),
        keep_trailing_newline=True,
    )


class JinjaLayoutRenderer:
    """Default load handler: renders the located file with its template context.

    Tracks which paths have been loaded so ``require_once`` loads emit a
    file at most once per renderer. A load that fails is not recorded.
    """

    def __init__(self, roots: tuple[Path, ...]) -> None:
        self._roots = roots
        self._env = build_template_environment(roots)
        self._loaded: set[Path] = set()
        self._lock = threading.Lock()

    def __call__(
        self,
        located: Path,
        require_once: bool,
        layout_name: str | None,
        layout_base: str | None,
        context: TemplateContext,
    ) -> str:
        if require_once:
            with self._lock:
                if located in self._loaded:
                    logger.debug("Skipping already loaded template %s", located)
                    return ""
                self._loaded.add(located)

        try:
            return self._render(located, context)
        except TemplateLoadError:
            if require_once:
                with self._lock:
                    self._loaded.discard(located)
            raise

    def _render(self, located: Path, context: TemplateContext) -> str:
        template = self._get_template(located)
        try:
            return template.render(context)
        except TemplateError as exc:
            raise TemplateLoadError(located, str(exc)) from exc

    def _get_template(self, located: Path) -> Template:
        try:
            for root in self._roots:
                if located.is_relative_to(root):
                    return self._env.get_template(located.relative_to(root).as_posix())
            source = located.read_text(encoding="utf-8")
            return self._env.from_string(source)
        except TemplateNotFound as exc:
            raise TemplateLoadError(located, "template file not found") from exc
        except OSError as exc:
            raise TemplateLoadError(located, str(exc)) from exc
        except TemplateError as exc:
            raise TemplateLoadError(located, str(exc)) from exc
