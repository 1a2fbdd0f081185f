"""Command: list the search paths registered for a layout base."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from flexlayout.commands._base import FlexCommand

if TYPE_CHECKING:
    from flexlayout.commands._context import AppContext


@click.command(
    cls=FlexCommand,
    examples="""\
  flexlayout paths widget
  flexlayout paths widget --no-default
  flexlayout paths _default""",
)
@click.argument("key", default="")
@click.option("--no-default", is_flag=True, help="Omit the _default search paths.")
@click.pass_obj
def paths(app: AppContext, key: str, no_default: bool) -> None:
    """List search paths for KEY in lookup order."""
    from flexlayout.services.resolution import ResolutionService

    svc = ResolutionService(app.layouts)
    app.emit(svc.paths(key or None, include_default=not no_default))
