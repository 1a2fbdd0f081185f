"""Command: show the ordered entries a layout lookup checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from flexlayout.commands._base import FlexCommand

if TYPE_CHECKING:
    from flexlayout.commands._context import AppContext


@click.command(
    cls=FlexCommand,
    examples="""\
  flexlayout candidates hero --base widget
  flexlayout --prefix theme- candidates hero --base widget
  flexlayout --json candidates hero""",
)
@click.argument("name")
@click.option("-b", "--base", "layout_base", default=None, help="Layout base.")
@click.pass_obj
def candidates(app: AppContext, name: str, layout_base: str | None) -> None:
    """List candidate names and root-relative entries for layout NAME."""
    from flexlayout.services.resolution import ResolutionService

    app.emit(ResolutionService(app.layouts).candidates(name, layout_base))
