"""Command: find the template that would render a layout."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from flexlayout.commands._base import FlexCommand

if TYPE_CHECKING:
    from flexlayout.commands._context import AppContext


@click.command(
    cls=FlexCommand,
    examples="""\
  flexlayout locate hero --base widget
  flexlayout --override-root child --base-root parent locate hero -b widget
  flexlayout --json locate hero""",
)
@click.argument("name")
@click.option("-b", "--base", "layout_base", default=None, help="Layout base.")
@click.pass_obj
def locate(app: AppContext, name: str, layout_base: str | None) -> None:
    """Print the template path for layout NAME without rendering it."""
    from flexlayout.services.resolution import ResolutionService

    app.emit(ResolutionService(app.layouts).locate(name, layout_base))
