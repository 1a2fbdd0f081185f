"""Command: render a JSON array of layout records."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, TextIO

import click

from flexlayout.commands._base import FlexCommand

if TYPE_CHECKING:
    from flexlayout.commands._context import AppContext


def _read_records(source: TextIO) -> list[Any]:
    try:
        data = json.load(source)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in {source.name}: {exc}"
        raise click.ClickException(msg) from exc
    if not isinstance(data, list):
        msg = f"Expected a JSON array of layout records in {source.name}"
        raise click.ClickException(msg)
    return data


@click.command(
    cls=FlexCommand,
    examples="""\
  flexlayout render layouts.json --base widget
  cat layouts.json | flexlayout render - --capture
  flexlayout --json render layouts.json --capture""",
)
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("-b", "--base", "layout_base", default=None, help="Layout base.")
@click.option("--capture", is_flag=True, help="Report each layout's output instead of printing.")
@click.pass_obj
def render(app: AppContext, source: TextIO, layout_base: str | None, capture: bool) -> None:
    """Render the layout records in SOURCE (a file, or - for stdin).

    Without --capture the rendered templates are written to stdout as-is.
    """
    from flexlayout.services.resolution import ResolutionService

    records = _read_records(source)
    result = ResolutionService(app.layouts).render(records, layout_base, capture=capture)
    if capture or not result.ok:
        app.emit(result)
        return
    for warning in result.warnings:
        click.echo(f"WARNING: {warning}", err=True)
