"""Root CLI group for flexlayout with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from flexlayout import __version__
from flexlayout.commands import register_commands
from flexlayout.commands._context import AppContext
from flexlayout.config.settings import FlexLayoutSettings

_DIR = click.Path(file_okay=False, path_type=Path)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="flexlayout")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--override-root", type=_DIR, default=None, help="Root searched first.")
@click.option("--base-root", type=_DIR, default=None, help="Root searched second.")
@click.option("--prefix", default=None, help="Filename prefix for every candidate.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    override_root: Path | None,
    base_root: Path | None,
    prefix: str | None,
) -> None:
    """flexlayout — resolve and render layout templates across theme roots."""
    ctx.ensure_object(dict)
    settings = FlexLayoutSettings.from_cli(
        config_path=config_path,
        override_root=override_root,
        base_root=base_root,
        prefix=prefix,
        json_output=json_output or None,
        verbose=verbose or None,
        log_json=log_json or None,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
