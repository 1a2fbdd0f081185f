"""Subcommand modules for flexlayout.

Provides register_commands() which uses deferred imports to keep
``flexlayout --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from flexlayout.commands.candidates import candidates
    from flexlayout.commands.locate import locate
    from flexlayout.commands.paths import paths
    from flexlayout.commands.render import render

    cli.add_command(paths)
    cli.add_command(candidates)
    cli.add_command(locate)
    cli.add_command(render)
