"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy LayoutService construction and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from flexlayout.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from flexlayout.config.settings import FlexLayoutSettings
    from flexlayout.services.layouts import LayoutService
    from flexlayout.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The layout service is created on first use so ``--help`` and
    ``--version`` never trigger plugin discovery.
    """

    def __init__(self, settings: FlexLayoutSettings) -> None:
        self.settings = settings
        self._layouts: LayoutService | None = None

        from flexlayout.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def layouts(self) -> LayoutService:
        """The layout service (created lazily on first access)."""
        if self._layouts is None:
            from flexlayout.services.layouts import LayoutService

            self._layouts = LayoutService.from_settings(self.settings)
        return self._layouts

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            verbose=self.settings.verbose,
            no_color=not sys.stdout.isatty(),
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
