"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich markup, one entry per line
for list payloads) or machines (--json).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from rich.markup import escape

from flexlayout.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from flexlayout.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output mode flags taken from the CLI settings."""

    model_config = {"frozen": True}

    json_output: bool = False
    verbose: bool = False
    no_color: bool = True


def _print_value(console: Console, key: str, value: Any) -> None:
    if isinstance(value, list):
        console.print(f"  [flex.key]{escape(key)}:[/] ({len(value)})")
        for item in value:
            console.print(f"    [flex.path]{escape(str(item))}[/]")
    elif isinstance(value, dict):
        console.print(f"  [flex.key]{escape(key)}:[/]")
        for sub_key, sub_value in value.items():
            console.print(f"    {escape(str(sub_key))}: {escape(str(sub_value))}")
    else:
        console.print(f"  [flex.key]{escape(key)}:[/] {escape(str(value))}")


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    console = create_console(no_color=settings.no_color)
    if result.ok:
        console.print(f"[flex.ok]OK[/]: [flex.op]{result.op}[/]")
        for key, value in result.data.items():
            _print_value(console, key, value)
    else:
        message = result.error.message if result.error else "Unknown error"
        console.print(f"[flex.error]ERROR[/]: [flex.op]{result.op}[/] - {escape(message)}")
        if settings.verbose and result.error and result.error.detail:
            for key, value in result.error.detail.items():
                _print_value(console, key, value)
    return get_output(console).rstrip("\n")
