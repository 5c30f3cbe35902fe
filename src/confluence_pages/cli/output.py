"""Terminal output handling using Rich.

Status messages go to stderr so stdout stays reserved for JSON results.
"""

import json
from typing import Any

import typer
from rich.console import Console


class OutputHandler:
    """Prints status messages and results.

    Attributes:
        verbosity: 0=summary, 1=info, 2=debug
        console: Rich Console writing to stderr
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        self.verbosity = verbosity
        self.console = Console(
            stderr=True,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def result(self, data: Any) -> None:
        """Write a JSON document to stdout."""
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
