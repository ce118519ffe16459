"""
Console output for the talsim-sos CLI.

Thin wrapper around :class:`rich.console.Console` so that command handlers
print status lines and tables consistently, and tests can swap in a console
that records output.
"""

from typing import List, Optional, Sequence

from rich.console import Console as RichConsole
from rich.table import Table


class Console:
    """Status-line and table output for CLI commands."""

    def __init__(self, stdout: Optional[RichConsole] = None, stderr: Optional[RichConsole] = None):
        self._out = stdout or RichConsole(highlight=False)
        self._err = stderr or RichConsole(stderr=True, highlight=False)

    def info(self, message: str) -> None:
        self._out.print(f"[cyan]ℹ[/cyan] {message}")

    def success(self, message: str) -> None:
        self._out.print(f"[green]✓[/green] {message}")

    def warning(self, message: str) -> None:
        self._err.print(f"[yellow]⚠[/yellow] {message}")

    def error(self, message: str) -> None:
        self._err.print(f"[red]✗[/red] {message}")

    def indent(self, message: str, level: int = 1) -> None:
        self._out.print("  " * level + message)

    def newline(self) -> None:
        self._out.print()

    def table(self, columns: Sequence[str], rows: List[Sequence[str]], title: Optional[str] = None) -> None:
        table = Table(title=title)
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*[str(cell) for cell in row])
        self._out.print(table)


console = Console()
