"""Shared Rich consoles for CLI output.

Results go to stdout through get_console(); problems go to stderr through
get_error_console() so piped JSON output stays clean.
"""

from typing import Iterable, Sequence

from rich.console import Console
from rich.table import Table

_console: Console | None = None
_error_console: Console | None = None


def get_console() -> Console:
    """Get or create the stdout Console."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def get_error_console() -> Console:
    """Get or create the stderr Console."""
    global _error_console
    if _error_console is None:
        _error_console = Console(stderr=True)
    return _error_console


def safe_print(message: str, style: str | None = None, error: bool = False) -> None:
    """Print a message, to stderr when error is set.

    Args:
        message: Rich markup message
        style: Optional Rich style string (e.g., "bold red", "green")
        error: Write to stderr instead of stdout
    """
    console = get_error_console() if error else get_console()
    if style:
        console.print(message, style=style)
    else:
        console.print(message)


def print_table(
    title: str, columns: Sequence[str], rows: Iterable[Sequence[str]]
) -> None:
    """Print rows as a Rich table with plain string cells."""
    table = Table(title=title, title_justify="left")
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*row)
    get_console().print(table)
