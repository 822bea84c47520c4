"""
Shared CLI helpers for geophylo commands.

Spinner, quiet-aware printing, the two-column property tables used by
``convert`` and ``inspect``, and escaped error output.
"""

from __future__ import annotations

from collections.abc import Generator, Iterable
from contextlib import contextmanager
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table


@contextmanager
def spinner_progress(
    description: str,
    console: Console | None = None,
    quiet: bool = False,
) -> Generator[Progress, None, None]:
    """Show a spinner with elapsed time while a conversion stage runs.

    Args:
        description: Task description to display.
        console: Rich Console to draw on.
        quiet: If True, the progress display is disabled.

    Yields:
        The Progress instance, also when disabled.
    """
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=None if quiet else console,
        disable=quiet,
    ) as progress:
        progress.add_task(description=description, total=None)
        yield progress


class QuietConsole:
    """Rich console proxy whose ``print`` is a no-op in quiet mode.

    Errors should go through ``.console`` so they show up regardless.
    """

    def __init__(self, console: Console, quiet: bool = False):
        self._console = console
        self._quiet = quiet

    @property
    def console(self) -> Console:
        return self._console

    def print(self, *args: Any, **kwargs: Any) -> None:
        if not self._quiet:
            self._console.print(*args, **kwargs)

    def __getattr__(self, name: str) -> Any:
        return getattr(self._console, name)


def property_table(title: str, rows: Iterable[tuple[str, str]]) -> Table:
    """Build a Property/Value summary table."""
    table = Table(title=escape(title), show_header=True)
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right", style="magenta")
    for name, value in rows:
        table.add_row(name, escape(value))
    return table


def print_error(console: Console, message: str, prefix: str = "Error") -> None:
    """Print a red error line; the message is escaped so [labels] survive."""
    console.print(f"[red]{prefix}: {escape(message)}[/red]")
