"""
Main CLI entry point for geophylo.

Provides subcommands:
- convert: Build a geophylogeny from a tree file and a GeoJSON file
- inspect: Parse a tree file and report its shape
- config: Manage conversion configuration files
"""

from __future__ import annotations

import typer
from rich import print as rprint
from rich.console import Console

from geophylo import __version__

app = typer.Typer(
    name="geophylo",
    help="Pair phylogenetic tree leaves with map positions for geophylogeny drawings",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        rprint(f"geophylo version {__version__}")
        raise typer.Exit


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """
    Geophylo: pair phylogenetic tree leaves with map positions.

    Reads a Newick or NEXUS tree and a GeoJSON point collection, keeps the
    taxa that have a location, and lays them out on a drawing canvas.
    """


# Import subcommands
from geophylo.cli import config, convert

app.command(name="convert")(convert.convert)
app.command(name="inspect")(convert.inspect)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
