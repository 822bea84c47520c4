"""
Convert and inspect commands.

Provides commands:
- convert: Build a geophylogeny from a tree file and a GeoJSON file
- inspect: Parse a tree file and report its shape without any GeoJSON
"""
from __future__ import annotations

from enum import Enum
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from geophylo.cli.utils import QuietConsole, print_error, property_table, spinner_progress
from geophylo.core.exceptions import GeophyloError

console = Console()


class SiteTableFormat(str, Enum):
    """Output format of the site table."""

    CSV = "csv"
    PARQUET = "parquet"


def convert(
    tree_file: Path = typer.Argument(
        ...,
        help="Newick or NEXUS tree file",
        exists=True,
        dir_okay=False,
    ),
    geojson_file: Path = typer.Argument(
        ...,
        help="GeoJSON FeatureCollection with Point features",
        exists=True,
        dir_okay=False,
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML configuration file (options below override it)",
        exists=True,
        dir_okay=False,
    ),
    width: int | None = typer.Option(
        None,
        "--width",
        "-W",
        help="Canvas width (default: 800)",
        min=1,
    ),
    height: int | None = typer.Option(
        None,
        "--height",
        "-H",
        help="Canvas height (default: 500)",
        min=1,
    ),
    padding: float | None = typer.Option(
        None,
        "--padding",
        "-p",
        help="Padding fraction on each side, below 0.5 (default: 0.1)",
    ),
    name: str | None = typer.Option(
        None,
        "--name",
        "-n",
        help="Display name of the tree (default: tree file stem)",
    ),
    sites: Path | None = typer.Option(
        None,
        "--sites",
        "-s",
        help="Write the leaf/site table to this file",
    ),
    sites_format: SiteTableFormat = typer.Option(
        SiteTableFormat.CSV,
        "--format",
        "-f",
        help="Site table format: csv or parquet",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show every leaf with its canvas position",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress progress output",
    ),
) -> None:
    """
    Build a geophylogeny from a tree and GeoJSON points.

    Leaves without a GeoJSON point are pruned, the tree is made binary,
    and each remaining leaf is projected onto the canvas.

    Examples:

        # Default 800x500 canvas
        geophylo convert Indo-European.dnd Balto-Slavic.geojson

        # Custom canvas, site table as CSV
        geophylo convert tree.nex points.geojson -W 1200 -H 800 --sites sites.csv
    """
    from pydantic import ValidationError

    from geophylo.core.io_utils import write_site_table
    from geophylo.core.pipeline import convert as run_conversion
    from geophylo.models.config import ConversionConfig

    out = QuietConsole(console, quiet=quiet)

    out.print("\n[bold blue]Geophylo Converter[/bold blue]\n")
    out.print(f"[bold]Tree:[/bold] {escape(str(tree_file))}")
    out.print(f"[bold]GeoJSON:[/bold] {escape(str(geojson_file))}")

    try:
        config = ConversionConfig.from_yaml(config_file) if config_file else ConversionConfig()
        config = config.with_overrides(
            canvas_width=width,
            canvas_height=height,
            padding_fraction=padding,
            tree_name=name,
        )
    except (ValidationError, ValueError) as e:
        print_error(console, str(e), prefix="Invalid configuration")
        raise typer.Exit(code=1) from None

    try:
        with spinner_progress("Converting tree and GeoJSON...", console, quiet):
            geophylogeny = run_conversion(tree_file, geojson_file, config)
    except GeophyloError as e:
        print_error(console, e.full_message)
        raise typer.Exit(code=1) from None
    except (UnicodeDecodeError, PermissionError) as e:
        print_error(console, str(e), prefix="Cannot read input")
        raise typer.Exit(code=1) from None

    tree = geophylogeny.tree
    out.print()
    out.print(
        property_table(
            f"Geophylogeny '{geophylogeny.name}'",
            [
                ("Leaves", f"{tree.leaf_count:,}"),
                ("Internal vertices", f"{tree.leaf_count - 1:,}"),
                ("Sites", f"{len(geophylogeny.sites):,}"),
                ("Canvas", f"{geophylogeny.width} x {geophylogeny.height}"),
            ],
        )
    )

    if verbose:
        leaf_table = Table(title="Leaf Sites", show_header=True)
        leaf_table.add_column("Leaf", justify="right", style="cyan")
        leaf_table.add_column("Taxon", style="green")
        leaf_table.add_column("x", justify="right")
        leaf_table.add_column("y", justify="right")
        for leaf, site in zip(tree.leaves_in_index_order(), geophylogeny.sites):
            leaf_table.add_row(
                str(leaf.id),
                escape(leaf.taxon_name or ""),
                f"{site.x:.2f}",
                f"{site.y:.2f}",
            )
        out.print(leaf_table)

    if sites is not None:
        write_site_table(geophylogeny, sites, sites_format.value)
        out.print(f"\n[bold]Site table:[/bold] {escape(str(sites))}")

    out.print("\n[bold green]Conversion complete![/bold green]\n")


def inspect(
    tree_file: Path = typer.Argument(
        ...,
        help="Newick or NEXUS tree file",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """
    Parse a tree file and report its format and size.
    """
    from geophylo.core.pipeline import read_tree_file

    try:
        parsed = read_tree_file(tree_file)
    except GeophyloError as e:
        print_error(console, e.full_message)
        raise typer.Exit(code=1) from None

    leaves = list(parsed.root.iter_leaves())
    console.print(
        property_table(
            f"Tree {tree_file.name}",
            [
                ("Format", "NEXUS" if parsed.is_nexus else "Newick"),
                ("Leaves", f"{len(leaves):,}"),
                ("Internal nodes", f"{parsed.root.count_internal():,}"),
                ("Translate entries", f"{len(parsed.translate):,}"),
            ],
        )
    )
