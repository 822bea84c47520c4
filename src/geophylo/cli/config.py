"""
Config command for conversion settings.

Provides subcommands:
- init: Write the default configuration as YAML
- show: Print the effective configuration of a YAML file
"""
from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from geophylo.cli.utils import print_error
from geophylo.models.config import ConversionConfig

app = typer.Typer(
    name="config",
    help="Create and check conversion configuration files",
    no_args_is_help=True,
)

console = Console()


@app.command(name="init")
def init(
    output: Path = typer.Argument(..., help="Path of the YAML file to create"),
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite an existing file",
    ),
) -> None:
    """Write the default configuration to a YAML file."""
    if output.exists() and not force:
        print_error(console, f"{output} exists (use --force to overwrite)")
        raise typer.Exit(code=1) from None

    output.parent.mkdir(parents=True, exist_ok=True)
    ConversionConfig().to_yaml(output)
    console.print(f"[bold green]Wrote default configuration:[/bold green] {output}")


@app.command(name="show")
def show(
    config_file: Path = typer.Argument(
        ...,
        help="YAML configuration file",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """Validate a YAML file and print the effective configuration."""
    from pydantic import ValidationError

    try:
        config = ConversionConfig.from_yaml(config_file)
    except (ValidationError, ValueError) as e:
        print_error(console, str(e), prefix="Invalid configuration")
        raise typer.Exit(code=1) from None

    console.print(config.to_yaml_str(), end="", markup=False, highlight=False)
