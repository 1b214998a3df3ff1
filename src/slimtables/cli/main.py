"""Main CLI entry point for slimtables."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from slimtables import __version__
from slimtables.cli import scenario

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
)

console = Console()

app = typer.Typer(
    name="slimtables",
    help="Scenario tables for table-driven fixture tests",
    add_completion=True,
    no_args_is_help=True,
)

app.add_typer(scenario.app, name="scenario", help="Scenario inspection commands")


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        console.print(f"slimtables version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
        exists=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """slimtables - scenario tables for table-driven fixture tests."""
    from slimtables.config.loader import apply_config, load_config

    ctx.ensure_object(dict)
    ctx.obj["config_file"] = config_file
    ctx.obj["verbose"] = verbose

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = load_config(config_file)
        apply_config(config)
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(1)

    ctx.obj["config"] = config


if __name__ == "__main__":
    app()
