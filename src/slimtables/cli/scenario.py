"""Scenario CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

console = Console()
app = typer.Typer(no_args_is_help=True)


def _load_document(ctx: typer.Context, file: Path):
    """Parse a test document and register its scenarios."""
    from slimtables.core.document import DocumentParser
    from slimtables.errors import SlimError

    config = (ctx.obj or {}).get("config")
    expand_env = config.document.expand_env_vars if config else True

    try:
        document = DocumentParser(expand_env=expand_env).parse(file)
        document.collect()
    except SlimError as e:
        console.print(f"[red]Error loading document:[/red] {e}")
        raise typer.Exit(1)

    return document


def _parse_arguments(arguments: List[str]) -> dict[str, str]:
    parsed = {}
    for argument in arguments:
        name, separator, value = argument.partition("=")
        if not separator:
            console.print(f"[red]Invalid argument (expected name=value):[/red] {argument}")
            raise typer.Exit(1)
        parsed[name.strip()] = value
    return parsed


@app.command("list")
def list_scenarios(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Path to test document YAML file", exists=True),
    output_json: bool = typer.Option(
        False, "--json", "-j", help="Output as JSON"
    ),
):
    """List the scenarios a document declares."""
    from slimtables.core.scenario.matcher import render_template

    document = _load_document(ctx, file)
    scenarios = document.scenarios

    if output_json:
        console.print_json(json.dumps([s.definition.to_dict() for s in scenarios], indent=2))
        return

    if not scenarios:
        console.print("[yellow]No scenarios declared[/yellow]")
        return

    table = Table(title=f"Scenarios in {file.name}")
    table.add_column("Name", style="bold")
    table.add_column("Invoked as")
    table.add_column("Inputs")
    table.add_column("Outputs")

    for scenario in scenarios:
        definition = scenario.definition
        table.add_row(
            definition.name,
            render_template(definition.name_template) or "[dim]-[/dim]",
            ", ".join(definition.inputs),
            ", ".join(sorted(definition.outputs)),
        )

    console.print(table)


@app.command("match")
def match_phrase(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Path to test document YAML file", exists=True),
    phrase: str = typer.Argument(..., help="Invocation phrase, e.g. 'add 3 and 4'"),
):
    """Show which scenario a phrase invokes and with which arguments."""
    document = _load_document(ctx, file)
    scenario, arguments = document.find_scenario_call(phrase)

    if scenario is None:
        console.print(f"[red]✗ No scenario matches:[/red] {phrase}")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] {scenario.name}")
    for name, value in zip(scenario.inputs, arguments):
        console.print(f"  {name} = {value!r}")


@app.command("expand")
def expand_call(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Path to test document YAML file", exists=True),
    phrase: str = typer.Argument(..., help="Scenario name or invocation phrase"),
    arguments: Optional[List[str]] = typer.Option(
        None, "--arg", "-a", help="Named argument as name=value (repeatable)"
    ),
):
    """Print a scenario body with the call's arguments substituted."""
    from slimtables.core.scenario.binder import bind_named, bind_positional
    from slimtables.errors import SlimError

    document = _load_document(ctx, file)
    scenario, captured = document.find_scenario_call(phrase)

    if scenario is None:
        console.print(f"[red]✗ No scenario matches:[/red] {phrase}")
        raise typer.Exit(1)

    try:
        binding = bind_positional(scenario.inputs, captured)
        binding.update(bind_named(scenario.inputs, _parse_arguments(arguments or [])))
        expanded = scenario.expand(binding)
    except SlimError as e:
        console.print(f"[red]Error expanding scenario:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title=scenario.name, show_header=False)
    columns = max(expanded.get_column_count_in_row(r) for r in range(expanded.get_row_count()))
    for _ in range(columns):
        table.add_column()
    for row in range(1, expanded.get_row_count()):
        table.add_row(*expanded.get_row(row))

    console.print(table)
