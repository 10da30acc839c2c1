"""CLI commands for configuration management."""
from __future__ import annotations

import typer
from cmdtree.ui import console, is_json, print_json_output
from cmdtree.error_handler import handle_errors

app = typer.Typer(
    name="config",
    help="Manage cmdtree configuration.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.command()
@handle_errors
def show():
    """Display the resolved configuration (all layers merged)."""
    from rich.panel import Panel
    from rich.table import Table
    from cmdtree.core.config_service import get_config_service

    info = get_config_service().show()
    if is_json():
        print_json_output(info)
        return

    sources = info["sources"]
    console.print(Panel(
        f"Global:  {sources['global_config'] or '[dim]not found[/dim]'}\n"
        f"Project: {sources['project_config'] or '[dim]not found[/dim]'}",
        title="Config Sources",
        border_style="cyan",
    ))

    for section, values in info["resolved"].items():
        if not isinstance(values, dict):
            continue
        table = Table(title=section.capitalize(), show_header=True)
        table.add_column("Setting", style="cyan")
        table.add_column("Value")
        for key, val in values.items():
            table.add_row(key, str(val) if val != "" else "[dim]not set[/dim]")
        console.print(table)


@app.command("set")
@handle_errors
def set_value(
    key: str = typer.Argument(..., help="Config key in dotted notation (e.g. registry.path)"),
    value: str = typer.Argument(..., help="Value to set"),
):
    """Set a global configuration value."""
    from cmdtree.core.config_service import get_config_service
    from cmdtree.errors import ConfigError

    if "." not in key:
        raise ConfigError(f"Config keys are dotted (section.name), got '{key}'", context={"key": key})

    parsed_value: object
    if value.lower() in ("true", "yes"):
        parsed_value = True
    elif value.lower() in ("false", "no"):
        parsed_value = False
    else:
        parsed_value = value

    get_config_service().set_global(key, parsed_value)
    console.print(f"[green]Set[/green] {key} = {parsed_value}")


@app.command()
@handle_errors
def paths():
    """Show config file locations."""
    from cmdtree.core.config_service import get_config_service

    locations = get_config_service().config_paths()
    if is_json():
        print_json_output(locations)
        return
    for name, location in locations.items():
        console.print(f"[cyan]{name}[/cyan]: {location}")
