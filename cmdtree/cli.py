#!/usr/bin/env python3
"""
cmdtree: shell completion for hierarchical command-line tools
(namespace resource verb, name=value arguments, global flags).
"""
from pathlib import Path
from typing import List, Optional

import typer
from cmdtree.ui import console
from cmdtree.error_handler import handle_errors, quiet_errors

app = typer.Typer(
    name="cmdtree",
    help="Shell completion engine for namespace/resource/verb CLIs.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

from cmdtree.commands import autocomplete_cmd, config_cmd

app.add_typer(config_cmd.app, name="config", help="Manage configuration", rich_help_panel="Settings")


@app.callback()
def main_callback(
    registry: Optional[Path] = typer.Option(
        None, "--registry", "-r",
        help="Command registry YAML file. Overrides CMDTREE_REGISTRY.",
    ),
    program: Optional[str] = typer.Option(
        None, "--program",
        help="Program name at the root of the command tree. Overrides CMDTREE_PROGRAM.",
    ),
    json_output: bool = typer.Option(False, "--json", help="Print JSON instead of text."),
    plain: bool = typer.Option(False, "--plain", help="Plain output, no colors."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logs on stderr."),
):
    """Shell completion engine for namespace/resource/verb CLIs."""
    from cmdtree.core.config_service import get_config_service
    from cmdtree.ui import set_json_mode, set_plain_mode, setup_logging

    setup_logging(verbose)
    svc = get_config_service()
    if registry is not None:
        svc.override("registry.path", str(registry))
    if program:
        svc.override("registry.program", program)
    if plain or svc.is_plain():
        set_plain_mode()
    set_json_mode(json_output)


@app.command("complete", rich_help_panel="Shell")
@quiet_errors
def complete_words(
    shell: str = typer.Argument(..., help="Calling shell (bash, zsh, fish)"),
    index: int = typer.Argument(..., help="Index of the word under the cursor"),
    words: Optional[List[str]] = typer.Argument(None, help="Command line words, after '--'"),
):
    """Print completions for the word at INDEX, one per line."""
    from cmdtree.core.config_service import get_config_service
    from cmdtree.errors import UnsupportedShellError

    if shell not in autocomplete_cmd.SHELLS:
        raise UnsupportedShellError(shell, supported=autocomplete_cmd.SHELLS)
    left, current, right = autocomplete_cmd.split_words(index, words or [])
    response = autocomplete_cmd.run_complete(left, current, right, get_config_service().get_program())
    response.suggestions = autocomplete_cmd.shell_suggestions(shell, current, response.suggestions)
    autocomplete_cmd.print_response(response)


@app.command("complete-line", rich_help_panel="Shell")
@quiet_errors
def complete_line(
    line: str = typer.Argument(..., help="Raw command line"),
    point: int = typer.Argument(..., help="Cursor offset in LINE"),
):
    """Print completions for the cursor position in a raw command line."""
    from cmdtree.core.config_service import get_config_service

    left, current, right = autocomplete_cmd.split_line(line, point)
    response = autocomplete_cmd.run_complete(left, current, right, get_config_service().get_program())
    autocomplete_cmd.print_response(response)


@app.command(rich_help_panel="Shell")
@handle_errors
def script(
    shell: str = typer.Option("bash", "--shell", "-s", help="Target shell (bash, zsh, fish)"),
):
    """Print the shell integration script.

    Example: [dim]eval "$(cmdtree --program scw script --shell bash)"[/dim]
    """
    from cmdtree.core.config_service import get_config_service

    print(autocomplete_cmd.render_script(shell, get_config_service().get_program()), end="")


@app.command(rich_help_panel="Info")
@handle_errors
def tree(
    flags: bool = typer.Option(False, "--flags", "-f", help="Include flag nodes"),
):
    """Show the [bold]autocomplete tree[/bold] built from the registry."""
    from cmdtree.autocomplete import build_tree
    from cmdtree.core.config_service import get_config_service
    from cmdtree.core.registry_service import load_registry
    from cmdtree.ui import build_rich_tree, is_json, print_json_output, tree_as_dict

    root = build_tree(load_registry(), get_config_service().get_program())
    if is_json():
        print_json_output(tree_as_dict(root))
        return
    console.print(build_rich_tree(root, show_flags=flags))


@app.command(rich_help_panel="Info")
@handle_errors
def plugins():
    """List available value completers (built-in and plugins)."""
    from rich.table import Table

    from cmdtree.completions import BUILTIN_COMPLETERS
    from cmdtree.plugins import list_all_plugins
    from cmdtree.ui import is_json, print_json_output

    found = list_all_plugins()
    if is_json():
        print_json_output({
            "builtin": sorted(BUILTIN_COMPLETERS),
            "plugins": [
                {"name": p.name, "group": p.group, "module": p.module,
                 "loaded": p.loaded, "error": p.error}
                for p in found
            ],
        })
        return

    table = Table(title="Completers", show_header=True)
    table.add_column("Name", style="cyan")
    table.add_column("Source")
    table.add_column("Status")
    for name in sorted(BUILTIN_COMPLETERS):
        table.add_row(name, "built-in", "[green]ok[/green]")
    for p in found:
        status = "[green]ok[/green]" if p.loaded else f"[red]{p.error}[/red]"
        table.add_row(p.name, p.module, status)
    console.print(table)


if __name__ == "__main__":
    app()
