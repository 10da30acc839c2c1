"""Unified CLI error handler for cmdtree commands."""

from __future__ import annotations

import functools
import logging
import os
import traceback

import typer

from cmdtree.errors import (
    CmdtreeError,
    CompleterNotFoundError,
    RegistryFormatError,
    RegistryNotFoundError,
    UnsupportedShellError,
)
from cmdtree.ui import err_console

logger = logging.getLogger("cmdtree.error_handler")


def _debug_mode() -> bool:
    """Check if debug output is enabled via CMDTREE_DEBUG env var."""
    return os.environ.get("CMDTREE_DEBUG", "").lower() in ("1", "true", "yes")


def _render_cmdtree_error(e: CmdtreeError) -> None:
    """Render a CmdtreeError with Rich formatting and context."""
    err_console.print(f"\n[bold red]Error:[/bold red] {e}")

    if e.context and _debug_mode():
        context_parts = [
            f"  [dim]{key}:[/dim] {value}" for key, value in e.context.items() if value
        ]
        if context_parts:
            err_console.print("[dim]Context:[/dim]")
            for part in context_parts:
                err_console.print(part)

    # Actionable hints based on error type
    if isinstance(e, RegistryNotFoundError):
        err_console.print(
            "[dim]Pass --registry, set CMDTREE_REGISTRY, or run "
            "'cmdtree config set registry.path <file>'.[/dim]"
        )
    elif isinstance(e, RegistryFormatError):
        err_console.print("[dim]Registry files need a top-level 'commands' list.[/dim]")
    elif isinstance(e, CompleterNotFoundError):
        err_console.print("[dim]Run 'cmdtree plugins' to see available completers.[/dim]")
    elif isinstance(e, UnsupportedShellError):
        err_console.print("[dim]Run 'cmdtree script --help' for supported shells.[/dim]")


def handle_errors(func):
    """Decorator that catches CmdtreeError and renders formatted CLI output.

    Usage::

        @app.command()
        @handle_errors
        def my_command(...):
            ...  # no try/except needed
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except CmdtreeError as e:
            _render_cmdtree_error(e)
            if _debug_mode():
                err_console.print(f"\n[dim]{traceback.format_exc()}[/dim]")
            raise typer.Exit(e.exit_code)
        except KeyboardInterrupt:
            err_console.print("\n[dim]Interrupted.[/dim]")
            raise typer.Exit(130)
        except (typer.Exit, typer.Abort, SystemExit):
            raise
        except Exception as e:
            err_console.print(f"\n[bold red]Unexpected error:[/bold red] {e}")
            if _debug_mode():
                err_console.print(f"\n[dim]{traceback.format_exc()}[/dim]")
            else:
                err_console.print("[dim]Set CMDTREE_DEBUG=1 for full traceback.[/dim]")
            raise typer.Exit(1)

    return wrapper


def quiet_errors(func):
    """Decorator for shell-facing commands: failures print nothing.

    The shell must never see an error message in place of completions.
    With CMDTREE_DEBUG set, errors are rendered like ``handle_errors``.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if _debug_mode():
            return handle_errors(func)(*args, **kwargs)
        try:
            return func(*args, **kwargs)
        except (typer.Exit, typer.Abort, SystemExit):
            raise
        except Exception as e:
            logger.debug("Completion failed: %s", e)
            raise typer.Exit(0)

    return wrapper
