"""Custom exception hierarchy for cmdtree.

All cmdtree-specific exceptions derive from CmdtreeError. Each exception
carries an optional ``context`` dict with structured metadata
(registry path, completer name, offending word, etc.) that the CLI error
handler can render.

Exception hierarchy::

    CmdtreeError
    ├── RegistryError
    │   ├── RegistryNotFoundError
    │   └── RegistryFormatError
    ├── CompleterNotFoundError
    ├── UnresolvedWordError
    ├── UnsupportedShellError
    └── ConfigError
"""
from __future__ import annotations

from typing import Optional


class CmdtreeError(Exception):
    """Base class for all cmdtree exceptions.

    Args:
        message: Human-readable error description.
        context: Optional dict of structured metadata.
    """

    exit_code: int = 1

    def __init__(self, message: str, context: Optional[dict] = None):
        self.context = context or {}
        super().__init__(message)


# ── Registry Errors ────────────────────────────────────────────────

class RegistryError(CmdtreeError):
    """Base class for command registry errors."""

    def __init__(self, message: str, path: str = "", context: Optional[dict] = None):
        ctx = {"registry": path}
        if context:
            ctx.update(context)
        super().__init__(message, context=ctx)


class RegistryNotFoundError(RegistryError):
    """Raised when the registry file does not exist or none is configured."""

    def __init__(self, path: str = ""):
        if path:
            msg = f"Registry file '{path}' not found"
        else:
            msg = "No command registry configured"
        super().__init__(msg, path=path)


class RegistryFormatError(RegistryError):
    """Raised when a registry document is malformed."""
    pass


class CompleterNotFoundError(CmdtreeError):
    """Raised when an argument references an unknown completion callback."""

    def __init__(self, completer: str, argument: str = "", available: Optional[list[str]] = None):
        available_str = f". Available: {', '.join(available)}" if available else ""
        super().__init__(
            f"Completer '{completer}' not found{available_str}",
            context={"completer": completer, "argument": argument},
        )


# ── Completion Errors ──────────────────────────────────────────────

class UnresolvedWordError(CmdtreeError):
    """Raised when a word left of the cursor matches nothing in the tree."""

    def __init__(self, word: str, position: int = -1):
        super().__init__(
            f"Cannot resolve word '{word}'",
            context={"word": word, "position": position},
        )


class UnsupportedShellError(CmdtreeError):
    """Raised when no integration script exists for a shell."""

    def __init__(self, shell: str, supported: Optional[list[str]] = None):
        supported_str = f". Supported: {', '.join(supported)}" if supported else ""
        super().__init__(
            f"Shell '{shell}' is not supported{supported_str}",
            context={"shell": shell},
        )


class ConfigError(CmdtreeError):
    """Raised when configuration is invalid or missing."""
    pass
