"""Load the command registry named by the configuration."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from cmdtree.completions import BUILTIN_COMPLETERS
from cmdtree.errors import RegistryNotFoundError
from cmdtree.models import CompleteFunc, Registry
from cmdtree.plugins import discover_completers

logger = logging.getLogger("cmdtree.registry")


def available_completers() -> dict[str, CompleteFunc]:
    """Built-in completers, overridden by same-named plugins."""
    completers: dict[str, CompleteFunc] = dict(BUILTIN_COMPLETERS)
    completers.update(discover_completers())
    return completers


def load_registry(path: Optional[Path] = None) -> Registry:
    """Load the registry at ``path``, or at the configured location.

    Raises:
        RegistryNotFoundError: no path configured or the file is missing.
        RegistryFormatError: the document is malformed.
        CompleterNotFoundError: an argument names an unknown completer.
    """
    if path is None:
        from cmdtree.core.config_service import get_config_service
        path = get_config_service().get_registry_path()
    if path is None:
        raise RegistryNotFoundError()

    registry = Registry.from_file(Path(path), available_completers())
    logger.debug("Loaded %d commands from %s", len(registry), path)
    return registry
