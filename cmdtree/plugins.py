"""Plugin discovery via setuptools entry points.

Third-party packages can register value completers by declaring entry points
in their ``pyproject.toml``::

    [project.entry-points."cmdtree.completers"]
    server-id = "cmdtree_instance:complete_server_id"

After ``pip install cmdtree-instance``, registry files can use
``complete: server-id`` and the completer shows up in ``cmdtree plugins``.

Entry point groups:
    cmdtree.completers - value completion callables ``(prefix) -> list[str]``
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib.metadata import entry_points
from typing import Any

logger = logging.getLogger("cmdtree.plugins")

COMPLETER_GROUP = "cmdtree.completers"

ALL_GROUPS = [COMPLETER_GROUP]


@dataclass
class PluginInfo:
    """Metadata about a discovered plugin."""

    name: str
    group: str
    module: str
    loaded: bool = False
    error: str = ""


def discover_plugins(group: str) -> dict[str, Any]:
    """Discover all registered plugins for a given entry point group.

    Args:
        group: Entry point group name (e.g. ``cmdtree.completers``).

    Returns:
        Dict mapping plugin name to its loaded object.
    """
    plugins = {}
    for ep in entry_points(group=group):
        try:
            plugins[ep.name] = ep.load()
            logger.debug("Loaded plugin %s from %s", ep.name, ep.value)
        except Exception as e:
            logger.warning("Failed to load plugin %s: %s", ep.name, e)
    return plugins


def discover_completers() -> dict[str, Any]:
    """Discover all registered value completers via entry points."""
    return discover_plugins(COMPLETER_GROUP)


def list_all_plugins() -> list[PluginInfo]:
    """List all discovered plugins across all groups with load status."""
    results = []
    for group in ALL_GROUPS:
        for ep in entry_points(group=group):
            info = PluginInfo(name=ep.name, group=group, module=ep.value)
            try:
                ep.load()
                info.loaded = True
            except Exception as e:
                info.error = str(e)
            results.append(info)
    return results


def get_completer_names() -> list[str]:
    """Sorted names of built-in and plugin completers."""
    from cmdtree.completions import BUILTIN_COMPLETERS

    eps = entry_points(group=COMPLETER_GROUP)
    return sorted(set(BUILTIN_COMPLETERS) | {ep.name for ep in eps})
