"""Built-in argument value completion functions.

Registry files refer to these by name (``complete: zone``).
"""
from __future__ import annotations

ZONES = ["fr-par-1", "fr-par-2", "fr-par-3", "nl-ams-1", "nl-ams-2", "pl-waw-1"]
REGIONS = ["fr-par", "nl-ams", "pl-waw"]


def complete_zone(incomplete: str) -> list[str]:
    """Complete availability zone names."""
    return [z for z in ZONES if z.startswith(incomplete)]


def complete_region(incomplete: str) -> list[str]:
    """Complete region names."""
    return [r for r in REGIONS if r.startswith(incomplete)]


def complete_output_format(incomplete: str) -> list[str]:
    """Complete output format names."""
    return [f for f in ["json", "human"] if f.startswith(incomplete)]


def complete_boolean(incomplete: str) -> list[str]:
    return [b for b in ["true", "false"] if b.startswith(incomplete)]


BUILTIN_COMPLETERS = {
    "zone": complete_zone,
    "region": complete_region,
    "output": complete_output_format,
    "boolean": complete_boolean,
}
