"""Command registry models for cmdtree.

The registry is the read-only input of the autocomplete engine: a flat list
of commands, each addressed by ``namespace resource verb`` and carrying the
specs of the arguments it accepts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

import yaml

from .errors import CompleterNotFoundError, RegistryFormatError, RegistryNotFoundError

# A value-completion callback receives the typed value prefix.
CompleteFunc = Callable[[str], list[str]]
ValidateFunc = Callable[[str], None]


@dataclass
class ArgSpec:
    name: str  # may embed {idx} / {key} segments
    required: bool = False
    enum_values: list[str] = field(default_factory=list)
    complete_value: Optional[CompleteFunc] = field(default=None, repr=False)
    validate: Optional[ValidateFunc] = field(default=None, repr=False)
    short: str = ""

    @classmethod
    def from_dict(cls, d: dict, completers: Optional[dict[str, CompleteFunc]] = None) -> ArgSpec:
        if not isinstance(d, dict) or not d.get("name"):
            raise RegistryFormatError(f"Argument entry needs a name: {d!r}")
        complete_value = None
        completer = d.get("complete")
        if completer:
            completers = completers or {}
            if completer not in completers:
                raise CompleterNotFoundError(
                    completer, argument=d["name"], available=sorted(completers)
                )
            complete_value = completers[completer]
        return cls(
            name=str(d["name"]),
            required=bool(d.get("required", False)),
            enum_values=[str(v) for v in d.get("enum", []) or []],
            complete_value=complete_value,
            short=d.get("short", ""),
        )


def _segment(d: dict, key: str) -> str:
    """Path segment as text. YAML 1.1 loads ``on`` as True and ``2`` as an int."""
    value = d.get(key)
    if value is None or value == "":
        return ""
    if isinstance(value, (dict, list)):
        raise RegistryFormatError(f"Command {key} must be a word: {value!r}")
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


@dataclass
class Command:
    namespace: str = ""
    resource: str = ""
    verb: str = ""
    arg_specs: list[ArgSpec] = field(default_factory=list)
    supports_wait: bool = False
    short: str = ""

    @property
    def path(self) -> list[str]:
        """Non-empty segments of ``namespace resource verb``."""
        return [part for part in (self.namespace, self.resource, self.verb) if part]

    @classmethod
    def from_dict(cls, d: dict, completers: Optional[dict[str, CompleteFunc]] = None) -> Command:
        if not isinstance(d, dict):
            raise RegistryFormatError(f"Command entry must be a mapping: {d!r}")
        return cls(
            namespace=_segment(d, "namespace"),
            resource=_segment(d, "resource"),
            verb=_segment(d, "verb"),
            arg_specs=[ArgSpec.from_dict(a, completers) for a in d.get("args", []) or []],
            supports_wait=bool(d.get("wait", False)),
            short=d.get("short", ""),
        )


@dataclass
class Registry:
    commands: list[Command] = field(default_factory=list)

    def __iter__(self):
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    @classmethod
    def from_dict(cls, d: dict, completers: Optional[dict[str, CompleteFunc]] = None) -> Registry:
        if not isinstance(d, dict) or not isinstance(d.get("commands", []), list):
            raise RegistryFormatError("Registry must be a mapping with a 'commands' list")
        return cls(commands=[Command.from_dict(c, completers) for c in d.get("commands", [])])

    @classmethod
    def from_file(cls, path: Path, completers: Optional[dict[str, CompleteFunc]] = None) -> Registry:
        path = Path(path)
        if not path.is_file():
            raise RegistryNotFoundError(str(path))
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise RegistryFormatError(f"Invalid YAML in {path}: {e}", path=str(path)) from e
        try:
            return cls.from_dict(data, completers)
        except RegistryFormatError as e:
            e.context["registry"] = str(path)
            raise
