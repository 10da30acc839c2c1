"""Autocomplete tree nodes and the child key schema.

A child key is either a literal token (``instance``, ``--output``, ``zone=``)
or a dotted template using the ``{idx}`` (list index) and ``{key}`` (map key)
placeholders, e.g. ``volumes.{idx}.size=``. Templated keys are compiled into a
:class:`KeyPattern` once, when the child is attached.
"""

from __future__ import annotations

import enum
import re
from typing import Optional

from cmdtree.models import ArgSpec, Command

SLICE_SCHEMA = "{idx}"
MAP_SCHEMA = "{key}"
PLACEHOLDERS = {
    SLICE_SCHEMA: "[0-9]+",
    MAP_SCHEMA: "[0-9a-zA-Z-]+",
}

VARIABLE_FLAG_VALUE_SUFFIX = "-value"

_PLACEHOLDER_RE = re.compile("|".join(re.escape(p) for p in PLACEHOLDERS))


class NodeType(enum.Enum):
    COMMAND = "command"
    ARGUMENT = "argument"
    FLAG = "flag"
    FLAG_VALUE_CONST = "flag-value-const"
    FLAG_VALUE_VARIABLE = "flag-value-variable"


def is_templated(key: str) -> bool:
    return _PLACEHOLDER_RE.search(key) is not None


def template_regex(key: str, capture: Optional[str] = None) -> str:
    """Turn a templated key into an anchored-ready regex.

    Literal parts are escaped and each placeholder becomes its character
    class. When ``capture`` names a placeholder, its first occurrence becomes
    a capturing digit group, for index lookups.
    """
    parts = []
    pos = 0
    captured = False
    for m in _PLACEHOLDER_RE.finditer(key):
        parts.append(re.escape(key[pos:m.start()]))
        cls = PLACEHOLDERS[m.group()]
        if m.group() == capture and not captured:
            parts.append("([0-9]+)")
            captured = True
        else:
            parts.append(cls)
        pos = m.end()
    parts.append(re.escape(key[pos:]))
    return "".join(parts)


class KeyPattern:
    """Pre-compiled structural matcher for one templated child key."""

    __slots__ = ("key", "regex", "literal_weight")

    def __init__(self, key: str):
        self.key = key
        self.regex = re.compile(template_regex(key))
        # Characters outside placeholders; more literal text is more specific.
        self.literal_weight = len(_PLACEHOLDER_RE.sub("", key))

    def matches(self, word: str) -> bool:
        return self.regex.fullmatch(word) is not None

    def __repr__(self) -> str:
        return f"KeyPattern({self.key!r})"


class Node:
    """A node in the autocomplete tree.

    Command nodes own their children. Flag-value nodes, and flags without
    values, share the completion context of another node: their ``children``
    resolve through ``context`` so that completion resumes where it was
    before the flag.
    """

    def __init__(
        self,
        name: str = "",
        type: NodeType = NodeType.COMMAND,
        arg_spec: Optional[ArgSpec] = None,
        context: Optional[Node] = None,
    ):
        self.name = name
        self.type = type
        self.arg_spec = arg_spec
        self.command: Optional[Command] = None
        self.context = context
        self._children: dict[str, Node] = {}
        self._patterns: dict[str, KeyPattern] = {}

    def __repr__(self) -> str:
        return f"Node({self.name!r}, {self.type.value})"

    def _owner(self) -> Node:
        node = self
        while node.context is not None:
            node = node.context
        return node

    @property
    def children(self) -> dict[str, Node]:
        return self._owner()._children

    @property
    def patterns(self) -> dict[str, KeyPattern]:
        return self._owner()._patterns

    def add_child(self, key: str, child: Node) -> Node:
        owner = self._owner()
        owner._children[key] = child
        if is_templated(key):
            owner._patterns[key] = KeyPattern(key)
        else:
            owner._patterns.pop(key, None)
        return child

    def get_child(self, key: str) -> Optional[Node]:
        return self.children.get(key)

    def get_child_or_create(self, name: str) -> Node:
        """Return the child called ``name``, creating a command node if absent."""
        child = self.children.get(name)
        if child is None:
            child = self.add_child(name, Node(name))
        return child

    def get_child_match(self, name: str) -> Optional[Node]:
        """Resolve a concrete argument key (``volumes.1.size=``) to its leaf.

        An exact key wins. Among templated keys that structurally match, the
        one with the most literal characters wins, then the smallest key.
        """
        child = self.children.get(name)
        if child is not None and child.type == NodeType.ARGUMENT:
            return child
        candidates = [
            p for p in self.patterns.values()
            if self.children[p.key].type == NodeType.ARGUMENT and p.matches(name)
        ]
        if not candidates:
            return None
        best = min(candidates, key=lambda p: (-p.literal_weight, p.key))
        return self.children[best.key]

    def is_leaf_command(self) -> bool:
        """True for a command node that has no command children."""
        if self.type != NodeType.COMMAND:
            return False
        return all(c.type != NodeType.COMMAND for c in self.children.values())
