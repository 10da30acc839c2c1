"""Build the autocomplete tree from a command registry."""

from __future__ import annotations

from typing import Iterable, Optional

from cmdtree.models import Command, Registry

from .node import VARIABLE_FLAG_VALUE_SUFFIX, Node, NodeType

DEFAULT_PROGRAM = "scw"

OUTPUT_FORMATS = ["json", "human"]

# (flag, accepted values, takes a free-form value)
GLOBAL_FLAGS: list[tuple[str, list[str], bool]] = [
    ("--access-key", [], True),
    ("-D", [], False),
    ("--debug", [], False),
    ("-h", [], False),
    ("--help", [], False),
    ("-o", OUTPUT_FORMATS, False),
    ("--output", OUTPUT_FORMATS, False),
    ("-p", [], False),
    ("--profile", [], False),
    ("--secret-key", [], True),
]

WAIT_FLAGS = ["-w", "--wait"]


def new_flag_node(
    name: str,
    parent: Node,
    values: Optional[Iterable[str]] = None,
    has_variable_value: bool = False,
) -> Node:
    """Create a flag node whose values loop back to ``parent``'s context."""
    values = list(values or [])
    if not values and not has_variable_value:
        return Node(name, NodeType.FLAG, context=parent)

    node = Node(name, NodeType.FLAG)
    for value in values:
        node.add_child(value, Node(value, NodeType.FLAG_VALUE_CONST, context=parent))
    if has_variable_value:
        key = name + VARIABLE_FLAG_VALUE_SUFFIX
        node.add_child(key, Node(key, NodeType.FLAG_VALUE_VARIABLE, context=parent))
    return node


def add_global_flags(node: Node) -> None:
    for name, values, variable in GLOBAL_FLAGS:
        node.add_child(name, new_flag_node(name, node, values, variable))


def add_command(root: Node, cmd: Command) -> Node:
    """Attach ``cmd`` under ``root`` and return its terminal node."""
    node = root
    for part in cmd.path:
        node = node.get_child_or_create(part)
        add_global_flags(node)

    node.command = cmd
    # Arguments are completion leaves.
    for spec in cmd.arg_specs:
        key = spec.name + "="
        node.add_child(key, Node(key, NodeType.ARGUMENT, arg_spec=spec))

    if cmd.supports_wait:
        for name in WAIT_FLAGS:
            node.add_child(name, new_flag_node(name, node))
    return node


def build_tree(registry: Registry | Iterable[Command], program: str = DEFAULT_PROGRAM) -> Node:
    """Build a fresh autocomplete tree rooted at the ``program`` node."""
    root = Node(program)
    add_global_flags(root)
    for cmd in registry:
        add_command(root, cmd)
    return root
