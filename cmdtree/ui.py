"""Shared console, output modes, and display helpers for cmdtree."""

import json
import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme
from rich.tree import Tree

from cmdtree.autocomplete.node import Node, NodeType

# ── Output Mode State ──
_json_mode: bool = False


def set_plain_mode(enabled: bool = True) -> None:
    """Enable or disable colored output on both consoles."""
    for c in (console, err_console):
        c.no_color = enabled


def set_json_mode(enabled: bool = True) -> None:
    """Enable or disable JSON output mode."""
    global _json_mode
    _json_mode = enabled


def is_json() -> bool:
    return _json_mode


def print_json_output(data: dict | list) -> None:
    """Print data as formatted JSON to stdout."""
    print(json.dumps(data, indent=2, default=str))


# ── Theme ──
CMDTREE_THEME = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "yellow",
    "error": "bold red",
    "node.command": "bold cyan",
    "node.argument": "green",
    "node.flag": "yellow",
    "node.value": "dim",
    "muted": "dim",
})

console = Console(theme=CMDTREE_THEME)
err_console = Console(stderr=True, theme=CMDTREE_THEME)


def setup_logging(verbose: bool = False) -> None:
    """Send cmdtree logs to stderr; stdout carries completions."""
    logger = logging.getLogger("cmdtree")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=err_console, show_path=False))


# ── Tree Rendering ──
_NODE_STYLES = {
    NodeType.COMMAND: "node.command",
    NodeType.ARGUMENT: "node.argument",
    NodeType.FLAG: "node.flag",
    NodeType.FLAG_VALUE_CONST: "node.value",
    NodeType.FLAG_VALUE_VARIABLE: "node.value",
}


def _label(key: str, node: Node, show_flags: bool) -> str:
    label = f"[{_NODE_STYLES[node.type]}]{key}[/]"
    if node.command is not None and node.command.short:
        label += f"  [muted]{node.command.short}[/muted]"
    if node.type == NodeType.ARGUMENT and node.arg_spec is not None:
        spec = node.arg_spec
        if spec.required:
            label += " [error]*[/error]"
        if spec.enum_values:
            label += f"  [muted]{' | '.join(spec.enum_values)}[/muted]"
    if node.type == NodeType.FLAG and node.context is None and show_flags:
        label += f"  [muted]{' | '.join(sorted(node.children))}[/muted]"
    return label


def build_rich_tree(root: Node, show_flags: bool = False) -> Tree:
    """Render command and argument nodes; flags only when asked."""
    tree = Tree(f"[{_NODE_STYLES[root.type]}]{root.name}[/]")

    def walk(node: Node, branch: Tree) -> None:
        for key in sorted(node.children):
            child = node.children[key]
            if child.type == NodeType.FLAG and not show_flags:
                continue
            sub = branch.add(_label(key, child, show_flags))
            if child.type == NodeType.COMMAND:
                walk(child, sub)

    walk(root, tree)
    return tree


def tree_as_dict(node: Node) -> dict:
    """JSON-friendly view of the command structure."""
    out: dict = {"name": node.name, "type": node.type.value}
    commands = {}
    arguments = []
    for key in sorted(node.children):
        child = node.children[key]
        if child.type == NodeType.COMMAND:
            commands[key] = tree_as_dict(child)
        elif child.type == NodeType.ARGUMENT:
            arguments.append(key)
    if commands:
        out["commands"] = commands
    if arguments:
        out["arguments"] = arguments
    return out
