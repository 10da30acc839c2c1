"""Track which flags and arguments the command line already carries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .node import Node, NodeType


def is_flag(word: str) -> bool:
    return word.startswith("-")


def is_arg(word: str) -> bool:
    return "=" in word


def word_key(word: str) -> str:
    """Part of ``word`` before the first ``=``."""
    return word.split("=", 1)[0]


@dataclass
class Usage:
    flags: set[str] = field(default_factory=set)
    args: set[str] = field(default_factory=set)

    def __contains__(self, key: str) -> bool:
        return key in self.flags or key in self.args


def track_usage(node: Node, words: Iterable[str]) -> Usage:
    """Collect completed flags and ``name=`` argument keys from ``words``.

    ``words`` are the words on both sides of the cursor, the word being
    completed excluded. Bare words naming an argument of ``node`` count as
    boolean arguments.
    """
    usage = Usage()
    for word in words:
        if is_flag(word):
            usage.flags.add(word_key(word))
        elif is_arg(word):
            usage.args.add(word_key(word) + "=")
        else:
            child = node.get_child(word + "=")
            if child is not None and child.type == NodeType.ARGUMENT:
                usage.args.add(word + "=")
    return usage
