"""Find the tree node matching the words left of the cursor."""

from __future__ import annotations

import logging
from typing import Sequence

from cmdtree.errors import UnresolvedWordError

from .node import VARIABLE_FLAG_VALUE_SUFFIX, Node, NodeType

logger = logging.getLogger("cmdtree.autocomplete")


def strip_program(root: Node, left_words: Sequence[str]) -> list[str]:
    """Drop a leading program name; hosts may or may not pass it."""
    words = list(left_words)
    if words and words[0] == root.name:
        return words[1:]
    return words


def locate(root: Node, left_words: Sequence[str]) -> Node:
    """Walk ``left_words`` from ``root`` and return the completion context.

    Raises:
        UnresolvedWordError: a word matches nothing and the walk has not
            reached a leaf command.
    """
    words = strip_program(root, left_words)
    node = root
    for i, word in enumerate(words):
        child = node.get_child(word)

        if child is None and node.is_leaf_command():
            # Probably an unknown argument.
            logger.debug("Skipping unknown word %r at %s", word, node.name)
            continue

        if child is None:
            # The word may be the free-form value of the previous flag.
            if i > 0:
                value_node = node.get_child(words[i - 1] + VARIABLE_FLAG_VALUE_SUFFIX)
                if value_node is not None:
                    node = value_node
                    continue
            raise UnresolvedWordError(word, position=i)

        if child.type == NodeType.ARGUMENT:
            # Arguments are not structural.
            continue

        node = child
    return node
