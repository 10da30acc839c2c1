"""Shell autocompletion over the command tree.

Typical use::

    from cmdtree.autocomplete import complete

    response = complete(registry, ["scw", "instance", "server"], "li")
    response.suggestions  # ["list"]
"""

from cmdtree.autocomplete.builder import DEFAULT_PROGRAM, GLOBAL_FLAGS, build_tree
from cmdtree.autocomplete.engine import AutocompleteResponse, complete, word_index
from cmdtree.autocomplete.locator import locate
from cmdtree.autocomplete.node import MAP_SCHEMA, SLICE_SCHEMA, Node, NodeType
from cmdtree.autocomplete.suggest import has_prefix, key_suggestion
from cmdtree.autocomplete.usage import Usage, track_usage

__all__ = [
    "AutocompleteResponse",
    "DEFAULT_PROGRAM",
    "GLOBAL_FLAGS",
    "MAP_SCHEMA",
    "Node",
    "NodeType",
    "SLICE_SCHEMA",
    "Usage",
    "build_tree",
    "complete",
    "has_prefix",
    "key_suggestion",
    "locate",
    "track_usage",
    "word_index",
]
