"""Suggestion generation for argument values and names."""

from __future__ import annotations

import logging
import re

from cmdtree.models import ArgSpec

from .node import MAP_SCHEMA, SLICE_SCHEMA, Node, template_regex
from .usage import Usage, is_flag

logger = logging.getLogger("cmdtree.autocomplete")


def is_completing_arg_value(word: str) -> bool:
    return "=" in word


def split_arg_word(word: str) -> tuple[str, str]:
    """Split ``name=prefix`` into ``("name=", "prefix")``."""
    name, value = word.split("=", 1)
    return name + "=", value


def has_prefix(key: str, word: str) -> bool:
    """Whether ``word`` prefixes ``key``, placeholders included.

    ``security-gr`` prefixes ``security-group-id=``,
    ``volumes.0.s`` prefixes ``volumes.{idx}.size=`` and
    ``ip.fr-par.c`` prefixes ``ip.{key}.class=``.
    """
    if key.startswith(word):
        return True
    if "." not in word and (key.startswith(SLICE_SCHEMA) or key.startswith(MAP_SCHEMA)):
        return True
    if "." not in key or "." not in word:
        return False

    left_key, rest_key = key.split(".", 1)
    left_word, rest_word = word.split(".", 1)
    if left_key == left_word or left_key in (SLICE_SCHEMA, MAP_SCHEMA):
        return has_prefix(rest_key, rest_word)
    return False


def key_suggestion(key: str, schema: str, completed_args: set[str]) -> str:
    """Replace ``schema`` in ``key`` by the smallest index not used yet."""
    regex = re.compile(template_regex(key, capture=schema))
    used = set()
    for arg in completed_args:
        m = regex.fullmatch(arg)
        if m:
            used.add(int(m.group(1)))

    i = 0
    while i in used:
        i += 1
    return key.replace(schema, str(i))


def complete_arg_value(spec: ArgSpec, prefix: str) -> list[str]:
    """Values for ``spec`` starting with ``prefix``.

    The argument's callback has priority over its enum values. A failing
    callback yields no suggestions.
    """
    if spec.complete_value is not None:
        try:
            return list(spec.complete_value(prefix) or [])
        except Exception as e:
            logger.debug("Value completion for %s failed: %s", spec.name, e)
            return []
    return [v for v in spec.enum_values if v.startswith(prefix)]


def value_suggestions(node: Node, word: str) -> list[str]:
    arg_name, value_prefix = split_arg_word(word)
    arg_node = node.get_child_match(arg_name)
    if arg_node is None or arg_node.arg_spec is None:
        logger.debug("No argument matches %r at %s", arg_name, node.name)
        return []
    return [arg_name + s for s in complete_arg_value(arg_node.arg_spec, value_prefix)]


def name_suggestions(node: Node, word: str, usage: Usage) -> list[str]:
    suggestions = []
    for key in node.children:
        if not has_prefix(key, word):
            continue

        if SLICE_SCHEMA in key:
            suggestions.append(key_suggestion(key, SLICE_SCHEMA, usage.args))
        elif MAP_SCHEMA in key:
            suggestions.append(key_suggestion(key, MAP_SCHEMA, usage.args))
        else:
            if key in usage:
                continue
            if is_flag(key) and word == "":
                # "scw <tab>" lists commands; "scw -<tab>" lists flags.
                continue
            suggestions.append(key)
    return suggestions


def suggest(node: Node, word: str, usage: Usage) -> list[str]:
    """Unsorted suggestions for ``word`` in the context of ``node``."""
    if is_completing_arg_value(word):
        return value_suggestions(node, word)
    return name_suggestions(node, word, usage)
