"""Entry point of the autocomplete engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from cmdtree.errors import UnresolvedWordError
from cmdtree.models import Command, Registry

from .builder import DEFAULT_PROGRAM, build_tree
from .locator import locate
from .suggest import is_completing_arg_value, suggest
from .usage import track_usage

logger = logging.getLogger("cmdtree.autocomplete")


@dataclass
class AutocompleteResponse:
    """Words to hand to the shell, sorted."""

    suggestions: list[str] = field(default_factory=list)

    @classmethod
    def of(cls, suggestions: Iterable[str]) -> AutocompleteResponse:
        return cls(suggestions=sorted(set(suggestions)))


def complete(
    registry: Registry | Iterable[Command],
    left_words: Sequence[str],
    word_to_complete: str,
    right_words: Sequence[str] = (),
    program: str = DEFAULT_PROGRAM,
) -> AutocompleteResponse:
    """Compute completions for the word under the cursor.

    Never raises on malformed input: anything that cannot be resolved yields
    an empty response.
    """
    root = build_tree(registry, program)

    try:
        node = locate(root, left_words)
    except UnresolvedWordError as e:
        logger.debug("%s, no suggestions", e)
        return AutocompleteResponse()

    usage = track_usage(node, [*left_words, *right_words])
    logger.debug("Completing %r at %s (flags=%s, args=%s)",
                 word_to_complete, node.name, sorted(usage.flags), sorted(usage.args))

    suggestions = suggest(node, word_to_complete, usage)
    # On the first word the program name is itself a valid completion.
    if (
        not left_words
        and not is_completing_arg_value(word_to_complete)
        and program.startswith(word_to_complete)
    ):
        suggestions.append(program)
    return AutocompleteResponse.of(suggestions)


def word_index(char_index: int, words: Sequence[str]) -> int:
    """Index of the word holding ``char_index`` in the space-joined ``words``.

    An index on the boundary after a word belongs to that word; past the end
    of the line the result is ``len(words)``.
    """
    char_count = 0
    for i, word in enumerate(words):
        char_count += len(word)
        if char_index <= char_count:
            return i
        char_count += 1  # separator
    return len(words)
