"""Shell-facing completion commands and integration scripts."""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from cmdtree.autocomplete import AutocompleteResponse, complete, word_index
from cmdtree.core.registry_service import load_registry
from cmdtree.errors import UnsupportedShellError
from cmdtree.ui import print_json_output, is_json

SHELLS = ["bash", "zsh", "fish"]

BASH_SCRIPT = """\
_{func}() {{
    local cur cword words
    _get_comp_words_by_ref -n = cur cword words
    local IFS=$'\\n'
    COMPREPLY=($({cmd} complete bash "$cword" -- "${{words[@]}}" 2>/dev/null))
    [[ $COMPREPLY == *= ]] && compopt -o nospace
    return 0
}}
complete -F _{func} {program}
"""

ZSH_SCRIPT = """\
#compdef {program}
_{func}() {{
    local -a suggestions
    suggestions=("${{(@f)$({cmd} complete zsh $((CURRENT - 1)) -- "${{words[@]}}" 2>/dev/null)}}")
    compadd -- $suggestions
}}
compdef _{func} {program}
"""

FISH_SCRIPT = """\
function __{func}_complete
    set -l tokens (commandline -opc)
    {cmd} complete fish (count $tokens) -- $tokens (commandline -ct) 2>/dev/null
end
complete -c {program} -f -a '(__{func}_complete)'
"""

_SCRIPTS = {"bash": BASH_SCRIPT, "zsh": ZSH_SCRIPT, "fish": FISH_SCRIPT}


def split_words(index: int, words: Sequence[str]) -> tuple[list[str], str, list[str]]:
    """Split ``words`` around the cursor word at ``index``."""
    words = list(words)
    if index < 0:
        index = 0
    current = words[index] if index < len(words) else ""
    return words[:index], current, words[index + 1:]


def split_line(line: str, point: int) -> tuple[list[str], str, list[str]]:
    """Split a raw command line at character offset ``point``.

    The cursor word is cut at ``point``: only what is left of the cursor is
    being completed.
    """
    words = line.split(" ")
    index = word_index(point, words)
    left, current, right = split_words(index, words)
    start = sum(len(w) + 1 for w in left)
    current = current[:max(point - start, 0)]
    return [w for w in left if w], current, [w for w in right if w]


def run_complete(
    left: list[str],
    current: str,
    right: list[str],
    program: str,
    registry_path: Optional[Path] = None,
) -> AutocompleteResponse:
    registry = load_registry(registry_path)
    return complete(registry, left, current, right, program=program)


def shell_suggestions(shell: str, current: str, suggestions: Sequence[str]) -> list[str]:
    """Adapt suggestions to what ``shell`` replaces.

    Bash breaks words on ``=`` and only replaces the text after it, so the
    ``name=`` part typed before the cursor is dropped from each suggestion.
    """
    if shell != "bash" or "=" not in current:
        return list(suggestions)
    head = current[:current.rfind("=") + 1]
    return [s[len(head):] if s.startswith(head) else s for s in suggestions]


def print_response(response: AutocompleteResponse) -> None:
    if is_json():
        print_json_output(response.suggestions)
        return
    for suggestion in response.suggestions:
        print(suggestion)


def render_script(shell: str, program: str, cmd: str = "cmdtree") -> str:
    """Integration script wiring ``program``'s completion to cmdtree."""
    template = _SCRIPTS.get(shell)
    if template is None:
        raise UnsupportedShellError(shell, supported=SHELLS)
    func = program.replace("-", "_")
    return template.format(func=func, program=program, cmd=f"{cmd} --program {program}")
