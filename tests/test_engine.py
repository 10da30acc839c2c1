"""End-to-end tests for complete() and word_index()."""
import pytest

from cmdtree.autocomplete import (
    GLOBAL_FLAGS,
    AutocompleteResponse,
    NodeType,
    build_tree,
    complete,
    locate,
    word_index,
)
from cmdtree.models import ArgSpec, Command, Registry

LIST = ["scw", "instance", "server", "list"]
CREATE = ["scw", "instance", "server", "create"]


def suggestions(registry, left, word, right=()):
    return complete(registry, left, word, list(right)).suggestions


class TestNameCompletion:
    def test_first_word(self, registry):
        assert suggestions(registry, [], "") == ["instance", "marketplace", "scw"]

    def test_empty_registry_offers_program(self):
        result = suggestions(Registry(), [], "")
        assert "scw" in result
        assert len(result) == len(set(result))

    def test_dash_lists_global_flags(self, registry):
        expected = sorted(name for name, _, _ in GLOBAL_FLAGS)
        assert suggestions(registry, [], "-") == expected

    def test_namespace(self, registry):
        assert suggestions(registry, ["scw"], "") == ["instance", "marketplace"]

    def test_resource_prefix(self, registry):
        assert suggestions(registry, ["scw", "instance"], "se") == ["server"]

    def test_verbs(self, registry):
        assert suggestions(registry, ["scw", "instance", "server"], "") == ["create", "get", "list"]

    def test_arguments(self, registry):
        assert suggestions(registry, LIST, "") == ["all=", "tags.0=", "zone="]

    def test_supplied_argument_not_repeated(self, registry):
        assert suggestions(registry, LIST + ["zone=fr-par-1"], "") == ["all=", "tags.0="]

    def test_right_words_count_as_supplied(self, registry):
        assert suggestions(registry, LIST, "", ["zone=fr-par-1"]) == ["all=", "tags.0="]

    def test_boolean_argument_supplied(self, registry):
        assert "all=" not in suggestions(registry, LIST + ["all"], "")

    def test_next_index(self, registry):
        assert suggestions(registry, LIST + ["tags.0=foo"], "tags.") == ["tags.1="]

    def test_next_index_order_free(self, registry):
        left = LIST + ["tags.1=b", "tags.0=a"]
        assert suggestions(registry, left, "tags.") == ["tags.2="]

    def test_nested_index(self, registry):
        assert suggestions(registry, CREATE, "volumes.0.s") == ["volumes.0.size="]

    def test_map_key(self, registry):
        assert suggestions(registry, CREATE, "ip.fr-par.c") == ["ip.0.class="]

    def test_unknown_word_at_leaf(self, registry):
        assert suggestions(registry, LIST + ["bogus"], "z") == ["zone="]

    def test_unknown_word_before_leaf(self, registry):
        assert suggestions(registry, ["scw", "bogus"], "") == []

    def test_wait_flags(self, registry):
        assert suggestions(registry, CREATE, "--w") == ["--wait"]
        assert suggestions(registry, CREATE + ["--wait"], "--w") == []

    def test_used_flag_not_repeated(self, registry):
        assert "--debug" not in suggestions(registry, LIST + ["--debug"], "--")

    def test_flag_values(self, registry):
        assert suggestions(registry, LIST + ["-o"], "") == ["human", "json"]
        assert suggestions(registry, LIST + ["--output"], "j") == ["json"]

    def test_after_flag_value(self, registry):
        assert suggestions(registry, LIST + ["-o", "json"], "z") == ["zone="]

    def test_after_variable_flag_value(self, registry):
        left = ["scw", "--access-key", "SCWXXXXXXXX"]
        assert suggestions(registry, left, "") == ["instance", "marketplace"]

    def test_variable_flag_value_placeholder_hidden(self, registry):
        assert suggestions(registry, ["scw", "--access-key"], "") == []

    def test_without_program_name(self, registry):
        assert suggestions(registry, ["instance", "server", "list"], "zone=fr") == ["zone=fr-par-1"]


class TestValueCompletion:
    def test_enum(self, registry):
        assert suggestions(registry, LIST, "zone=fr") == ["zone=fr-par-1"]

    def test_enum_all(self, registry):
        assert suggestions(registry, LIST, "zone=") == ["zone=fr-par-1", "zone=nl-ams-1"]

    def test_callback(self, registry):
        get = ["scw", "instance", "server", "get"]
        assert suggestions(registry, get, "server-id=1") == ["server-id=11111111-aaaa"]

    def test_free_form_argument(self, registry):
        assert suggestions(registry, LIST, "tags.0=fo") == []

    def test_templated_argument(self, registry):
        assert suggestions(registry, CREATE, "ip.nl-ams.class=p") == [
            "ip.nl-ams.class=private",
            "ip.nl-ams.class=public",
        ]

    def test_unknown_argument(self, registry):
        assert suggestions(registry, LIST, "nope=x") == []

    def test_failing_callback(self):
        def boom(prefix):
            raise TimeoutError("slow api")

        reg = Registry(commands=[Command(namespace="a", arg_specs=[ArgSpec(name="id", complete_value=boom)])])
        assert suggestions(reg, ["a"], "id=") == []

    def test_duplicate_callback_values_collapsed(self):
        reg = Registry(commands=[Command(
            namespace="a", arg_specs=[ArgSpec(name="id", complete_value=lambda p: ["b", "a", "b"])],
        )])
        assert suggestions(reg, ["a"], "id=") == ["id=a", "id=b"]


class TestResponse:
    def test_idempotent(self, registry):
        first = complete(registry, LIST, "", [])
        second = complete(registry, LIST, "", [])
        assert first == second

    def test_sorted(self):
        assert AutocompleteResponse.of(["b", "a", "c"]).suggestions == ["a", "b", "c"]

    @pytest.mark.parametrize("left,word", [
        ([], ""),
        (["scw"], ""),
        (["scw"], "-"),
        (["scw", "instance"], ""),
        (["scw", "instance", "server"], ""),
        (LIST, ""),
        (LIST, "--"),
        (CREATE, "volumes."),
    ])
    def test_every_suggestion_is_a_valid_next_word(self, registry, left, word):
        root = build_tree(registry)
        node = locate(root, left)
        result = suggestions(registry, left, word)
        assert result
        for s in result:
            if not left and s == root.name:
                continue
            assert s in node.children or node.get_child_match(s) is not None, s

    def test_leaf_suggestions_resolve_to_arguments(self, registry):
        node = locate(build_tree(registry), CREATE)
        for s in suggestions(registry, CREATE, ""):
            if s.endswith("=") and s not in node.children:
                assert node.get_child_match(s).type == NodeType.ARGUMENT, s

    def test_custom_program(self, registry):
        result = complete(registry, ["cli", "instance"], "se", [], program="cli")
        assert result.suggestions == ["server"]


class TestWordIndex:
    WORDS = ["scw", "instance", "server"]

    @pytest.mark.parametrize("char_index,expected", [
        (0, 0),
        (2, 0),
        (3, 0),
        (4, 1),
        (12, 1),
        (13, 2),
        (19, 2),
        (20, 3),
        (100, 3),
    ])
    def test_positions(self, char_index, expected):
        assert word_index(char_index, self.WORDS) == expected

    def test_empty_words(self):
        assert word_index(0, []) == 0
