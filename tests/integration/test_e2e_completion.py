"""End-to-end integration tests for a typing session.

These tests exercise the complete flow: load a YAML registry through the
configured path -> build the tree -> complete word by word the way a shell
would while a user types a command.
"""

from __future__ import annotations

import pytest
import yaml

pytestmark = pytest.mark.integration


@pytest.fixture
def configured_registry(tmp_path, monkeypatch):
    data = {
        "commands": [
            {
                "namespace": "instance", "resource": "server", "verb": "create",
                "wait": True,
                "args": [
                    {"name": "zone", "complete": "zone"},
                    {"name": "type", "enum": ["DEV1-S", "DEV1-M", "GP1-XS"]},
                    {"name": "volumes.{idx}.size"},
                    {"name": "ip.{key}.class", "enum": ["public", "private"]},
                ],
            },
            {"namespace": "instance", "resource": "server", "verb": "delete"},
            {"namespace": "instance", "resource": "volume", "verb": "list"},
        ],
    }
    path = tmp_path / "scw.yaml"
    path.write_text(yaml.dump(data, sort_keys=False))
    monkeypatch.setenv("CMDTREE_REGISTRY", str(path))
    return path


class TestTypingSession:
    """Complete a whole command one word at a time."""

    def test_create_server(self, configured_registry):
        from cmdtree.autocomplete import complete
        from cmdtree.core.registry_service import load_registry

        registry = load_registry()
        line = ["scw"]

        def tab(word, right=()):
            return complete(registry, line, word, list(right)).suggestions

        # 1. Namespace and resource
        assert tab("i") == ["instance"]
        line.append("instance")
        assert tab("") == ["server", "volume"]
        line.append("server")

        # 2. Verb
        assert tab("c") == ["create"]
        line.append("create")

        # 3. Arguments
        assert tab("") == ["ip.0.class=", "type=", "volumes.0.size=", "zone="]
        assert tab("zone=fr-par-") == ["zone=fr-par-1", "zone=fr-par-2", "zone=fr-par-3"]
        line.append("zone=fr-par-2")

        # 4. Indexed arguments accumulate
        line.append("volumes.0.size=20G")
        assert tab("vol") == ["volumes.1.size="]
        line.append("volumes.1.size=50G")
        assert tab("volumes.") == ["volumes.2.size="]

        # 5. Keyed arguments resolve their values
        assert tab("ip.fr-par.class=pr") == ["ip.fr-par.class=private"]

        # 6. Flags and their values
        assert tab("--w") == ["--wait"]
        line.append("-o")
        assert tab("") == ["human", "json"]
        line.append("json")
        assert tab("t") == ["type="]

        # 7. Supplied single-valued arguments and flags are not offered again
        assert "zone=" not in tab("")
        assert "-o" not in tab("-")

    def test_cursor_in_the_middle(self, configured_registry):
        from cmdtree.commands.autocomplete_cmd import run_complete, split_line

        left, current, right = split_line("scw instance server create ty zone=fr-par-1", 29)
        assert current == "ty"
        response = run_complete(left, current, right, "scw")
        assert response.suggestions == ["type="]

    def test_garbage_never_raises(self, configured_registry):
        from cmdtree.autocomplete import complete
        from cmdtree.core.registry_service import load_registry

        registry = load_registry()
        for left, word in [
            (["scw", "nope", "nope"], ""),
            (["scw", "instance", "server", "create", "==="], "=="),
            (["scw", "--access-key"], "--access-key-value"),
            ([], "scw=x"),
            (["scw", "instance", "server", "create"], "volumes.x.size=1"),
        ]:
            assert isinstance(complete(registry, left, word, []).suggestions, list)
