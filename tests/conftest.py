"""Shared fixtures for cmdtree tests."""
import yaml
import pytest

from cmdtree.models import ArgSpec, Command, Registry


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point HOME and cwd at a temporary directory for every test.

    Tests never read the real ~/.config/cmdtree or a .cmdtree.toml in the
    checkout, and the config singleton starts fresh.
    """
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for var in ("CMDTREE_REGISTRY", "CMDTREE_PROGRAM", "CMDTREE_PLAIN", "CMDTREE_DEBUG"):
        monkeypatch.delenv(var, raising=False)

    from cmdtree.core.config_service import reset_config_service
    reset_config_service()
    yield home
    reset_config_service()

    from cmdtree.ui import set_json_mode
    set_json_mode(False)


def list_server_ids(prefix):
    return [i for i in ["11111111-aaaa", "22222222-bbbb"] if i.startswith(prefix)]


@pytest.fixture
def registry():
    """A small instance/marketplace registry."""
    return Registry(commands=[
        Command(
            namespace="instance", resource="server", verb="list",
            short="List servers",
            arg_specs=[
                ArgSpec(name="zone", enum_values=["fr-par-1", "nl-ams-1"]),
                ArgSpec(name="tags.{idx}"),
                ArgSpec(name="all"),
            ],
        ),
        Command(
            namespace="instance", resource="server", verb="create",
            short="Create a server",
            supports_wait=True,
            arg_specs=[
                ArgSpec(name="name", required=True),
                ArgSpec(name="volumes.{idx}.size"),
                ArgSpec(name="volumes.{idx}.name"),
                ArgSpec(name="ip.{key}.class", enum_values=["public", "private"]),
            ],
        ),
        Command(
            namespace="instance", resource="server", verb="get",
            arg_specs=[ArgSpec(name="server-id", complete_value=list_server_ids)],
        ),
        Command(namespace="instance", resource="image", verb="list"),
        Command(namespace="marketplace", resource="image", verb="list"),
    ])


@pytest.fixture
def registry_data():
    """The same kind of registry, as a YAML document."""
    return {
        "commands": [
            {
                "namespace": "instance",
                "resource": "server",
                "verb": "list",
                "short": "List servers",
                "args": [
                    {"name": "zone", "complete": "zone"},
                    {"name": "tags.{idx}"},
                ],
            },
            {
                "namespace": "instance",
                "resource": "server",
                "verb": "create",
                "wait": True,
                "args": [
                    {"name": "name", "required": True},
                    {"name": "type", "enum": ["DEV1-S", "DEV1-M"]},
                ],
            },
        ],
    }


@pytest.fixture
def registry_file(tmp_path, registry_data):
    """Write the sample registry to disk and return its path."""
    path = tmp_path / "registry.yaml"
    with open(path, "w") as f:
        yaml.dump(registry_data, f, default_flow_style=False, sort_keys=False)
    return path
