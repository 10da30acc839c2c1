"""Layered configuration service for cmdtree.

Priority (highest to lowest):
1. CLI options (--registry, --program), passed as overrides
2. Environment variables (CMDTREE_*)
3. Project config (.cmdtree.toml in current directory)
4. Global config (~/.config/cmdtree/config.toml)
5. Built-in defaults
"""
from __future__ import annotations

import copy
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger("cmdtree.config")

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w


DEFAULTS: dict[str, Any] = {
    "registry": {
        "path": "",
        "program": "scw",
    },
    "ui": {
        "plain_output": False,
    },
}

# Mapping of env vars to config paths
ENV_VAR_MAP = {
    "CMDTREE_REGISTRY": "registry.path",
    "CMDTREE_PROGRAM": "registry.program",
    "CMDTREE_PLAIN": "ui.plain_output",
}


def _global_config_dir() -> Path:
    """Return the global config directory: ~/.config/cmdtree/."""
    return Path.home() / ".config" / "cmdtree"


def _global_config_path() -> Path:
    return _global_config_dir() / "config.toml"


def _project_config_path() -> Path:
    """Return the project config file path (.cmdtree.toml in cwd)."""
    return Path.cwd() / ".cmdtree.toml"


def _read_toml(path: Path) -> dict:
    """Read a TOML file, returning empty dict if missing or unreadable."""
    if not path.is_file():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to read %s: %s", path, e)
        return {}


def _write_toml(data: dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        tomli_w.dump(data, f)


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge override into base (override wins)."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _get_nested(data: dict, dotted_key: str, default: Any = None) -> Any:
    """Get a value from a nested dict using dotted key notation."""
    current = data
    for key in dotted_key.split("."):
        if not isinstance(current, dict):
            return default
        current = current.get(key)
        if current is None:
            return default
    return current


def _set_nested(data: dict, dotted_key: str, value: Any) -> None:
    """Set a value in a nested dict using dotted key notation."""
    keys = dotted_key.split(".")
    current = data
    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], dict):
            current[key] = {}
        current = current[key]
    current[keys[-1]] = value


def _coerce(value: str) -> Any:
    if value.lower() in ("true", "1", "yes"):
        return True
    if value.lower() in ("false", "0", "no"):
        return False
    return value


@dataclass
class ResolvedConfig:
    """Fully resolved configuration after merging all layers."""
    data: dict = field(default_factory=dict)
    global_config_path: Optional[Path] = None
    project_config_path: Optional[Path] = None

    def get(self, dotted_key: str, default: Any = None) -> Any:
        return _get_nested(self.data, dotted_key, default)


class ConfigService:
    """Layered configuration service.

    Resolves config from multiple sources with clear precedence:
    1. Overrides set by the CLI
    2. Environment variables (CMDTREE_*)
    3. Project config (.cmdtree.toml)
    4. Global config (~/.config/cmdtree/config.toml)
    5. Built-in defaults
    """

    def __init__(self):
        self._resolved: Optional[ResolvedConfig] = None
        self._overrides: dict = {}

    def override(self, dotted_key: str, value: Any) -> None:
        """Set a runtime override (e.g. from a CLI option)."""
        _set_nested(self._overrides, dotted_key, value)
        self._resolved = None

    def resolve(self, force: bool = False) -> ResolvedConfig:
        """Resolve the full config from all layers."""
        if self._resolved is not None and not force:
            return self._resolved

        merged = copy.deepcopy(DEFAULTS)

        global_path = _global_config_path()
        global_data = _read_toml(global_path)
        if global_data:
            merged = _deep_merge(merged, global_data)
            logger.debug("Loaded global config from %s", global_path)

        project_path = _project_config_path()
        project_data = _read_toml(project_path)
        if project_data:
            merged = _deep_merge(merged, project_data)
            logger.debug("Loaded project config from %s", project_path)

        for env_var, config_path in ENV_VAR_MAP.items():
            env_value = os.environ.get(env_var)
            if env_value is not None:
                _set_nested(merged, config_path, _coerce(env_value))

        merged = _deep_merge(merged, self._overrides)

        self._resolved = ResolvedConfig(
            data=merged,
            global_config_path=global_path if global_path.is_file() else None,
            project_config_path=project_path if project_path.is_file() else None,
        )
        return self._resolved

    def get(self, dotted_key: str, default: Any = None) -> Any:
        return self.resolve().get(dotted_key, default)

    def get_registry_path(self) -> Optional[Path]:
        """Path of the registry file, or None when not configured."""
        value = self.get("registry.path", "")
        return Path(value).expanduser() if value else None

    def get_program(self) -> str:
        return self.get("registry.program", "scw") or "scw"

    def is_plain(self) -> bool:
        return bool(self.get("ui.plain_output", False))

    def set_global(self, dotted_key: str, value: Any) -> None:
        """Set a value in the global config file."""
        path = _global_config_path()
        data = _read_toml(path)
        _set_nested(data, dotted_key, value)
        _write_toml(data, path)
        self._resolved = None
        logger.info("Set %s = %s in %s", dotted_key, value, path)

    def show(self) -> dict:
        """Return the resolved config and where it came from."""
        resolved = self.resolve(force=True)
        return {
            "resolved": resolved.data,
            "sources": {
                "global_config": str(resolved.global_config_path) if resolved.global_config_path else None,
                "project_config": str(resolved.project_config_path) if resolved.project_config_path else None,
            },
        }

    def config_paths(self) -> dict[str, str]:
        """Return all config file locations and their existence status."""
        global_path = _global_config_path()
        project_path = _project_config_path()
        registry_path = self.get_registry_path()
        paths = {
            "global_config": f"{global_path} ({'exists' if global_path.is_file() else 'not found'})",
            "project_config": f"{project_path} ({'exists' if project_path.is_file() else 'not found'})",
        }
        if registry_path is not None:
            paths["registry"] = f"{registry_path} ({'exists' if registry_path.is_file() else 'not found'})"
        else:
            paths["registry"] = "not configured"
        return paths


# Module-level singleton
_config_service: Optional[ConfigService] = None


def get_config_service() -> ConfigService:
    """Get or create the global ConfigService instance."""
    global _config_service
    if _config_service is None:
        _config_service = ConfigService()
    return _config_service


def reset_config_service() -> None:
    """Reset the global config service (useful for testing)."""
    global _config_service
    _config_service = None
