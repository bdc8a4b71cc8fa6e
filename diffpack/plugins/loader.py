"""JSON plugin config loader.

Config shape::

    {
      "config_version": 1,
      "plugins": [
        {"entrypoint": "package.module:Factory", "options": {}, "enabled": true}
      ]
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
import importlib
import json
from pathlib import Path
from typing import Any

from diffpack.plugins.base import PLUGIN_API_VERSION, PLUGIN_CONFIG_VERSION
from diffpack.plugins.exceptions import PluginConfigError, PluginLoadError
from diffpack.plugins.manager import PluginManager

_ENTRY_KEYS = frozenset({"entrypoint", "options", "enabled"})


@dataclass(frozen=True, slots=True)
class PluginEntry:
    """One validated ``plugins[]`` entry."""

    index: int
    entrypoint: str
    options: dict[str, Any] = field(default_factory=dict)
    enabled: bool = True

    @property
    def module_name(self) -> str:
        return self.entrypoint.partition(":")[0]

    @property
    def attribute(self) -> str:
        return self.entrypoint.partition(":")[2]


def load_plugin_manager_from_file(path: str | Path) -> PluginManager:
    """Build a plugin manager from a JSON config file."""
    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as error:
        raise PluginConfigError(f"Invalid plugin config JSON ({config_path}): {error}") from error
    return build_plugin_manager(raw, source=str(config_path))


def build_plugin_manager(raw: Any, *, source: str = "<memory>") -> PluginManager:
    if not isinstance(raw, dict):
        raise PluginConfigError(f"Plugin config must be a JSON object ({source}).")

    version = raw.get("config_version")
    if version != PLUGIN_CONFIG_VERSION:
        raise PluginConfigError(
            f"Unsupported plugin config version {version!r}; "
            f"expected {PLUGIN_CONFIG_VERSION}."
        )

    entries_payload = raw.get("plugins")
    if not isinstance(entries_payload, list):
        raise PluginConfigError("Plugin config key 'plugins' must be a JSON array.")

    entries = [
        parse_plugin_entry(payload, index=index)
        for index, payload in enumerate(entries_payload, start=1)
    ]
    plugins = tuple(instantiate_plugin(entry) for entry in entries if entry.enabled)
    return PluginManager(plugins=plugins)


def parse_plugin_entry(payload: Any, *, index: int) -> PluginEntry:
    if not isinstance(payload, dict):
        raise PluginConfigError(f"Plugin entry #{index} must be a JSON object.")

    unknown = sorted(set(payload) - _ENTRY_KEYS)
    if unknown:
        raise PluginConfigError(
            f"Plugin entry #{index} contains unsupported keys: {', '.join(unknown)}"
        )

    enabled = payload.get("enabled", True)
    if not isinstance(enabled, bool):
        raise PluginConfigError(f"Plugin entry #{index} key 'enabled' must be boolean.")

    entrypoint = payload.get("entrypoint")
    if not isinstance(entrypoint, str) or ":" not in entrypoint:
        raise PluginConfigError(
            f"Plugin entry #{index} key 'entrypoint' must be 'module:attribute'."
        )

    options = payload.get("options", {})
    if not isinstance(options, dict):
        raise PluginConfigError(f"Plugin entry #{index} key 'options' must be a JSON object.")

    return PluginEntry(index=index, entrypoint=entrypoint, options=options, enabled=enabled)


def instantiate_plugin(entry: PluginEntry) -> object:
    try:
        module = importlib.import_module(entry.module_name)
    except Exception as error:
        raise PluginLoadError(
            f"Plugin entry #{entry.index} failed to import module "
            f"'{entry.module_name}': {error}"
        ) from error

    target = getattr(module, entry.attribute, None)
    if target is None:
        raise PluginLoadError(
            f"Plugin entry #{entry.index} could not find attribute "
            f"'{entry.attribute}' in '{entry.module_name}'."
        )

    if callable(target):
        try:
            plugin = target(**entry.options)
        except Exception as error:
            raise PluginLoadError(
                f"Plugin entry #{entry.index} failed to instantiate '{entry.entrypoint}' "
                f"with options {sorted(entry.options)}: {error}"
            ) from error
    elif entry.options:
        raise PluginLoadError(
            f"Plugin entry #{entry.index} uses non-callable '{entry.entrypoint}' "
            "and cannot accept options."
        )
    else:
        plugin = target

    declared = str(getattr(plugin, "api_version", PLUGIN_API_VERSION))
    if _major(declared) != _major(PLUGIN_API_VERSION):
        raise PluginLoadError(
            f"Plugin entry #{entry.index} '{entry.entrypoint}' declares unsupported "
            f"api_version {declared!r}; supported major version is "
            f"{_major(PLUGIN_API_VERSION)}."
        )
    return plugin


def _major(version: str) -> str:
    return version.split(".", 1)[0]
