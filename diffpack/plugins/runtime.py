"""Active plugin manager resolution."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
import os
from pathlib import Path
from typing import Iterator

from diffpack.plugins.base import PLUGIN_CONFIG_ENV_VAR
from diffpack.plugins.loader import load_plugin_manager_from_file
from diffpack.plugins.manager import PluginManager

_ACTIVE_PLUGIN_MANAGER: ContextVar[PluginManager | None] = ContextVar(
    "diffpack_active_plugin_manager",
    default=None,
)
_EMPTY_PLUGIN_MANAGER = PluginManager(plugins=())
_ENV_CACHE: tuple[str, PluginManager] | None = None


def get_active_plugin_manager() -> PluginManager:
    """Context override first, then ``DIFFKIT_PLUGIN_CONFIG``, then no plugins."""
    manager = _ACTIVE_PLUGIN_MANAGER.get()
    if manager is not None:
        return manager

    config_path = os.getenv(PLUGIN_CONFIG_ENV_VAR, "").strip()
    if not config_path:
        return _EMPTY_PLUGIN_MANAGER

    global _ENV_CACHE
    if _ENV_CACHE is None or _ENV_CACHE[0] != config_path:
        _ENV_CACHE = (config_path, load_plugin_manager_from_file(config_path))
    return _ENV_CACHE[1]


@contextmanager
def use_plugin_manager(manager: PluginManager) -> Iterator[PluginManager]:
    token = _ACTIVE_PLUGIN_MANAGER.set(manager)
    try:
        yield manager
    finally:
        _ACTIVE_PLUGIN_MANAGER.reset(token)


@contextmanager
def use_plugins_from_config(path: str | Path) -> Iterator[PluginManager]:
    with use_plugin_manager(load_plugin_manager_from_file(path)) as manager:
        yield manager


def reset_plugin_runtime_cache() -> None:
    """Forget the env-loaded manager (tests switch configs between cases)."""
    global _ENV_CACHE
    _ENV_CACHE = None
