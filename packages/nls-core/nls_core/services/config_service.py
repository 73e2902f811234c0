"""Shared configuration service for the store and the CLI."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

import yaml

from ..persistence.fs_store import get_nls_home

_CONFIG_CACHE: Dict[str, Dict[str, Any]] = {}

DEFAULT_STORAGE = {"backend": "file", "path": None}
DEFAULT_LOGGING = {"level": "WARNING"}


def _default_config_path() -> Path:
    """Resolve the default config path (supports NLS_CONFIG_PATH override)."""
    env_path = os.getenv("NLS_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return get_nls_home() / "config.yaml"


def clear_config_cache() -> None:
    """Clear cached config (primarily for tests)."""
    _CONFIG_CACHE.clear()


def load_config(path: str | Path | None = None) -> Dict[str, Any]:
    """
    Load YAML configuration with caching.

    Args:
        path: Optional custom path. Defaults to NLS_CONFIG_PATH or
            ``$NLS_HOME/config.yaml``. A missing default file means an
            empty config; a missing NLS_CONFIG_PATH or explicit file raises.
    """
    resolved = Path(path).expanduser() if path else _default_config_path()
    if not path and not os.getenv("NLS_CONFIG_PATH") and not resolved.exists():
        return {}
    key = str(resolved.resolve())
    if key not in _CONFIG_CACHE:
        with open(resolved, "r", encoding="utf-8") as f:
            _CONFIG_CACHE[key] = yaml.safe_load(f) or {}
    return _CONFIG_CACHE[key]


def _get_section(section_path: str, path: str | Path | None = None) -> Dict[str, Any]:
    """
    Return nested configuration section by dotted path (e.g. ``storage``).
    """
    config = load_config(path)
    section: Any = config
    for key in section_path.split("."):
        if not isinstance(section, dict):
            return {}
        section = section.get(key)
        if section is None:
            return {}
    return section if isinstance(section, dict) else {}


def get_storage_settings(path: str | Path | None = None) -> Dict[str, Any]:
    """Return storage backend settings merged over the defaults."""
    return {**DEFAULT_STORAGE, **_get_section("storage", path)}


def get_logging_settings(path: str | Path | None = None) -> Dict[str, Any]:
    """Return logging settings merged over the defaults."""
    return {**DEFAULT_LOGGING, **_get_section("logging", path)}
