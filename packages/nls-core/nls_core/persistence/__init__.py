"""
NLS Persistence - list storage interface and backends.

The memory and filesystem backends are pure Python; the SQLite backend
uses the stdlib ``sqlite3`` module.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from .interfaces import ListStore, StoreHandle
from .memory_store import InMemoryListStore
from .fs_store import FileListStore, get_nls_home
from .sqlite_store import SQLiteListStore

BACKENDS = ("memory", "file", "sqlite")


def open_store(settings: Optional[Dict[str, Any]] = None) -> ListStore:
    """
    Build a backend from storage settings.

    Args:
        settings: ``{"backend": "memory|file|sqlite", "path": ...}``.
            Defaults to the ``storage`` section of the loaded config.
    """
    if settings is None:
        from ..services.config_service import get_storage_settings
        settings = get_storage_settings()

    backend = settings.get("backend") or "file"
    path = settings.get("path")

    if backend == "memory":
        return InMemoryListStore()
    if backend == "file":
        return FileListStore(base_dir=path)
    if backend == "sqlite":
        return SQLiteListStore(db_path=str(path) if path else None)
    raise ValueError(f"Unknown storage backend: {backend} (expected one of {', '.join(BACKENDS)})")


__all__ = [
    # Interfaces
    "ListStore",
    "StoreHandle",
    # Implementations
    "InMemoryListStore",
    "FileListStore",
    "SQLiteListStore",
    # Utils
    "get_nls_home",
    "open_store",
    "BACKENDS",
]
