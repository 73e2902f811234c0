"""
NLS Filesystem Storage Implementation.

Layout under the base directory:

    names.json            -- {"<named key>": "<ref>", ...}
    lists/<ref>.json      -- {"name": ..., "records": [...], "updated_at": ...}
"""
from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..errors import StorageAccessFailure
from .interfaces import ListStore, StoreHandle, new_ref

logger = logging.getLogger(__name__)


def get_nls_home() -> Path:
    """
    Get NLS home directory.

    Uses NLS_HOME env var or defaults to ~/.nls
    """
    home = os.environ.get("NLS_HOME")
    if home:
        return Path(home).expanduser()
    return Path.home() / ".nls"


class FileListStore(ListStore):
    """
    Filesystem-based list storage.

    Inside a transaction, bindings and list writes are held in memory and
    flushed to disk when the transaction commits.
    """

    def __init__(self, base_dir: Optional[Path] = None):
        """
        Initialize the store.

        Args:
            base_dir: Base directory (default: NLS_HOME)
        """
        super().__init__()
        if base_dir is None:
            base_dir = get_nls_home()
        self.base_dir = Path(base_dir).expanduser()
        self.lists_dir = self.base_dir / "lists"
        try:
            self.lists_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageAccessFailure(f"Cannot create store directory {self.lists_dir}: {e}") from e
        self._names_path = self.base_dir / "names.json"
        self._staged_names: Optional[Dict[str, str]] = None
        self._staged_lists: Dict[str, List[str]] = {}

    # -- file helpers ------------------------------------------------------

    def _list_path(self, ref: str) -> Path:
        return self.lists_dir / f"{ref}.json"

    def _load_json(self, path: Path) -> Any:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageAccessFailure(f"Cannot read {path}: {e}") from e

    def _dump_json(self, path: Path, data: Any) -> None:
        tmp = path.with_suffix(".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp, path)
        except OSError as e:
            raise StorageAccessFailure(f"Cannot write {path}: {e}") from e

    def _load_names(self) -> Dict[str, str]:
        if not self._names_path.exists():
            return {}
        return dict(self._load_json(self._names_path))

    def _current_names(self) -> Dict[str, str]:
        if self._staged_names is not None:
            return self._staged_names
        return self._load_names()

    def _flush_list(self, name: str, ref: str, records: List[str]) -> None:
        self._dump_json(self._list_path(ref), {
            "name": name,
            "records": records,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        })
        logger.debug(f"Wrote {len(records)} record(s) to {ref}")

    def _exists(self, ref: str) -> bool:
        return ref in self._staged_lists or self._list_path(ref).exists()

    # -- ListStore ---------------------------------------------------------

    def lookup(self, name: str) -> Optional[StoreHandle]:
        ref = self._current_names().get(name)
        if ref is None:
            return None
        return StoreHandle(name=name, ref=ref)

    def bind(self, name: str) -> StoreHandle:
        names = self._current_names()
        if name in names:
            return StoreHandle(name=name, ref=names[name])

        handle = StoreHandle(name=name, ref=new_ref())
        if self.in_transaction:
            names[name] = handle.ref
            self._staged_lists[handle.ref] = []
        else:
            self._flush_list(name, handle.ref, [])
            names[name] = handle.ref
            self._dump_json(self._names_path, names)
        return handle

    def read(self, handle: StoreHandle) -> List[str]:
        if handle.ref in self._staged_lists:
            return list(self._staged_lists[handle.ref])
        path = self._list_path(handle.ref)
        if not path.exists():
            raise StorageAccessFailure(f"No list stored at {handle.ref}", name=handle.name)
        return list(self._load_json(path).get("records", []))

    def write(self, handle: StoreHandle, records: List[str]) -> None:
        if not self._exists(handle.ref):
            raise StorageAccessFailure(f"No list stored at {handle.ref}", name=handle.name)
        if self.in_transaction:
            self._staged_lists[handle.ref] = list(records)
        else:
            self._flush_list(handle.name, handle.ref, list(records))

    def list_names(self) -> List[str]:
        return sorted(self._current_names())

    # -- transactions ------------------------------------------------------

    def _begin(self) -> None:
        self._staged_names = self._load_names()
        self._staged_lists = {}

    def _commit(self) -> None:
        names = self._staged_names or {}
        by_ref = {ref: name for name, ref in names.items()}
        try:
            for ref, records in self._staged_lists.items():
                self._flush_list(by_ref.get(ref, ref), ref, records)
            self._dump_json(self._names_path, names)
        finally:
            self._staged_names = None
            self._staged_lists = {}

    def _rollback(self) -> None:
        self._staged_names = None
        self._staged_lists = {}
