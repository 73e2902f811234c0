"""
In-process list storage (no persistence). Useful for tests and embedding.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ..errors import StorageAccessFailure
from .interfaces import ListStore, StoreHandle, new_ref


class InMemoryListStore(ListStore):
    """Dict-backed list store; transactions restore a snapshot on rollback."""

    def __init__(self) -> None:
        super().__init__()
        self._names: Dict[str, str] = {}
        self._lists: Dict[str, List[str]] = {}
        self._snapshot: Optional[Tuple[Dict[str, str], Dict[str, List[str]]]] = None

    def lookup(self, name: str) -> Optional[StoreHandle]:
        ref = self._names.get(name)
        if ref is None:
            return None
        return StoreHandle(name=name, ref=ref)

    def bind(self, name: str) -> StoreHandle:
        existing = self.lookup(name)
        if existing is not None:
            return existing
        ref = new_ref()
        self._lists[ref] = []
        self._names[name] = ref
        return StoreHandle(name=name, ref=ref)

    def read(self, handle: StoreHandle) -> List[str]:
        if handle.ref not in self._lists:
            raise StorageAccessFailure(f"No list stored at {handle.ref}", name=handle.name)
        return list(self._lists[handle.ref])

    def write(self, handle: StoreHandle, records: List[str]) -> None:
        if handle.ref not in self._lists:
            raise StorageAccessFailure(f"No list stored at {handle.ref}", name=handle.name)
        self._lists[handle.ref] = list(records)

    def list_names(self) -> List[str]:
        return sorted(self._names)

    def _begin(self) -> None:
        self._snapshot = (
            dict(self._names),
            {ref: list(records) for ref, records in self._lists.items()},
        )

    def _commit(self) -> None:
        self._snapshot = None

    def _rollback(self) -> None:
        if self._snapshot is not None:
            self._names, self._lists = self._snapshot
            self._snapshot = None
