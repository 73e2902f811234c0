"""
Named List Store.

Primitive operations over one named list held by a ``ListStore``
backend. Each primitive reads the whole list through the name's handle,
changes a local copy, and writes the whole list back. Nothing is cached
between calls.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .persistence.interfaces import ListStore, StoreHandle
from .records import find_first, record_identifier

logger = logging.getLogger(__name__)


class NamedListStore:
    """Named list operations on top of a storage backend."""

    def __init__(self, backend: ListStore):
        self.backend = backend

    def ensure_exists(self, list_name: str) -> StoreHandle:
        """Bind an empty list to ``list_name`` unless one is already bound."""
        handle = self.backend.lookup(list_name)
        if handle is None:
            handle = self.backend.bind(list_name)
            logger.info(f"Created named list '{list_name}' ({handle.ref})")
        return handle

    def reset(self, list_name: str) -> None:
        """Empty the list bound to ``list_name``, keeping its handle."""
        handle = self.backend.lookup(list_name)
        if handle is None:
            return
        self.backend.write(handle, [])
        logger.debug(f"Reset named list '{list_name}'")

    def remove_matching(self, list_name: str, batch: Iterable[str]) -> List[str]:
        """
        Remove, for each record in ``batch``, the first stored record that
        contains its identifier.

        Removals happen one after another against the list as already
        modified, so a repeated identifier can remove several records.
        Returns the removed records in removal order.
        """
        handle = self.backend.lookup(list_name)
        if handle is None:
            return []

        records = self.backend.read(handle)
        if not records:
            return []

        removed: List[str] = []
        for incoming in batch:
            identifier = record_identifier(incoming)
            index = find_first(records, identifier)
            if index is not None:
                removed.append(records.pop(index))
                logger.debug(f"Removed record matching '{identifier}' from '{list_name}'")

        self.backend.write(handle, records)
        return removed

    def upsert(self, list_name: str, record: str) -> None:
        """
        Append ``record`` to the list.

        Replacing an existing record relies on ``remove_matching`` having run
        over the batch first.
        """
        handle = self.backend.lookup(list_name)
        if handle is None:
            return
        records = self.backend.read(handle)
        records.append(record)
        self.backend.write(handle, records)
        logger.debug(f"Appended record to '{list_name}' ({len(records)} total)")

    def get_list(self, list_name: str) -> Optional[List[str]]:
        """Return a copy of the list, or None if the name is unbound."""
        handle = self.backend.lookup(list_name)
        if handle is None:
            return None
        return self.backend.read(handle)

    def names(self) -> List[str]:
        return self.backend.list_names()
