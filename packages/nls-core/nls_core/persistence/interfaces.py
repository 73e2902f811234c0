"""
NLS Persistence Interfaces.

Abstract base class for list storage backends.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional
from uuid import uuid4


@dataclass(frozen=True)
class StoreHandle:
    """Opaque reference to a named list's location inside a backend."""
    name: str
    ref: str


def new_ref() -> str:
    """Generate a fresh location token for a list."""
    return f"lst_{uuid4().hex[:12]}"


class ListStore(ABC):
    """
    Interface for named list storage.

    Names are bound to handles once; contents are always read and written
    as a whole list through the handle.

    Writes made inside ``transaction()`` are staged and become visible to
    other readers of the backend only when the outermost transaction exits
    cleanly. Outside a transaction every write commits immediately.
    """

    def __init__(self) -> None:
        self._tx_depth = 0

    @abstractmethod
    def lookup(self, name: str) -> Optional[StoreHandle]:
        """Return the handle bound to ``name``, or None."""
        pass

    @abstractmethod
    def bind(self, name: str) -> StoreHandle:
        """Bind ``name`` to a new empty list (or return the existing handle)."""
        pass

    @abstractmethod
    def read(self, handle: StoreHandle) -> List[str]:
        """Read the full list behind a handle."""
        pass

    @abstractmethod
    def write(self, handle: StoreHandle, records: List[str]) -> None:
        """Replace the full list behind a handle."""
        pass

    @abstractmethod
    def list_names(self) -> List[str]:
        """List all bound names."""
        pass

    # -- transactions ------------------------------------------------------

    def _begin(self) -> None:
        pass

    def _commit(self) -> None:
        pass

    def _rollback(self) -> None:
        pass

    @property
    def in_transaction(self) -> bool:
        return self._tx_depth > 0

    @contextmanager
    def transaction(self) -> Iterator["ListStore"]:
        """
        Run a block as one all-or-nothing unit of work.

        Nested calls join the enclosing transaction.
        """
        if self._tx_depth:
            self._tx_depth += 1
            try:
                yield self
            finally:
                self._tx_depth -= 1
            return

        self._begin()
        self._tx_depth = 1
        try:
            yield self
        except BaseException:
            self._tx_depth = 0
            self._rollback()
            raise
        self._tx_depth = 0
        self._commit()

    # -- lifecycle ---------------------------------------------------------

    def close(self) -> None:
        """Release backend resources."""
        pass

    def __enter__(self) -> "ListStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
