"""
SQLite list storage.

One row per named key binding and one row per list; the list is stored
as a JSON array. Transactions map onto SQLite transactions.
"""
from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from ..errors import StorageAccessFailure
from .interfaces import ListStore, StoreHandle, new_ref

logger = logging.getLogger(__name__)

_CREATE_NAMED_KEYS = """
CREATE TABLE IF NOT EXISTS named_keys (
    name TEXT PRIMARY KEY,
    ref TEXT NOT NULL UNIQUE
);
"""

_CREATE_LISTS = """
CREATE TABLE IF NOT EXISTS lists (
    ref TEXT PRIMARY KEY,
    records TEXT NOT NULL DEFAULT '[]',
    updated_at TEXT
);
"""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SQLiteListStore(ListStore):
    """SQLite-backed list store."""

    def __init__(self, db_path: Optional[str] = None):
        """
        Open (or create) the database and ensure tables exist.

        Args:
            db_path: Path to SQLite database file, or ``":memory:"``.
                     Defaults to 'lists.db' under NLS_HOME.
        """
        super().__init__()
        if db_path is None:
            from .fs_store import get_nls_home
            db_path = str(get_nls_home() / "lists.db")
        if db_path != ":memory:":
            db_path = str(Path(db_path).expanduser())
        self._db_path = db_path
        try:
            if db_path != ":memory:":
                Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            # autocommit mode; transaction() issues BEGIN/COMMIT itself
            self._conn: Optional[sqlite3.Connection] = sqlite3.connect(db_path, isolation_level=None)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute(_CREATE_NAMED_KEYS)
            self._conn.execute(_CREATE_LISTS)
        except (OSError, sqlite3.Error) as e:
            raise StorageAccessFailure(f"Cannot open list database at {db_path}: {e}") from e
        logger.debug(f"Opened list database {db_path}")

    def _execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        if self._conn is None:
            raise StorageAccessFailure("SQLiteListStore is closed")
        try:
            return self._conn.execute(sql, params)
        except sqlite3.Error as e:
            raise StorageAccessFailure(f"SQLite error: {e}") from e

    def lookup(self, name: str) -> Optional[StoreHandle]:
        row = self._execute("SELECT ref FROM named_keys WHERE name=?", (name,)).fetchone()
        if row is None:
            return None
        return StoreHandle(name=name, ref=row["ref"])

    def bind(self, name: str) -> StoreHandle:
        existing = self.lookup(name)
        if existing is not None:
            return existing
        handle = StoreHandle(name=name, ref=new_ref())
        with self.transaction():
            self._execute(
                "INSERT INTO lists (ref, records, updated_at) VALUES (?, '[]', ?)",
                (handle.ref, _now()),
            )
            self._execute(
                "INSERT INTO named_keys (name, ref) VALUES (?, ?)",
                (name, handle.ref),
            )
        return handle

    def read(self, handle: StoreHandle) -> List[str]:
        row = self._execute("SELECT records FROM lists WHERE ref=?", (handle.ref,)).fetchone()
        if row is None:
            raise StorageAccessFailure(f"No list stored at {handle.ref}", name=handle.name)
        try:
            return list(json.loads(row["records"]))
        except json.JSONDecodeError as e:
            raise StorageAccessFailure(f"Corrupt list at {handle.ref}: {e}", name=handle.name) from e

    def write(self, handle: StoreHandle, records: List[str]) -> None:
        cur = self._execute(
            "UPDATE lists SET records=?, updated_at=? WHERE ref=?",
            (json.dumps(list(records)), _now(), handle.ref),
        )
        if cur.rowcount == 0:
            raise StorageAccessFailure(f"No list stored at {handle.ref}", name=handle.name)

    def list_names(self) -> List[str]:
        rows = self._execute("SELECT name FROM named_keys ORDER BY name").fetchall()
        return [row["name"] for row in rows]

    def _begin(self) -> None:
        self._execute("BEGIN")

    def _commit(self) -> None:
        self._execute("COMMIT")

    def _rollback(self) -> None:
        if self._conn is not None and self._conn.in_transaction:
            self._execute("ROLLBACK")

    def close(self) -> None:
        """Close the database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None
