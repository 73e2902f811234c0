"""
Named List Demo - add, update, delete and clear records with NLS.

Usage (in-process store, no persistence):
    python examples/named_lists/demo.py

Usage (SQLite store in ./demo.db):
    python examples/named_lists/demo.py --sqlite
"""
from __future__ import annotations

import sys

from nls_core import call
from nls_core.persistence import InMemoryListStore, SQLiteListStore

NAMED_KEY = "blockchain-authenticator"


def show(step: str, result) -> None:
    print(f"\n--- {step} ---")
    for record in result.records or ["(empty)"]:
        print(f"  {record}")


def main(use_sqlite: bool = False):
    if use_sqlite:
        store = SQLiteListStore(db_path="demo.db")
        print("Using SQLiteListStore (demo.db)")
    else:
        store = InMemoryListStore()
        print("Using InMemoryListStore (in-process, no persistence)")

    with store:
        show("Add three codes", call(["ID1;VALUE", "ID2;VALUE", "ID3;VALUE"], "add", NAMED_KEY, store=store))
        show("Update ID2", call(["ID2;NEWVALUE"], "add", NAMED_KEY, store=store))
        show("Delete ID1", call(["ID1"], "del", NAMED_KEY, store=store))
        show("Clear", call([], "delall", NAMED_KEY, store=store))

    print("\nDone.")


if __name__ == "__main__":
    main(use_sqlite="--sqlite" in sys.argv)
