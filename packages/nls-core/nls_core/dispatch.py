"""
Dispatch entrypoint.

``dispatch`` is the single externally callable operation. For every
method it first makes sure the list exists and removes the stored
records matched by the incoming batch; ``add`` then appends the batch and
``delall`` empties the list. Any other method stops after the removal.

The whole call runs inside one backend transaction: either every write
commits or none does.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Sequence, Union

from .args import ARG_KEYS, ARG_METHOD, ARG_NAMED_KEY, InvocationArgs, decode_args
from .persistence.interfaces import ListStore
from .store import NamedListStore

logger = logging.getLogger(__name__)


class Method(str, Enum):
    """Known method selectors."""
    ADD = "add"
    DEL = "del"
    DELALL = "delall"


KNOWN_METHODS = {m.value for m in Method}


@dataclass
class DispatchResult:
    """Summary of one dispatch call."""
    named_key: str
    method: str
    removed: List[str] = field(default_factory=list)
    appended: int = 0
    cleared: bool = False
    records: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "named_key": self.named_key,
            "method": self.method,
            "removed": self.removed,
            "appended": self.appended,
            "cleared": self.cleared,
            "records": self.records,
        }


def dispatch(
    store: Union[NamedListStore, ListStore],
    args: Union[InvocationArgs, Mapping[str, Any]],
) -> DispatchResult:
    """
    Run one invocation against a store.

    Args:
        store: Named list store, or a bare backend to wrap.
        args: Runtime arguments ``keys``, ``method`` and ``named-key``.

    Raises:
        MissingArgument: if an argument is absent. Nothing is written.
        StorageAccessFailure: if the backend fails. Staged writes are
            discarded and the previously committed list stands.
    """
    decoded = decode_args(args)
    if isinstance(store, ListStore):
        store = NamedListStore(store)

    name = decoded.named_key
    method = decoded.method
    batch = list(decoded.keys)

    if method not in KNOWN_METHODS:
        logger.warning(f"Unrecognized method '{method}' on '{name}'; only removing matches")

    logger.info(f"Dispatch {method} on '{name}' with {len(batch)} record(s)")
    result = DispatchResult(named_key=name, method=method)

    with store.backend.transaction():
        store.ensure_exists(name)
        result.removed = store.remove_matching(name, batch)

        if method == Method.ADD.value:
            for record in batch:
                store.upsert(name, record)
            result.appended = len(batch)
        elif method == Method.DELALL.value:
            store.reset(name)
            result.cleared = True

        result.records = store.get_list(name) or []

    logger.info(
        f"Dispatch {method} on '{name}' done: removed={len(result.removed)} "
        f"appended={result.appended} size={len(result.records)}"
    )
    return result


def call(
    keys: Optional[Sequence[str]],
    method: Optional[str],
    named_key: Optional[str],
    store: Union[NamedListStore, ListStore, None] = None,
) -> DispatchResult:
    """
    Keyword wrapper around ``dispatch``.

    ``None`` arguments are treated as absent. Without ``store`` the
    configured backend is opened for the duration of the call.
    """
    args = {
        ARG_KEYS: list(keys) if keys is not None else None,
        ARG_METHOD: method,
        ARG_NAMED_KEY: named_key,
    }
    if store is not None:
        return dispatch(store, args)

    from .persistence import open_store
    with open_store() as backend:
        return dispatch(backend, args)
