"""
NLS Core Library.

Maintains named, ordered lists of ``"<identifier>;<payload>"`` records in
a key-value store:
- Dispatch entrypoint (add / del / delall) with all-or-nothing commits
- Named list primitives (ensure_exists, reset, remove_matching, upsert)
- Pluggable storage backends (memory, filesystem, SQLite)
- YAML configuration and the ``nls`` command line
"""

__version__ = "0.1.0"

from .errors import NamedListError, MissingArgument, StorageAccessFailure
from .records import ParsedRecord, parse_record, record_identifier
from .args import InvocationArgs, decode_args
from .store import NamedListStore
from .dispatch import Method, DispatchResult, dispatch, call

__all__ = [
    "__version__",
    # Errors
    "NamedListError",
    "MissingArgument",
    "StorageAccessFailure",
    # Records
    "ParsedRecord",
    "parse_record",
    "record_identifier",
    # Arguments
    "InvocationArgs",
    "decode_args",
    # Store and dispatch
    "NamedListStore",
    "Method",
    "DispatchResult",
    "dispatch",
    "call",
]
