"""
Record helpers.

A record is opaque text shaped like ``"<identifier>;<payload>"``. Only the
identifier matters to the store: it decides which stored record an
incoming record replaces or removes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

SEPARATOR = ";"


@dataclass(frozen=True)
class ParsedRecord:
    """A record split at its first separator."""
    identifier: str
    payload: str
    raw: str


def parse_record(record: str) -> ParsedRecord:
    """Split a record into identifier and payload.

    Without a separator the whole text is the identifier.
    """
    identifier, _, payload = record.partition(SEPARATOR)
    return ParsedRecord(identifier=identifier, payload=payload, raw=record)


def record_identifier(record: str) -> str:
    """Return the text before the first separator."""
    return record.partition(SEPARATOR)[0]


def matches(stored: str, identifier: str) -> bool:
    """
    Return True if a stored record matches an identifier.

    The match is substring containment over the whole stored text, not
    equality with the stored identifier. An identifier that occurs inside
    another record's payload therefore matches that record too, and an
    empty identifier matches everything.
    """
    return identifier in stored


def find_first(records: List[str], identifier: str) -> Optional[int]:
    """Index of the first record matching ``identifier``, or None."""
    for index, stored in enumerate(records):
        if matches(stored, identifier):
            return index
    return None
