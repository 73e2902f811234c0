"""
NLS error types.

Every error aborts the invocation that raised it; there is no
recoverable category.
"""
from __future__ import annotations

from typing import Optional


class NamedListError(Exception):
    """Base class for all named list store errors."""


class MissingArgument(NamedListError):
    """A required invocation argument was not supplied."""

    def __init__(self, argument: str):
        self.argument = argument
        super().__init__(f"Missing argument: {argument}")


class StorageAccessFailure(NamedListError):
    """The backing store could not be read or written through a handle."""

    def __init__(self, message: str, name: Optional[str] = None):
        self.name = name
        if name:
            message = f"{message} (named key: {name})"
        super().__init__(message)
