"""
Invocation argument decoding.

The dispatch entrypoint takes three runtime arguments, named as on the
wire: ``keys`` (list of records), ``method`` and ``named-key``.
"""
from __future__ import annotations

from typing import Any, List, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import MissingArgument, NamedListError

ARG_KEYS = "keys"
ARG_METHOD = "method"
ARG_NAMED_KEY = "named-key"

REQUIRED_ARGS = (ARG_KEYS, ARG_METHOD, ARG_NAMED_KEY)


class InvocationArgs(BaseModel):
    """Decoded arguments of one dispatch call."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    keys: List[str] = Field(default_factory=list)
    method: str
    named_key: str = Field(alias=ARG_NAMED_KEY)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


def _lookup(raw: Mapping[str, Any], name: str) -> Any:
    value = raw.get(name)
    if value is None and name == ARG_NAMED_KEY:
        value = raw.get("named_key")
    return value


def decode_args(raw: Union[InvocationArgs, Mapping[str, Any]]) -> InvocationArgs:
    """
    Decode runtime arguments into ``InvocationArgs``.

    Raises:
        MissingArgument: if ``keys``, ``method`` or ``named-key`` is absent.
        NamedListError: if a value has the wrong type.
    """
    if isinstance(raw, InvocationArgs):
        return raw

    for name in REQUIRED_ARGS:
        if _lookup(raw, name) is None:
            raise MissingArgument(name)

    try:
        return InvocationArgs.model_validate({
            ARG_KEYS: raw[ARG_KEYS],
            ARG_METHOD: raw[ARG_METHOD],
            ARG_NAMED_KEY: _lookup(raw, ARG_NAMED_KEY),
        })
    except ValidationError as e:
        raise NamedListError(f"Invalid arguments: {e}") from e
