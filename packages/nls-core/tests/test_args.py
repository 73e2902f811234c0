"""Tests for invocation argument decoding."""
import pytest

from nls_core.args import InvocationArgs, decode_args
from nls_core.errors import MissingArgument, NamedListError


class TestDecodeArgs:
    def test_wire_names(self):
        args = decode_args({"keys": ["ID1;VALUE"], "method": "add", "named-key": "k"})
        assert args.keys == ["ID1;VALUE"]
        assert args.method == "add"
        assert args.named_key == "k"

    def test_python_name_for_named_key(self):
        args = decode_args({"keys": [], "method": "del", "named_key": "k"})
        assert args.named_key == "k"

    def test_empty_keys_allowed(self):
        assert decode_args({"keys": [], "method": "add", "named-key": "k"}).keys == []

    @pytest.mark.parametrize("missing", ["keys", "method", "named-key"])
    def test_missing_argument(self, missing):
        raw = {"keys": [], "method": "add", "named-key": "k"}
        del raw[missing]
        with pytest.raises(MissingArgument) as exc:
            decode_args(raw)
        assert exc.value.argument == missing
        assert missing in str(exc.value)

    def test_none_counts_as_missing(self):
        with pytest.raises(MissingArgument):
            decode_args({"keys": None, "method": "add", "named-key": "k"})

    def test_wrong_type(self):
        with pytest.raises(NamedListError, match="Invalid arguments"):
            decode_args({"keys": "ID1;VALUE", "method": "add", "named-key": "k"})

    def test_empty_named_key_is_a_name(self):
        assert decode_args({"keys": [], "method": "add", "named-key": ""}).named_key == ""

    def test_passthrough(self):
        args = InvocationArgs(keys=["a"], method="add", named_key="k")
        assert decode_args(args) is args

    def test_to_wire(self):
        args = InvocationArgs(keys=["a"], method="add", named_key="k")
        assert args.to_wire() == {"keys": ["a"], "method": "add", "named-key": "k"}

    def test_missing_is_named_list_error(self):
        assert issubclass(MissingArgument, NamedListError)
