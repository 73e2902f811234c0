"""Tests for the named list primitives."""
import pytest

from nls_core.persistence import InMemoryListStore
from nls_core.store import NamedListStore

NAME = "my-named-key"


@pytest.fixture
def store():
    return NamedListStore(InMemoryListStore())


def _seed(store, records):
    store.ensure_exists(NAME)
    for record in records:
        store.upsert(NAME, record)


class TestEnsureExists:
    def test_binds_empty_list(self, store):
        store.ensure_exists(NAME)
        assert store.get_list(NAME) == []

    def test_idempotent(self, store):
        first = store.ensure_exists(NAME)
        second = store.ensure_exists(NAME)
        assert first == second
        assert store.get_list(NAME) == []
        assert store.names() == [NAME]

    def test_keeps_existing_contents(self, store):
        _seed(store, ["ID1;VALUE"])
        store.ensure_exists(NAME)
        assert store.get_list(NAME) == ["ID1;VALUE"]


class TestReset:
    def test_empties_list(self, store):
        _seed(store, ["ID1;VALUE", "ID2;VALUE"])
        store.reset(NAME)
        assert store.get_list(NAME) == []

    def test_keeps_handle(self, store):
        handle = store.ensure_exists(NAME)
        store.reset(NAME)
        assert store.backend.lookup(NAME) == handle

    def test_unbound_is_noop(self, store):
        store.reset(NAME)
        assert store.get_list(NAME) is None


class TestRemoveMatching:
    def test_removes_by_identifier(self, store):
        _seed(store, ["ID1;VALUE", "ID2;VALUE", "ID3;VALUE"])
        removed = store.remove_matching(NAME, ["ID1;OTHER", "ID3"])
        assert removed == ["ID1;VALUE", "ID3;VALUE"]
        assert store.get_list(NAME) == ["ID2;VALUE"]

    def test_missing_identifiers_are_noop(self, store):
        _seed(store, ["ID1;VALUE"])
        assert store.remove_matching(NAME, ["ID2;VALUE", "ID3;VALUE"]) == []
        assert store.get_list(NAME) == ["ID1;VALUE"]

    def test_repeated_identifier_removes_sequentially(self, store):
        _seed(store, ["A;1", "A;2", "B;1"])
        store.remove_matching(NAME, ["A;x", "A;y"])
        assert store.get_list(NAME) == ["B;1"]

    def test_each_identifier_removes_at_most_one(self, store):
        _seed(store, ["A;1", "A;2"])
        store.remove_matching(NAME, ["A;x"])
        assert store.get_list(NAME) == ["A;2"]

    def test_first_substring_match_wins(self, store):
        # Looser than field equality: "ID1" also matches "ID10"
        _seed(store, ["ID10;VALUE", "ID1;VALUE"])
        store.remove_matching(NAME, ["ID1;NEW"])
        assert store.get_list(NAME) == ["ID1;VALUE"]

    def test_unbound_is_noop(self, store):
        assert store.remove_matching(NAME, ["ID1;VALUE"]) == []
        assert store.get_list(NAME) is None

    def test_empty_list(self, store):
        store.ensure_exists(NAME)
        assert store.remove_matching(NAME, ["ID1;VALUE"]) == []
        assert store.get_list(NAME) == []


class TestUpsert:
    def test_appends_to_end(self, store):
        _seed(store, ["ID1;VALUE"])
        store.upsert(NAME, "ID2;VALUE")
        assert store.get_list(NAME) == ["ID1;VALUE", "ID2;VALUE"]

    def test_does_not_deduplicate(self, store):
        _seed(store, ["ID1;VALUE"])
        store.upsert(NAME, "ID1;VALUE2")
        assert store.get_list(NAME) == ["ID1;VALUE", "ID1;VALUE2"]

    def test_unbound_is_noop(self, store):
        store.upsert(NAME, "ID1;VALUE")
        assert store.get_list(NAME) is None
        assert store.names() == []
