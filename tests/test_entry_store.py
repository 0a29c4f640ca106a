# ==============================================
# Tests for EntryStore
# ==============================================

from picklekv.storage import EntryStore, KeyKind


class TestKeyExclusivity:
    """A key is never both a value and a list."""

    def test_list_replaces_scalar(self):
        store = EntryStore()
        store.put_scalar("k", "1")
        store.put_list("k")

        assert store.key_kind("k") is KeyKind.LIST
        assert store.get_scalar("k") is None
        assert store.get_list("k") == []

    def test_scalar_replaces_list(self):
        store = EntryStore()
        store.put_list("k")
        store.get_list("k").append("1")
        store.put_scalar("k", "2")

        assert store.key_kind("k") is KeyKind.SCALAR
        assert store.get_list("k") is None
        assert store.count() == 1

    def test_put_list_resets_existing_list(self):
        store = EntryStore()
        store.put_list("k")
        store.get_list("k").extend(["1", "2"])
        store.put_list("k")

        assert store.get_list("k") == []

    def test_overlapping_snapshot_keeps_list(self):
        store = EntryStore.from_snapshot({"k": "1", "a": "2"}, {"k": ["3"]})

        assert store.key_kind("k") is KeyKind.LIST
        assert store.key_kind("a") is KeyKind.SCALAR
        assert store.count() == 2


class TestKeys:
    """Key listing and counting."""

    def test_absent_key(self):
        assert EntryStore().key_kind("nope") is KeyKind.ABSENT

    def test_all_keys_is_union(self):
        store = EntryStore({"a": "1", "b": "2"}, {"c": []})

        assert sorted(store.all_keys()) == ["a", "b", "c"]
        assert store.count() == 3

    def test_remove(self):
        store = EntryStore({"a": "1"}, {"l": ["1", "2"]})

        assert store.remove("a") is True
        assert store.remove("l") is True
        assert store.remove("a") is False
        assert store.count() == 0

    def test_remove_list_returns_length(self):
        store = EntryStore({"a": "1"}, {"l": ["1", "2"]})

        assert store.remove_list("l") == 2
        assert store.remove_list("l") == 0
        # scalars are untouched by remove_list
        assert store.remove_list("a") == 0
        assert store.key_kind("a") is KeyKind.SCALAR


class TestSnapshot:
    """snapshot() is detached from the live store."""

    def test_snapshot_is_a_copy(self):
        store = EntryStore({"a": "1"}, {"l": ["1"]})
        scalars, lists = store.snapshot()
        scalars["b"] = "2"
        lists["l"].append("2")

        assert store.get_scalar("b") is None
        assert store.get_list("l") == ["1"]

    def test_constructor_copies_input(self):
        lists = {"l": ["1"]}
        store = EntryStore({}, lists)
        lists["l"].append("2")

        assert store.get_list("l") == ["1"]
