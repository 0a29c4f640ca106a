# ==============================================
# Tests for DbFile
# ==============================================

import pytest

from picklekv.codec import BsonCodec, JsonCodec
from picklekv.errors import DumpError, LoadError
from picklekv.persistence import DbFile
from picklekv.storage import EntryStore


class TestSaveLoad:

    def test_roundtrip(self, db_path):
        store = EntryStore({"a": "1"}, {"l": ['"x"', "2"]})
        db_file = DbFile(db_path, JsonCodec())
        db_file.save(store)

        loaded = db_file.load()
        assert loaded.snapshot() == store.snapshot()

    def test_creates_parent_directories(self, tmp_path):
        db_file = DbFile(tmp_path / "nested" / "dir" / "x.db", BsonCodec())
        db_file.save(EntryStore())

        assert db_file.exists()

    def test_save_rewrites_whole_file(self, db_path):
        db_file = DbFile(db_path, JsonCodec())
        db_file.save(EntryStore({"a": "1", "b": "2"}))
        db_file.save(EntryStore({"c": "3"}))

        assert db_file.load().all_keys() == ["c"]

    def test_write_failure(self, tmp_path):
        db_file = DbFile(tmp_path, JsonCodec())  # a directory

        with pytest.raises(DumpError):
            db_file.save(EntryStore())


class TestLoadErrors:

    def test_missing_file(self, db_path):
        with pytest.raises(LoadError):
            DbFile(db_path, JsonCodec()).load()

    def test_corrupt_file(self, db_path):
        db_path.write_text("this is not a dump")

        with pytest.raises(LoadError):
            DbFile(db_path, JsonCodec()).load()

    def test_truncated_file(self, db_path):
        DbFile(db_path, JsonCodec()).save(EntryStore({"a": "1"}))
        db_path.write_bytes(db_path.read_bytes()[:-3])

        with pytest.raises(LoadError):
            DbFile(db_path, JsonCodec()).load()
