# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures:
# - clean_env (autouse)  → no PICKLEKV_* variables, fresh config singleton
# - FakeClock / clock    → manual time source for the periodic policy
# - db_path              → DB file path inside tmp_path
# - auto_db / manual_db  → PickleDb instances with AUTO / UPON_REQUEST dumping
# - save_calls           → records every DbFile.save() call
#
# ==============================================

import os

import pytest

from picklekv import DumpPolicy, PickleDb
from picklekv.config import reset_config
from picklekv.persistence import DbFile

ENV_VARS = [
    "PICKLEKV_DB_PATH",
    "PICKLEKV_DUMP_POLICY",
    "PICKLEKV_DUMP_INTERVAL",
    "PICKLEKV_CODEC",
]


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
    # load_dotenv writes straight into os.environ
    for name in ENV_VARS:
        os.environ.pop(name, None)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "test.db"


@pytest.fixture
def auto_db(db_path):
    return PickleDb.new(db_path, DumpPolicy.auto())


@pytest.fixture
def manual_db(db_path):
    return PickleDb.new(db_path, DumpPolicy.upon_request())


@pytest.fixture
def save_calls(monkeypatch):
    """Key counts of every store written through DbFile.save()."""
    calls = []
    original_save = DbFile.save

    def counting_save(self, store):
        calls.append(store.count())
        return original_save(self, store)

    monkeypatch.setattr(DbFile, "save", counting_save)
    return calls
