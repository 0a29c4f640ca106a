# ==============================================
# picklekv — embedded file-backed key-value store
# ==============================================
#
# Package Structure:
#
# picklekv/
# ├── codec/         # Value <-> payload conversion (JSON, BSON)
# ├── storage/       # In-memory entries (values + lists)
# ├── persistence/   # Dump policies and the DB file
# ├── config.py      # Configuration from env / .env
# ├── errors.py      # Exception hierarchy
# ├── pickle_db.py   # PickleDb, the public facade
# └── cli.py         # Command line entry point
#
# USAGE:
# ------
#   from picklekv import PickleDb, DumpPolicy
#
#   with PickleDb.new("example.db", DumpPolicy.auto()) as db:
#       db.set("key", 100)
#       db.get("key", int)       # → 100
#
# ==============================================

from picklekv.codec import BsonCodec, Codec, JsonCodec, get_codec
from picklekv.errors import (
    CodecError,
    ConfigError,
    DumpError,
    LoadError,
    PickleDbError,
    UnsupportedTypeError,
)
from picklekv.persistence import DumpMode, DumpPolicy
from picklekv.pickle_db import PickleDb

__version__ = "0.1.0"

__all__ = [
    "PickleDb",
    "DumpPolicy",
    "DumpMode",
    "Codec",
    "JsonCodec",
    "BsonCodec",
    "get_codec",
    "PickleDbError",
    "CodecError",
    "LoadError",
    "DumpError",
    "ConfigError",
    "UnsupportedTypeError",
]
