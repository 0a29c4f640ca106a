# ==============================================
# PickleDb — Store Facade
# ==============================================
#
# PURPOSE:
#   The only class users interact with. Ties the pieces together:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                        PickleDb                          │
#   │                                                          │
#   │   set / lcreate / ladd / lpop / ...                      │
#   │        │  encode values (Codec)                          │
#   │        ▼                                                 │
#   │   [ EntryStore ]  scalars + lists, disjoint keys         │
#   │        │  after each mutation                            │
#   │        ▼                                                 │
#   │   [ DumpScheduler ]  never / auto / upon request /       │
#   │        │             periodic                            │
#   │        ▼  if triggered                                   │
#   │   [ DbFile ]  codec.dumps_db → whole-file write          │
#   └──────────────────────────────────────────────────────────┘
#
# CLASS: PickleDb
# ---------------
#
#   Constructors:
#   -------------
#   - PickleDb.new(location, policy, codec=None)      → empty DB
#   - PickleDb.load(location, policy, codec=None)     → raises LoadError
#   - PickleDb.load_read_only(location, codec=None)   → policy NEVER
#   - PickleDb.from_config(config=None)               → load or new
#
#   Scalars: set, get, exists, get_all, total_keys, rem
#   Lists:   lcreate, lexists, ladd, lextend, lget, lgetall, liter,
#            llen, lrem_list, lpop, lrem_value
#   Dumping: dump, close (also via `with PickleDb...(...) as db:`)
#
#   Reads take an optional type_ (int, str, list[int], a dataclass, ...).
#   A value that is missing, of the other kind, or that does not decode
#   as type_ is reported as None.
#
# NOT THREAD-SAFE:
#   One PickleDb per file, used from one thread.
#
# ==============================================

import logging
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, List, Optional, Union

from picklekv.codec import Codec, JsonCodec, Payload, get_codec
from picklekv.config import StoreConfig, get_config
from picklekv.errors import CodecError, PickleDbError
from picklekv.persistence import DbFile, DumpMode, DumpPolicy, DumpScheduler
from picklekv.storage import EntryStore, KeyKind

logger = logging.getLogger(__name__)


class PickleDb:
    """
    In-memory key-value store persisted to a single file.

    Keys are strings. Values can be anything the codec can serialize;
    lists can mix value types. Values are stored serialized, so what
    a read returns is always a new object.
    """

    def __init__(
        self,
        location: Union[str, Path],
        policy: DumpPolicy,
        codec: Optional[Codec] = None,
        store: Optional[EntryStore] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Prefer the new()/load() constructors.

        Args:
            location: Path of the DB file
            policy: Dump policy for the lifetime of this instance
            codec: Value/file codec. Defaults to JsonCodec.
            store: Initial entries. Defaults to empty.
            clock: Monotonic time source for the periodic policy
        """
        self._codec = codec or JsonCodec()
        self._file = DbFile(location, self._codec)
        self._store = store if store is not None else EntryStore()
        self._scheduler = DumpScheduler(policy, clock)
        self._closed = False
        self.last_dump_error: Optional[PickleDbError] = None

    # ----------------------------------------------
    # Construction
    # ----------------------------------------------

    @classmethod
    def new(
        cls,
        location: Union[str, Path],
        policy: DumpPolicy,
        codec: Optional[Codec] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> "PickleDb":
        """
        Create an empty DB. Nothing is written until the policy says so.

        Example:
            db = PickleDb.new("example.db", DumpPolicy.auto())
        """
        db = cls(location, policy, codec=codec, clock=clock)
        logger.info("Created new DB at %s (policy: %s)", db.location, policy)
        return db

    @classmethod
    def load(
        cls,
        location: Union[str, Path],
        policy: DumpPolicy,
        codec: Optional[Codec] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> "PickleDb":
        """
        Load a DB from its file.

        Args:
            location: Path of an existing DB file
            policy: Dump policy to use from now on
            codec: Must match the codec that wrote the file

        Raises:
            LoadError: if the file is missing, unreadable or corrupt
        """
        codec = codec or JsonCodec()
        store = DbFile(location, codec).load()
        return cls(location, policy, codec=codec, store=store, clock=clock)

    @classmethod
    def load_read_only(
        cls,
        location: Union[str, Path],
        codec: Optional[Codec] = None,
    ) -> "PickleDb":
        """
        Load a DB that will never write back to its file, not even on dump().

        Raises:
            LoadError: if the file is missing, unreadable or corrupt
        """
        return cls.load(location, DumpPolicy.never(), codec=codec)

    @classmethod
    def from_config(cls, config: Optional[StoreConfig] = None) -> "PickleDb":
        """
        Open the DB described by configuration (see picklekv.config).

        Loads db_path if it exists, otherwise starts an empty DB there.
        """
        config = config or get_config()
        policy = config.dump_policy_value()
        codec = get_codec(config.codec)

        if DbFile(config.db_path, codec).exists():
            return cls.load(config.db_path, policy, codec=codec)
        return cls.new(config.db_path, policy, codec=codec)

    # ----------------------------------------------
    # Properties
    # ----------------------------------------------

    @property
    def location(self) -> Path:
        return self._file.path

    @property
    def policy(self) -> DumpPolicy:
        return self._scheduler.policy

    @property
    def codec(self) -> Codec:
        return self._codec

    # ----------------------------------------------
    # Dumping
    # ----------------------------------------------

    def dump(self) -> bool:
        """
        Write the DB to its file now.

        With DumpPolicy.never() nothing is written and True is returned.
        For the periodic policy this also restarts the cooldown.

        Returns:
            True on success, False if encoding or writing failed
            (the error is kept in last_dump_error).
        """
        if not self._scheduler.allows_dump():
            return True

        try:
            self._file.save(self._store)
        except PickleDbError as e:
            self.last_dump_error = e
            logger.warning("Dump to %s failed: %s", self.location, e)
            return False

        self.last_dump_error = None
        self._scheduler.mark_dumped()
        return True

    def _on_mutation(self) -> None:
        if self._scheduler.on_mutation():
            self.dump()

    def close(self) -> bool:
        """
        Final dump (unless the policy is NEVER). Safe to call twice.

        Returns:
            Result of the final dump, True if nothing had to be written
        """
        if self._closed:
            return True
        self._closed = True
        if self.policy.mode is DumpMode.NEVER:
            return True
        return self.dump()

    def __enter__(self) -> "PickleDb":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False  # Don't suppress exceptions

    # ----------------------------------------------
    # Decoding helpers
    # ----------------------------------------------

    def _decode(self, payload: Payload, type_: Any) -> Optional[Any]:
        try:
            return self._codec.decode(payload, type_)
        except CodecError:
            return None

    # ----------------------------------------------
    # Scalar values
    # ----------------------------------------------

    def set(self, key: str, value: Any) -> None:
        """
        Set a key to a value, replacing a value or list under the same key.

        Raises:
            CodecError: if the value cannot be serialized (DB unchanged)
        """
        payload = self._codec.encode(value)
        self._store.put_scalar(key, payload)
        self._on_mutation()

    def get(self, key: str, type_: Any = None) -> Optional[Any]:
        """
        Get the value of a key.

        Args:
            key: The key
            type_: Expected type, e.g. int or list[str]. None accepts anything.

        Returns:
            The value, or None if the key is missing, is a list,
            or does not decode as type_.

        Raises:
            UnsupportedTypeError: if type_ is not a type values can be read as
        """
        payload = self._store.get_scalar(key)
        if payload is None:
            return None
        return self._decode(payload, type_)

    def exists(self, key: str) -> bool:
        """True if key holds a value or a list."""
        return self._store.key_kind(key) is not KeyKind.ABSENT

    def get_all(self) -> List[str]:
        """All keys (values and lists), in no particular order."""
        return self._store.all_keys()

    def total_keys(self) -> int:
        return self._store.count()

    def rem(self, key: str) -> bool:
        """
        Remove a value or a list.

        Counts as a mutation for the dump policy even if nothing was removed.

        Returns:
            True if the key existed
        """
        removed = self._store.remove(key)
        self._on_mutation()
        return removed

    # ----------------------------------------------
    # Lists
    # ----------------------------------------------

    def lcreate(self, name: str) -> None:
        """Create an empty list, replacing a value or list under the same key."""
        self._store.put_list(name)
        self._on_mutation()

    def lexists(self, name: str) -> bool:
        """True only if name holds a list (see exists() for any kind)."""
        return self._store.key_kind(name) is KeyKind.LIST

    def ladd(self, name: str, value: Any) -> bool:
        """
        Append one item to an existing list.

        Returns:
            False if the list does not exist
        """
        return self.lextend(name, [value])

    def lextend(self, name: str, values: Iterable[Any]) -> bool:
        """
        Append items to an existing list, in order.

        Raises:
            CodecError: if any value cannot be serialized (list unchanged)

        Returns:
            False if the list does not exist
        """
        items = self._store.get_list(name)
        if items is None:
            return False

        payloads = [self._codec.encode(value) for value in values]
        items.extend(payloads)
        self._on_mutation()
        return True

    def lget(self, name: str, pos: int, type_: Any = None) -> Optional[Any]:
        """
        Get the item at pos.

        Returns:
            None if the list is missing, pos is out of range (negative
            positions included) or the item does not decode as type_.
        """
        items = self._store.get_list(name)
        if items is None or not 0 <= pos < len(items):
            return None
        return self._decode(items[pos], type_)

    def lgetall(self, name: str, type_: Any = None) -> Optional[List[Any]]:
        """
        Get every item of a list.

        Returns:
            The decoded items, or None if the list is missing or any
            item does not decode as type_.
        """
        items = self._store.get_list(name)
        if items is None:
            return None

        values = []
        for payload in items:
            try:
                values.append(self._codec.decode(payload, type_))
            except CodecError:
                return None
        return values

    def liter(self, name: str, type_: Any = None) -> Iterator[Optional[Any]]:
        """
        Iterate over a list's items. Items that do not decode as type_ come
        out as None. The iteration works on a copy, so the DB may be
        modified while iterating. A missing list yields nothing.
        """
        items = self._store.get_list(name)
        for payload in list(items or []):
            yield self._decode(payload, type_)

    def llen(self, name: str) -> int:
        """Number of items in a list, 0 if it does not exist."""
        items = self._store.get_list(name)
        return len(items) if items is not None else 0

    def lrem_list(self, name: str) -> int:
        """
        Remove a whole list.

        Returns:
            How many items the list had (0 if it did not exist)
        """
        removed = self._store.remove_list(name)
        self._on_mutation()
        return removed

    def lpop(self, name: str, pos: int, type_: Any = None) -> Optional[Any]:
        """
        Remove and return the item at pos; later items shift left.

        The item is decoded first and only removed if that succeeds,
        so asking for the wrong type never loses data.

        Returns:
            The item, or None if the list is missing, pos is out of
            range or the item does not decode as type_.
        """
        items = self._store.get_list(name)
        if items is None or not 0 <= pos < len(items):
            return None

        try:
            value = self._codec.decode(items[pos], type_)
        except CodecError:
            logger.warning("lpop(%r, %d): item does not decode as %s, left in place",
                           name, pos, getattr(type_, "__name__", type_))
            return None

        del items[pos]
        self._on_mutation()
        return value

    def lrem_value(self, name: str, value: Any) -> bool:
        """
        Remove the first item equal to value (compared in serialized form).

        Returns:
            True if an item was removed
        """
        items = self._store.get_list(name)
        if items is None:
            return False

        payload = self._codec.encode(value)
        try:
            items.remove(payload)
        except ValueError:
            return False

        self._on_mutation()
        return True

    # ----------------------------------------------
    # Python protocol helpers
    # ----------------------------------------------

    def __contains__(self, key: str) -> bool:
        return self.exists(key)

    def __len__(self) -> int:
        return self.total_keys()

    def __repr__(self) -> str:
        return (f"PickleDb({str(self.location)!r}, policy={self.policy}, "
                f"codec={self._codec.name}, keys={self.total_keys()})")
