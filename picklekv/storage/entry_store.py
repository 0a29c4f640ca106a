# ==============================================
# EntryStore
# ==============================================
#
# PURPOSE:
#   The in-memory dataset: a scalar map (key → payload) and a list
#   map (key → ordered payloads). Payloads are opaque codec output.
#
# INVARIANT (key exclusivity):
#   A key lives in at most one of the two maps. Writing one kind
#   silently drops the other kind under the same key.
#
# CLASS: EntryStore
# -----------------
#   - put_scalar(key, payload) -> None
#   - put_list(key) -> None              (always an empty list)
#   - key_kind(key) -> KeyKind
#   - all_keys() -> list[str]            (no ordering guarantee)
#   - count() -> int
#   - get_scalar / get_list / remove / remove_list
#   - snapshot() / from_snapshot()       (used by the persistence layer)
#
#   Not gated by any dump policy; PickleDb decides when to flush.
#
# ==============================================

from enum import Enum
from typing import List, Optional, Tuple

from picklekv.codec import ListMap, Payload, ScalarMap


class KeyKind(Enum):
    """What a key currently holds."""
    ABSENT = "absent"
    SCALAR = "scalar"
    LIST = "list"


class EntryStore:
    """Two maps with disjoint key sets."""

    def __init__(
        self,
        scalars: Optional[ScalarMap] = None,
        lists: Optional[ListMap] = None,
    ):
        self._scalars: ScalarMap = dict(scalars or {})
        self._lists: ListMap = {name: list(items) for name, items in (lists or {}).items()}

        # A loaded file could name a key in both maps; the list wins,
        # matching what lcreate() after set() would have produced.
        for key in self._lists:
            self._scalars.pop(key, None)

    def put_scalar(self, key: str, payload: Payload) -> None:
        self._lists.pop(key, None)
        self._scalars[key] = payload

    def put_list(self, key: str) -> None:
        self._scalars.pop(key, None)
        self._lists[key] = []

    def key_kind(self, key: str) -> KeyKind:
        if key in self._scalars:
            return KeyKind.SCALAR
        if key in self._lists:
            return KeyKind.LIST
        return KeyKind.ABSENT

    def all_keys(self) -> List[str]:
        return list(self._scalars) + list(self._lists)

    def count(self) -> int:
        return len(self._scalars) + len(self._lists)

    def get_scalar(self, key: str) -> Optional[Payload]:
        return self._scalars.get(key)

    def get_list(self, name: str) -> Optional[List[Payload]]:
        """
        Return the live payload list for name, or None.

        The returned list is the store's own; callers inside the
        package mutate it in place for ladd/lpop/lrem_value.
        """
        return self._lists.get(name)

    def remove(self, key: str) -> bool:
        """Remove key from whichever map holds it."""
        if self._scalars.pop(key, None) is not None:
            return True
        return self._lists.pop(key, None) is not None

    def remove_list(self, name: str) -> int:
        """Remove a list and return how many items it had (0 if absent)."""
        items = self._lists.pop(name, None)
        return len(items) if items is not None else 0

    def snapshot(self) -> Tuple[ScalarMap, ListMap]:
        """Shallow copies of both maps (payloads are immutable)."""
        return dict(self._scalars), {name: list(items) for name, items in self._lists.items()}

    @classmethod
    def from_snapshot(cls, scalars: ScalarMap, lists: ListMap) -> "EntryStore":
        return cls(scalars, lists)

    def __repr__(self) -> str:
        return f"EntryStore(scalars={len(self._scalars)}, lists={len(self._lists)})"
