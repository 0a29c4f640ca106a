# ==============================================
# STORAGE: in-memory entries
# ==============================================
#
# Modules:
# --------
# - entry_store.py → EntryStore (scalar + list maps), KeyKind
#
# ==============================================

from .entry_store import EntryStore, KeyKind

__all__ = ["EntryStore", "KeyKind"]
