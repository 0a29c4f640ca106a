# ==============================================
# DbFile
# ==============================================
#
# PURPOSE:
#   Read and write the whole DB as one file. The codec decides the
#   byte layout; this class only moves bytes to and from disk.
#
# CLASS: DbFile
# -------------
#   Stateless apart from the path and codec.
#
#   - save(store: EntryStore) -> None
#       Serialize both maps and rewrite the file.
#       Raises CodecError (encode) or DumpError (write).
#
#   - load() -> EntryStore
#       Raises LoadError if the file is missing, unreadable or corrupt.
#
#   - exists() -> bool
#
# DURABILITY:
#   Writes are whole-file rewrites in place (no temp file + rename),
#   so a crash mid-write can leave a truncated file behind.
#
# ==============================================

import logging
from pathlib import Path
from typing import Union

from picklekv.codec import Codec
from picklekv.errors import CodecError, DumpError, LoadError
from picklekv.storage import EntryStore

logger = logging.getLogger(__name__)


class DbFile:
    """The backing file of a PickleDb."""

    def __init__(self, location: Union[str, Path], codec: Codec):
        """
        Args:
            location: Path of the DB file
            codec: Codec used for the file layout
        """
        self.path = Path(location)
        self.codec = codec

    def save(self, store: EntryStore) -> None:
        """
        Write the full store to disk.

        Args:
            store: Entries to persist
        """
        scalars, lists = store.snapshot()
        data = self.codec.dumps_db(scalars, lists)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_bytes(data)
        except OSError as e:
            raise DumpError(
                f"Unable to write DB file {self.path}",
                details={"path": str(self.path), "error": str(e)},
            ) from e

        logger.debug("Dumped %d keys (%d bytes) to %s", store.count(), len(data), self.path)

    def load(self) -> EntryStore:
        """
        Read the DB file.

        Returns:
            A new EntryStore with the file's contents
        """
        try:
            data = self.path.read_bytes()
        except OSError as e:
            raise LoadError(
                f"Unable to read DB file {self.path}",
                details={"path": str(self.path), "error": str(e)},
            ) from e

        try:
            scalars, lists = self.codec.loads_db(data)
        except CodecError as e:
            raise LoadError(
                f"DB file {self.path} is corrupt or not a {self.codec.name} dump",
                details={"path": str(self.path), **e.details},
            ) from e

        store = EntryStore.from_snapshot(scalars, lists)
        logger.info("Loaded %d keys from %s", store.count(), self.path)
        return store

    def exists(self) -> bool:
        return self.path.is_file()

    def __repr__(self) -> str:
        return f"DbFile({str(self.path)!r}, codec={self.codec.name})"
