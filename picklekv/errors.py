# ==============================================
# Errors
# ==============================================
#
# Exception hierarchy for the store. Everything raised on purpose
# by picklekv derives from PickleDbError so callers can catch one type.
#
# - CodecError   → value could not be encoded / payload could not be decoded
# - UnsupportedTypeError → a read asked for a type that cannot be validated
# - LoadError    → the DB file could not be read or parsed
# - DumpError    → the DB file could not be written
# - ConfigError  → invalid configuration value
#
# ==============================================

from typing import Any, Dict, Optional


class PickleDbError(Exception):
    """Base exception for picklekv errors."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.details = details or {}


class CodecError(PickleDbError):
    """Encoding or decoding failed."""


class UnsupportedTypeError(PickleDbError, TypeError):
    """A requested read type has no validation schema (caller error)."""


class LoadError(PickleDbError):
    """Loading the DB file failed."""


class DumpError(PickleDbError):
    """Writing the DB file failed."""


class ConfigError(PickleDbError):
    """Invalid configuration."""
