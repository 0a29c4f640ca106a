# ==============================================
# CODEC: value <-> payload conversion
# ==============================================
#
# Modules:
# --------
# - base.py        → Codec interface + strict shape check helpers
# - json_codec.py  → JsonCodec (default, text payloads)
# - bson_codec.py  → BsonCodec (binary payloads)
#
# ==============================================

from typing import Dict, Type

from picklekv.errors import ConfigError

from .base import Codec, ListMap, Payload, ScalarMap
from .bson_codec import BsonCodec
from .json_codec import JsonCodec

CODECS: Dict[str, Type[Codec]] = {
    JsonCodec.name: JsonCodec,
    BsonCodec.name: BsonCodec,
}


def get_codec(name: str) -> Codec:
    """
    Build a codec by name.

    Args:
        name: "json" or "bson" (case-insensitive)

    Returns:
        A new Codec instance

    Raises:
        ConfigError: for unknown names
    """
    try:
        return CODECS[name.strip().lower()]()
    except KeyError:
        raise ConfigError(
            f"Unknown codec '{name}'", details={"available": sorted(CODECS)}
        ) from None


__all__ = [
    "Codec",
    "JsonCodec",
    "BsonCodec",
    "Payload",
    "ScalarMap",
    "ListMap",
    "CODECS",
    "get_codec",
]
