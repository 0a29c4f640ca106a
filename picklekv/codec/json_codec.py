# ==============================================
# JsonCodec
# ==============================================
#
# Default codec. Payloads are compact JSON text.
#
# FILE FORMAT:
#   A JSON array holding the pair [scalars, lists]:
#
#   [
#     {"key1": "100", "key2": "\"hello\""},
#     {"list1": ["1", "\"a\"", "[1,2]"]}
#   ]
#
# ==============================================

import json
from typing import Any, Dict, List, Tuple

import pydantic_core
from pydantic import ValidationError

from picklekv.codec.base import Codec, ListMap, Payload, ScalarMap, type_adapter, validate_json
from picklekv.errors import CodecError

_DB_SHAPE = Tuple[Dict[str, str], Dict[str, List[str]]]


class JsonCodec(Codec):
    """Codec storing values as JSON text."""

    name = "json"

    def encode(self, value: Any) -> Payload:
        try:
            return pydantic_core.to_json(value).decode("utf-8")
        except pydantic_core.PydanticSerializationError as e:
            raise CodecError(
                f"Cannot encode value of type {type(value).__name__}",
                details={"error": str(e)},
            ) from e

    def decode(self, payload: Payload, type_: Any = None) -> Any:
        if type_ is None:
            try:
                return pydantic_core.from_json(payload)
            except ValueError as e:
                raise CodecError("Payload is not valid JSON", details={"error": str(e)}) from e
        return validate_json(payload, type_)

    def dumps_db(self, scalars: ScalarMap, lists: ListMap) -> bytes:
        try:
            return json.dumps([scalars, lists], indent=2, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise CodecError("Cannot serialize DB contents", details={"error": str(e)}) from e

    def loads_db(self, data: bytes) -> Tuple[ScalarMap, ListMap]:
        try:
            scalars, lists = type_adapter(_DB_SHAPE).validate_json(data, strict=True)
        except (ValidationError, ValueError) as e:
            raise CodecError("DB file is not a valid JSON dump", details={"error": str(e)}) from e
        return scalars, lists
