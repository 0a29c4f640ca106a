# ==============================================
# BsonCodec
# ==============================================
#
# Binary codec built on the bson package that ships with pymongo.
#
# - Each payload is a BSON document {"v": <value>}.
# - The DB file is one BSON document {"scalars": {...}, "lists": {...}}
#   with payloads stored as binary fields.
#
# Values are first reduced to the JSON data model
# (pydantic_core.to_jsonable_python) so both codecs accept and
# reject exactly the same shapes on decode.
#
# ==============================================

from typing import Any, Dict, List, Tuple

import bson
import pydantic_core
from bson.errors import BSONError
from pydantic import ValidationError

from picklekv.codec.base import Codec, ListMap, Payload, ScalarMap, type_adapter, validate_json
from picklekv.errors import CodecError

_DB_SHAPE = Tuple[Dict[str, bytes], Dict[str, List[bytes]]]


class BsonCodec(Codec):
    """Codec storing values as BSON documents."""

    name = "bson"

    def encode(self, value: Any) -> Payload:
        try:
            return bson.encode({"v": pydantic_core.to_jsonable_python(value)})
        except (BSONError, pydantic_core.PydanticSerializationError, OverflowError) as e:
            raise CodecError(
                f"Cannot encode value of type {type(value).__name__}",
                details={"error": str(e)},
            ) from e

    def decode(self, payload: Payload, type_: Any = None) -> Any:
        try:
            document = bson.decode(payload)
        except (BSONError, TypeError) as e:
            raise CodecError("Payload is not a valid BSON document", details={"error": str(e)}) from e
        if "v" not in document:
            raise CodecError("BSON payload has no value field")

        value = document["v"]
        if type_ is None:
            return value
        return validate_json(pydantic_core.to_json(value), type_)

    def dumps_db(self, scalars: ScalarMap, lists: ListMap) -> bytes:
        try:
            return bson.encode({"scalars": scalars, "lists": lists})
        except BSONError as e:
            raise CodecError("Cannot serialize DB contents", details={"error": str(e)}) from e

    def loads_db(self, data: bytes) -> Tuple[ScalarMap, ListMap]:
        try:
            document = bson.decode(data)
            scalars, lists = type_adapter(_DB_SHAPE).validate_python(
                (document.get("scalars"), document.get("lists")),
                strict=True,
            )
        except (BSONError, ValidationError) as e:
            raise CodecError("DB file is not a valid BSON dump", details={"error": str(e)}) from e
        return scalars, lists
