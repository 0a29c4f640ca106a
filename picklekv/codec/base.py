# ==============================================
# Codec (Base Class)
# ==============================================
#
# PURPOSE:
#   A Codec turns any value into an opaque payload and back.
#   The store never keeps typed values, only payloads, so every
#   read is a fresh decode and lists can hold mixed types.
#
# CLASS: Codec (abstract)
# -----------------------
#   - encode(value) -> Payload
#   - decode(payload, type_=None) -> Any
#       type_=None returns the plain decoded value. Otherwise the
#       payload must structurally match type_ (strict, no coercion)
#       or CodecError is raised.
#   - dumps_db(scalars, lists) -> bytes
#   - loads_db(data) -> (scalars, lists)
#       Whole-file format for the DB.
#
# STRICT SHAPE CHECK:
#   Done with pydantic TypeAdapter in strict mode over the JSON data
#   model, so 42 is not a str, "42" is not an int and true is not an int.
#
# ==============================================

from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any, Dict, List, Tuple, Union

from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticUserError

from picklekv.errors import CodecError, UnsupportedTypeError

Payload = Union[str, bytes]
ScalarMap = Dict[str, Payload]
ListMap = Dict[str, List[Payload]]


def _type_name(type_: Any) -> str:
    return getattr(type_, "__name__", str(type_))


def _unsupported(type_: Any, error: Exception) -> UnsupportedTypeError:
    return UnsupportedTypeError(
        f"Cannot decode values as {_type_name(type_)}",
        details={"error": str(error)},
    )


def _build_adapter(type_: Any) -> TypeAdapter:
    try:
        return TypeAdapter(type_)
    except PydanticUserError as e:
        raise _unsupported(type_, e) from e


@lru_cache(maxsize=256)
def _cached_adapter(type_: Any) -> TypeAdapter:
    return _build_adapter(type_)


def type_adapter(type_: Any) -> TypeAdapter:
    """
    Return a (cached when hashable) TypeAdapter for type_.

    Raises:
        UnsupportedTypeError: if pydantic cannot build a schema for type_
    """
    try:
        hash(type_)
    except TypeError:
        # unhashable annotations (e.g. Annotated with dict metadata)
        return _build_adapter(type_)
    return _cached_adapter(type_)


def validate_json(data: Union[str, bytes], type_: Any) -> Any:
    """
    Strictly validate JSON text against type_.

    Args:
        data: JSON text
        type_: Requested Python type (int, list[str], a dataclass, ...)

    Returns:
        A fresh instance of type_

    Raises:
        CodecError: if the JSON is malformed or its shape does not match
        UnsupportedTypeError: if type_ is not something pydantic can validate
    """
    adapter = type_adapter(type_)
    try:
        return adapter.validate_json(data, strict=True)
    except PydanticUserError as e:
        # schema building can be deferred until first use
        raise _unsupported(type_, e) from e
    except (ValidationError, ValueError) as e:
        raise CodecError(
            f"Payload does not decode as {_type_name(type_)}",
            details={"error": str(e)},
        ) from e


class Codec(ABC):
    """Interchangeable value/payload converter used by PickleDb."""

    name: str = ""

    @abstractmethod
    def encode(self, value: Any) -> Payload:
        """Serialize value into a payload. Raises CodecError."""

    @abstractmethod
    def decode(self, payload: Payload, type_: Any = None) -> Any:
        """Deserialize a payload, optionally checked against type_. Raises CodecError."""

    @abstractmethod
    def dumps_db(self, scalars: ScalarMap, lists: ListMap) -> bytes:
        """Serialize the (scalars, lists) pair into file content."""

    @abstractmethod
    def loads_db(self, data: bytes) -> Tuple[ScalarMap, ListMap]:
        """Parse file content back into the (scalars, lists) pair."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
