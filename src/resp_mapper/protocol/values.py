"""Reply values received from the store.

A Value is the already-decoded shape of one wire reply. Exactly one variant
holds at a time; the ``kind`` field discriminates them:

    nil, integer, double, simple_string, bulk_string, array, map, error

Values are produced by whatever parses the wire bytes (outside this
package). The helpers at the bottom build them from Python natives, mostly
for tests and for adapting decoders that return plain Python objects.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class NilValue(BaseModel):
    """Absent value (null bulk string or null array)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["nil"] = "nil"


class IntegerValue(BaseModel):
    """Integer reply, e.g. ``:42``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["integer"] = "integer"
    value: int


class DoubleValue(BaseModel):
    """Floating point reply (RESP3 double)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["double"] = "double"
    value: float


class SimpleStringValue(BaseModel):
    """Status reply, e.g. ``+OK``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["simple_string"] = "simple_string"
    value: str


class BulkStringValue(BaseModel):
    """Binary-safe string reply. The payload may or may not be text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["bulk_string"] = "bulk_string"
    data: bytes


class ArrayValue(BaseModel):
    """Ordered sequence of replies."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["array"] = "array"
    items: list[Value] = Field(default_factory=list)


class MapValue(BaseModel):
    """Key/value reply (RESP3 map), entries in wire order."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["map"] = "map"
    entries: list[tuple[Value, Value]] = Field(default_factory=list)


class ErrorValue(BaseModel):
    """Error reported by the store, e.g. ``-ERR unknown command``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["error"] = "error"
    message: str


Value = Annotated[
    Union[
        NilValue,
        IntegerValue,
        DoubleValue,
        SimpleStringValue,
        BulkStringValue,
        ArrayValue,
        MapValue,
        ErrorValue,
    ],
    Field(discriminator="kind"),
]

VALUE_TYPES = (
    NilValue,
    IntegerValue,
    DoubleValue,
    SimpleStringValue,
    BulkStringValue,
    ArrayValue,
    MapValue,
    ErrorValue,
)

ArrayValue.model_rebuild()
MapValue.model_rebuild()

value_adapter: TypeAdapter[Any] = TypeAdapter(Value)


def is_value(obj: Any) -> bool:
    """Check if ``obj`` is one of the reply variants."""
    return isinstance(obj, VALUE_TYPES)


# =============================================================================
# Constructors
# =============================================================================


def nil() -> NilValue:
    return NilValue()


def integer(value: int) -> IntegerValue:
    return IntegerValue(value=value)


def double(value: float) -> DoubleValue:
    return DoubleValue(value=value)


def simple(value: str) -> SimpleStringValue:
    return SimpleStringValue(value=value)


def bulk(data: bytes | str) -> BulkStringValue:
    """Create a bulk string; text is stored as its UTF-8 bytes."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return BulkStringValue(data=bytes(data))


def array(items: list[Any]) -> ArrayValue:
    """Create an array; plain Python items are converted with to_value."""
    return ArrayValue(items=[to_value(item) for item in items])


def error(message: str) -> ErrorValue:
    return ErrorValue(message=message)


def to_value(obj: Any) -> Any:
    """Convert a Python native into the matching reply variant.

    Mapping:
        None -> nil, bool/int -> integer, float -> double,
        str/bytes -> bulk string, list/tuple -> array, dict -> map,
        Exception -> error, Value -> unchanged

    Raises:
        TypeError: If ``obj`` has no reply equivalent
    """
    if is_value(obj):
        return obj
    if obj is None:
        return NilValue()
    if isinstance(obj, bool):
        return IntegerValue(value=int(obj))
    if isinstance(obj, int):
        return IntegerValue(value=obj)
    if isinstance(obj, float):
        return DoubleValue(value=obj)
    if isinstance(obj, (str, bytes, bytearray, memoryview)):
        return bulk(bytes(obj) if not isinstance(obj, str) else obj)
    if isinstance(obj, (list, tuple)):
        return array(list(obj))
    if isinstance(obj, Mapping):
        return MapValue(entries=[(to_value(k), to_value(v)) for k, v in obj.items()])
    if isinstance(obj, BaseException):
        return ErrorValue(message=str(obj))
    raise TypeError(f"Cannot convert {type(obj).__name__} into a reply value")
