"""Conversion of reply values into native Python types.

The caller names the type it wants and ``decode`` either produces it or
raises. The same reply shape can serve several targets (a bulk string
decodes as ``bytes`` or as ``str``); the target decides, the content is
never sniffed.

Supported targets:
- scalars: bool, int, float, str, bytes
- None for commands whose only outcome is success or an error
- Optional[T] / T | None, where a nil reply becomes None
- list[T], set[T], frozenset[T], tuple[T, ...] from array replies
- fixed tuples such as tuple[int, list[str]] (scan cursor + batch)
- dict[K, V] from map replies or flat key/value arrays
- pydantic models from field/value pairs
- Value or Any to get the reply untouched
- any class with a ``from_value(value)`` classmethod

An error reply always raises ResponseError, whatever the target.
"""

from __future__ import annotations

import re
import types
from collections.abc import Callable
from typing import Any, Protocol, TypeVar, Union, get_args, get_origin, runtime_checkable

from pydantic import BaseModel, ValidationError

from ..errors import ConversionError, ResponseError
from .values import (
    VALUE_TYPES,
    ArrayValue,
    BulkStringValue,
    DoubleValue,
    ErrorValue,
    IntegerValue,
    MapValue,
    NilValue,
    SimpleStringValue,
    Value,
)

T = TypeVar("T")

_DECIMAL_RE = re.compile(rb"-?[0-9]+")
_FLOAT_RE = re.compile(rb"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|[+-]?inf|nan")

_SEQUENCE_ORIGINS: dict[Any, Callable[[list[Any]], Any]] = {
    list: list,
    set: set,
    frozenset: frozenset,
}


@runtime_checkable
class FromValue(Protocol):
    """Protocol for types that build themselves from a reply value."""

    @classmethod
    def from_value(cls, value: Any) -> Any:
        """Convert ``value`` or raise ConversionError."""
        ...


def decode(value: Any, target: Any) -> Any:
    """Convert a reply into ``target``.

    Args:
        value: Reply received from the store
        target: Requested type expression (e.g. ``int``, ``list[str]``,
            ``tuple[int, list[bytes]]``, ``str | None``)

    Returns:
        The converted value

    Raises:
        ResponseError: If the reply is an error reply
        ConversionError: If the reply shape does not fit ``target``
        TypeError: If ``target`` is not a supported type expression
    """
    if isinstance(value, ErrorValue):
        raise ResponseError(value.message)

    if target is Any or target is Value:
        return value

    # Unit: success is anything but an error
    if target is None or target is type(None):
        return None

    origin = get_origin(target)

    if origin is Union or origin is types.UnionType:
        return _decode_union(value, target)

    if isinstance(value, NilValue):
        raise ConversionError(target, value, "nil reply for a non-optional type")

    scalar = _SCALAR_DECODERS.get(target)
    if scalar is not None:
        return scalar(value, target)

    if target in _SEQUENCE_ORIGINS:
        return _decode_sequence(value, target, _SEQUENCE_ORIGINS[target], Any)
    if origin in _SEQUENCE_ORIGINS:
        (element,) = get_args(target)
        return _decode_sequence(value, target, _SEQUENCE_ORIGINS[origin], element)

    if target is tuple:
        return _decode_sequence(value, target, tuple, Any)
    if origin is tuple:
        args = get_args(target)
        if len(args) == 2 and args[1] is Ellipsis:
            return _decode_sequence(value, target, tuple, args[0])
        return _decode_fixed_tuple(value, target, args)

    if target is dict:
        return _decode_dict(value, target, Any, Any)
    if origin is dict:
        key_type, item_type = get_args(target)
        return _decode_dict(value, target, key_type, item_type)

    if target in VALUE_TYPES:
        if isinstance(value, target):
            return value
        raise ConversionError(target, value, f"expected {target.__name__}")

    if isinstance(target, type) and issubclass(target, BaseModel):
        return _decode_model(value, target)

    if isinstance(target, type) and isinstance(target, FromValue):
        return target.from_value(value)

    raise TypeError(f"Unsupported decode target: {target!r}")


def _decode_union(value: Any, target: Any) -> Any:
    members = get_args(target)
    if type(None) not in members:
        raise TypeError(f"Only optional unions can be decoded, got {target!r}")
    if isinstance(value, NilValue):
        return None
    rest = tuple(m for m in members if m is not type(None))
    inner = rest[0] if len(rest) == 1 else Union[rest]
    return decode(value, inner)


# =============================================================================
# Scalars
# =============================================================================


def _to_bool(value: Any, target: Any) -> bool:
    if isinstance(value, IntegerValue):
        return value.value != 0
    raise ConversionError(target, value, "expected an integer reply")


def _to_int(value: Any, target: Any) -> int:
    if isinstance(value, IntegerValue):
        return value.value
    if isinstance(value, (BulkStringValue, SimpleStringValue)):
        raw = _raw_bytes(value)
        if _DECIMAL_RE.fullmatch(raw):
            return int(raw)
        raise ConversionError(target, value, f"{raw[:32]!r} is not a decimal integer")
    raise ConversionError(target, value, "expected an integer reply")


def _to_float(value: Any, target: Any) -> float:
    if isinstance(value, (DoubleValue, IntegerValue)):
        return float(value.value)
    if isinstance(value, (BulkStringValue, SimpleStringValue)):
        raw = _raw_bytes(value)
        if _FLOAT_RE.fullmatch(raw):
            return float(raw)
        raise ConversionError(target, value, f"{raw[:32]!r} is not a number")
    raise ConversionError(target, value, "expected a numeric reply")


def _to_str(value: Any, target: Any) -> str:
    if isinstance(value, SimpleStringValue):
        return value.value
    if isinstance(value, BulkStringValue):
        try:
            return value.data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ConversionError(target, value, f"bulk string is not valid UTF-8 ({e.reason})") from e
    raise ConversionError(target, value, "expected a string reply")


def _to_bytes(value: Any, target: Any) -> bytes:
    if isinstance(value, (BulkStringValue, SimpleStringValue)):
        return _raw_bytes(value)
    raise ConversionError(target, value, "expected a string reply")


def _raw_bytes(value: BulkStringValue | SimpleStringValue) -> bytes:
    if isinstance(value, BulkStringValue):
        return value.data
    return value.value.encode("utf-8")


_SCALAR_DECODERS: dict[Any, Callable[[Any, Any], Any]] = {
    bool: _to_bool,
    int: _to_int,
    float: _to_float,
    str: _to_str,
    bytes: _to_bytes,
}


# =============================================================================
# Collections
# =============================================================================


def _decode_sequence(
    value: Any,
    target: Any,
    factory: Callable[[list[Any]], Any],
    element: Any,
) -> Any:
    if not isinstance(value, ArrayValue):
        raise ConversionError(target, value, "expected an array reply")
    return factory([decode(item, element) for item in value.items])


def _decode_fixed_tuple(value: Any, target: Any, elements: tuple[Any, ...]) -> tuple[Any, ...]:
    if not isinstance(value, ArrayValue):
        raise ConversionError(target, value, "expected an array reply")
    if len(value.items) != len(elements):
        raise ConversionError(
            target,
            value,
            f"expected an array of {len(elements)} elements, got {len(value.items)}",
        )
    return tuple(decode(item, element) for item, element in zip(value.items, elements))


def _pairs(value: Any, target: Any) -> list[tuple[Any, Any]]:
    if isinstance(value, MapValue):
        return list(value.entries)
    if isinstance(value, ArrayValue):
        if len(value.items) % 2:
            raise ConversionError(target, value, "key/value array has an odd number of elements")
        return list(zip(value.items[::2], value.items[1::2]))
    raise ConversionError(target, value, "expected a map or key/value array reply")


def _decode_dict(value: Any, target: Any, key_type: Any, item_type: Any) -> dict[Any, Any]:
    return {decode(k, key_type): decode(v, item_type) for k, v in _pairs(value, target)}


def _decode_model(value: Any, target: type[BaseModel]) -> BaseModel:
    fields = {decode(k, str): decode(v, Any) for k, v in _pairs(value, target)}
    data = {name: _model_input(v) for name, v in fields.items()}
    try:
        return target.model_validate(data)
    except ValidationError as e:
        raise ConversionError(target, value, str(e)) from e


def _model_input(value: Any) -> Any:
    """Unwrap a reply into plain data for pydantic validation."""
    if isinstance(value, BulkStringValue):
        try:
            return value.data.decode("utf-8")
        except UnicodeDecodeError:
            return value.data
    if isinstance(value, (SimpleStringValue, IntegerValue, DoubleValue)):
        return value.value
    if isinstance(value, NilValue):
        return None
    if isinstance(value, ArrayValue):
        return [_model_input(item) for item in value.items]
    if isinstance(value, MapValue):
        return {_model_input(k): _model_input(v) for k, v in value.entries}
    return value
