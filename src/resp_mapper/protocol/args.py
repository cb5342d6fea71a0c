"""Argument collection and the encoding capability.

A command's arguments are an ordered list of binary tokens. Native values
append themselves through ``write_args``:

- bytes-like values become one token, verbatim
- str becomes one UTF-8 token
- bool, int and float become one decimal text token
- collections become one token per element, in iteration order
- mappings become key, value, key, value, ...

Types outside this set join by implementing the ToArgs protocol.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Mapping
from decimal import Decimal
from enum import Enum
from functools import singledispatch
from typing import Any, Protocol, overload, runtime_checkable


@runtime_checkable
class ToArgs(Protocol):
    """Protocol for values that know how to append themselves to CommandArgs."""

    def write_args(self, args: CommandArgs) -> None:
        """Append one or more tokens to ``args``."""
        ...


class CommandArgs:
    """Ordered, binary-safe collection of command arguments.

    Arguments are append-only: ``arg`` and ``arg_if`` push tokens at the end
    and there is no API to remove or reorder them. Insertion order is the
    order the arguments are sent in.

    Example:
        args = CommandArgs().arg("key").arg(10).arg_if(replace, "REPLACE")
    """

    __slots__ = ("_args",)

    def __init__(self, args: Iterable[Any] | None = None):
        self._args: list[bytes] = []
        for value in args or ():
            write_args(value, self)

    def arg(self, value: Any) -> CommandArgs:
        """Append ``value`` and return this collection for chaining."""
        write_args(value, self)
        return self

    def arg_if(self, condition: bool, value: Any) -> CommandArgs:
        """Append ``value`` only if ``condition`` holds.

        When the condition is false ``value`` is not encoded at all, so the
        result is identical to never having made the call.
        """
        if condition:
            write_args(value, self)
        return self

    def write_arg(self, buf: bytes | bytearray | memoryview) -> None:
        """Append a single raw token."""
        self._args.append(bytes(buf))

    def build(self) -> CommandArgs:
        """Move the tokens into a new collection, leaving this one empty."""
        built = CommandArgs()
        built._args, self._args = self._args, []
        return built

    def copy(self) -> CommandArgs:
        """Return an independent collection with the same tokens."""
        clone = CommandArgs()
        clone._args = self._args.copy()
        return clone

    def is_empty(self) -> bool:
        return not self._args

    def __len__(self) -> int:
        return len(self._args)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._args)

    @overload
    def __getitem__(self, index: int) -> bytes: ...

    @overload
    def __getitem__(self, index: slice) -> list[bytes]: ...

    def __getitem__(self, index: int | slice) -> bytes | list[bytes]:
        return self._args[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommandArgs):
            return NotImplemented
        return self._args == other._args

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rendered = [a.decode("utf-8", errors="replace") for a in self._args]
        return f"CommandArgs(args={rendered!r})"


# =============================================================================
# Encoding
# =============================================================================


@singledispatch
def write_args(value: Any, args: CommandArgs) -> None:
    """Append ``value`` to ``args`` as one or more tokens.

    Raises:
        TypeError: If ``value`` has no known encoding
    """
    if isinstance(value, ToArgs):
        value.write_args(args)
        return
    if isinstance(value, Mapping):
        _write_mapping(value, args)
        return
    if isinstance(value, Iterable):
        for item in value:
            write_args(item, args)
        return
    raise TypeError(f"Cannot encode {type(value).__name__} as a command argument")


@write_args.register(bytes)
@write_args.register(bytearray)
@write_args.register(memoryview)
def _write_bytes(value: bytes | bytearray | memoryview, args: CommandArgs) -> None:
    args.write_arg(value)


@write_args.register(str)
def _write_str(value: str, args: CommandArgs) -> None:
    args.write_arg(value.encode("utf-8"))


@write_args.register(bool)
def _write_bool(value: bool, args: CommandArgs) -> None:
    args.write_arg(b"1" if value else b"0")


@write_args.register(int)
def _write_int(value: int, args: CommandArgs) -> None:
    args.write_arg(str(value).encode("ascii"))


@write_args.register(float)
def _write_float(value: float, args: CommandArgs) -> None:
    args.write_arg(format_float(value))


@write_args.register(Enum)
def _write_enum(value: Enum, args: CommandArgs) -> None:
    write_args(value.value, args)


@write_args.register(dict)
def _write_dict(value: dict[Any, Any], args: CommandArgs) -> None:
    _write_mapping(value, args)


def _write_mapping(value: Mapping[Any, Any], args: CommandArgs) -> None:
    for key, item in value.items():
        write_args(key, args)
        write_args(item, args)


def format_float(value: float) -> bytes:
    """Render a float as positional decimal text, never with an exponent.

    The shortest repr that round-trips is expanded positionally, so the
    output does not depend on locale or on repr's exponent thresholds.
    """
    if math.isnan(value):
        return b"nan"
    if math.isinf(value):
        return b"+inf" if value > 0 else b"-inf"
    text = format(Decimal(repr(value)), "f")
    if "." not in text:
        text += ".0"
    return text.encode("ascii")
