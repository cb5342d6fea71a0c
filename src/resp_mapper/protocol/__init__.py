"""Protocol mapping layer.

Defines how native values become wire arguments and how replies become
native values, independently of any transport.

Key concepts:
- CommandArgs: ordered, binary-safe argument tokens
- Command: a name plus its arguments, built with chained calls
- Value: the decoded shape of one reply
- decode: conversion of a Value into a requested Python type
"""

from .args import CommandArgs, ToArgs, format_float, write_args
from .command import Command, cmd
from .decode import FromValue, decode
from .values import (
    ArrayValue,
    BulkStringValue,
    DoubleValue,
    ErrorValue,
    IntegerValue,
    MapValue,
    NilValue,
    SimpleStringValue,
    Value,
    array,
    bulk,
    double,
    error,
    integer,
    is_value,
    nil,
    simple,
    to_value,
    value_adapter,
)

__all__ = [
    "CommandArgs",
    "ToArgs",
    "format_float",
    "write_args",
    "Command",
    "cmd",
    "FromValue",
    "decode",
    "Value",
    "ArrayValue",
    "BulkStringValue",
    "DoubleValue",
    "ErrorValue",
    "IntegerValue",
    "MapValue",
    "NilValue",
    "SimpleStringValue",
    "array",
    "bulk",
    "double",
    "error",
    "integer",
    "is_value",
    "nil",
    "simple",
    "to_value",
    "value_adapter",
]
