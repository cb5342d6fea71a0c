"""Exceptions raised by the mapping layer.

Three kinds of failure reach a caller:
- ResponseError: the store answered with an error reply
- ConversionError: the reply shape does not fit the requested type
- whatever the sender raises for transport problems (never wrapped)
"""

from __future__ import annotations

from typing import Any


class RespError(Exception):
    """Base class for errors raised by resp_mapper."""


class ResponseError(RespError):
    """Error reply reported by the store.

    The store's message is kept verbatim, so ``str(exc)`` is exactly the text
    the server sent (e.g. ``"ERR no such key"``).
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def code(self) -> str:
        """Leading error code by convention (``ERR``, ``WRONGTYPE``, ...)."""
        return self.message.split(" ", 1)[0] if self.message else ""


class ConversionError(RespError):
    """A reply could not be converted into the requested type.

    This is a contract violation between the command and the type asked for,
    not a runtime condition: retrying the same command will fail the same way.
    """

    def __init__(self, target: Any, value: Any, reason: str):
        self.target = target
        self.value = value
        self.reason = reason
        super().__init__(f"Cannot convert {_describe(value)} into {_type_name(target)}: {reason}")


class CommandConsumedError(RespError):
    """A command builder was executed more than once."""


def _describe(value: Any) -> str:
    kind = getattr(value, "kind", None)
    return f"{kind} reply" if kind else type(value).__name__


def _type_name(target: Any) -> str:
    if isinstance(target, type):
        return target.__name__
    return repr(target)
