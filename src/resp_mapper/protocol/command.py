"""Command definitions for the protocol layer.

A command is a name plus its ordered argument tokens. Commands are built
with chained calls starting from ``cmd``:

    command = cmd("COPY").arg("src").arg("dst").arg_if(replace, "REPLACE")

The name is an opaque token; this layer attaches no meaning to it.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .args import CommandArgs


class Command:
    """A fully or partially built request.

    ``arg`` and ``arg_if`` append in place and return the same command.
    Use ``copy`` when an independent command is needed.
    """

    __slots__ = ("_name", "_args")

    def __init__(self, name: str, args: CommandArgs | None = None):
        self._name = name
        self._args = args if args is not None else CommandArgs()

    @property
    def name(self) -> str:
        """Command name token."""
        return self._name

    @property
    def args(self) -> CommandArgs:
        """Argument tokens, excluding the name."""
        return self._args

    def arg(self, value: Any) -> Command:
        """Append ``value`` to the arguments."""
        self._args.arg(value)
        return self

    def arg_if(self, condition: bool, value: Any) -> Command:
        """Append ``value`` to the arguments only if ``condition`` holds."""
        self._args.arg_if(condition, value)
        return self

    def copy(self) -> Command:
        return Command(self._name, self._args.copy())

    def tokens(self) -> list[bytes]:
        """Name followed by every argument, as sent on the wire."""
        return [self._name.encode("utf-8"), *self._args]

    def encode(self) -> bytes:
        """Serialize as a RESP multi-bulk request.

        Every token, the name included, is sent as a length-prefixed bulk
        string so arguments may contain any byte, CR/LF included.
        """
        tokens = self.tokens()
        parts = [b"*%d\r\n" % len(tokens)]
        for token in tokens:
            parts.append(b"$%d\r\n" % len(token))
            parts.append(token)
            parts.append(b"\r\n")
        return b"".join(parts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Command):
            return NotImplemented
        return self._name == other._name and self._args == other._args

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rendered = [a.decode("utf-8", errors="replace") for a in self._args]
        return f"Command(name={self._name!r}, args={rendered!r})"


def cmd(name: str, args: Iterable[Any] = ()) -> Command:
    """Create a command named ``name``.

    Args:
        name: Command name (e.g. "DEL", "OBJECT")
        args: Optional initial arguments, encoded in order

    Returns:
        A new Command ready for chaining
    """
    command = Command(name)
    for value in args:
        command.arg(value)
    return command
