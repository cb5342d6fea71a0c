"""Base class for fluent command builders.

A builder is created with the command's mandatory arguments already in
place. Each modifier returns a new builder holding a copy of the command
with the modifier's tokens appended, so earlier builder values never see
later changes:

    base = client.copy("src", "dst")
    with_db = base.db(3)          # base is unchanged
    await with_db.replace()       # COPY src dst DB 3 REPLACE

A builder is submitted with ``execute()`` (or by awaiting it directly) and
can only be submitted once.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Self, TypeVar

from ..errors import CommandConsumedError
from ..protocol.command import Command
from ..protocol.values import Value

if TYPE_CHECKING:
    from ..sender import CommandSend

R = TypeVar("R")


class CommandBuilder(Generic[R]):
    """Partially built command bound to the object that will send it."""

    __slots__ = ("_sender", "_command", "_submitted")

    # Type the reply is decoded into by execute()
    result_type: ClassVar[Any] = Value

    def __init__(self, sender: CommandSend, command: Command):
        self._sender = sender
        self._command = command
        self._submitted = False

    @property
    def command(self) -> Command:
        """Copy of the command as built so far."""
        return self._command.copy()

    def _with(self, *values: Any) -> Self:
        """Return a new builder with ``values`` appended in order."""
        command = self._command.copy()
        for value in values:
            command.arg(value)
        return type(self)(self._sender, command)

    def _with_if(self, condition: bool, *values: Any) -> Self:
        if not condition:
            return type(self)(self._sender, self._command.copy())
        return self._with(*values)

    def _take(self) -> Command:
        if self._submitted:
            raise CommandConsumedError(f"{type(self).__name__} builder was already executed")
        self._submitted = True
        return self._command

    async def execute(self) -> R:
        """Send the command and decode the reply.

        Raises:
            CommandConsumedError: If this builder was already executed
        """
        return await self._sender.send_into(self._take(), self.result_type)

    def __await__(self) -> Generator[Any, None, R]:
        return self.execute().__await__()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._command!r})"
