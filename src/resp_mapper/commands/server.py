"""Server management commands.

See Also:
    https://redis.io/commands/?group=server
"""

from __future__ import annotations

from enum import Enum

from ..protocol.command import Command, cmd
from ..sender import CommandSend


class FlushingMode(str, Enum):
    """How the store flushes databases."""

    DEFAULT = "default"  # server-configured behavior, no flag sent
    ASYNC = "async"  # flush in the background
    SYNC = "sync"  # flush before replying

    @classmethod
    def _missing_(cls, value: object) -> FlushingMode | None:
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return None


def _with_flushing_mode(command: Command, mode: FlushingMode) -> Command:
    return command.arg_if(mode is FlushingMode.ASYNC, "ASYNC").arg_if(mode is FlushingMode.SYNC, "SYNC")


class ServerCommands(CommandSend):
    """A group of commands related to server management."""

    async def flushdb(self, mode: FlushingMode | str = FlushingMode.DEFAULT) -> None:
        """Delete all the keys of the currently selected database."""
        await self.send_into(_with_flushing_mode(cmd("FLUSHDB"), FlushingMode(mode)), None)

    async def flushall(self, mode: FlushingMode | str = FlushingMode.DEFAULT) -> None:
        """Delete all the keys of every database, not just the selected one."""
        await self.send_into(_with_flushing_mode(cmd("FLUSHALL"), FlushingMode(mode)), None)

    async def dbsize(self) -> int:
        """Number of keys in the currently selected database."""
        return await self.send_into(cmd("DBSIZE"), int)
