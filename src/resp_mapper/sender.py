"""Sending abstraction used by the command groups.

Architecture:
- Sender is the PROTOCOL for whatever moves commands over the wire
- CommandSend is the base for everything that exposes typed commands;
  it composes ``send`` with reply decoding in ``send_into``
- MockSender is an in-memory Sender for tests

Transport concerns (connections, pipelining, retries) live behind the
Sender and are not implemented here.
"""

from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable

from .protocol.command import Command
from .protocol.decode import decode
from .protocol.values import Value, simple, to_value

logger = logging.getLogger(__name__)

# Default-reply marker; an explicit None makes nil the default
_OK = object()


@runtime_checkable
class Sender(Protocol):
    """Protocol for transports that submit commands.

    The transport handles:
    - Wire encoding of the command (see Command.encode)
    - Parsing the reply bytes into a Value
    - Connection management, ordering and retry policy
    """

    async def send(self, command: Command) -> Value:
        """Submit a command and return its reply.

        Args:
            command: The fully built command

        Returns:
            The reply value, which may be an error reply

        Raises:
            ConnectionError: If the command could not be delivered
        """
        ...


class CommandSend(ABC):
    """Base class for objects that submit commands and decode replies."""

    @abstractmethod
    async def send(self, command: Command) -> Value:
        """Submit ``command`` and return the raw reply."""
        ...

    async def send_into(self, command: Command, target: Any) -> Any:
        """Submit ``command`` and decode the reply into ``target``.

        Transport failures from ``send`` and conversion failures from
        decoding both propagate to the caller unchanged.
        """
        reply = await self.send(command)
        return decode(reply, target)


class MockSender:
    """Mock sender for testing.

    Records every command and answers with canned replies. No actual I/O.

    Replies may be Values or Python natives (converted with to_value).
    An exception instance is raised instead of returned, which models a
    transport failure. An awaitable is awaited first, so an unresolved
    future models a channel that never answers.

    Usage:
        sender = MockSender()
        sender.set_response("SCAN", [b"17", [b"a", b"b"]], [b"0", []])

        client = Client(sender)
        cursor, keys = await client.scan(0).execute()

        assert sender.recorded_commands[0].name == "SCAN"
    """

    def __init__(self, default: Any = _OK) -> None:
        self._default = simple("OK") if default is _OK else default
        self._responses: dict[str, list[Any]] = {}
        self._recorded_commands: list[Command] = []

    @property
    def recorded_commands(self) -> list[Command]:
        """Get all commands sent through this sender."""
        return self._recorded_commands.copy()

    @property
    def last_command(self) -> Command | None:
        return self._recorded_commands[-1] if self._recorded_commands else None

    def set_response(self, command_name: str, *replies: Any) -> None:
        """Set canned replies for a command name.

        Replies are served in order; the last one repeats once the others
        are used up.

        Args:
            command_name: The command name (e.g. "EXPIRE")
            replies: One or more replies
        """
        if not replies:
            raise ValueError("At least one reply is required")
        self._responses[command_name.upper()] = list(replies)

    def set_responses(self, responses: dict[str, Any] | Iterable[tuple[str, Any]]) -> None:
        """Set a single canned reply for several command names at once."""
        items = responses.items() if isinstance(responses, dict) else responses
        for name, reply in items:
            self.set_response(name, reply)

    def clear(self) -> None:
        """Clear recorded commands and canned replies."""
        self._recorded_commands.clear()
        self._responses.clear()

    async def send(self, command: Command) -> Value:
        """Record the command and return its canned reply."""
        self._recorded_commands.append(command)
        logger.debug(f"MockSender recorded {command!r}")

        reply = self._next_reply(command.name.upper())
        if inspect.isawaitable(reply):
            reply = await reply
        if isinstance(reply, BaseException):
            raise reply
        return to_value(reply)

    def _next_reply(self, name: str) -> Any:
        queue = self._responses.get(name)
        if not queue:
            return self._default
        if len(queue) > 1:
            return queue.pop(0)
        return queue[0]


def create_mock_sender(responses: dict[str, Any] | None = None) -> MockSender:
    """Create a mock sender for testing.

    Args:
        responses: Optional mapping of command name to a single canned reply

    Returns:
        MockSender with the given replies installed
    """
    sender = MockSender()
    if responses:
        sender.set_responses(responses)
    return sender
