"""Typed client bound to a sender.

The client is where the command groups meet a concrete Sender:

    client = Client(my_sender)
    removed = await client.delete(["a", "b"])
    applied = await client.expire("session:1", 60).gt()
    cursor, keys = await client.scan(0).match("user:*").count(100).execute()

Works with any Sender implementation, including MockSender for tests.
"""

from __future__ import annotations

import asyncio
import logging

from .commands.generic import GenericCommands
from .commands.server import ServerCommands
from .config import ClientConfig
from .protocol.command import Command
from .protocol.values import Value
from .sender import MockSender, Sender, create_mock_sender

logger = logging.getLogger(__name__)


class Client(GenericCommands, ServerCommands):
    """Command groups over a Sender.

    The client holds no per-command state; concurrent commands go straight
    to the sender, which owns ordering.
    """

    def __init__(self, sender: Sender, config: ClientConfig | None = None):
        if not isinstance(sender, Sender):
            raise TypeError(f"{type(sender).__name__} does not provide an async send(command)")
        self._sender = sender
        self._config = config or ClientConfig()

    @property
    def sender(self) -> Sender:
        """Access the underlying sender."""
        return self._sender

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def send(self, command: Command) -> Value:
        """Submit ``command`` through the sender.

        Raises:
            TimeoutError: If a timeout is configured and the sender does not
                answer in time
        """
        if self._config.log_commands:
            logger.debug(f"Sending {command!r}")

        if self._config.timeout is None:
            return await self._sender.send(command)
        return await asyncio.wait_for(self._sender.send(command), timeout=self._config.timeout)

    def __repr__(self) -> str:
        return f"Client(sender={type(self._sender).__name__}, config={self._config!r})"


# Factory functions


def create_client(sender: Sender, config: ClientConfig | None = None) -> Client:
    """Create a client over ``sender``.

    Args:
        sender: Transport providing ``async send(command) -> Value``
        config: Client settings (default: read from the environment)

    Returns:
        Client bound to the sender
    """
    return Client(sender, config or ClientConfig.from_env())


def create_test_client(sender: MockSender | None = None) -> Client:
    """Create a client for testing.

    Args:
        sender: Pre-configured mock sender (creates new if None)

    Returns:
        Client with a MockSender
    """
    return Client(sender or create_mock_sender())
