"""resp-mapper - typed command/reply mapping for RESP key-value stores.

Turns native, typed calls into ordered binary-safe wire commands and turns
replies back into typed results. Transport is pluggable: anything with an
``async send(command) -> Value`` method can carry the commands.

Usage:
    from resp_mapper import Client

    client = Client(sender)
    await client.copy("src", "dst").db(3).replace()
"""

from .client import Client, create_client, create_test_client
from .commands import (
    CommandBuilder,
    Copy,
    Expire,
    FlushingMode,
    GenericCommands,
    Restore,
    Scan,
    ServerCommands,
)
from .config import ClientConfig
from .errors import CommandConsumedError, ConversionError, RespError, ResponseError
from .protocol import (
    Command,
    CommandArgs,
    FromValue,
    ToArgs,
    Value,
    cmd,
    decode,
    to_value,
)
from .sender import CommandSend, MockSender, Sender, create_mock_sender

__all__ = [
    # Client
    "Client",
    "ClientConfig",
    "create_client",
    "create_test_client",
    # Sending
    "Sender",
    "CommandSend",
    "MockSender",
    "create_mock_sender",
    # Protocol
    "Command",
    "CommandArgs",
    "ToArgs",
    "FromValue",
    "Value",
    "cmd",
    "decode",
    "to_value",
    # Command groups
    "CommandBuilder",
    "GenericCommands",
    "ServerCommands",
    "Copy",
    "Expire",
    "Restore",
    "Scan",
    "FlushingMode",
    # Errors
    "RespError",
    "ResponseError",
    "ConversionError",
    "CommandConsumedError",
]
