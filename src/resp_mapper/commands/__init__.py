"""Typed command groups.

Each group is a mixin over CommandSend; a client combines the groups it
supports. Commands with optional flags return builders.
"""

from .builder import CommandBuilder
from .generic import Copy, Expire, GenericCommands, Restore, Scan, sequence_of
from .server import FlushingMode, ServerCommands

__all__ = [
    "CommandBuilder",
    "Copy",
    "Expire",
    "FlushingMode",
    "GenericCommands",
    "Restore",
    "Scan",
    "ServerCommands",
    "sequence_of",
]
