"""Generic key-space commands.

Commands without optional flags return the decoded reply directly.
Commands with optional flags return a builder; see builder.py.

See Also:
    https://redis.io/commands/?group=generic
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterable
from typing import Any

from ..protocol.command import cmd
from ..sender import CommandSend
from .builder import CommandBuilder

Key = str | bytes

# "One key or many keys": a single key, or any iterable of keys
Keys = Key | Iterable[Key]


def sequence_of(container: type, element_type: Any) -> Any:
    """Build the decode target for a homogeneous collection.

    ``tuple`` gets the variadic form, other containers are subscripted
    directly (``list[str]``, ``set[bytes]``, ...).
    """
    if container is tuple:
        return tuple[element_type, ...]
    return container[element_type]


class GenericCommands(CommandSend):
    """A group of generic commands operating on the key space."""

    def copy(self, source: Key, destination: Key) -> Copy:
        """Copy the value stored at ``source`` to ``destination``.

        Returns:
            Copy builder; executes to True if the value was copied
        """
        return Copy(self, cmd("COPY").arg(source).arg(destination))

    async def delete(self, keys: Keys) -> int:
        """Remove the specified keys. Keys that do not exist are ignored.

        Returns:
            The number of keys that were removed
        """
        return await self.send_into(cmd("DEL").arg(keys), int)

    async def dump(self, key: Key) -> bytes | None:
        """Serialize the value stored at ``key`` in the store's own format.

        Returns:
            The serialized payload, or None if the key does not exist
        """
        return await self.send_into(cmd("DUMP").arg(key), bytes | None)

    async def exists(self, keys: Keys) -> int:
        """Count how many of the given keys exist.

        A key given several times is counted several times.
        """
        return await self.send_into(cmd("EXISTS").arg(keys), int)

    def expire(self, key: Key, seconds: int) -> Expire:
        """Set a timeout on ``key``, in seconds.

        Returns:
            Expire builder; executes to True if the timeout was set, False if
            the key does not exist or a condition flag skipped the operation
        """
        return Expire(self, cmd("EXPIRE").arg(key).arg(seconds))

    def expireat(self, key: Key, unix_time_seconds: int) -> Expire:
        """Like expire, but with an absolute Unix timestamp in seconds.

        A timestamp in the past deletes the key.
        """
        return Expire(self, cmd("EXPIREAT").arg(key).arg(unix_time_seconds))

    async def expiretime(self, key: Key) -> int:
        """Absolute Unix timestamp, in seconds, at which ``key`` expires.

        Returns:
            The timestamp, -1 if the key has no expiry, -2 if it does not exist
        """
        return await self.send_into(cmd("EXPIRETIME").arg(key), int)

    async def keys(self, pattern: Key, element_type: Any = str, container: type = list) -> Any:
        """Return all keys matching ``pattern``.

        Args:
            pattern: Glob-style pattern
            element_type: Type each key is decoded into (str or bytes)
            container: Collection type for the result (list, set, tuple, ...)
        """
        target = sequence_of(container, element_type)
        return await self.send_into(cmd("KEYS").arg(pattern), target)

    async def move(self, key: Key, db: int) -> bool:
        """Move ``key`` to another logical database.

        Returns:
            True if the key was moved
        """
        return await self.send_into(cmd("MOVE").arg(key).arg(db), bool)

    async def object_encoding(self, key: Key) -> str | None:
        """Internal encoding of the object stored at ``key``, or None if missing."""
        return await self.send_into(cmd("OBJECT").arg("ENCODING").arg(key), str | None)

    async def object_freq(self, key: Key) -> int:
        """Logarithmic access frequency counter of the object at ``key``."""
        return await self.send_into(cmd("OBJECT").arg("FREQ").arg(key), int)

    async def object_idle_time(self, key: Key) -> int:
        """Seconds since the object at ``key`` was last accessed."""
        return await self.send_into(cmd("OBJECT").arg("IDLETIME").arg(key), int)

    async def object_refcount(self, key: Key) -> int:
        """Reference count of the object at ``key``."""
        return await self.send_into(cmd("OBJECT").arg("REFCOUNT").arg(key), int)

    async def persist(self, key: Key) -> bool:
        """Remove the existing timeout on ``key``.

        Returns:
            True if the timeout was removed, False if the key does not exist
            or has no timeout
        """
        return await self.send_into(cmd("PERSIST").arg(key), bool)

    def pexpire(self, key: Key, milliseconds: int) -> Expire:
        """Like expire, with the time to live in milliseconds."""
        return Expire(self, cmd("PEXPIRE").arg(key).arg(milliseconds))

    def pexpireat(self, key: Key, unix_time_milliseconds: int) -> Expire:
        """Like expireat, with the timestamp in milliseconds."""
        return Expire(self, cmd("PEXPIREAT").arg(key).arg(unix_time_milliseconds))

    async def pexpiretime(self, key: Key) -> int:
        """Like expiretime, in milliseconds."""
        return await self.send_into(cmd("PEXPIRETIME").arg(key), int)

    async def pttl(self, key: Key) -> int:
        """Remaining time to live of ``key`` in milliseconds.

        Returns:
            The TTL, -1 if the key has no expiry, -2 if it does not exist
        """
        return await self.send_into(cmd("PTTL").arg(key), int)

    async def randomkey(self, target: Any = str | None) -> Any:
        """Return a random key, or None when the database is empty."""
        return await self.send_into(cmd("RANDOMKEY"), target)

    async def rename(self, key: Key, new_key: Key) -> None:
        """Rename ``key`` to ``new_key``, overwriting ``new_key`` if it exists."""
        await self.send_into(cmd("RENAME").arg(key).arg(new_key), None)

    async def renamenx(self, key: Key, new_key: Key) -> bool:
        """Rename ``key`` to ``new_key`` only if ``new_key`` does not exist.

        Returns:
            True if the key was renamed, False if ``new_key`` already exists
        """
        return await self.send_into(cmd("RENAMENX").arg(key).arg(new_key), bool)

    def restore(self, key: Key, ttl: int, serialized_value: bytes) -> Restore:
        """Create ``key`` from a payload produced by dump.

        Args:
            key: Key to create
            ttl: Time to live in milliseconds, 0 for no expiry
            serialized_value: Payload returned by dump, sent verbatim
        """
        return Restore(self, cmd("RESTORE").arg(key).arg(ttl).arg(bytes(serialized_value)))

    def scan(self, cursor: int) -> Scan:
        """Iterate the key space, one batch per call.

        Start with cursor 0 and call again with the returned cursor until
        the store returns 0.
        """
        return Scan(self, cmd("SCAN").arg(cursor))

    async def scan_iter(
        self,
        match: Key | None = None,
        count: int | None = None,
        type: str | None = None,
        element_type: Any = str,
    ) -> AsyncIterator[Any]:
        """Yield every key of a full scan, from cursor 0 until the store returns 0.

        Keys may repeat across batches; the store only guarantees that keys
        present for the whole scan are returned at least once.
        """
        cursor = 0
        while True:
            builder = self.scan(cursor)
            if match is not None:
                builder = builder.match(match)
            if count is not None:
                builder = builder.count(count)
            if type is not None:
                builder = builder.type(type)
            cursor, batch = await builder.execute(element_type)
            for key in batch:
                yield key
            if cursor == 0:
                return

    async def ttl(self, key: Key) -> int:
        """Remaining time to live of ``key`` in seconds.

        Returns:
            The TTL, -1 if the key has no expiry, -2 if it does not exist
        """
        return await self.send_into(cmd("TTL").arg(key), int)

    async def type(self, key: Key) -> str:
        """Type of the value stored at ``key`` (string, list, set, zset, hash, stream).

        Returns "none" when the key does not exist.
        """
        return await self.send_into(cmd("TYPE").arg(key), str)

    async def unlink(self, keys: Keys) -> int:
        """Remove the specified keys, reclaiming memory in the background.

        Returns:
            The number of keys that were unlinked
        """
        return await self.send_into(cmd("UNLINK").arg(keys), int)


# =============================================================================
# Builders
# =============================================================================


class Copy(CommandBuilder[bool]):
    """Builder for the copy command."""

    __slots__ = ()

    result_type = bool

    def db(self, destination_db: int) -> Copy:
        """Copy into another logical database."""
        return self._with("DB", destination_db)

    def replace(self) -> Copy:
        """Remove the destination key before copying."""
        return self._with("REPLACE")


class Expire(CommandBuilder[bool]):
    """Builder for expire, expireat, pexpire and pexpireat.

    At most one condition flag is meaningful; combinations are rejected by
    the store, not here.
    """

    __slots__ = ()

    result_type = bool

    def nx(self) -> Expire:
        """Set expiry only when the key has no expiry."""
        return self._with("NX")

    def xx(self) -> Expire:
        """Set expiry only when the key has an existing expiry."""
        return self._with("XX")

    def gt(self) -> Expire:
        """Set expiry only when the new expiry is greater than the current one."""
        return self._with("GT")

    def lt(self) -> Expire:
        """Set expiry only when the new expiry is less than the current one."""
        return self._with("LT")


class Restore(CommandBuilder[None]):
    """Builder for the restore command."""

    __slots__ = ()

    result_type = None

    def replace(self) -> Restore:
        """Replace the key if it already exists."""
        return self._with("REPLACE")

    def abs_ttl(self, enabled: bool = True) -> Restore:
        """Interpret ttl as an absolute Unix timestamp in milliseconds."""
        return self._with_if(enabled, "ABSTTL")

    def idle_time(self, seconds: int) -> Restore:
        """Set the object idle time, for LRU eviction."""
        return self._with("IDLETIME", seconds)

    def freq(self, frequency: float) -> Restore:
        """Set the object access frequency, for LFU eviction."""
        return self._with("FREQ", frequency)


class Scan(CommandBuilder[tuple[int, Any]]):
    """Builder for the scan command."""

    __slots__ = ()

    def match(self, pattern: Key) -> Scan:
        """Only return keys matching the glob-style ``pattern``."""
        return self._with("MATCH", pattern)

    def count(self, count: int) -> Scan:
        """Hint how much work to do per call. Batch sizes may differ."""
        return self._with("COUNT", count)

    def type(self, type_: str) -> Scan:
        """Only return keys holding values of the given type."""
        return self._with("TYPE", type_)

    async def execute(self, element_type: Any = str, container: type = list) -> tuple[int, Any]:
        """Send the scan and decode ``(next_cursor, batch)``.

        Args:
            element_type: Type each key is decoded into (str or bytes)
            container: Collection type for the batch

        Returns:
            Tuple of the next cursor (0 when the scan is complete) and the
            batch of keys, which may be empty
        """
        target = tuple[int, sequence_of(container, element_type)]
        return await self._sender.send_into(self._take(), target)
