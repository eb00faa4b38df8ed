"""Key-value store interface for durable shell storage.

The shell keeps two independent keys: the consent flag and the state
snapshot.  Values are opaque strings; serialisation is the persistence
port's concern.  Writes replace the whole value, so concurrent writers
(several shell processes on one data root) resolve as last-writer-wins.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Async protocol for reading and writing string values by key."""

    async def get(self, key: str) -> str | None:
        """Return the stored value, or ``None`` if the key is absent."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    async def delete(self, key: str) -> None:
        """Remove ``key``.  No-op if not found."""
        ...
