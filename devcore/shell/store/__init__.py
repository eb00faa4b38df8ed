"""Key-value store implementations for shell persistence."""

from devcore.shell.store.base import KeyValueStore
from devcore.shell.store.local import LocalKeyValueStore
from devcore.shell.store.memory import MemoryKeyValueStore

__all__ = ["KeyValueStore", "LocalKeyValueStore", "MemoryKeyValueStore"]
