"""Unit tests for the key-value store backends.

No external services required -- uses a temporary directory.
"""

from __future__ import annotations

import pytest

from devcore.shell.store.base import KeyValueStore
from devcore.shell.store.local import InvalidKeyError, LocalKeyValueStore
from devcore.shell.store.memory import MemoryKeyValueStore


@pytest.fixture
def store(tmp_path) -> LocalKeyValueStore:
    return LocalKeyValueStore(tmp_path)


async def test_set_and_get(store: LocalKeyValueStore) -> None:
    await store.set("devcore_shell_snapshot", '{"a": 1}')
    assert await store.get("devcore_shell_snapshot") == '{"a": 1}'


async def test_get_missing_returns_none(store: LocalKeyValueStore) -> None:
    assert await store.get("nothing") is None


async def test_set_overwrites(store: LocalKeyValueStore) -> None:
    await store.set("k", "one")
    await store.set("k", "two")
    assert await store.get("k") == "two"


async def test_delete(store: LocalKeyValueStore) -> None:
    await store.set("k", "v")
    await store.delete("k")
    assert await store.get("k") is None

    # Delete non-existent is a no-op.
    await store.delete("k")


async def test_no_temp_files_left_behind(store: LocalKeyValueStore, tmp_path) -> None:
    for i in range(5):
        await store.set("k", str(i))
    files = sorted(p.name for p in (tmp_path / "kv").iterdir())
    assert files == ["k.json"]


async def test_prefix_creates_namespaced_path(tmp_path) -> None:
    store = LocalKeyValueStore(tmp_path, prefix="alice")
    await store.set("k", "v")
    assert (tmp_path / "alice" / "kv" / "k.json").read_text(encoding="utf-8") == "v"


async def test_different_prefixes_isolated(tmp_path) -> None:
    store_a = LocalKeyValueStore(tmp_path, prefix="alice")
    store_b = LocalKeyValueStore(tmp_path, prefix="bob")
    await store_a.set("k", "a")
    await store_b.set("k", "b")
    assert await store_a.get("k") == "a"
    assert await store_b.get("k") == "b"


@pytest.mark.parametrize("key", ["../escape", "a/b", "", ".hidden"])
async def test_invalid_keys_rejected(store: LocalKeyValueStore, key: str) -> None:
    with pytest.raises(InvalidKeyError):
        await store.set(key, "v")


async def test_memory_store() -> None:
    store = MemoryKeyValueStore({"k": "v"})
    assert "k" in store
    assert await store.get("k") == "v"
    await store.set("k", "w")
    assert await store.get("k") == "w"
    await store.delete("k")
    await store.delete("k")
    assert await store.get("k") is None


def test_backends_satisfy_protocol(tmp_path) -> None:
    assert isinstance(LocalKeyValueStore(tmp_path), KeyValueStore)
    assert isinstance(MemoryKeyValueStore(), KeyValueStore)
