"""Unit tests for the consent-gated persistence port."""

from __future__ import annotations

from unittest.mock import AsyncMock

from devcore.shell.models.actions import OpenApp
from devcore.shell.models.snapshot import build_snapshot
from devcore.shell.models.state import ShellState
from devcore.shell.persistence import PersistencePort, create_port
from devcore.shell.reducer import reduce
from devcore.shell.settings import get_settings
from devcore.shell.store.memory import MemoryKeyValueStore


def _snapshot():
    state = reduce(ShellState(), OpenApp(app_id="notes", title="Notes", props={"x": 1}))
    return build_snapshot(state)


async def test_without_consent_nothing_is_read_or_written(port: PersistencePort, kv: MemoryKeyValueStore) -> None:
    assert await port.has_consent() is False
    assert await port.save(_snapshot()) is False
    assert "devcore_shell_snapshot" not in kv

    await kv.set("devcore_shell_snapshot", _snapshot().to_json())
    assert await port.load() is None


async def test_consent_requires_exact_granted_value(kv: MemoryKeyValueStore) -> None:
    port = PersistencePort(kv)
    for value in ("", "yes", "GRANTED", "true"):
        await kv.set("devcore_ls_consent", value)
        assert await port.has_consent() is False
    await kv.set("devcore_ls_consent", "granted")
    assert await port.has_consent() is True


async def test_save_and_load(consented_port: PersistencePort) -> None:
    snapshot = _snapshot()
    assert await consented_port.save(snapshot) is True

    loaded = await consented_port.load()
    assert loaded is not None
    assert loaded.workspace.apps.keys() == snapshot.workspace.apps.keys()
    assert loaded.workspace.z_counter == 11


async def test_load_empty_returns_none(consented_port: PersistencePort) -> None:
    assert await consented_port.load() is None


async def test_load_malformed_returns_none(consented_port: PersistencePort, kv: MemoryKeyValueStore) -> None:
    await kv.set("devcore_shell_snapshot", "{broken")
    assert await consented_port.load() is None


async def test_revoke_removes_snapshot(consented_port: PersistencePort, kv: MemoryKeyValueStore) -> None:
    await consented_port.save(_snapshot())
    await consented_port.revoke_consent()
    assert await consented_port.has_consent() is False
    assert "devcore_shell_snapshot" not in kv
    assert "devcore_ls_consent" not in kv


async def test_clear_keeps_consent(consented_port: PersistencePort) -> None:
    await consented_port.save(_snapshot())
    await consented_port.clear()
    assert await consented_port.read_raw() is None
    assert await consented_port.has_consent() is True


async def test_write_failure_is_absorbed() -> None:
    store = AsyncMock()
    store.get.return_value = "granted"
    store.set.side_effect = OSError("quota exceeded")
    port = PersistencePort(store)

    assert await port.save(_snapshot()) is False
    store.set.assert_awaited_once()


async def test_read_failure_is_absorbed() -> None:
    store = AsyncMock()
    store.get.side_effect = OSError("storage disabled")
    port = PersistencePort(store)

    assert await port.has_consent() is False
    assert await port.load() is None


async def test_custom_keys(kv: MemoryKeyValueStore) -> None:
    port = PersistencePort(kv, snapshot_key="snap", consent_key="ok")
    await port.grant_consent()
    await port.save(_snapshot())
    assert "snap" in kv
    assert "ok" in kv


async def test_create_port_uses_settings(tmp_path) -> None:
    settings = get_settings()
    port = create_port(settings)
    await port.grant_consent()
    assert (tmp_path / "data" / "kv" / "devcore_ls_consent.json").exists()
