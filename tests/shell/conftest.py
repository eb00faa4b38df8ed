"""Shared fixtures for shell state tests."""

from __future__ import annotations

import itertools

import pytest

from devcore.shell.persistence import PersistencePort
from devcore.shell.reducer import InstanceIdFactory
from devcore.shell.store.memory import MemoryKeyValueStore


@pytest.fixture
def id_factory() -> InstanceIdFactory:
    """Deterministic instance ids: ``notes-1``, ``notes-2``, ..."""
    counter = itertools.count(1)
    return lambda app_id: f"{app_id}-{next(counter)}"


@pytest.fixture
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def port(kv: MemoryKeyValueStore) -> PersistencePort:
    return PersistencePort(kv)


@pytest.fixture
async def consented_port(port: PersistencePort) -> PersistencePort:
    await port.grant_consent()
    return port
