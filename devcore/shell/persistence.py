"""Consent-gated persistence of shell snapshots.

``PersistencePort`` sits between the workspace store and a key-value
backend.  Nothing is read or written unless the consent key holds exactly
``"granted"``.  Storage failures never escape the port: a bad read means
"no snapshot", a bad write is logged and dropped (no retry).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from devcore.shell.models.snapshot import ShellSnapshot, parse_snapshot

if TYPE_CHECKING:
    from devcore.shell.settings import DevcoreSettings
    from devcore.shell.store.base import KeyValueStore

log = logger.bind(component="persistence")

CONSENT_GRANTED = "granted"
DEFAULT_SNAPSHOT_KEY = "devcore_shell_snapshot"
DEFAULT_CONSENT_KEY = "devcore_ls_consent"


class PersistencePort:
    def __init__(
        self,
        store: KeyValueStore,
        *,
        snapshot_key: str = DEFAULT_SNAPSHOT_KEY,
        consent_key: str = DEFAULT_CONSENT_KEY,
    ) -> None:
        self._store = store
        self._snapshot_key = snapshot_key
        self._consent_key = consent_key

    # -- Consent ---------------------------------------------------------------

    async def has_consent(self) -> bool:
        try:
            value = await self._store.get(self._consent_key)
        except Exception:
            log.exception("failed to read consent flag, treating as not granted")
            return False
        return value == CONSENT_GRANTED

    async def grant_consent(self) -> None:
        await self._store.set(self._consent_key, CONSENT_GRANTED)
        log.info("consent granted")

    async def revoke_consent(self) -> None:
        """Withdraw consent and remove the stored snapshot."""
        await self._store.delete(self._consent_key)
        await self._store.delete(self._snapshot_key)
        log.info("consent revoked, snapshot removed")

    # -- Snapshot --------------------------------------------------------------

    async def load(self) -> ShellSnapshot | None:
        """Return the stored snapshot, or ``None`` if absent, unreadable or not consented."""
        if not await self.has_consent():
            return None
        try:
            raw = await self._store.get(self._snapshot_key)
        except Exception:
            log.exception("failed to read snapshot")
            return None
        if not raw:
            return None
        return parse_snapshot(raw)

    async def save(self, snapshot: ShellSnapshot) -> bool:
        """Write ``snapshot``.  Returns ``True`` if it was written."""
        if not await self.has_consent():
            log.debug("no consent, snapshot not written")
            return False
        try:
            await self._store.set(self._snapshot_key, snapshot.to_json())
        except Exception:
            log.exception("failed to write snapshot")
            return False
        return True

    async def read_raw(self) -> str | None:
        """Return the stored snapshot text regardless of consent (for inspection)."""
        return await self._store.get(self._snapshot_key)

    async def clear(self) -> None:
        await self._store.delete(self._snapshot_key)


def create_port(settings: DevcoreSettings) -> PersistencePort:
    """Build a port over the local filesystem store described by ``settings``."""
    from devcore.shell.store.local import LocalKeyValueStore

    store = LocalKeyValueStore(settings.data_root, prefix=settings.data_prefix)
    return PersistencePort(store, snapshot_key=settings.snapshot_key, consent_key=settings.consent_key)
