"""Shell configuration loaded from DEVCORE_* environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class DevcoreSettings(BaseSettings):
    """Devcore shell settings.

    All fields are read from environment variables with the ``DEVCORE_``
    prefix.  For example, ``DEVCORE_LOG_LEVEL=DEBUG`` maps to ``log_level``.
    """

    model_config = SettingsConfigDict(
        env_prefix="DEVCORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"
    log_file: str | None = None
    """Optional log file in addition to stderr."""

    log_rotation: str = "10 MB"
    """loguru rotation policy for ``log_file``."""

    # -- Data storage ----------------------------------------------------------
    data_root: str = "./data"
    """Root directory of the local key-value store."""

    data_prefix: str | None = None
    """Optional namespace inserted as ``{data_root}/{data_prefix}/...``.

    Lets several profiles share one data root without seeing each other's
    snapshots.
    """

    snapshot_key: str = "devcore_shell_snapshot"
    consent_key: str = "devcore_ls_consent"

    # -- Persistence -----------------------------------------------------------
    persist_debounce: float = 0.5
    """Quiet interval (seconds) before a changed workspace is written."""


def get_settings() -> DevcoreSettings:
    """Return a cached settings instance.

    Call ``_get_settings_cached.cache_clear()`` in tests to force a re-read
    after overriding env vars.
    """
    return _get_settings_cached()


@lru_cache(maxsize=1)
def _get_settings_cached() -> DevcoreSettings:
    return DevcoreSettings()
