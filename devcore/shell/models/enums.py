"""Shared enumerations used across the shell state core."""

from __future__ import annotations

from enum import StrEnum

# -- Session -----------------------------------------------------------------


class SessionStatus(StrEnum):
    """Authentication status reported by the identity provider."""

    PENDING = "pending"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"
