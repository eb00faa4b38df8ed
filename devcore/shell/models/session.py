"""Session (identity) model.

Session data may carry short-lived credentials and is held in memory only;
no snapshot ever contains it.
"""

from __future__ import annotations

from pydantic import SecretStr

from devcore.shell.models.base import ShellModel
from devcore.shell.models.enums import SessionStatus


class AppUser(ShellModel):
    """Display identity of the signed-in user, as supplied by the IdP."""

    uid: str
    display_name: str | None = None
    email: str | None = None
    photo_url: str | None = None


class SessionState(ShellModel):
    status: SessionStatus = SessionStatus.PENDING
    user: AppUser | None = None
    token: SecretStr | None = None
