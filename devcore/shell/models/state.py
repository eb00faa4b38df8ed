"""Root shell state."""

from __future__ import annotations

from pydantic import Field

from devcore.shell.models.base import ShellModel
from devcore.shell.models.preferences import SettingsState
from devcore.shell.models.session import SessionState
from devcore.shell.models.workspace import WorkspaceState


class ShellState(ShellModel):
    session: SessionState = Field(default_factory=SessionState)
    workspace: WorkspaceState = Field(default_factory=WorkspaceState)
    settings: SettingsState = Field(default_factory=SettingsState)
