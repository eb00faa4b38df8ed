"""Data models for the shell state core."""

from devcore.shell.models.actions import (
    Action,
    CloseApp,
    FocusApp,
    Logout,
    MinimizeApp,
    OpenApp,
    SetGeminiApiKey,
    SetSessionState,
    ToggleFeatureVisibility,
    UpdateGeometry,
    parse_action,
    parse_actions,
)
from devcore.shell.models.enums import SessionStatus
from devcore.shell.models.preferences import SettingsState
from devcore.shell.models.session import AppUser, SessionState
from devcore.shell.models.snapshot import ShellSnapshot, build_snapshot, parse_snapshot
from devcore.shell.models.state import ShellState
from devcore.shell.models.workspace import AppGeometry, Position, Size, WorkspaceApp, WorkspaceState

__all__ = [
    # Actions
    "Action",
    "AppGeometry",
    # Session
    "AppUser",
    "CloseApp",
    "FocusApp",
    "Logout",
    "MinimizeApp",
    "OpenApp",
    "Position",
    "SessionState",
    "SessionStatus",
    "SetGeminiApiKey",
    "SetSessionState",
    # Settings
    "SettingsState",
    # Snapshot
    "ShellSnapshot",
    "ShellState",
    "Size",
    "ToggleFeatureVisibility",
    "UpdateGeometry",
    # Workspace
    "WorkspaceApp",
    "WorkspaceState",
    "build_snapshot",
    "parse_action",
    "parse_actions",
    "parse_snapshot",
]
