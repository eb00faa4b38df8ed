"""Actions accepted by the shell reducer.

The action set is a closed tagged union discriminated by ``type``.  Workspace
actions drive the window state machine; session and settings actions are
produced by the identity provider and the settings view respectively.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import Field, SecretStr, TypeAdapter

from devcore.shell.models.base import ShellModel
from devcore.shell.models.enums import SessionStatus
from devcore.shell.models.session import AppUser
from devcore.shell.models.workspace import AppGeometry

# -- Workspace -----------------------------------------------------------------


class OpenApp(ShellModel):
    """Open a window for ``app_id``, or raise an already visible one."""

    type: Literal["WORKSPACE_OPEN_APP"] = "WORKSPACE_OPEN_APP"
    app_id: str
    title: str
    props: dict[str, Any] | None = None


class CloseApp(ShellModel):
    type: Literal["WORKSPACE_CLOSE_APP"] = "WORKSPACE_CLOSE_APP"
    instance_id: str


class FocusApp(ShellModel):
    type: Literal["WORKSPACE_FOCUS_APP"] = "WORKSPACE_FOCUS_APP"
    instance_id: str


class MinimizeApp(ShellModel):
    type: Literal["WORKSPACE_MINIMIZE_APP"] = "WORKSPACE_MINIMIZE_APP"
    instance_id: str


class UpdateGeometry(ShellModel):
    type: Literal["WORKSPACE_UPDATE_APP"] = "WORKSPACE_UPDATE_APP"
    instance_id: str
    partial: AppGeometry


# -- Session -------------------------------------------------------------------


class SetSessionState(ShellModel):
    """Partial session update.  Fields left unset keep their current value."""

    type: Literal["SESSION_SET_STATE"] = "SESSION_SET_STATE"
    status: SessionStatus | None = None
    user: AppUser | None = None
    token: SecretStr | None = None


class Logout(ShellModel):
    type: Literal["SESSION_LOGOUT"] = "SESSION_LOGOUT"


# -- Settings ------------------------------------------------------------------


class ToggleFeatureVisibility(ShellModel):
    type: Literal["SETTINGS_TOGGLE_FEATURE_VISIBILITY"] = "SETTINGS_TOGGLE_FEATURE_VISIBILITY"
    feature_id: str


class SetGeminiApiKey(ShellModel):
    type: Literal["SETTINGS_SET_GEMINI_API_KEY"] = "SETTINGS_SET_GEMINI_API_KEY"
    api_key: str | None = None


Action = Annotated[
    OpenApp
    | CloseApp
    | FocusApp
    | MinimizeApp
    | UpdateGeometry
    | SetSessionState
    | Logout
    | ToggleFeatureVisibility
    | SetGeminiApiKey,
    Field(discriminator="type"),
]

_action_adapter: TypeAdapter[Action] = TypeAdapter(Action)
_actions_adapter: TypeAdapter[list[Action]] = TypeAdapter(list[Action])


def parse_action(data: Any) -> Action:
    """Validate a JSON-like mapping into an action.  Raises ``ValidationError``."""
    return _action_adapter.validate_python(data)


def parse_actions(data: Any) -> list[Action]:
    """Validate a list of JSON-like mappings into actions."""
    return _actions_adapter.validate_python(data)
