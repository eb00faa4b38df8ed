"""Shell state reducer.

``reduce(state, action)`` is the only place shell state changes.  It is pure
apart from instance-id generation (injectable for tests), never raises, and
returns the *same* object when an action does not apply -- callers rely on
identity to tell whether anything changed.

Window lifecycle per instance::

    Open-Active <--focus-- Open-Inactive
        |                      |
        +------minimize--------+--> Minimized --focus--> Open-Active

Close removes an instance from any state.  At most one instance is active,
and the active instance is never minimized.  ``z_counter`` only grows, so a
newly raised window always ends up above every existing one.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable

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
)
from devcore.shell.models.enums import SessionStatus
from devcore.shell.models.session import SessionState
from devcore.shell.models.state import ShellState
from devcore.shell.models.workspace import Position, Size, WorkspaceApp, WorkspaceState

InstanceIdFactory = Callable[[str], str]

CASCADE_ORIGIN = 50
CASCADE_STEP = 20
DEFAULT_SIZE = Size(width=800, height=600)


def new_instance_id(app_id: str) -> str:
    """Return a fresh instance id for ``app_id``."""
    return f"{app_id}-{uuid.uuid4().hex}"


def reduce(state: ShellState, action: Action, *, id_factory: InstanceIdFactory = new_instance_id) -> ShellState:
    """Apply ``action`` to ``state`` and return the resulting state."""
    match action:
        case OpenApp() | CloseApp() | FocusApp() | MinimizeApp() | UpdateGeometry():
            workspace = reduce_workspace(state.workspace, action, id_factory=id_factory)
            if workspace is state.workspace:
                return state
            return state.model_copy(update={"workspace": workspace})
        case SetSessionState():
            changes = {name: getattr(action, name) for name in action.model_fields_set if name != "type"}
            if not changes:
                return state
            return state.model_copy(update={"session": state.session.model_copy(update=changes)})
        case Logout():
            return state.model_copy(update={"session": SessionState(status=SessionStatus.UNAUTHENTICATED)})
        case ToggleFeatureVisibility(feature_id=feature_id):
            hidden = state.settings.hidden_features
            hidden = [f for f in hidden if f != feature_id] if feature_id in hidden else [*hidden, feature_id]
            return state.model_copy(update={"settings": state.settings.model_copy(update={"hidden_features": hidden})})
        case SetGeminiApiKey(api_key=api_key):
            return state.model_copy(update={"settings": state.settings.model_copy(update={"gemini_api_key": api_key})})
        case _:
            return state


def reduce_workspace(
    workspace: WorkspaceState,
    action: Action,
    *,
    id_factory: InstanceIdFactory = new_instance_id,
) -> WorkspaceState:
    """Window state machine.  Operations on unknown instance ids are no-ops."""
    match action:
        case OpenApp():
            return _open(workspace, action, id_factory)
        case CloseApp(instance_id=instance_id):
            if instance_id not in workspace.apps:
                return workspace
            apps = {k: v for k, v in workspace.apps.items() if k != instance_id}
            return workspace.model_copy(
                update={"apps": apps, "active_app_instance_id": _clear_if_active(workspace, instance_id)}
            )
        case FocusApp(instance_id=instance_id):
            app = workspace.apps.get(instance_id)
            if app is None:
                return workspace
            return _raise(workspace, app)
        case MinimizeApp(instance_id=instance_id):
            app = workspace.apps.get(instance_id)
            if app is None:
                return workspace
            return workspace.model_copy(
                update={
                    "apps": {**workspace.apps, instance_id: app.model_copy(update={"is_minimized": True})},
                    "active_app_instance_id": _clear_if_active(workspace, instance_id),
                }
            )
        case UpdateGeometry(instance_id=instance_id, partial=partial):
            app = workspace.apps.get(instance_id)
            if app is None:
                return workspace
            changes = {name: getattr(partial, name) for name in partial.model_fields_set}
            # Explicit nulls are ignored.
            changes = {name: value for name, value in changes.items() if value is not None}
            if not changes:
                return workspace
            return workspace.model_copy(
                update={"apps": {**workspace.apps, instance_id: app.model_copy(update=changes)}}
            )
        case _:
            return workspace


def _open(workspace: WorkspaceState, action: OpenApp, id_factory: InstanceIdFactory) -> WorkspaceState:
    # A visible window for the same feature is raised instead of duplicated.
    # A minimized one is left alone and a second instance is created.
    for app in workspace.apps.values():
        if app.app_id == action.app_id and not app.is_minimized:
            return _raise(workspace, app)

    instance_id = id_factory(action.app_id)
    while instance_id in workspace.apps:
        instance_id = id_factory(action.app_id)

    z_index = workspace.z_counter + 1
    offset = CASCADE_ORIGIN + len(workspace.apps) * CASCADE_STEP
    app = WorkspaceApp(
        instance_id=instance_id,
        app_id=action.app_id,
        title=action.title,
        position=Position(x=offset, y=offset),
        size=DEFAULT_SIZE,
        z_index=z_index,
        is_minimized=False,
        props=action.props or {},
    )
    return workspace.model_copy(
        update={
            "apps": {**workspace.apps, instance_id: app},
            "active_app_instance_id": instance_id,
            "z_counter": z_index,
        }
    )


def _raise(workspace: WorkspaceState, app: WorkspaceApp) -> WorkspaceState:
    """Put ``app`` on top, restore it and make it the active window."""
    z_index = workspace.z_counter + 1
    return workspace.model_copy(
        update={
            "apps": {**workspace.apps, app.instance_id: app.model_copy(update={"z_index": z_index, "is_minimized": False})},
            "active_app_instance_id": app.instance_id,
            "z_counter": z_index,
        }
    )


def _clear_if_active(workspace: WorkspaceState, instance_id: str) -> str | None:
    active = workspace.active_app_instance_id
    return None if active == instance_id else active
