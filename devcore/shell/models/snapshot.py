"""Persisted snapshot of the shell state.

Only the workspace layout and user settings are written.  The session is
never part of a snapshot, window ``props`` are dropped, and the active window
is cleared so a restored window does not reclaim focus on its own.

Wire layout (single storage key)::

    {
      "workspace": {
        "apps": {"<instanceId>": {"instanceId", "appId", "title", "position",
                                  "size", "zIndex", "isMinimized"}},
        "activeAppInstanceId": null,
        "zCounter": 12
      },
      "settings": {"hiddenFeatures": [], "geminiApiKey": null}
    }
"""

from __future__ import annotations

from loguru import logger
from pydantic import ValidationError, model_validator

from devcore.shell.models.base import ShellModel
from devcore.shell.models.preferences import SettingsState
from devcore.shell.models.state import ShellState
from devcore.shell.models.workspace import WorkspaceState

log = logger.bind(component="snapshot")


class ShellSnapshot(ShellModel):
    workspace: WorkspaceState | None = None
    settings: SettingsState | None = None

    @model_validator(mode="after")
    def _validate_app_keys(self) -> ShellSnapshot:
        """Every ``apps`` key must match the entry's own ``instanceId``."""
        if self.workspace is None:
            return self
        for key, app in self.workspace.apps.items():
            if key != app.instance_id:
                msg = f"apps key {key!r} does not match instanceId {app.instance_id!r}"
                raise ValueError(msg)
        return self

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


def build_snapshot(state: ShellState) -> ShellSnapshot:
    """Derive the persistable subset of ``state``."""
    workspace = state.workspace.model_copy(
        update={
            "apps": {
                instance_id: app.model_copy(update={"props": {}})
                for instance_id, app in state.workspace.apps.items()
            },
            "active_app_instance_id": None,
        }
    )
    return ShellSnapshot(workspace=workspace, settings=state.settings)


def parse_snapshot(raw: str | bytes) -> ShellSnapshot | None:
    """Parse a stored snapshot.  Returns ``None`` if it is not well-formed."""
    try:
        return ShellSnapshot.model_validate_json(raw)
    except ValidationError as exc:
        log.warning("discarding malformed snapshot ({} errors)", exc.error_count())
        return None
