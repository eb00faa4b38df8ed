"""Workspace window data model.

A workspace is the set of feature windows currently open in the shell,
keyed by ``instance_id``.  Stacking order is derived from ``z_index``.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from devcore.shell.models.base import ShellModel


class Position(ShellModel):
    x: float
    y: float


class Size(ShellModel):
    width: float
    height: float


class AppGeometry(ShellModel):
    """Partial update for a window.  Only fields that were set are merged."""

    position: Position | None = None
    size: Size | None = None
    title: str | None = None


class WorkspaceApp(ShellModel):
    """One open instance of a feature window."""

    instance_id: str
    app_id: str
    title: str
    position: Position = Field(default_factory=lambda: Position(x=0, y=0))
    size: Size = Field(default_factory=lambda: Size(width=800, height=600))
    z_index: int
    is_minimized: bool = False
    props: dict[str, Any] = Field(default_factory=dict, exclude=True)
    """Initialisation payload handed to the feature at open time.  Never serialised."""


class WorkspaceState(ShellModel):
    apps: dict[str, WorkspaceApp] = Field(default_factory=dict)
    active_app_instance_id: str | None = None
    z_counter: int = 10
    """Last z-index handed out.  Only ever grows."""

    def ordered_apps(self) -> list[WorkspaceApp]:
        """Return windows bottom-most first."""
        return sorted(self.apps.values(), key=lambda app: app.z_index)

    def top_app(self) -> WorkspaceApp | None:
        ordered = self.ordered_apps()
        return ordered[-1] if ordered else None
