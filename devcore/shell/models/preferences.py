"""User preferences persisted across shell restarts."""

from __future__ import annotations

from pydantic import Field

from devcore.shell.models.base import ShellModel


class SettingsState(ShellModel):
    hidden_features: list[str] = Field(default_factory=list, description="Feature ids hidden from the launcher")
    gemini_api_key: str | None = None
