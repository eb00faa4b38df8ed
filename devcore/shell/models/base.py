"""Common pydantic configuration for shell state models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ShellModel(BaseModel):
    """Immutable model serialised with camelCase keys.

    State objects are never mutated in place; the reducer derives new ones
    with ``model_copy(update=...)``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
