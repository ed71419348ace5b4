"""Base models for pyeventmap.

:class:`EventMapBaseModel` is the immutable base for every domain
model.  :class:`CatalogBaseModel` is the base for the parsed view of
catalog records; it tolerates unknown keys and keeps the original
record in ``raw``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EventMapBaseModel(BaseModel):
    """Frozen base for domain models."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )


class CatalogBaseModel(BaseModel):
    """Base for untrusted catalog payload models.

    Handles:
    * unknown keys are ignored (the catalog sends many more fields
      than we read)
    * ``None`` values are dropped so the field default is used
    * the original record dict is stashed in ``raw``
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict, repr=False)
    """Original catalog record."""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        cleaned = {key: value for key, value in values.items() if value is not None}
        # Keep the caller's raw when constructing from kwargs.
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned
