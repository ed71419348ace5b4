"""Catalog record models and the normalized event model.

The ``Catalog*`` models are a tolerant, parsed view of one record from
the Ticketmaster Discovery ``events.json`` response.  :class:`Event` is
the minimal shape the rest of the library works with.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator, model_validator

from pyeventmap.ingestion.normalize import safe_float, safe_str
from pyeventmap.models._base import CatalogBaseModel, EventMapBaseModel
from pyeventmap.models.position import Position


def _text(value: Any) -> str:
    return safe_str(value) or ""


def _positional_dicts(value: Any) -> list[dict[str, Any]]:
    # Non-mapping entries become empty records so indexes keep their meaning.
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, dict) else {} for item in value]


class VenueLocation(CatalogBaseModel):
    """Venue coordinates.

    The catalog sends both values as numeric strings.  Anything absent,
    empty or non-numeric parses to ``None``.
    """

    latitude: float | None = None
    longitude: float | None = None

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @property
    def is_plottable(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class CatalogVenue(CatalogBaseModel):
    location: VenueLocation | None = None

    @field_validator("location", mode="before")
    @classmethod
    def _drop_non_mapping(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else None


class CatalogImage(CatalogBaseModel):
    url: str = ""

    @field_validator("url", mode="before")
    @classmethod
    def _coerce_url(cls, value: Any) -> str:
        return _text(value)


class CatalogEvent(CatalogBaseModel):
    """One raw catalog event.

    Venues live under ``_embedded.venues`` in the payload and are
    lifted to :attr:`venues` before validation.
    """

    id: str = ""
    name: str = ""
    url: str = ""
    images: list[CatalogImage] = Field(default_factory=list)
    venues: list[CatalogVenue] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _lift_embedded_venues(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        lifted = dict(values)
        embedded = values.get("_embedded")
        if "venues" not in lifted:
            lifted["venues"] = embedded.get("venues") if isinstance(embedded, dict) else None
        lifted.setdefault("raw", values)
        return lifted

    @field_validator("id", "name", "url", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _text(value)

    @field_validator("images", "venues", mode="before")
    @classmethod
    def _coerce_lists(cls, value: Any) -> list[dict[str, Any]]:
        return _positional_dicts(value)

    @property
    def first_venue_location(self) -> VenueLocation | None:
        if not self.venues:
            return None
        return self.venues[0].location

    @property
    def image_url(self) -> str:
        """URL of the first image, or ``""`` when there is none."""
        return self.images[0].url if self.images else ""


class Event(EventMapBaseModel):
    """A normalized, plottable event."""

    id: str
    name: str
    url: str
    image_url: str = ""
    location: Position
    """Venue coordinates; always inside the valid latitude/longitude ranges."""
