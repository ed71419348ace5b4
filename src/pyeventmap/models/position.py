"""Position and geolocation acquisition models."""

from __future__ import annotations

import time

from pydantic import AliasChoices, Field

from pyeventmap.models._base import EventMapBaseModel


class Position(EventMapBaseModel):
    """A point on Earth's surface.

    Parameters
    ----------
    lat : float
        Latitude in degrees, within ``[-90, 90]``.
    lng : float
        Longitude in degrees, within ``[-180, 180]``.
    """

    lat: float = Field(ge=-90.0, le=90.0, allow_inf_nan=False, validation_alias=AliasChoices("lat", "latitude"))
    lng: float = Field(
        ge=-180.0,
        le=180.0,
        allow_inf_nan=False,
        validation_alias=AliasChoices("lng", "longitude", "lon"),
    )

    def as_latlong(self) -> str:
        """Render as the ``"lat,lng"`` string used by the catalog query."""
        return f"{self.lat},{self.lng}"


class GeolocationReading(EventMapBaseModel):
    """A single reading produced by a geolocation provider.

    Readings are trusted as given; only the numeric types are enforced.
    """

    latitude: float
    longitude: float
    accuracy: float | None = None
    """Accuracy radius in metres, when the provider knows it."""
    timestamp: float = Field(default_factory=time.time)
    """Epoch seconds when the reading was taken."""

    def to_position(self) -> Position:
        return Position(lat=self.latitude, lng=self.longitude)


class AcquisitionState(EventMapBaseModel):
    """Outcome of (or progress towards) acquiring the user's position.

    Starts as :meth:`pending` and moves exactly once to either
    :meth:`located` or :meth:`fallback`.
    """

    position: Position | None = None
    loading: bool = True
    degraded: bool = False
    failure_reason: str | None = None

    @classmethod
    def pending(cls) -> AcquisitionState:
        return cls()

    @classmethod
    def located(cls, position: Position) -> AcquisitionState:
        return cls(position=position, loading=False, degraded=False)

    @classmethod
    def fallback(cls, position: Position, reason: str) -> AcquisitionState:
        return cls(position=position, loading=False, degraded=True, failure_reason=reason)
