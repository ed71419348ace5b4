"""Snapshot handed to the presentation layer."""

from __future__ import annotations

from pydantic import Field

from pyeventmap.models._base import EventMapBaseModel
from pyeventmap.models.discovery import DiscoveryState
from pyeventmap.models.event import Event
from pyeventmap.models.position import AcquisitionState, Position


class MapSnapshot(EventMapBaseModel):
    """Combined acquisition + discovery state at one instant."""

    acquisition: AcquisitionState = Field(default_factory=AcquisitionState.pending)
    discovery: DiscoveryState = Field(default_factory=DiscoveryState)

    @property
    def position(self) -> Position | None:
        return self.acquisition.position

    @property
    def acquisition_loading(self) -> bool:
        return self.acquisition.loading

    @property
    def acquisition_degraded(self) -> bool:
        return self.acquisition.degraded

    @property
    def events(self) -> tuple[Event, ...]:
        return self.discovery.events

    @property
    def discovery_loading(self) -> bool:
        return self.discovery.loading
