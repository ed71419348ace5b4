"""Data models for pyeventmap."""

from pyeventmap.models._base import CatalogBaseModel, EventMapBaseModel
from pyeventmap.models.discovery import DiscoveryResult, DiscoveryState
from pyeventmap.models.event import CatalogEvent, CatalogImage, CatalogVenue, Event, VenueLocation
from pyeventmap.models.map_view import MapMarker, MapView, MarkerKind
from pyeventmap.models.position import AcquisitionState, GeolocationReading, Position
from pyeventmap.models.snapshot import MapSnapshot

__all__ = [
    "AcquisitionState",
    "CatalogBaseModel",
    "CatalogEvent",
    "CatalogImage",
    "CatalogVenue",
    "DiscoveryResult",
    "DiscoveryState",
    "Event",
    "EventMapBaseModel",
    "GeolocationReading",
    "MapMarker",
    "MapSnapshot",
    "MapView",
    "MarkerKind",
    "Position",
    "VenueLocation",
]
