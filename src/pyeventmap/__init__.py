"""pyeventmap - Async Python client for discovering live events near the user."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyeventmap")
except PackageNotFoundError:
    __version__ = "0+local"
from pyeventmap.client import EventMapClient
from pyeventmap.config import EventMapConfig, GeolocationOptions
from pyeventmap.discovery import EventDiscoveryClient
from pyeventmap.exceptions import (
    CatalogResponseError,
    EventMapConfigError,
    EventMapError,
    EventMapTransportError,
    GeolocationError,
    GeolocationUnsupportedError,
    PositionErrorCode,
)
from pyeventmap.geolocation import GeolocationProvider, IpGeolocationProvider, StaticGeolocationProvider
from pyeventmap.map_view import build_map_view
from pyeventmap.models import (
    AcquisitionState,
    DiscoveryResult,
    DiscoveryState,
    Event,
    GeolocationReading,
    MapMarker,
    MapSnapshot,
    MapView,
    MarkerKind,
    Position,
)
from pyeventmap.orchestrator import EventMapOrchestrator
from pyeventmap.resolver import PositionResolver

__all__ = [
    "__version__",
    "AcquisitionState",
    "CatalogResponseError",
    "DiscoveryResult",
    "DiscoveryState",
    "Event",
    "EventDiscoveryClient",
    "EventMapClient",
    "EventMapConfig",
    "EventMapConfigError",
    "EventMapError",
    "EventMapOrchestrator",
    "EventMapTransportError",
    "GeolocationError",
    "GeolocationOptions",
    "GeolocationProvider",
    "GeolocationReading",
    "GeolocationUnsupportedError",
    "IpGeolocationProvider",
    "MapMarker",
    "MapSnapshot",
    "MapView",
    "MarkerKind",
    "Position",
    "PositionErrorCode",
    "PositionResolver",
    "StaticGeolocationProvider",
    "build_map_view",
]
