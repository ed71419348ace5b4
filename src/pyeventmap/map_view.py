"""Build the map description a rendering surface consumes."""

from __future__ import annotations

from pyeventmap._constants import (
    DEFAULT_MAP_ZOOM,
    DEGRADED_BANNER,
    LOADING_EVENTS_BANNER,
    USER_MARKER_KEY,
    USER_MARKER_LABEL,
)
from pyeventmap.models.map_view import MapMarker, MapView, MarkerKind
from pyeventmap.models.snapshot import MapSnapshot


def build_map_view(snapshot: MapSnapshot, *, zoom: int = DEFAULT_MAP_ZOOM) -> MapView | None:
    """Describe the map for *snapshot*.

    Returns ``None`` while the position is still being acquired; the
    presentation layer should show its "locating" state instead of a map.
    Otherwise the map is centred on the position with the user marker
    first, followed by one marker per event in snapshot order.
    """
    position = snapshot.position
    if snapshot.acquisition_loading or position is None:
        return None

    markers = [
        MapMarker(
            key=USER_MARKER_KEY,
            kind=MarkerKind.USER,
            position=position,
            label=USER_MARKER_LABEL,
        )
    ]
    markers.extend(
        MapMarker(
            key=event.id,
            kind=MarkerKind.EVENT,
            position=event.location,
            label=event.name,
            image_url=event.image_url,
            url=event.url,
        )
        for event in snapshot.events
    )

    banners: list[str] = []
    if snapshot.acquisition_degraded:
        banners.append(DEGRADED_BANNER)
    if snapshot.discovery_loading:
        banners.append(LOADING_EVENTS_BANNER)

    return MapView(center=position, zoom=zoom, markers=tuple(markers), banners=tuple(banners))
