"""Description of what a map surface should draw."""

from __future__ import annotations

from enum import StrEnum

from pyeventmap.models._base import EventMapBaseModel
from pyeventmap.models.position import Position


class MarkerKind(StrEnum):
    USER = "user"
    EVENT = "event"


class MapMarker(EventMapBaseModel):
    """One marker plus the payload its popup renders."""

    key: str
    kind: MarkerKind
    position: Position
    label: str
    image_url: str = ""
    url: str = ""


class MapView(EventMapBaseModel):
    center: Position
    zoom: int
    markers: tuple[MapMarker, ...] = ()
    banners: tuple[str, ...] = ()
