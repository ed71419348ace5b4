"""Custom exception hierarchy for pyeventmap."""

from __future__ import annotations

import enum


class EventMapError(Exception):
    """Base exception for all pyeventmap errors."""


class EventMapConfigError(EventMapError):
    """Invalid or missing configuration."""


class EventMapTransportError(EventMapError):
    """HTTP-level failure (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class CatalogResponseError(EventMapError):
    """Catalog returned JSON that does not have the expected shape."""


class PositionErrorCode(enum.IntEnum):
    """Failure codes a geolocation provider can report.

    Values follow the W3C ``GeolocationPositionError`` codes.
    """

    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3


class GeolocationError(EventMapError):
    """A geolocation provider could not produce a reading."""

    def __init__(
        self,
        message: str,
        *,
        code: PositionErrorCode = PositionErrorCode.POSITION_UNAVAILABLE,
    ) -> None:
        self.code = code
        super().__init__(message)


class GeolocationUnsupportedError(GeolocationError):
    """The host offers no geolocation capability at all.

    Providers raise this when they discover at call time that they
    cannot work on the current host.  The resolver treats it exactly
    like having no provider.
    """
