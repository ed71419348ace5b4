"""Geolocation providers.

A provider is the host's capability to produce one position reading.
Providers raise :class:`GeolocationError` when they cannot; the
:class:`~pyeventmap.resolver.PositionResolver` turns that into a
fallback position.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any, Protocol

import aiohttp

from pyeventmap._constants import USER_AGENT
from pyeventmap.config import GeolocationOptions
from pyeventmap.exceptions import GeolocationError, PositionErrorCode
from pyeventmap.ingestion.normalize import dig, safe_float
from pyeventmap.models.position import GeolocationReading, Position

_logger = logging.getLogger(__name__)


class GeolocationProvider(Protocol):
    """Structural interface for anything that can locate the host."""

    async def get_current_position(self, options: GeolocationOptions) -> GeolocationReading:
        ...


class StaticGeolocationProvider:
    """Provider that always returns the same reading.

    Useful when the host already knows its coordinates (e.g. supplied
    by the user or by a device profile).
    """

    def __init__(self, position: Position, *, accuracy: float | None = None) -> None:
        self._position = position
        self._accuracy = accuracy

    async def get_current_position(self, options: GeolocationOptions) -> GeolocationReading:
        return GeolocationReading(
            latitude=self._position.lat,
            longitude=self._position.lng,
            accuracy=self._accuracy,
        )


def _parse_ip_lookup(body: Any) -> GeolocationReading:
    """Parse an IP geolocation body into a reading.

    Accepts the common ``latitude``/``longitude`` and ``lat``/``lon``
    spellings, either at the top level or under ``location``.
    """
    if not isinstance(body, dict):
        raise GeolocationError("IP geolocation returned an unexpected body")
    if body.get("error"):
        reason = body.get("reason") or body.get("message") or "lookup refused"
        raise GeolocationError(f"IP geolocation failed: {reason}")

    candidate = body.get("location") if isinstance(body.get("location"), dict) else body
    latitude = safe_float(dig(candidate, "latitude"))
    if latitude is None:
        latitude = safe_float(dig(candidate, "lat"))
    longitude = safe_float(dig(candidate, "longitude"))
    if longitude is None:
        longitude = safe_float(dig(candidate, "lon"))
    if latitude is None or longitude is None:
        raise GeolocationError("IP geolocation returned no coordinates")

    return GeolocationReading(
        latitude=latitude,
        longitude=longitude,
        accuracy=safe_float(dig(candidate, "accuracy")),
    )


class IpGeolocationProvider:
    """Locate the host from its public IP address.

    IP lookups are coarse, so ``high_accuracy`` cannot be honoured; the
    timeout and maximum age hints are.
    """

    def __init__(
        self,
        http_session: aiohttp.ClientSession,
        url: str,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._http = http_session
        self._url = url
        self._clock = clock
        self._cached: GeolocationReading | None = None
        self._cached_at: float | None = None

    def _cached_reading(self, maximum_age_ms: int) -> GeolocationReading | None:
        if maximum_age_ms <= 0 or self._cached is None or self._cached_at is None:
            return None
        age_ms = (self._clock() - self._cached_at) * 1000.0
        return self._cached if age_ms <= maximum_age_ms else None

    async def get_current_position(self, options: GeolocationOptions) -> GeolocationReading:
        cached = self._cached_reading(options.maximum_age_ms)
        if cached is not None:
            _logger.debug("Using cached IP geolocation reading")
            return cached

        timeout = aiohttp.ClientTimeout(total=options.timeout_seconds)
        headers = {"accept": "application/json", "user-agent": USER_AGENT}

        _logger.debug("GET %s (IP geolocation)", self._url)
        try:
            async with self._http.get(self._url, headers=headers, timeout=timeout) as resp:
                if not 200 <= resp.status < 300:
                    raise GeolocationError(f"IP geolocation returned HTTP {resp.status}")
                body = await resp.json(content_type=None)
        except GeolocationError:
            raise
        except TimeoutError as exc:
            raise GeolocationError("Timeout expired", code=PositionErrorCode.TIMEOUT) from exc
        except (aiohttp.ClientError, ValueError) as exc:
            raise GeolocationError(f"IP geolocation failed: {exc}") from exc

        reading = _parse_ip_lookup(body)
        self._cached = reading
        self._cached_at = self._clock()
        return reading
