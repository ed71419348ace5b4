"""Client configuration for pyeventmap."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pydantic import ValidationError

from pyeventmap._constants import (
    CATALOG_BASE_URL,
    DEFAULT_CLASSIFICATION,
    DEFAULT_MAP_ZOOM,
    DEFAULT_RADIUS,
    DEFAULT_SORT,
    DEFAULT_UNIT,
    FALLBACK_LATITUDE,
    FALLBACK_LONGITUDE,
    GEOLOCATION_TIMEOUT_MS,
    IP_GEOLOCATION_URL,
    VALID_UNITS,
)
from pyeventmap.exceptions import EventMapConfigError
from pyeventmap.models.position import Position


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(env_key: str, value: str, kind: type[int] | type[float]) -> int | float:
    try:
        return kind(value)
    except ValueError as exc:
        raise EventMapConfigError(f"{env_key} must be a {kind.__name__}, got {value!r}") from exc


def _default_fallback() -> Position:
    return Position(lat=FALLBACK_LATITUDE, lng=FALLBACK_LONGITUDE)


@dataclasses.dataclass(frozen=True)
class GeolocationOptions:
    """Hints passed to the geolocation provider with every request.

    Parameters
    ----------
    high_accuracy : bool
        Ask for the most precise reading the provider can give.
    timeout_ms : int
        Milliseconds to wait for a reading before giving up.
    maximum_age_ms : int
        Oldest cached reading the provider may return.  ``0`` forces a
        fresh reading.
    """

    high_accuracy: bool = True
    timeout_ms: int = GEOLOCATION_TIMEOUT_MS
    maximum_age_ms: int = 0

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0


@dataclasses.dataclass(frozen=True)
class EventMapConfig:
    """Client configuration.

    Parameters
    ----------
    api_key : str
        Ticketmaster Discovery API key.  Required; a blank key raises
        :class:`EventMapConfigError` at construction.
    base_url : str
        Discovery API base URL.
    radius : int
        Search radius around the position.
    unit : str
        Radius unit, ``"km"`` or ``"miles"``.
    classification_name : str
        The single event classification to search (e.g. ``"Music"``).
    sort : str
        Catalog sort order.
    fallback_position : Position
        Position used when the user's position cannot be acquired.
    geolocation : GeolocationOptions
        Hints for the geolocation provider.
    geolocation_url : str or None
        IP geolocation endpoint used when no provider is supplied to the
        client.  ``None`` means the host has no geolocation capability.
    request_timeout : float or None
        Total seconds allowed for a catalog request.  ``None`` leaves
        the request unbounded.
    map_zoom : int
        Zoom level of the map view built from a snapshot.
    """

    api_key: str
    base_url: str = CATALOG_BASE_URL
    radius: int = DEFAULT_RADIUS
    unit: str = DEFAULT_UNIT
    classification_name: str = DEFAULT_CLASSIFICATION
    sort: str = DEFAULT_SORT
    fallback_position: Position = dataclasses.field(default_factory=_default_fallback)
    geolocation: GeolocationOptions = dataclasses.field(default_factory=GeolocationOptions)
    geolocation_url: str | None = IP_GEOLOCATION_URL
    request_timeout: float | None = None
    map_zoom: int = DEFAULT_MAP_ZOOM

    def __post_init__(self) -> None:
        if not isinstance(self.api_key, str) or not self.api_key.strip():
            raise EventMapConfigError(
                "Catalog API key required. Set EVENTMAP_API_KEY (or TICKETMASTER_API_KEY) "
                "or pass api_key to EventMapConfig."
            )
        if self.radius <= 0:
            raise EventMapConfigError(f"radius must be positive, got {self.radius}")
        if self.unit not in VALID_UNITS:
            raise EventMapConfigError(f"unit must be one of {sorted(VALID_UNITS)}, got {self.unit!r}")
        if not self.classification_name.strip():
            raise EventMapConfigError("classification_name must be non-empty")
        if self.geolocation.timeout_ms <= 0:
            raise EventMapConfigError(f"geolocation timeout must be positive, got {self.geolocation.timeout_ms}")
        if self.geolocation.maximum_age_ms < 0:
            raise EventMapConfigError(
                f"geolocation maximum age must not be negative, got {self.geolocation.maximum_age_ms}"
            )
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise EventMapConfigError(f"request_timeout must be positive, got {self.request_timeout}")

    @classmethod
    def from_env(cls, **overrides: Any) -> EventMapConfig:
        """Create configuration from environment variables.

        Reads ``EVENTMAP_API_KEY`` (falling back to
        ``TICKETMASTER_API_KEY``) and optional ``EVENTMAP_*`` variables.
        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        EventMapConfig
            Populated configuration.

        Raises
        ------
        EventMapConfigError
            If the API key is missing or a value cannot be parsed.
        """
        env = os.environ

        geo_kwargs: dict[str, Any] = {}
        if "EVENTMAP_GEO_HIGH_ACCURACY" in env:
            geo_kwargs["high_accuracy"] = _env_bool(env["EVENTMAP_GEO_HIGH_ACCURACY"], True)
        _ENV_GEO_MAP = {
            "EVENTMAP_GEO_TIMEOUT_MS": "timeout_ms",
            "EVENTMAP_GEO_MAXIMUM_AGE_MS": "maximum_age_ms",
        }
        for env_key, field_name in _ENV_GEO_MAP.items():
            val = env.get(env_key)
            if val is not None:
                geo_kwargs[field_name] = _env_number(env_key, val, int)

        # Allow overriding geolocation fields via a nested dict
        geo_overrides = overrides.pop("geolocation", None)
        if isinstance(geo_overrides, dict):
            geo_kwargs.update(geo_overrides)
        elif isinstance(geo_overrides, GeolocationOptions):
            geo_kwargs = dataclasses.asdict(geo_overrides)

        config_kwargs: dict[str, Any] = {"geolocation": GeolocationOptions(**geo_kwargs)}

        api_key = env.get("EVENTMAP_API_KEY") or env.get("TICKETMASTER_API_KEY")
        if api_key is not None:
            config_kwargs["api_key"] = api_key

        _ENV_CONFIG_MAP = {
            "EVENTMAP_BASE_URL": "base_url",
            "EVENTMAP_UNIT": "unit",
            "EVENTMAP_CLASSIFICATION": "classification_name",
            "EVENTMAP_SORT": "sort",
        }
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        radius_env = env.get("EVENTMAP_RADIUS")
        if radius_env is not None and "radius" not in overrides:
            config_kwargs["radius"] = _env_number("EVENTMAP_RADIUS", radius_env, int)

        zoom_env = env.get("EVENTMAP_MAP_ZOOM")
        if zoom_env is not None and "map_zoom" not in overrides:
            config_kwargs["map_zoom"] = _env_number("EVENTMAP_MAP_ZOOM", zoom_env, int)

        timeout_env = env.get("EVENTMAP_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = _env_number("EVENTMAP_REQUEST_TIMEOUT", timeout_env, float)

        # An empty value disables IP geolocation.
        if "EVENTMAP_GEOLOCATION_URL" in env and "geolocation_url" not in overrides:
            config_kwargs["geolocation_url"] = env["EVENTMAP_GEOLOCATION_URL"].strip() or None

        lat_env = env.get("EVENTMAP_FALLBACK_LAT")
        lng_env = env.get("EVENTMAP_FALLBACK_LNG")
        if (lat_env is not None or lng_env is not None) and "fallback_position" not in overrides:
            lat = _env_number("EVENTMAP_FALLBACK_LAT", lat_env, float) if lat_env is not None else FALLBACK_LATITUDE
            lng = _env_number("EVENTMAP_FALLBACK_LNG", lng_env, float) if lng_env is not None else FALLBACK_LONGITUDE
            try:
                config_kwargs["fallback_position"] = Position(lat=lat, lng=lng)
            except ValidationError as exc:
                raise EventMapConfigError(f"Invalid fallback position ({lat}, {lng})") from exc

        config_kwargs.update(overrides)

        if "api_key" not in config_kwargs:
            raise EventMapConfigError(
                "Catalog API key required. Set EVENTMAP_API_KEY (or TICKETMASTER_API_KEY) "
                "or pass api_key to EventMapConfig.from_env()."
            )

        return cls(**config_kwargs)
