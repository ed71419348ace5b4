from __future__ import annotations

import pytest

from pyeventmap.config import EventMapConfig, GeolocationOptions
from pyeventmap.exceptions import EventMapConfigError
from pyeventmap.models.position import Position

_ENV_KEYS = (
    "EVENTMAP_API_KEY",
    "TICKETMASTER_API_KEY",
    "EVENTMAP_BASE_URL",
    "EVENTMAP_RADIUS",
    "EVENTMAP_UNIT",
    "EVENTMAP_CLASSIFICATION",
    "EVENTMAP_SORT",
    "EVENTMAP_FALLBACK_LAT",
    "EVENTMAP_FALLBACK_LNG",
    "EVENTMAP_GEOLOCATION_URL",
    "EVENTMAP_REQUEST_TIMEOUT",
    "EVENTMAP_MAP_ZOOM",
    "EVENTMAP_GEO_HIGH_ACCURACY",
    "EVENTMAP_GEO_TIMEOUT_MS",
    "EVENTMAP_GEO_MAXIMUM_AGE_MS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_match_reference_deployment() -> None:
    config = EventMapConfig(api_key="KEY")

    assert config.radius == 20
    assert config.unit == "km"
    assert config.classification_name == "Music"
    assert config.sort == "date,asc"
    assert config.fallback_position == Position(lat=51.5074, lng=-0.1278)
    assert config.geolocation == GeolocationOptions(high_accuracy=True, timeout_ms=10_000, maximum_age_ms=0)
    assert config.request_timeout is None


@pytest.mark.parametrize("api_key", ["", "   "])
def test_blank_api_key_fails_fast(api_key: str) -> None:
    with pytest.raises(EventMapConfigError, match="API key"):
        EventMapConfig(api_key=api_key)


def test_from_env_without_key_fails_fast() -> None:
    with pytest.raises(EventMapConfigError, match="EVENTMAP_API_KEY"):
        EventMapConfig.from_env()


def test_from_env_reads_ticketmaster_key_as_fallback(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TICKETMASTER_API_KEY", "tm-key")

    assert EventMapConfig.from_env().api_key == "tm-key"


def test_from_env_prefers_eventmap_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TICKETMASTER_API_KEY", "tm-key")
    monkeypatch.setenv("EVENTMAP_API_KEY", "em-key")

    assert EventMapConfig.from_env().api_key == "em-key"


def test_from_env_reads_optional_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EVENTMAP_API_KEY", "KEY")
    monkeypatch.setenv("EVENTMAP_RADIUS", "35")
    monkeypatch.setenv("EVENTMAP_UNIT", "miles")
    monkeypatch.setenv("EVENTMAP_CLASSIFICATION", "Sports")
    monkeypatch.setenv("EVENTMAP_FALLBACK_LAT", "40.7128")
    monkeypatch.setenv("EVENTMAP_FALLBACK_LNG", "-74.006")
    monkeypatch.setenv("EVENTMAP_REQUEST_TIMEOUT", "7.5")
    monkeypatch.setenv("EVENTMAP_GEO_TIMEOUT_MS", "2500")
    monkeypatch.setenv("EVENTMAP_GEO_HIGH_ACCURACY", "off")
    monkeypatch.setenv("EVENTMAP_GEOLOCATION_URL", "")

    config = EventMapConfig.from_env()

    assert config.radius == 35
    assert config.unit == "miles"
    assert config.classification_name == "Sports"
    assert config.fallback_position == Position(lat=40.7128, lng=-74.006)
    assert config.request_timeout == 7.5
    assert config.geolocation.timeout_ms == 2500
    assert config.geolocation.high_accuracy is False
    assert config.geolocation_url is None


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EVENTMAP_API_KEY", "KEY")
    monkeypatch.setenv("EVENTMAP_RADIUS", "35")

    config = EventMapConfig.from_env(radius=5, geolocation={"maximum_age_ms": 60_000})

    assert config.radius == 5
    assert config.geolocation.maximum_age_ms == 60_000
    assert config.geolocation.timeout_ms == 10_000


def test_from_env_rejects_unparseable_number(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EVENTMAP_API_KEY", "KEY")
    monkeypatch.setenv("EVENTMAP_RADIUS", "twenty")

    with pytest.raises(EventMapConfigError, match="EVENTMAP_RADIUS"):
        EventMapConfig.from_env()


def test_from_env_rejects_out_of_range_fallback(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EVENTMAP_API_KEY", "KEY")
    monkeypatch.setenv("EVENTMAP_FALLBACK_LAT", "123")

    with pytest.raises(EventMapConfigError, match="fallback position"):
        EventMapConfig.from_env()


@pytest.mark.parametrize(
    "overrides",
    [
        {"radius": 0},
        {"unit": "parsecs"},
        {"classification_name": " "},
        {"request_timeout": 0},
        {"geolocation": GeolocationOptions(timeout_ms=0)},
        {"geolocation": GeolocationOptions(maximum_age_ms=-1)},
    ],
)
def test_invalid_values_rejected(overrides: dict) -> None:
    with pytest.raises(EventMapConfigError):
        EventMapConfig(api_key="KEY", **overrides)
