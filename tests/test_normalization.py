from __future__ import annotations

import math
from typing import Any

import pytest

from pyeventmap.exceptions import CatalogResponseError
from pyeventmap.ingestion.events import extract_raw_events, normalize_event, normalize_events
from pyeventmap.ingestion.normalize import dig, safe_float
from pyeventmap.models.event import Event
from pyeventmap.models.position import Position


def _raw_event(
    event_id: str,
    *,
    latitude: Any = "51.5",
    longitude: Any = "-0.12",
    images: list[Any] | None = None,
) -> dict[str, Any]:
    return {
        "id": event_id,
        "name": f"Event {event_id}",
        "url": f"https://example.com/{event_id}",
        "images": images if images is not None else [{"url": f"https://img.example.com/{event_id}.jpg"}],
        "_embedded": {"venues": [{"location": {"latitude": latitude, "longitude": longitude}}]},
    }


def _body(*events: dict[str, Any]) -> dict[str, Any]:
    return {"_embedded": {"events": list(events)}, "page": {"size": 20, "totalElements": len(events)}}


def test_safe_float_rejects_non_finite() -> None:
    assert safe_float("12.5") == 12.5
    assert safe_float("nan") is None
    assert safe_float(math.inf) is None
    assert safe_float("abc") is None
    assert safe_float("12.3abc") is None
    assert safe_float(False) is None


def test_dig_returns_none_on_gap() -> None:
    assert dig({"a": {"b": 1}}, "a", "b") == 1
    assert dig({"a": []}, "a", "b") is None
    assert dig(None, "a") is None


def test_event_without_venues_dropped() -> None:
    complete = _raw_event("A1", latitude="51.5074", longitude="-0.1278")
    missing = {"id": "B2", "name": "No venue", "url": "https://example.com/B2", "images": []}

    events = normalize_events(_body(complete, missing))

    assert events == [
        Event(
            id="A1",
            name="Event A1",
            url="https://example.com/A1",
            image_url="https://img.example.com/A1.jpg",
            location=Position(lat=51.5074, lng=-0.1278),
        )
    ]


def test_empty_images_give_empty_image_url() -> None:
    event = normalize_event(_raw_event("C3", images=[]))

    assert event is not None
    assert event.image_url == ""


def test_non_numeric_latitude_dropped() -> None:
    assert normalize_event(_raw_event("D4", latitude="not-a-number", longitude="12.3")) is None


@pytest.mark.parametrize(
    ("latitude", "longitude"),
    [(None, "1.0"), ("1.0", None), ("", "1.0"), ("NaN", "1.0"), ("95.0", "1.0"), ("1.0", "-200")],
)
def test_unusable_locations_dropped(latitude: Any, longitude: Any) -> None:
    assert normalize_event(_raw_event("E5", latitude=latitude, longitude=longitude)) is None


def test_venue_without_location_dropped() -> None:
    raw = _raw_event("F6")
    raw["_embedded"]["venues"] = [{"name": "Mystery venue"}]

    assert normalize_event(raw) is None


def test_only_first_venue_considered() -> None:
    raw = _raw_event("G7")
    raw["_embedded"]["venues"] = [{"name": "no location"}, {"location": {"latitude": "1", "longitude": "2"}}]

    assert normalize_event(raw) is None


def test_non_mapping_first_venue_is_not_skipped() -> None:
    raw = _raw_event("G8")
    raw["_embedded"]["venues"] = ["bogus", {"location": {"latitude": "1", "longitude": "2"}}]

    assert normalize_event(raw) is None


def test_non_mapping_first_image_gives_empty_image_url() -> None:
    images: list[Any] = ["bogus", {"url": "https://img.example.com/second.jpg"}]

    event = normalize_event(_raw_event("G9", images=images))

    assert event is not None
    assert event.image_url == ""


def test_non_mapping_records_dropped() -> None:
    events = normalize_events(_body("junk", None, _raw_event("H8")))  # type: ignore[arg-type]

    assert [event.id for event in events] == ["H8"]


def test_order_preserved_across_filtering() -> None:
    raw = [
        _raw_event("1"),
        _raw_event("2", latitude="bad"),
        _raw_event("3"),
        _raw_event("4", longitude=None),
        _raw_event("5"),
    ]

    assert [event.id for event in normalize_events(_body(*raw))] == ["1", "3", "5"]


def test_every_normalized_event_is_finite() -> None:
    raw = [_raw_event(str(i), latitude=lat) for i, lat in enumerate(["1.5", "nan", "inf", "-45", "x", "0"])]

    events = normalize_events(_body(*raw))

    assert [event.id for event in events] == ["0", "3", "5"]
    for event in events:
        assert math.isfinite(event.location.lat)
        assert math.isfinite(event.location.lng)


def test_normalization_is_idempotent() -> None:
    body = _body(_raw_event("1"), _raw_event("2", images=[]), _raw_event("3", latitude="?"))

    assert normalize_events(body) == normalize_events(body)


def test_missing_embedded_events_is_empty() -> None:
    assert normalize_events({"page": {"totalElements": 0}}) == []
    assert normalize_events({"_embedded": {}}) == []


@pytest.mark.parametrize("body", [[], "text", None, {"_embedded": []}, {"_embedded": {"events": {}}}])
def test_malformed_bodies_raise(body: Any) -> None:
    with pytest.raises(CatalogResponseError):
        extract_raw_events(body)
