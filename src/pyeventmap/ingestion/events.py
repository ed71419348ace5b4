"""Catalog response ingestion.

Turns a decoded ``events.json`` body into normalized :class:`Event`
objects, dropping every record that cannot be plotted.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pyeventmap.exceptions import CatalogResponseError
from pyeventmap.models.event import CatalogEvent, Event
from pyeventmap.models.position import Position

_logger = logging.getLogger(__name__)


def extract_raw_events(payload: Any) -> list[Any]:
    """Return the records under ``_embedded.events``.

    A missing collection means "no results" and yields ``[]``.

    Raises
    ------
    CatalogResponseError
        If the body is not a JSON object or the collection has the
        wrong type.
    """
    if not isinstance(payload, dict):
        raise CatalogResponseError(f"Expected a JSON object, got {type(payload).__name__}")

    embedded = payload.get("_embedded")
    if embedded is None:
        return []
    if not isinstance(embedded, dict):
        raise CatalogResponseError(f"Expected '_embedded' to be an object, got {type(embedded).__name__}")

    events = embedded.get("events")
    if events is None:
        return []
    if not isinstance(events, list):
        raise CatalogResponseError(f"Expected '_embedded.events' to be a list, got {type(events).__name__}")
    return events


def normalize_event(raw: Any) -> Event | None:
    """Normalize one raw record, or return ``None`` if it has no usable location."""
    if not isinstance(raw, dict):
        return None

    try:
        record = CatalogEvent.model_validate(raw)
    except ValidationError:
        _logger.debug("Dropping unparseable catalog record", exc_info=True)
        return None

    location = record.first_venue_location
    if location is None or not location.is_plottable:
        _logger.debug("Dropping event id=%s: no venue location", record.id)
        return None

    try:
        position = Position(lat=location.latitude, lng=location.longitude)
    except ValidationError:
        _logger.debug(
            "Dropping event id=%s: location out of range (%s, %s)",
            record.id,
            location.latitude,
            location.longitude,
        )
        return None

    return Event(
        id=record.id,
        name=record.name,
        url=record.url,
        image_url=record.image_url,
        location=position,
    )


def normalize_events(payload: Any) -> list[Event]:
    """Normalize a full catalog body, preserving record order."""
    raw_events = extract_raw_events(payload)
    events: list[Event] = []
    for raw in raw_events:
        event = normalize_event(raw)
        if event is not None:
            events.append(event)

    dropped = len(raw_events) - len(events)
    if dropped:
        _logger.debug("Normalized %d of %d catalog records (%d dropped)", len(events), len(raw_events), dropped)
    return events
