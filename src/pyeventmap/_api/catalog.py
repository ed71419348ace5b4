"""Catalog event search endpoint.

Endpoint:
  - GET {base_url}/events.json
"""

from __future__ import annotations

import logging

from pyeventmap._constants import EVENTS_ENDPOINT
from pyeventmap._transport import Transport
from pyeventmap.config import EventMapConfig
from pyeventmap.ingestion.events import normalize_events
from pyeventmap.models.event import Event
from pyeventmap.models.position import Position

_logger = logging.getLogger(__name__)


def build_event_query(config: EventMapConfig, position: Position) -> dict[str, str]:
    """Build the query parameters for an event search around *position*.

    Pure function of its inputs: the same config and position always
    produce the same parameters.
    """
    return {
        "apikey": config.api_key,
        "latlong": position.as_latlong(),
        "radius": str(config.radius),
        "unit": config.unit,
        "classificationName": config.classification_name,
        "sort": config.sort,
    }


def events_url(config: EventMapConfig) -> str:
    return f"{config.base_url.rstrip('/')}{EVENTS_ENDPOINT}"


async def fetch_events(
    config: EventMapConfig,
    transport: Transport,
    position: Position,
) -> list[Event]:
    """Search the catalog around *position* and normalize the results.

    Parameters
    ----------
    config : EventMapConfig
        Client configuration.
    transport : Transport
        HTTP transport.
    position : Position
        Search center.

    Returns
    -------
    list[Event]
        Plottable events in catalog order.

    Raises
    ------
    EventMapTransportError
        If the request fails or the body is not JSON.
    CatalogResponseError
        If the body does not have the expected shape.
    """
    body = await transport.get_json(events_url(config), build_event_query(config, position))
    events = normalize_events(body)
    _logger.debug("Catalog returned %d plottable events near %s", len(events), position.as_latlong())
    return events
