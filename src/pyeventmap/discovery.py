"""Event discovery around a position.

The discovery client never raises to its caller: every failure (network
error, non-2xx status, malformed body) becomes an empty result.
:meth:`EventDiscoveryClient.discover_result` keeps the failure reason for
callers that want to tell "no events" apart from "query failed".
"""

from __future__ import annotations

import logging

from pyeventmap._api.catalog import fetch_events
from pyeventmap._transport import Transport
from pyeventmap.config import EventMapConfig
from pyeventmap.models.discovery import DiscoveryResult
from pyeventmap.models.event import Event
from pyeventmap.models.position import Position

_logger = logging.getLogger(__name__)


class EventDiscoveryClient:
    """Finds plottable events near a position."""

    def __init__(self, config: EventMapConfig, transport: Transport) -> None:
        self._config = config
        self._transport = transport

    async def discover_result(self, position: Position) -> DiscoveryResult:
        """Run one catalog query and return a tagged outcome."""
        try:
            events = await fetch_events(self._config, self._transport, position)
        except Exception as exc:
            _logger.warning("Event discovery near %s failed: %s", position.as_latlong(), exc)
            _logger.debug("Event discovery failure details", exc_info=True)
            return DiscoveryResult.failure(str(exc) or type(exc).__name__)
        return DiscoveryResult.success(events)

    async def discover(self, position: Position) -> list[Event]:
        """Return plottable events near *position*, or ``[]`` on any failure."""
        result = await self.discover_result(position)
        return list(result.events)
