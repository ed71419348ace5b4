"""High-level async client for nearby event discovery."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import aiohttp

from pyeventmap._transport import HttpTransport
from pyeventmap.config import EventMapConfig
from pyeventmap.discovery import EventDiscoveryClient
from pyeventmap.exceptions import EventMapError
from pyeventmap.geolocation import GeolocationProvider, IpGeolocationProvider
from pyeventmap.map_view import build_map_view
from pyeventmap.models.discovery import DiscoveryResult
from pyeventmap.models.event import Event
from pyeventmap.models.map_view import MapView
from pyeventmap.models.position import AcquisitionState, Position
from pyeventmap.models.snapshot import MapSnapshot
from pyeventmap.orchestrator import EventMapOrchestrator
from pyeventmap.resolver import PositionResolver
from pyeventmap.state.store import SnapshotListener

_logger = logging.getLogger(__name__)


class EventMapClient:
    """Async client that locates the user and finds events nearby.

    Usage::

        config = EventMapConfig.from_env()
        async with EventMapClient(config) as client:
            snapshot = await client.run()
            view = client.map_view()

    Parameters
    ----------
    config : EventMapConfig
        Client configuration.
    geolocation : GeolocationProvider or None
        Host geolocation capability.  When omitted, an IP lookup against
        ``config.geolocation_url`` is used; if that is ``None`` too, the
        host is treated as having no capability and the fallback position
        is used.
    session : aiohttp.ClientSession or None
        Session to borrow.  When omitted, the client owns one for the
        duration of the ``async with`` block.
    on_snapshot : callable or None
        Listener registered before the pipeline starts.
    """

    def __init__(
        self,
        config: EventMapConfig,
        *,
        geolocation: GeolocationProvider | None = None,
        session: aiohttp.ClientSession | None = None,
        on_snapshot: SnapshotListener | None = None,
    ) -> None:
        self._config = config
        self._geolocation = geolocation
        self._external_session = session is not None
        self._http_session = session
        self._on_snapshot = on_snapshot
        self._transport: HttpTransport | None = None
        self._discovery: EventDiscoveryClient | None = None
        self._orchestrator: EventMapOrchestrator | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> EventMapClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._http_session, request_timeout=self._config.request_timeout)
        self._discovery = EventDiscoveryClient(self._config, self._transport)
        resolver = PositionResolver(
            self._resolve_provider(self._http_session),
            fallback=self._config.fallback_position,
            options=self._config.geolocation,
        )
        self._orchestrator = EventMapOrchestrator(resolver, self._discovery)
        if self._on_snapshot is not None:
            self._orchestrator.subscribe(self._on_snapshot)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None
        self._discovery = None
        self._orchestrator = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _resolve_provider(self, http_session: aiohttp.ClientSession) -> GeolocationProvider | None:
        if self._geolocation is not None:
            return self._geolocation
        if self._config.geolocation_url:
            return IpGeolocationProvider(http_session, self._config.geolocation_url)
        _logger.debug("No geolocation provider configured")
        return None

    def _require_orchestrator(self) -> EventMapOrchestrator:
        if self._orchestrator is None:
            raise EventMapError("Client not initialized. Use 'async with EventMapClient(...) as client:'")
        return self._orchestrator

    def _require_discovery(self) -> EventDiscoveryClient:
        if self._discovery is None:
            raise EventMapError("Client not initialized. Use 'async with EventMapClient(...) as client:'")
        return self._discovery

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> MapSnapshot:
        return self._require_orchestrator().snapshot

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a snapshot listener; returns an unsubscribe callable."""
        return self._require_orchestrator().subscribe(listener)

    async def run(self) -> MapSnapshot:
        """Resolve the position and discover events around it."""
        return await self._require_orchestrator().start()

    async def resolve_position(self) -> AcquisitionState:
        """Resolve (once) and return the acquisition state without discovering."""
        return await self._require_orchestrator().resolver.resolve()

    async def update_position(
        self,
        position: Position,
        *,
        degraded: bool = False,
        failure_reason: str | None = None,
    ) -> MapSnapshot:
        """Move the pipeline to a new position and re-discover."""
        return await self._require_orchestrator().update_position(
            position,
            degraded=degraded,
            failure_reason=failure_reason,
        )

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    async def discover(self, position: Position) -> list[Event]:
        """Events near *position*; ``[]`` on any failure."""
        return await self._require_discovery().discover(position)

    async def discover_result(self, position: Position) -> DiscoveryResult:
        """Events near *position* as a tagged success/failure outcome."""
        return await self._require_discovery().discover_result(position)

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def map_view(self, *, zoom: int | None = None) -> MapView | None:
        """Map description for the current snapshot, or ``None`` while locating."""
        effective_zoom = zoom if zoom is not None else self._config.map_zoom
        return build_map_view(self.snapshot, zoom=effective_zoom)
