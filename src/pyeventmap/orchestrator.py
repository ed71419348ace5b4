"""Reactive controller tying position resolution to event discovery."""

from __future__ import annotations

import logging
from collections.abc import Callable

from pyeventmap.discovery import EventDiscoveryClient
from pyeventmap.models.position import AcquisitionState, Position
from pyeventmap.models.snapshot import MapSnapshot
from pyeventmap.resolver import PositionResolver
from pyeventmap.state.policy import should_apply_discovery
from pyeventmap.state.store import SnapshotListener, SnapshotStore

_logger = logging.getLogger(__name__)


class EventMapOrchestrator:
    """Drive the resolve -> discover pipeline and publish snapshots.

    A new position is the only thing that triggers discovery, and each
    distinct position triggers it exactly once.  Every discovery call is
    tagged with a generation number and its originating position; a
    result is applied only if both still match when it arrives, so a
    slow response for a superseded position is discarded.

    Usage::

        orchestrator = EventMapOrchestrator(resolver, discovery)
        orchestrator.subscribe(render)
        await orchestrator.start()
    """

    def __init__(
        self,
        resolver: PositionResolver,
        discovery: EventDiscoveryClient,
        *,
        store: SnapshotStore | None = None,
    ) -> None:
        self._resolver = resolver
        self._discovery = discovery
        self._store = store or SnapshotStore()
        self._generation = 0
        self._active_position: Position | None = None

    @property
    def snapshot(self) -> MapSnapshot:
        return self._store.current

    @property
    def resolver(self) -> PositionResolver:
        return self._resolver

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        return self._store.subscribe(listener)

    async def start(self) -> MapSnapshot:
        """Resolve the position once, then discover events around it.

        Returns the snapshot after discovery for that position settles.
        """
        state = await self._resolver.resolve()
        if state.position is None:
            self._store.set_acquisition(state)
        else:
            await self._discover(state.position, state)
        return self.snapshot

    async def update_position(
        self,
        position: Position,
        *,
        degraded: bool = False,
        failure_reason: str | None = None,
    ) -> MapSnapshot:
        """Feed a newly resolved position into the pipeline.

        For resolvers that can re-resolve.  Submitting the position that
        is already active updates the acquisition state only.
        """
        if degraded:
            acquisition = AcquisitionState.fallback(position, failure_reason or "degraded")
        else:
            acquisition = AcquisitionState.located(position)
        await self._discover(position, acquisition)
        return self.snapshot

    async def _discover(self, position: Position, acquisition: AcquisitionState) -> None:
        if position == self._active_position:
            _logger.debug("Position %s already active; not re-querying", position.as_latlong())
            self._store.set_acquisition(acquisition)
            return

        self._generation += 1
        generation = self._generation
        self._active_position = position
        self._store.set_acquisition(acquisition, loading=True)

        result = await self._discovery.discover_result(position)

        if not should_apply_discovery(
            origin_position=position,
            origin_generation=generation,
            active_position=self._active_position,
            active_generation=self._generation,
        ):
            _logger.debug(
                "Discarding stale discovery result for %s (generation %d, current %d)",
                position.as_latlong(),
                generation,
                self._generation,
            )
            return

        if result.ok:
            self._store.update_discovery(events=result.events, loading=False, error=None)
        else:
            # Keep whatever events are already on the map.
            self._store.update_discovery(loading=False, error=result.error)
