"""In-memory snapshot store.

This is the only component allowed to replace the published snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from pyeventmap.models.position import AcquisitionState
from pyeventmap.models.snapshot import MapSnapshot

_logger = logging.getLogger(__name__)

SnapshotListener = Callable[[MapSnapshot], None]


class SnapshotStore:
    """Holds the current :class:`MapSnapshot` and notifies listeners.

    Snapshots are immutable; every change publishes a new one.  Listeners
    run synchronously in registration order.  A failing listener is
    logged and skipped so it cannot break the pipeline.
    """

    def __init__(self, initial: MapSnapshot | None = None) -> None:
        self._snapshot = initial or MapSnapshot()
        self._listeners: list[SnapshotListener] = []

    @property
    def current(self) -> MapSnapshot:
        return self._snapshot

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def set_acquisition(self, state: AcquisitionState, **discovery_changes: Any) -> MapSnapshot:
        """Replace the acquisition state.

        Any *discovery_changes* are applied in the same snapshot.
        """
        update: dict[str, Any] = {"acquisition": state}
        if discovery_changes:
            update["discovery"] = self._snapshot.discovery.model_copy(update=discovery_changes)
        return self._publish(self._snapshot.model_copy(update=update))

    def update_discovery(self, **changes: Any) -> MapSnapshot:
        """Replace the given discovery fields, keeping the others."""
        discovery = self._snapshot.discovery.model_copy(update=changes)
        return self._publish(self._snapshot.model_copy(update={"discovery": discovery}))

    def _publish(self, snapshot: MapSnapshot) -> MapSnapshot:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                _logger.debug("Snapshot listener failed", exc_info=True)
        return snapshot
