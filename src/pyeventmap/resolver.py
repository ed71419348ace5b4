"""Fallback-aware position resolution."""

from __future__ import annotations

import asyncio
import logging

from pydantic import ValidationError

from pyeventmap._constants import UNSUPPORTED_REASON
from pyeventmap.config import GeolocationOptions
from pyeventmap.exceptions import GeolocationError, GeolocationUnsupportedError
from pyeventmap.geolocation import GeolocationProvider
from pyeventmap.models.position import AcquisitionState, Position

_logger = logging.getLogger(__name__)


class PositionResolver:
    """Resolve the user's position once, falling back when that fails.

    The resolver is single-shot: the first :meth:`resolve` call asks the
    provider for one reading and every later (or concurrent) call returns
    the same terminal :class:`AcquisitionState`.  Downstream code never
    sees an absent position after resolution; it sees either a genuine
    reading or the fallback with ``degraded=True``.

    Parameters
    ----------
    provider : GeolocationProvider or None
        Host geolocation capability.  ``None`` means the host has none.
    fallback : Position
        Position substituted when acquisition is impossible.
    options : GeolocationOptions
        Hints passed to the provider.  ``timeout_ms`` is also enforced
        here in case the provider ignores it.
    """

    def __init__(
        self,
        provider: GeolocationProvider | None,
        *,
        fallback: Position,
        options: GeolocationOptions | None = None,
    ) -> None:
        self._provider = provider
        self._fallback = fallback
        self._options = options or GeolocationOptions()
        self._state = AcquisitionState.pending()
        self._lock = asyncio.Lock()

    @property
    def state(self) -> AcquisitionState:
        return self._state

    @property
    def fallback(self) -> Position:
        return self._fallback

    async def resolve(self) -> AcquisitionState:
        async with self._lock:
            if not self._state.loading:
                return self._state
            self._state = await self._acquire()
            return self._state

    async def _acquire(self) -> AcquisitionState:
        if self._provider is None:
            return self._use_fallback(UNSUPPORTED_REASON)

        try:
            reading = await asyncio.wait_for(
                self._provider.get_current_position(self._options),
                timeout=self._options.timeout_seconds,
            )
        except GeolocationUnsupportedError:
            return self._use_fallback(UNSUPPORTED_REASON)
        except GeolocationError as exc:
            return self._use_fallback(str(exc) or exc.code.name)
        except TimeoutError:
            return self._use_fallback("Timeout expired")
        except Exception as exc:
            _logger.debug("Geolocation provider failed unexpectedly", exc_info=True)
            return self._use_fallback(str(exc) or type(exc).__name__)

        try:
            position = reading.to_position()
        except ValidationError:
            return self._use_fallback(f"Invalid reading ({reading.latitude}, {reading.longitude})")

        _logger.debug("Resolved position %s (accuracy=%s)", position.as_latlong(), reading.accuracy)
        return AcquisitionState.located(position)

    def _use_fallback(self, reason: str) -> AcquisitionState:
        _logger.warning(
            "Geolocation unavailable (%s); using fallback position %s",
            reason,
            self._fallback.as_latlong(),
        )
        return AcquisitionState.fallback(self._fallback, reason)
