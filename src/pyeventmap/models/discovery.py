"""Discovery outcome and state models."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import Field

from pyeventmap.models._base import EventMapBaseModel
from pyeventmap.models.event import Event


class DiscoveryResult(EventMapBaseModel):
    """Tagged outcome of one discovery query.

    ``ok=True`` with a possibly empty ``events`` tuple means the catalog
    answered; ``ok=False`` means the query failed and ``error`` says why.
    """

    ok: bool
    events: tuple[Event, ...] = ()
    error: str | None = None

    @classmethod
    def success(cls, events: Iterable[Event]) -> DiscoveryResult:
        return cls(ok=True, events=tuple(events))

    @classmethod
    def failure(cls, reason: str) -> DiscoveryResult:
        return cls(ok=False, error=reason)


class DiscoveryState(EventMapBaseModel):
    """Events currently shown plus the in-flight flag.

    ``events`` is replaced wholesale by each successful query and left
    untouched by a failed one, in which case ``error`` is set.
    """

    events: tuple[Event, ...] = Field(default_factory=tuple)
    loading: bool = False
    error: str | None = None
