"""Deterministic policy for applying discovery results.

This module intentionally contains *no* I/O.  The orchestrator asks it
whether a settled discovery call may still write to the snapshot.
"""

from __future__ import annotations

from pyeventmap.models.position import Position


def should_apply_discovery(
    *,
    origin_position: Position,
    origin_generation: int,
    active_position: Position | None,
    active_generation: int,
) -> bool:
    """Decide whether a settled discovery call may update the snapshot.

    Policy:
    - Only the latest call (matching generation) may write.
    - Its originating position must still be the active position.
    """
    if origin_generation != active_generation:
        return False
    return active_position is not None and origin_position == active_position
