"""components.resources — World-level singletons (not per-entity)."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class GameClock:
    """Monotonic game time — accumulated ``dt`` since session start.

    Advanced once per frame by ``logic.tick.tick_systems`` and used as
    the timestamp for DevLog entries.
    """
    time: float = 0.0
    frame: int = 0
