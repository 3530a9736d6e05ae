"""logic/ai/wander.py — Patrol destination picking.

The Patrol state asks for a random point inside the enemy's patrol
envelope and hands it to the navigation agent.  Walkability is the
navigation collaborator's business; it gets a veto through the
*walkable* callback.
"""

from __future__ import annotations
import math
import random
from typing import Callable
from components import Position
from core.tuning import get as _tun


def pick_wander_destination(origin: Position, radius: float, *,
                            walkable: Callable[[float, float], bool] | None = None,
                            rng: random.Random | None = None,
                            ) -> Position | None:
    """Return a random walkable point within *radius* of *origin*.

    The point is at least ``enemy.ai.patrol_min_radius`` away (capped
    at half the radius) so the enemy visibly moves.  Returns ``None``
    when every attempt was rejected.
    """
    rng = rng or random
    attempts = int(_tun("enemy.ai", "patrol_dest_attempts", 8))
    min_r = min(_tun("enemy.ai", "patrol_min_radius", 1.5), radius * 0.5)

    for _ in range(attempts):
        angle = rng.uniform(0, 2 * math.pi)
        r = rng.uniform(min_r, radius)
        tx = origin.x + math.cos(angle) * r
        ty = origin.y + math.sin(angle) * r
        if walkable is None or walkable(tx, ty):
            return Position(tx, ty, origin.z, origin.zone)
    return None
