"""logic/navigation.py — Minimal navigation agent.

Stands in for a navmesh agent at the interface the enemy AI needs:

    agent.set_destination(point)   → bool
    agent.reset_path()
    agent.has_path / agent.destination / agent.remaining_distance
    agent.has_arrived()
    agent.desired_velocity         → (vx, vy) the agent wants this frame
    agent.next_position            → simulated position, height-locked

The agent never moves the enemy itself (it behaves like an agent with
position updates turned off).  The enemy merges the animation's
horizontal root motion with ``next_position.z`` each frame and writes
the result back, see ``EnemyController.animate``.

Path planning is straight-line; there is no obstacle avoidance.
"""

from __future__ import annotations
import math
from typing import Callable
from components import Position
from core.tuning import get as _tun


def flat_ground(x: float, y: float) -> float:
    return 0.0


class NavAgent:
    def __init__(self, position: Position, *,
                 speed: float | None = None,
                 stopping_distance: float | None = None,
                 ground_height: Callable[[float, float], float] = flat_ground,
                 walkable: Callable[[float, float], bool] | None = None):
        self.enabled = True
        self.speed = speed if speed is not None else _tun("navigation", "speed", 2.0)
        self.stopping_distance = (
            stopping_distance if stopping_distance is not None
            else _tun("navigation", "stopping_distance", 0.2))
        self.ground_height = ground_height
        self.walkable = walkable
        self.next_position = position.copy()
        self.next_position.z = ground_height(position.x, position.y)
        self.destination: Position | None = None
        self.desired_velocity: tuple[float, float] = (0.0, 0.0)

    # ── Path requests ────────────────────────────────────────────────

    def set_destination(self, point) -> bool:
        """Request a path to *point*.  Returns False while disabled."""
        if not self.enabled:
            return False
        if self.walkable is not None and not self.walkable(point.x, point.y):
            return False
        self.destination = Position(point.x, point.y,
                                    self.ground_height(point.x, point.y),
                                    self.next_position.zone)
        return True

    def reset_path(self) -> None:
        self.destination = None
        self.desired_velocity = (0.0, 0.0)

    @property
    def has_path(self) -> bool:
        return self.enabled and self.destination is not None

    @property
    def remaining_distance(self) -> float:
        if self.destination is None:
            return 0.0
        return self.next_position.horizontal_distance(self.destination)

    def has_arrived(self) -> bool:
        """True when there is no path left to follow."""
        if not self.enabled:
            return False
        return (self.destination is None
                or self.remaining_distance <= self.stopping_distance)

    # ── Simulation ───────────────────────────────────────────────────

    def update(self, dt: float) -> None:
        """Recompute the desired velocity toward the destination."""
        if not self.has_path:
            self.desired_velocity = (0.0, 0.0)
            return
        dx = self.destination.x - self.next_position.x
        dy = self.destination.y - self.next_position.y
        d = math.hypot(dx, dy)
        if d <= self.stopping_distance:
            self.desired_velocity = (0.0, 0.0)
            return
        # Don't overshoot within one frame.
        spd = min(self.speed, d / dt) if dt > 0 else self.speed
        self.desired_velocity = (dx / d * spd, dy / d * spd)

    def warp(self, x: float, y: float) -> None:
        """Accept an externally driven horizontal position."""
        self.next_position.x = x
        self.next_position.y = y
        self.next_position.z = self.ground_height(x, y)

    def disable(self) -> None:
        self.reset_path()
        self.enabled = False
