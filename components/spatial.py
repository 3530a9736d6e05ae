"""components.spatial — Position, heading, and collision layers.

All coordinates are in metres; ``z`` is up.
"""

from __future__ import annotations
import math
from dataclasses import dataclass


@dataclass
class Position:
    x: float = 0.0        # m
    y: float = 0.0        # m
    z: float = 0.0        # m  (height)
    zone: str = "arena"

    def copy(self) -> Position:
        return Position(self.x, self.y, self.z, self.zone)

    def horizontal_distance(self, other) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)


@dataclass
class Facing:
    """Heading in the ground plane.

    ``yaw`` is in degrees, 0 = +x, 90 = +y.
    Used by the sight cone, the weapon swing and the gizmos.
    """
    yaw: float = 0.0      # °

    def forward(self) -> tuple[float, float]:
        rad = math.radians(self.yaw)
        return math.cos(rad), math.sin(rad)

    def face_toward(self, origin, target) -> None:
        dx = target.x - origin.x
        dy = target.y - origin.y
        if abs(dx) > 1e-6 or abs(dy) > 1e-6:
            self.yaw = math.degrees(math.atan2(dy, dx))


@dataclass
class Layer:
    """Collision-layer membership bit mask (see ``core.constants``)."""
    mask: int = 1
