"""logic/ai/perception.py — Target detection for enemies (the Sensor).

An enemy "hears" anything on its target layers inside a sphere of
``detect_radius`` around it.  The forward sight cone is always
available for debug drawing; it only filters detection when the
enemy's config sets ``sight_cone_gates_detection``.

Ordering is explicit: the nearest candidate wins, equal distances go
to the lower entity id.  The overlap query itself has no meaningful
order.
"""

from __future__ import annotations
import math
from core.ecs import World
from components import Position, Layer


# ── Sight cone ───────────────────────────────────────────────────────

def angle_to(origin, yaw: float, target) -> float:
    """Unsigned angle (°) between heading *yaw* and the direction to *target*.

    Measured in the ground plane.  A target exactly on top of the
    origin is treated as straight ahead (0°).
    """
    dx = target.x - origin.x
    dy = target.y - origin.y
    if abs(dx) < 1e-9 and abs(dy) < 1e-9:
        return 0.0
    to_target = math.atan2(dy, dx)
    face = math.radians(yaw)
    diff = math.atan2(math.sin(to_target - face), math.cos(to_target - face))
    return abs(math.degrees(diff))


def in_sight_cone(origin, yaw: float, target, max_sight_angle: float) -> bool:
    """Return True if *target* lies within ±*max_sight_angle* of *yaw*."""
    return angle_to(origin, yaw, target) <= max_sight_angle + 1e-9


def sight_cone_rays(yaw: float, max_sight_angle: float,
                    length: float) -> list[tuple[float, float]]:
    """Return the (dx, dy) offsets of the right edge, left edge and forward ray."""
    rays = []
    for a in (yaw + max_sight_angle, yaw - max_sight_angle, yaw):
        rad = math.radians(a)
        rays.append((math.cos(rad) * length, math.sin(rad) * length))
    return rays


# ── Detection ────────────────────────────────────────────────────────

def detect_all(world: World, origin: Position, radius: float,
               layer_mask: int, *,
               exclude: int | None = None,
               yaw: float = 0.0,
               max_sight_angle: float = 180.0,
               use_sight_cone: bool = False) -> list[tuple[int, float]]:
    """Return ``[(eid, distance), ...]`` of every qualifying target, nearest first."""
    found: list[tuple[float, int]] = []
    for eid, pos, layer, dsq in world.nearby(
            origin.zone, origin.x, origin.y, origin.z, radius,
            Position, Layer):
        if eid == exclude:
            continue
        if not layer.mask & layer_mask:
            continue
        if use_sight_cone and not in_sight_cone(origin, yaw, pos,
                                                max_sight_angle):
            continue
        found.append((dsq, eid))
    found.sort()
    return [(eid, math.sqrt(dsq)) for dsq, eid in found]


def detect_nearest(world: World, origin: Position, radius: float,
                   layer_mask: int, **kw) -> int | None:
    """Return the entity id of the nearest detected target, or ``None``.

    Keyword arguments are those of :func:`detect_all`.  "Nothing
    detected" is a normal result, not an error.
    """
    hits = detect_all(world, origin, radius, layer_mask, **kw)
    if hits:
        return hits[0][0]
    return None
