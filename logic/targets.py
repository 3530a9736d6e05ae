"""logic/targets.py — Things enemies can detect and hit.

``TrainingDummy`` stands still and records every hit; tests use it as
the detection target and as the receiver of enemy weapon hits.
``PlayerAvatar`` adds keyboard movement and a melee strike for the
arena sandbox.
"""

from __future__ import annotations
import math
from typing import Any
from core.ecs import World
from core.constants import LAYER_PLAYER, LAYER_ENEMY
from core.tuning import get as _tun
from components import Position, Facing, Layer, Identity, Health, Damageable
from logic.ai.perception import detect_all


class TrainingDummy:
    def __init__(self, world: World, position: Position, *,
                 name: str = "Dummy",
                 attack_power: int = 30,
                 hp: int = 100,
                 layer: int = LAYER_PLAYER):
        self.world = world
        self.name = name
        self.attack_power = attack_power
        self.position = position
        self.facing = Facing()
        self.health = Health(hp, hp)
        self.hits: list[tuple[Any, tuple[float, float] | None]] = []
        self.eid = world.spawn()
        world.add(self.eid, position)
        world.zone_add(self.eid, position.zone)
        world.add(self.eid, self.facing)
        world.add(self.eid, Layer(layer))
        world.add(self.eid, Identity(name=name, kind="dummy"))
        world.add(self.eid, self.health)
        world.add(self.eid, Damageable(self))

    def take_hit(self, attacker: Any, direction=None) -> None:
        self.hits.append((attacker, direction))
        self.health.current -= getattr(attacker, "attack_power", 0)

    def move_to(self, x: float, y: float) -> None:
        self.position.x = x
        self.position.y = y

    def remove(self) -> None:
        self.world.kill(self.eid)


class PlayerAvatar(TrainingDummy):
    """Keyboard-driven target with a forward melee strike."""

    def __init__(self, world: World, position: Position, *,
                 name: str = "Player", speed: float = 4.0, **kw):
        super().__init__(world, position, name=name, **kw)
        self.speed = speed
        world.get(self.eid, Identity).kind = "player"

    def walk(self, dx: float, dy: float, dt: float) -> None:
        length = math.hypot(dx, dy)
        if length < 1e-6:
            return
        dx /= length
        dy /= length
        self.position.x += dx * self.speed * dt
        self.position.y += dy * self.speed * dt
        self.facing.yaw = math.degrees(math.atan2(dy, dx))

    def strike(self) -> int:
        """Hit every enemy in front within weapon reach.  Returns hit count."""
        reach = _tun("weapon", "reach", 0.6)
        fx, fy = self.facing.forward()
        p = self.position
        tip = Position(p.x + fx * reach, p.y + fy * reach, p.z, p.zone)
        hits = 0
        for eid, _d in detect_all(self.world, tip, _tun("weapon", "radius", 0.6),
                                  LAYER_ENEMY, exclude=self.eid):
            hittable = self.world.get(eid, Damageable)
            if hittable is not None and hittable.receiver is not None:
                hittable.receiver.take_hit(self, (fx, fy))
                hits += 1
        return hits
