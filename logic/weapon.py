"""logic/weapon.py — Melee weapon with a hit notification channel.

The weapon is the *source* side of a :class:`NotificationChannel`.
Its holder subscribes to it; whenever the swing overlaps a target the
weapon publishes that target's entity id::

    weapon = WeaponController(eid, pos, facing, LAYER_PLAYER)
    weapon.subscribe(enemy)         # enemy.on_next(target_eid) on hit
    weapon.attack_start()           # animation event opens the window
    weapon.check_hits(world)        # once per frame
    weapon.attack_end()             # animation event closes it
    weapon.destroy()                # enemy.on_completed()

A target is reported at most once per swing.
"""

from __future__ import annotations
from core.ecs import World
from core.events import NotificationChannel, Subscription
from components import Position, Facing
from logic.ai.perception import detect_all
from core.tuning import get as _tun


class WeaponController:
    def __init__(self, owner_eid: int, position: Position, facing: Facing,
                 target_layer_mask: int, *,
                 reach: float | None = None,
                 radius: float | None = None):
        self.owner_eid = owner_eid
        self.position = position
        self.facing = facing
        self.target_layer_mask = target_layer_mask
        self.reach = reach if reach is not None else _tun("weapon", "reach", 0.6)
        self.radius = radius if radius is not None else _tun("weapon", "radius", 0.6)
        self.channel = NotificationChannel(f"weapon:{owner_eid}")
        self.attacking = False
        self.swings = 0
        self._hit_this_swing: set[int] = set()

    # ── Observers ────────────────────────────────────────────────────

    def subscribe(self, observer) -> Subscription:
        return self.channel.subscribe(observer)

    def unsubscribe(self, observer) -> None:
        self.channel.unsubscribe(observer)

    # ── Swing window ─────────────────────────────────────────────────

    def attack_start(self) -> None:
        self.attacking = True
        self.swings += 1
        self._hit_this_swing.clear()

    def attack_end(self) -> None:
        self.attacking = False

    def tip(self) -> Position:
        fx, fy = self.facing.forward()
        p = self.position
        return Position(p.x + fx * self.reach, p.y + fy * self.reach,
                        p.z, p.zone)

    def check_hits(self, world: World) -> int:
        """Publish every newly overlapped target.  Returns how many."""
        if not self.attacking or self.channel.closed:
            return 0
        new = 0
        for eid, _dist in detect_all(world, self.tip(), self.radius,
                                     self.target_layer_mask,
                                     exclude=self.owner_eid):
            if eid in self._hit_this_swing:
                continue
            self._hit_this_swing.add(eid)
            self.channel.publish(eid)
            new += 1
        return new

    def destroy(self) -> None:
        """Tear the weapon down; observers receive ``on_completed``."""
        self.attacking = False
        self.channel.complete()
