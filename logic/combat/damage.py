"""logic/combat/damage.py — Damage resolution and the death impulse.

``resolve_hit()`` is the single damage formula.  It is pure: it does
not touch any entity, it only decides how much health remains and
whether the hit kills.  ``EnemyController.apply_damage`` applies the
result and performs the side effects (hit reaction or forced death).

Policy notes:
  - Damage is ``attack - defense`` with no floor.  A weak attacker
    can deal zero or negative damage; the hit still counts as a
    non-lethal hit and plays the reaction.
  - Lethal means remaining health ``<= 0``.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum, auto

from core.tuning import get as _tun


class HitOutcome(Enum):
    NON_LETHAL = auto()
    LETHAL     = auto()


@dataclass(frozen=True)
class HitResult:
    remaining_health: int
    damage: int
    outcome: HitOutcome

    @property
    def lethal(self) -> bool:
        return self.outcome is HitOutcome.LETHAL


def resolve_hit(attack_power: int, defense_power: int,
                current_health: int, max_health: int) -> HitResult:
    """Compute the outcome of one hit.

    >>> resolve_hit(30, 5, 100, 100)
    HitResult(remaining_health=75, damage=25, outcome=<HitOutcome.NON_LETHAL: 1>)
    """
    damage = attack_power - defense_power
    remaining = current_health - damage
    outcome = HitOutcome.LETHAL if remaining <= 0 else HitOutcome.NON_LETHAL
    return HitResult(remaining_health=remaining, damage=damage,
                     outcome=outcome)


def death_impulse(defender_pos, attacker_pos, *,
                  lift: float | None = None,
                  force: float | None = None) -> tuple[float, float, float]:
    """Return the one-time impulse that throws a killed body.

    Direction is attacker → defender in the ground plane with the
    vertical component replaced by *lift*, normalised, then scaled by
    *force*.  Defaults come from ``[enemy.death]``.
    """
    if lift is None:
        lift = _tun("enemy.death", "impulse_lift", 1.0)
    if force is None:
        force = _tun("enemy.death", "impulse_force", 20.0)
    dx = defender_pos.x - attacker_pos.x
    dy = defender_pos.y - attacker_pos.y
    dz = lift
    mag = math.sqrt(dx * dx + dy * dy + dz * dz)
    if mag < 1e-9:
        return 0.0, 0.0, 0.0
    return dx / mag * force, dy / mag * force, dz / mag * force
