"""components.combat — Fighting stats and hit receivers."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CombatStats:
    """Attack / defense pair.  Fixed once the entity spawns."""
    attack_power: int = 10
    defense_power: int = 5


@dataclass
class Damageable:
    """Marks an entity that weapons can hit.

    ``receiver`` is the object that handles the hit; it must provide
    ``take_hit(attacker, direction)``.  Enemies register themselves,
    the sandbox player avatar and training dummies do the same.
    """
    receiver: Any = None
