"""logic/combat — Combat subpackage.

Modules
-------
damage       — resolve_hit() damage formula + death_impulse()

Public symbols are re-exported here for ``from logic.combat import X``.
"""

from logic.combat.damage import (                    # noqa: F401
    HitOutcome,
    HitResult,
    resolve_hit,
    death_impulse,
)
