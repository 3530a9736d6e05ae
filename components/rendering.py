"""components.rendering — Visual identity and display."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Identity:
    name: str = "unnamed"
    kind: str = "enemy"        # "enemy", "player", "dummy"


@dataclass
class Sprite:
    char: str = "?"            # single character for debug rendering
    color: tuple = (255, 255, 255)
    layer: int = 0             # draw order


@dataclass
class DissolveMaterial:
    """Alpha-cutoff material driven by the death dissolve.

    ``cutoff`` runs 0 → 1; at 1 the body is fully dissolved.
    Advanced explicitly by elapsed time, never by a coroutine.
    """
    cutoff: float = 0.0
    active: bool = False

    def advance(self, dt: float, speed: float = 1.0) -> bool:
        """Step the effect.  Returns True on the frame it completes."""
        if not self.active or self.cutoff >= 1.0:
            return False
        self.cutoff = min(1.0, self.cutoff + dt * speed)
        return self.cutoff >= 1.0
