"""components.rpg — Health."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Health:
    current: int = 100         # HP
    maximum: int = 100         # HP

    @property
    def fraction(self) -> float:
        """``current / maximum`` clamped to [0, 1] for display."""
        if self.maximum <= 0:
            return 0.0
        return min(1.0, max(0.0, self.current / self.maximum))
