"""ui/hp_bar.py — Floating health bar shown above an enemy.

The AI core only pushes a normalised fraction and hides the bar on
death; drawing is pygame and happens in the sandbox scene.
"""

from __future__ import annotations
import pygame


class HealthBar:
    def __init__(self, width: int = 30, height: int = 4):
        self.width = width
        self.height = height
        self.fraction = 1.0
        self.visible = True
        self.updates = 0

    def set_hp(self, fraction: float) -> None:
        """Set the filled fraction, clamped to [0, 1]."""
        self.fraction = min(1.0, max(0.0, fraction))
        self.updates += 1

    def hide(self) -> None:
        self.visible = False

    def show(self) -> None:
        self.visible = True

    def draw(self, surface: pygame.Surface, cx: int, top: int) -> None:
        """Draw centred on *cx* with its top edge at *top*."""
        if not self.visible:
            return
        x = cx - self.width // 2
        pygame.draw.rect(surface, (40, 10, 10), (x, top, self.width, self.height))
        fill = int(self.width * self.fraction)
        if fill > 0:
            color = (80, 200, 80) if self.fraction > 0.3 else (220, 80, 40)
            pygame.draw.rect(surface, color, (x, top, fill, self.height))
        pygame.draw.rect(surface, (0, 0, 0), (x, top, self.width, self.height), 1)
