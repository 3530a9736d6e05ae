"""scenes/gizmos.py — Editor-style debug overlays for enemies.

Three overlays per enemy, all drawn with plain ``pygame.draw`` so they
work on any Surface (including an off-screen one in tests):

    yellow circle   detection radius
    red rays        sight cone (right edge, left edge, forward)
    green marker    current navigation destination, with a guide line
"""

from __future__ import annotations
import math
from typing import Callable
import pygame

from core.constants import PIXELS_PER_METRE
from components import Position
from logic.ai.perception import sight_cone_rays

DETECT_COLOR = (255, 220, 0)
SIGHT_COLOR = (255, 40, 40)
DEST_COLOR = (40, 220, 60)


def world_to_screen(pos: Position, camera: tuple[float, float] = (0.0, 0.0),
                    scale: int = PIXELS_PER_METRE) -> tuple[int, int]:
    """Top-down projection: world x/y in metres → surface pixels."""
    return (int((pos.x - camera[0]) * scale),
            int((pos.y - camera[1]) * scale))


def draw_circle_alpha(surface: pygame.Surface, color: tuple,
                      cx: int, cy: int, radius: int):
    """Filled translucent circle; *color* carries the alpha as 4th value."""
    if radius <= 0:
        return
    s = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
    pygame.draw.circle(s, color, (radius, radius), radius)
    surface.blit(s, (cx - radius, cy - radius))


def draw_enemy_gizmos(surface: pygame.Surface, enemy,
                      to_screen: Callable[[Position], tuple[int, int]],
                      scale: int = PIXELS_PER_METRE) -> None:
    cfg = enemy.config
    cx, cy = to_screen(enemy.position)

    radius = int(cfg.detect_radius * scale)
    if radius > 0:
        pygame.draw.circle(surface, DETECT_COLOR, (cx, cy), radius, 1)

    for dx, dy in sight_cone_rays(enemy.facing.yaw, cfg.max_sight_angle,
                                  cfg.detect_radius):
        end = (cx + int(round(dx * scale)), cy + int(round(dy * scale)))
        pygame.draw.line(surface, SIGHT_COLOR, (cx, cy), end, 1)

    agent = enemy.agent
    if agent.has_path:
        dx, dy = to_screen(agent.destination)
        pygame.draw.line(surface, DEST_COLOR, (cx, cy), (dx, dy), 1)
        pygame.draw.circle(surface, DEST_COLOR, (dx, dy),
                           max(2, int(0.25 * scale)))


def draw_facing_tick(surface: pygame.Surface, color: tuple,
                     cx: int, cy: int, yaw: float, length: int) -> None:
    """Short line from the entity centre along its facing."""
    rad = math.radians(yaw)
    pygame.draw.line(surface, color, (cx, cy),
                     (cx + int(math.cos(rad) * length),
                      cy + int(math.sin(rad) * length)), 2)
