"""logic/entity_factory.py — Table-driven enemy spawning.

``spawn_enemy(world, "brute", x, y)`` looks the archetype up in
``data.enemy_archetypes``, merges its overrides with the tuning
defaults, builds an :class:`EnemyController` with its collaborators,
and (by default) starts it so it is IDLE on return.
"""

from __future__ import annotations
import random
from core.ecs import World
from components import Position, Sprite, EnemyConfig
from logic.ai.enemy import EnemyController
from logic.navigation import NavAgent, flat_ground
from data.enemy_archetypes import ENEMY_ARCHETYPES


def archetype_names() -> list[str]:
    return sorted(ENEMY_ARCHETYPES)


def spawn_enemy(world: World, archetype: str, x: float, y: float, *,
                zone: str = "arena",
                yaw: float = 0.0,
                rng: random.Random | None = None,
                ground_height=flat_ground,
                start: bool = True,
                **config_overrides) -> EnemyController:
    """Create an enemy from *archetype*.

    Extra keyword arguments override ``EnemyConfig`` fields after the
    archetype's own overrides.  Raises ``KeyError`` for an unknown
    archetype and ``ValueError`` for an invalid config.
    """
    desc = ENEMY_ARCHETYPES[archetype]
    overrides = dict(desc.get("config", {}))
    overrides.update(config_overrides)
    config = EnemyConfig.from_tuning(**overrides)

    pos = Position(x, y, ground_height(x, y), zone)
    nav = desc.get("navigation", {})
    agent = NavAgent(pos, speed=nav.get("speed"),
                     stopping_distance=nav.get("stopping_distance"),
                     ground_height=ground_height)
    enemy = EnemyController(world, pos, config=config,
                            name=desc.get("name", archetype.title()),
                            yaw=yaw, agent=agent, rng=rng,
                            ground_height=ground_height)
    sprite = desc.get("sprite", {})
    world.add(enemy.eid, Sprite(char=sprite.get("char", "e"),
                                color=tuple(sprite.get("color", (200, 80, 80))),
                                layer=5))
    if start:
        enemy.start()
    return enemy
