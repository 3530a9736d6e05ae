"""data/enemy_archetypes.py — Named enemy variants.

Each archetype overrides a handful of ``EnemyConfig`` fields on top of
the ``[enemy]`` / ``[enemy.ai]`` tuning defaults, plus the navigation
speed and the debug sprite.  ``logic.entity_factory.spawn_enemy``
consumes these tables.
"""

ENEMY_ARCHETYPES = {
    "grunt": {
        "name": "Grunt",
        "config": {},
        "navigation": {},
        "sprite": {"char": "g", "color": (200, 80, 80)},
    },
    "brute": {
        "name": "Brute",
        "config": {
            "max_health": 160,
            "attack_power": 18,
            "defense_power": 8,
            "max_attack_distance": 0.7,
            "max_patrol_wait_time": 5.0,
        },
        "navigation": {"speed": 1.4},
        "sprite": {"char": "B", "color": (160, 60, 40)},
    },
    "scout": {
        "name": "Scout",
        "config": {
            "max_health": 60,
            "detect_radius": 14.0,
            "max_sight_angle": 45.0,
            "sight_cone_gates_detection": True,
            "max_patrol_wait_time": 1.5,
            "patrol_radius": 12.0,
        },
        "navigation": {"speed": 3.0},
        "sprite": {"char": "s", "color": (220, 160, 60)},
    },
}
