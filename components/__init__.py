"""components — ECS component dataclasses, organised by domain.

Submodules
----------
spatial        Position, Facing, Layer
rendering      Identity, Sprite, DissolveMaterial
rpg            Health
combat         CombatStats, Damageable
ai             EnemyConfig
resources      GameClock
dev_log        DevLog

All public names are re-exported here so code can do
``from components import Position``.
"""

# ── Spatial ──────────────────────────────────────────────────────────
from components.spatial import Position, Facing, Layer

# ── Rendering ────────────────────────────────────────────────────────
from components.rendering import Identity, Sprite, DissolveMaterial

# ── RPG ──────────────────────────────────────────────────────────────
from components.rpg import Health

# ── Combat ───────────────────────────────────────────────────────────
from components.combat import CombatStats, Damageable

# ── AI ───────────────────────────────────────────────────────────────
from components.ai import EnemyConfig

# ── World resources / singletons ─────────────────────────────────────
from components.resources import GameClock
from components.dev_log import DevLog

__all__ = [
    # spatial
    "Position", "Facing", "Layer",
    # rendering
    "Identity", "Sprite", "DissolveMaterial",
    # rpg
    "Health",
    # combat
    "CombatStats", "Damageable",
    # ai
    "EnemyConfig",
    # resources
    "GameClock", "DevLog",
]
