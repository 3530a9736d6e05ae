"""core/constants.py — Shared constants used across the codebase.

Centralises magic numbers so there's exactly one place to change them.

Unit System
-----------
All gameplay distances are in **metres**.  The ground plane is x/y and
``z`` points up, so "vertical" always means the z component.

    Distance / position     m       (metres)
    Speed                   m/s     (metres per second)
    Time                    s       (seconds, explicit ``dt`` per tick)
    Health                  HP      (hit points, integers)
    Angles                  °       (degrees; yaw 0 = +x, 90 = +y)
    Impulse                 N·s     (unit mass bodies → m/s)

Rendering converts to pixels via ``PIXELS_PER_METRE``.
No gameplay code should reference pixels — only the renderer.

Detection Range Hierarchy (small → large):
    0.5 m   Attack reach (``max_attack_distance``)
    1.2 m   Weapon swing (0.6 m reach + 0.6 m overlap)
     8 m   Patrol wander radius
    10 m   Detection circle ("hears" the player)
"""

# ── Collision layers (bit masks) ────────────────────────────────────
LAYER_DEFAULT = 1 << 0
LAYER_PLAYER  = 1 << 1
LAYER_ENEMY   = 1 << 2

# ── Physics ─────────────────────────────────────────────────────────
GRAVITY: float = 9.81            # m/s²
GROUND_TAG = "ground"

# ── Render ──────────────────────────────────────────────────────────
PIXELS_PER_METRE = 32
ARENA_BG = (32, 34, 30)
