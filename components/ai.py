"""components.ai — Enemy behaviour configuration."""

from __future__ import annotations
from dataclasses import dataclass, fields, replace

from core.constants import LAYER_PLAYER
from core.tuning import get as _tun


@dataclass(frozen=True)
class EnemyConfig:
    """Tunable enemy parameters.  Immutable once the enemy spawns.

    ``detect_radius``       — hearing circle for the Sensor (m).
    ``target_layer_mask``   — which ``Layer`` bits count as targets.
    ``max_sight_angle``     — half-angle of the forward cone (°, 0–180).
    ``sight_cone_gates_detection`` — when False the cone is drawn by the
                              gizmos only and detection is radius-only.
    ``max_patrol_wait_time``— seconds spent idle before patrolling (s).
    ``max_attack_distance`` — trace → attack switch distance (m).
    ``patrol_radius``       — wander envelope around the spawn point (m).
    """
    max_health: int = 100
    attack_power: int = 10
    defense_power: int = 5
    detect_radius: float = 10.0
    target_layer_mask: int = LAYER_PLAYER
    max_sight_angle: float = 30.0
    sight_cone_gates_detection: bool = False
    max_patrol_wait_time: float = 3.0
    max_attack_distance: float = 0.5
    patrol_radius: float = 8.0

    def __post_init__(self):
        if self.max_health <= 0:
            raise ValueError(f"max_health must be > 0, got {self.max_health}")
        if self.detect_radius <= 0:
            raise ValueError(f"detect_radius must be > 0, got {self.detect_radius}")
        if not 0.0 <= self.max_sight_angle <= 180.0:
            raise ValueError(
                f"max_sight_angle must be in [0, 180], got {self.max_sight_angle}")
        if self.max_patrol_wait_time < 0:
            raise ValueError(
                f"max_patrol_wait_time must be >= 0, got {self.max_patrol_wait_time}")
        if self.max_attack_distance <= 0:
            raise ValueError(
                f"max_attack_distance must be > 0, got {self.max_attack_distance}")
        if self.patrol_radius <= 0:
            raise ValueError(f"patrol_radius must be > 0, got {self.patrol_radius}")

    @classmethod
    def from_tuning(cls, **overrides) -> EnemyConfig:
        """Build a config from ``[enemy]`` / ``[enemy.ai]`` plus *overrides*."""
        base = cls(
            max_health=int(_tun("enemy", "max_health", 100)),
            attack_power=int(_tun("enemy", "attack_power", 10)),
            defense_power=int(_tun("enemy", "defense_power", 5)),
            detect_radius=float(_tun("enemy.ai", "detect_radius", 10.0)),
            max_sight_angle=float(_tun("enemy.ai", "max_sight_angle", 30.0)),
            sight_cone_gates_detection=bool(
                _tun("enemy.ai", "sight_cone_gates_detection", False)),
            max_patrol_wait_time=float(
                _tun("enemy.ai", "max_patrol_wait_time", 3.0)),
            max_attack_distance=float(
                _tun("enemy.ai", "max_attack_distance", 0.5)),
            patrol_radius=float(_tun("enemy.ai", "patrol_radius", 8.0)),
        )
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"unknown EnemyConfig fields: {sorted(unknown)}")
        return replace(base, **overrides)
