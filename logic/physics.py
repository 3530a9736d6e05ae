"""logic/physics.py — Rigid bodies, colliders and ragdoll parts.

Just enough physics for an enemy's death:

* While alive the main body is **kinematic** — animation and
  navigation drive the position, physics only reports contacts.
* On a lethal hit the body turns dynamic (gravity on, constraints
  released) and receives one impulse.  ``step_body`` integrates it
  with explicit Euler and reports the frame it touches the ground.
* On ground impact the ragdoll parts take over from the main body.

Integration is explicit Euler with no collision response beyond the ground.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable
from core.constants import GRAVITY
from core.tuning import get as _tun


@dataclass
class RigidBody:
    vx: float = 0.0            # m/s
    vy: float = 0.0
    vz: float = 0.0
    mass: float = 1.0          # kg
    is_kinematic: bool = True
    use_gravity: bool = False
    constraints: str = "freeze_rotation"   # or "none"
    detect_collisions: bool = True
    grounded: bool = True

    def add_impulse(self, fx: float, fy: float, fz: float) -> None:
        """Apply an instantaneous impulse.  Ignored while kinematic."""
        if self.is_kinematic:
            return
        self.vx += fx / self.mass
        self.vy += fy / self.mass
        self.vz += fz / self.mass

    @property
    def speed(self) -> float:
        return (self.vx ** 2 + self.vy ** 2 + self.vz ** 2) ** 0.5


@dataclass
class BodyCollider:
    enabled: bool = True
    is_trigger: bool = True


@dataclass
class RagdollPart:
    """One limb of the ragdoll: a collider plus its rigid body."""
    name: str
    collider: BodyCollider = field(default_factory=lambda: BodyCollider(is_trigger=False))
    body: RigidBody = field(default_factory=RigidBody)


def default_ragdoll() -> list[RagdollPart]:
    return [RagdollPart(name) for name in
            ("hips", "spine", "head", "arm_l", "arm_r", "leg_l", "leg_r")]


def set_ragdoll_parts(parts: list[RagdollPart], enabled: bool) -> None:
    """Switch every limb between simulated (*enabled*) and kinematic."""
    for part in parts:
        part.collider.enabled = enabled
        part.body.detect_collisions = enabled
        part.body.is_kinematic = not enabled


def step_body(body: RigidBody, position, dt: float,
              ground_height: Callable[[float, float], float]) -> bool:
    """Integrate a dynamic *body* at *position* for *dt* seconds.

    Returns True on the frame the body lands on the ground (a
    collision *enter*, not every frame it rests there).
    """
    if body.is_kinematic:
        return False
    if body.use_gravity:
        body.vz -= _tun("physics", "gravity", GRAVITY) * dt
    position.x += body.vx * dt
    position.y += body.vy * dt
    position.z += body.vz * dt

    ground = ground_height(position.x, position.y)
    if position.z > ground:
        body.grounded = False
        return False

    position.z = ground
    if body.vz < 0:
        body.vz = 0.0
    # Ground friction
    body.vx *= 0.5
    body.vy *= 0.5
    landed = not body.grounded
    body.grounded = True
    return landed and body.detect_collisions
