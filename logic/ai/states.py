"""logic/ai/states.py — Enemy behaviour states.

Each state implements three lifecycle hooks:

    enter(enemy)   — once each time the state becomes active
    update(dt)     — every frame while active
    exit()         — when the state is left, normally or forced

State objects are created once per enemy and reused on every entry.
Transitions always go through ``EnemyController.set_state``; a state
never assigns ``current_state`` itself.

``exit()`` must be safe at any point of the state's life: a lethal
hit can force ``DEAD`` in the middle of an attack swing or a hit
reaction, so exits only release what the state holds (clips, the
weapon window, the attacker reference).

    IDLE ──timer──▶ PATROL ──target──▶ TRACE ──in reach──▶ ATTACK
     ▲               │  ▲               │                    │
     └───arrived─────┘  └──target lost──┘  ◀──clip end───────┘
    any ──non-lethal hit──▶ HIT ──reaction finished──▶ IDLE
    any ──lethal hit──▶ DEAD  (terminal)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import TYPE_CHECKING

from core.tuning import get as _tun
from logic.ai.wander import pick_wander_destination

if TYPE_CHECKING:
    from logic.ai.enemy import EnemyController


class EnemyState(Enum):
    NONE   = auto()   # before start(); never entered afterwards
    IDLE   = auto()
    PATROL = auto()
    TRACE  = auto()
    ATTACK = auto()
    HIT    = auto()
    DEAD   = auto()


class InvariantViolation(RuntimeError):
    """The state set is incomplete or was driven into an impossible state."""


# ── State ABC ────────────────────────────────────────────────────────

class BehaviorState(ABC):
    """Abstract base for one enemy behaviour mode."""

    kind: EnemyState = EnemyState.NONE

    def __init__(self):
        self.enemy: EnemyController | None = None

    def enter(self, enemy: EnemyController) -> None:
        """Called once each time the state becomes active."""
        self.enemy = enemy

    @abstractmethod
    def update(self, dt: float) -> None:
        """Called every frame while active."""
        ...

    def exit(self) -> None:
        """Called when the state is left, whatever the reason."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


# ══════════════════════════════════════════════════════════════════════
#  STATES
# ══════════════════════════════════════════════════════════════════════


# ── Idle ─────────────────────────────────────────────────────────────

class IdleState(BehaviorState):
    """Stand still for ``max_patrol_wait_time`` seconds, then patrol."""

    kind = EnemyState.IDLE

    def __init__(self):
        super().__init__()
        self.elapsed = 0.0

    def enter(self, enemy):
        super().enter(enemy)
        self.elapsed = 0.0
        enemy.stop_moving()

    def update(self, dt):
        self.elapsed += dt
        if self.elapsed + 1e-9 >= self.enemy.config.max_patrol_wait_time:
            self.enemy.set_state(EnemyState.PATROL)


# ── Patrol ───────────────────────────────────────────────────────────

class PatrolState(BehaviorState):
    """Walk to a random point near home while listening for targets."""

    kind = EnemyState.PATROL

    def __init__(self):
        super().__init__()
        self.destination = None

    def enter(self, enemy):
        super().enter(enemy)
        self.destination = pick_wander_destination(
            enemy.home, enemy.config.patrol_radius,
            walkable=enemy.agent.walkable, rng=enemy.rng)
        if self.destination is not None:
            enemy.request_move_to(self.destination)
        else:
            enemy.stop_moving()

    def update(self, dt):
        if self.enemy.detect_target() is not None:
            self.enemy.set_state(EnemyState.TRACE)
            return
        if self.enemy.has_arrived():
            self.enemy.set_state(EnemyState.IDLE)


# ── Trace ────────────────────────────────────────────────────────────

class TraceState(BehaviorState):
    """Chase the detected target until it is in reach or lost."""

    kind = EnemyState.TRACE

    def __init__(self):
        super().__init__()
        self.last_known = None

    def enter(self, enemy):
        super().enter(enemy)
        self.last_known = None

    def update(self, dt):
        enemy = self.enemy
        target = enemy.detect_target()
        if target is None:
            enemy.set_state(EnemyState.PATROL)
            return
        pos = enemy.target_position(target)
        if pos is None:
            enemy.set_state(EnemyState.PATROL)
            return
        self.last_known = pos.copy()
        if enemy.position.horizontal_distance(pos) <= enemy.config.max_attack_distance:
            enemy.set_state(EnemyState.ATTACK)
            return
        enemy.request_move_to(self.last_known)


# ── Attack ───────────────────────────────────────────────────────────

class AttackState(BehaviorState):
    """One swing.  The attack clip drives the weapon window and the exit."""

    kind = EnemyState.ATTACK

    def enter(self, enemy):
        super().enter(enemy)
        enemy.stop_moving()
        enemy.face_target()
        enemy.animator.play(
            "attack", _tun("enemy.clips", "attack", 1.2),
            events=[
                (_tun("enemy.clips", "attack_grunt", 0.3), enemy.grunt),
                (_tun("enemy.clips", "attack_hit_begin", 0.35), enemy.attack_begin),
                (_tun("enemy.clips", "attack_hit_end", 0.7), enemy.attack_end),
            ],
            on_finish=enemy.on_attack_finished,
        )

    def update(self, dt):
        self.enemy.face_target()

    def complete(self):
        """Attack clip ended — keep chasing if the target is still there."""
        if self.enemy.detect_target() is not None:
            self.enemy.set_state(EnemyState.TRACE)
        else:
            self.enemy.set_state(EnemyState.IDLE)

    def exit(self):
        self.enemy.animator.stop("attack")
        if self.enemy.weapon.attacking:
            self.enemy.weapon.attack_end()


# ── Hit ──────────────────────────────────────────────────────────────

class HitState(BehaviorState):
    """Hit reaction.  Left only by the animator's reaction-finished callback."""

    kind = EnemyState.HIT

    def __init__(self):
        super().__init__()
        self.attacker = None
        self._next_attacker = None

    def set_attacker(self, attacker) -> None:
        """Remember who hit us for the reaction about to start."""
        self._next_attacker = attacker

    def enter(self, enemy):
        super().enter(enemy)
        self.attacker, self._next_attacker = self._next_attacker, None
        enemy.stop_moving()
        enemy.animator.play("hit", _tun("enemy.clips", "hit", 0.6),
                            on_finish=enemy.on_reaction_finished)

    def update(self, dt):
        pass

    def exit(self):
        self.enemy.animator.stop("hit")
        self.attacker = None


# ── Dead ─────────────────────────────────────────────────────────────

class DeadState(BehaviorState):
    """Terminal.  Death physics are applied by the host after entry."""

    kind = EnemyState.DEAD

    def enter(self, enemy):
        super().enter(enemy)
        enemy.stop_moving()
        enemy.animator.stop()
        enemy.animator.set_trigger("die")

    def update(self, dt):
        pass
