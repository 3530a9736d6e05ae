"""logic/ai/enemy.py — Enemy controller (behaviour state machine host).

One ``EnemyController`` per enemy.  It owns the enemy's vitals and
combat stats, the six behaviour-state objects, and the single active
state slot.  Collaborators (navigation, animation, weapon, physics
body, health bar) are plain objects handed in or defaulted.

Frame order, driven by ``logic.tick.tick_systems``::

    enemy.tick(dt)              # active state's update
    enemy.animate(dt)           # nav velocity → root motion → position
    enemy.weapon.check_hits()   # swing overlap → channel → on_next
    enemy.simulate_physics(dt)  # death body, ground impact, dissolve

Damage can arrive at any point of a frame through ``apply_damage`` /
``take_hit``; a lethal hit switches to ``DEAD`` immediately.
"""

from __future__ import annotations
import math
import random
from typing import Any

from core.ecs import World
from core.events import (
    EventBus, StateChanged, EnemyDied, EnemyDissolved, EnemyCue,
)
from core.constants import LAYER_ENEMY, GROUND_TAG
from core.tuning import get as _tun
from components import (
    Position, Facing, Layer, Identity, Health, CombatStats, Damageable,
    EnemyConfig, DissolveMaterial, GameClock, DevLog,
)
from logic.ai.perception import detect_nearest
from logic.ai.states import (
    EnemyState, InvariantViolation, BehaviorState,
    IdleState, PatrolState, TraceState, AttackState, HitState, DeadState,
)
from logic.animation import Animator
from logic.combat.damage import HitResult, resolve_hit, death_impulse
from logic.navigation import NavAgent, flat_ground
from logic.physics import (
    RigidBody, BodyCollider, default_ragdoll, set_ragdoll_parts, step_body,
)
from logic.weapon import WeaponController
from ui.hp_bar import HealthBar


class EnemyController:
    def __init__(self, world: World, position: Position, *,
                 config: EnemyConfig | None = None,
                 name: str = "Enemy",
                 yaw: float = 0.0,
                 agent: NavAgent | None = None,
                 animator: Animator | None = None,
                 weapon: WeaponController | None = None,
                 hp_bar: HealthBar | None = None,
                 rng: random.Random | None = None,
                 ground_height=flat_ground):
        self.world = world
        self.config = config or EnemyConfig.from_tuning()
        self.name = name
        self.eid = world.spawn()

        # -- Character record --
        self.position = position
        self.home = position.copy()
        self.facing = Facing(yaw)
        self.stats = CombatStats(self.config.attack_power,
                                 self.config.defense_power)
        self.health = Health(self.config.max_health, self.config.max_health)
        self.rng = rng or random.Random()
        self.target: int | None = None

        # -- Collaborators --
        self.agent = agent or NavAgent(position, ground_height=ground_height)
        self.animator = animator or Animator(position)
        self.animator.on_step = self.play_step
        self.weapon = weapon or WeaponController(
            self.eid, position, self.facing, self.config.target_layer_mask)
        self.hp_bar = hp_bar or HealthBar()
        self.body = RigidBody(mass=_tun("physics", "mass", 1.0))
        self.collider = BodyCollider()
        self.ragdoll = default_ragdoll()
        self.ragdoll_enabled = False
        self.material = DissolveMaterial()
        self._subscription = None

        # -- State machine --
        self.current_state = EnemyState.NONE
        self._dying = False
        self._idle = IdleState()
        self._patrol = PatrolState()
        self._trace = TraceState()
        self._attack = AttackState()
        self._hit = HitState()
        self._dead = DeadState()

        # -- Register with the world --
        world.add(self.eid, position)
        world.zone_add(self.eid, position.zone)
        world.add(self.eid, self.facing)
        world.add(self.eid, Layer(LAYER_ENEMY))
        world.add(self.eid, Identity(name=name, kind="enemy"))
        world.add(self.eid, self.health)
        world.add(self.eid, self.stats)
        world.add(self.eid, self.config)
        world.add(self.eid, self.material)
        world.add(self.eid, Damageable(self))
        world.add(self.eid, self)

    # ── Attacker interface ───────────────────────────────────────────

    @property
    def attack_power(self) -> int:
        return self.stats.attack_power

    @property
    def defense_power(self) -> int:
        return self.stats.defense_power

    @property
    def alive(self) -> bool:
        return not self._dying and self.current_state is not EnemyState.DEAD

    # ── Lifecycle ────────────────────────────────────────────────────

    def start(self) -> None:
        """Spawn-time setup.  Leaves the enemy in IDLE."""
        self.set_ragdoll_enabled(False)
        self._subscription = self.weapon.subscribe(self)
        self.health.current = self.config.max_health
        self.hp_bar.set_hp(self.health.fraction)
        self.set_state(EnemyState.IDLE)

    def destroy(self) -> None:
        """Teardown: leave the weapon channel and the world."""
        if self._subscription is not None:
            self._subscription.dispose()
            self._subscription = None
        self.world.kill(self.eid)

    # ── State machine ────────────────────────────────────────────────

    def state_object(self, kind: EnemyState) -> BehaviorState:
        """Return the behaviour object for *kind*.  Fatal if there is none."""
        if kind is EnemyState.IDLE:
            state = self._idle
        elif kind is EnemyState.PATROL:
            state = self._patrol
        elif kind is EnemyState.TRACE:
            state = self._trace
        elif kind is EnemyState.ATTACK:
            state = self._attack
        elif kind is EnemyState.HIT:
            state = self._hit
        elif kind is EnemyState.DEAD:
            state = self._dead
        else:
            raise InvariantViolation(f"{self.name}: no behaviour state for {kind!r}")
        if state is None:
            raise InvariantViolation(f"{self.name}: behaviour state {kind.name} is missing")
        return state

    @property
    def active_state(self) -> BehaviorState | None:
        if self.current_state is EnemyState.NONE:
            return None
        return self.state_object(self.current_state)

    def set_state(self, new_state: EnemyState) -> None:
        """Switch behaviour: exit(old) → assign → enter(new).

        Forced: the outgoing state is not consulted.  Re-entering the
        current state runs its exit and entry again.  Ignored once
        DEAD is active.
        """
        if self.current_state is EnemyState.DEAD:
            self._log("ignored", f"{new_state.name} while dead")
            return
        if new_state is EnemyState.NONE:
            raise InvariantViolation(f"{self.name}: NONE cannot be entered")
        incoming = self.state_object(new_state)

        old = self.current_state
        if old is not EnemyState.NONE:
            self.state_object(old).exit()
        self.current_state = new_state
        self._log("state", f"{old.name} → {new_state.name}")
        self._emit(StateChanged(self.eid, old.name, new_state.name))
        incoming.enter(self)

    def tick(self, dt: float) -> None:
        """Run the active state's per-frame update."""
        if self.current_state is EnemyState.NONE:
            return
        self.state_object(self.current_state).update(dt)

    # ── Animation callbacks ──────────────────────────────────────────

    def on_reaction_finished(self) -> None:
        """Hit reaction clip ended.  Public: the animator calls back here."""
        if self.current_state is not EnemyState.HIT:
            return
        self.set_state(EnemyState.IDLE)

    def on_attack_finished(self) -> None:
        if self.current_state is EnemyState.ATTACK:
            self._attack.complete()

    def attack_begin(self) -> None:
        self.weapon.attack_start()

    def attack_end(self) -> None:
        self.weapon.attack_end()

    def play_step(self) -> None:
        self._cue("step")

    def grunt(self) -> None:
        self._cue("grunt")

    # ── Movement ─────────────────────────────────────────────────────

    def request_move_to(self, point) -> bool:
        return self.agent.set_destination(point)

    def has_arrived(self) -> bool:
        return self.agent.has_arrived()

    def stop_moving(self) -> None:
        self.agent.reset_path()
        self.animator.root_velocity = (0.0, 0.0)
        self.animator.set_float("speed", 0.0)

    def face_target(self) -> None:
        if self.target is None:
            return
        pos = self.target_position(self.target)
        if pos is not None:
            self.facing.face_toward(self.position, pos)

    def animate(self, dt: float) -> None:
        """Advance navigation and animation, then merge root motion."""
        if self.agent.enabled:
            self.agent.update(dt)
            vx, vy = self.agent.desired_velocity
            speed = math.hypot(vx, vy)
            self.animator.root_velocity = (vx, vy)
            self.animator.set_float("speed", speed)
            if speed > 0.01:
                self.facing.yaw = math.degrees(math.atan2(vy, vx))
        self.animator.update(dt)
        if self.agent.enabled and self.animator.enabled:
            self._on_animator_move()

    def _on_animator_move(self) -> None:
        # Horizontal from root motion, height from navigation.
        root = self.animator.root_position
        self.agent.warp(root.x, root.y)
        self.position.x = root.x
        self.position.y = root.y
        self.position.z = self.agent.next_position.z
        root.z = self.position.z

    # ── Sensing ──────────────────────────────────────────────────────

    def detect_target(self) -> int | None:
        """Run the Sensor; remembers and returns the nearest target id."""
        cfg = self.config
        self.target = detect_nearest(
            self.world, self.position, cfg.detect_radius,
            cfg.target_layer_mask,
            exclude=self.eid,
            yaw=self.facing.yaw,
            max_sight_angle=cfg.max_sight_angle,
            use_sight_cone=cfg.sight_cone_gates_detection,
        )
        return self.target

    def target_position(self, eid: int) -> Position | None:
        return self.world.get(eid, Position)

    # ── Damage ───────────────────────────────────────────────────────

    def take_hit(self, attacker: Any, direction=None) -> HitResult | None:
        """``Damageable`` entry point used by weapons."""
        return self.apply_damage(attacker)

    def apply_damage(self, attacker: Any) -> HitResult | None:
        """Resolve one hit from *attacker* (needs ``attack_power`` and ``position``).

        Returns the :class:`HitResult`, or ``None`` when the enemy is
        already dying or dead and the hit was ignored.
        """
        if not self.alive:
            return None
        result = resolve_hit(attacker.attack_power, self.stats.defense_power,
                             self.health.current, self.health.maximum)
        self.health.current = result.remaining_health
        self.hp_bar.set_hp(self.health.fraction)

        attacker_name = getattr(attacker, "name", type(attacker).__name__)
        print(f"[COMBAT] {attacker_name} hit {self.name} for "
              f"{result.damage} damage (HP: {self.health.current}/{self.health.maximum})")
        self._log("combat", f"hit by {attacker_name}: -{result.damage}",
                  details={"hp": self.health.current,
                           "outcome": result.outcome.name})

        if result.lethal:
            self._die(attacker)
        else:
            self._hit.set_attacker(attacker)
            self.set_state(EnemyState.HIT)
        return result

    def _die(self, attacker: Any) -> None:
        self._dying = True
        self.hp_bar.hide()
        self.set_state(EnemyState.DEAD)

        self.agent.disable()
        self.body.is_kinematic = False
        self.body.use_gravity = True
        self.body.constraints = "none"
        self.body.add_impulse(*death_impulse(self.position, attacker.position))
        self.collider.is_trigger = False

        print(f"[COMBAT] {self.name} died")
        self._emit(EnemyDied(self.eid, attacker))

    # ── Weapon channel observer ──────────────────────────────────────

    def on_next(self, target: int) -> None:
        """Our weapon overlapped *target* during a swing."""
        hittable = self.world.get(target, Damageable)
        if hittable is None or hittable.receiver is None:
            return
        hittable.receiver.take_hit(self, self.facing.forward())

    def on_error(self, error: Exception) -> None:
        print(f"[WEAPON] {self.name}: channel error: {error!r}")
        self._log("error", f"weapon channel error: {error!r}")

    def on_completed(self) -> None:
        self.weapon.unsubscribe(self)
        self._subscription = None

    # ── Physics / death presentation ─────────────────────────────────

    @property
    def physics_mode(self) -> str:
        """``"animated"`` (kinematic), ``"dynamic"`` (thrown body) or ``"ragdoll"``."""
        if self.ragdoll_enabled:
            return "ragdoll"
        if not self.body.is_kinematic:
            return "dynamic"
        return "animated"

    def set_ragdoll_enabled(self, enabled: bool) -> None:
        """Swap between animated body and ragdoll limbs in one step."""
        set_ragdoll_parts(self.ragdoll, enabled)
        self.animator.enabled = not enabled
        self.collider.enabled = not enabled
        self.body.detect_collisions = not enabled
        self.animator.rebind()
        self.ragdoll_enabled = enabled

    def on_collision_enter(self, tag: str) -> None:
        if tag == GROUND_TAG:
            self.set_ragdoll_enabled(True)
            self.material.active = True

    def simulate_physics(self, dt: float) -> None:
        """Integrate the thrown body, land it, and run the dissolve."""
        if step_body(self.body, self.position, dt, self.agent.ground_height):
            self.on_collision_enter(GROUND_TAG)
        if self.material.advance(dt, _tun("enemy.death", "dissolve_speed", 1.0)):
            self._emit(EnemyDissolved(self.eid))

    # ── Diagnostics ──────────────────────────────────────────────────

    def _cue(self, cue: str) -> None:
        self._log("cue", cue)
        self._emit(EnemyCue(self.eid, cue))

    def _log(self, cat: str, msg: str, **kw) -> None:
        log = self.world.res(DevLog)
        if log is None:
            return
        clock = self.world.res(GameClock)
        log.record(self.eid, cat, msg, name=self.name,
                   t=clock.time if clock else 0.0, **kw)

    def _emit(self, event) -> None:
        bus = self.world.res(EventBus)
        if bus is not None:
            bus.emit(event)

    def __repr__(self) -> str:
        return (f"EnemyController({self.name!r}, eid={self.eid}, "
                f"state={self.current_state.name}, hp={self.health.current})")
