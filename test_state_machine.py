"""test_state_machine.py — Behaviour state machine host.

Checks the switching contract (exit old → assign → enter new), forced
re-entry, the terminal Dead state, the fatal invariant violations, and
the timer / callback driven transitions of Idle and Hit.

Tests are deterministic: seeded RNG and a fixed ``dt``.

Run:  python test_state_machine.py
"""
from __future__ import annotations
import sys, random, traceback

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

from core.events import EventBus
from components import Position, DevLog
from logic.ai.states import EnemyState, InvariantViolation, BehaviorState
from logic.ai.enemy import EnemyController
from logic.targets import TrainingDummy
from logic.tick import new_world


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")

def fail(label: str, detail: str = ""):
    global _failed
    _failed += 1
    msg = f"  [FAIL] {label}"
    if detail:
        msg += f" — {detail}"
    print(msg)


def _enemy(start: bool = True, **kw) -> tuple:
    w = new_world()
    enemy = EnemyController(w, Position(0.0, 0.0), name="Grunt",
                            rng=random.Random(7), **kw)
    if start:
        enemy.start()
    return w, enemy


class SpyState(BehaviorState):
    """Records every hook together with the host's state at that moment."""

    def __init__(self, kind: EnemyState, journal: list):
        super().__init__()
        self.kind = kind
        self.journal = journal

    def enter(self, enemy):
        super().enter(enemy)
        self.journal.append((f"{self.kind.name}.enter", enemy.current_state))

    def update(self, dt):
        self.journal.append((f"{self.kind.name}.update", self.enemy.current_state))

    def exit(self):
        self.journal.append((f"{self.kind.name}.exit", self.enemy.current_state))


# ═══════════════════════════════════════════════════════════════════
#  Switching contract
# ═══════════════════════════════════════════════════════════════════

def test_start():
    print("\n=== 1: start() ===")
    w, enemy = _enemy(start=False)
    assert enemy.current_state is EnemyState.NONE
    assert enemy.active_state is None
    enemy.tick(0.5)
    assert enemy.current_state is EnemyState.NONE
    ok("NONE before start, tick is a no-op")

    enemy.start()
    assert enemy.current_state is EnemyState.IDLE
    assert enemy.health.current == enemy.health.maximum == 100
    assert enemy.hp_bar.fraction == 1.0 and enemy.hp_bar.visible
    ok("IDLE with full health after start")

    assert enemy.weapon.channel.is_subscribed(enemy)
    assert enemy.physics_mode == "animated"
    assert all(p.body.is_kinematic and not p.collider.enabled
               for p in enemy.ragdoll)
    assert enemy.animator.enabled and enemy.collider.enabled
    ok("subscribed to own weapon, ragdoll off")

    assert w.res(DevLog).transitions(enemy.eid) == ["NONE → IDLE"]
    ok("transition logged")


def test_switch_ordering():
    print("\n=== 2: exit → assign → enter ordering ===")
    w, enemy = _enemy(start=False)
    journal: list = []
    enemy._idle = SpyState(EnemyState.IDLE, journal)
    enemy._patrol = SpyState(EnemyState.PATROL, journal)

    enemy.start()
    assert journal == [("IDLE.enter", EnemyState.IDLE)]
    ok("first entry has no exit")

    journal.clear()
    enemy.set_state(EnemyState.PATROL)
    assert journal == [
        ("IDLE.exit", EnemyState.IDLE),
        ("PATROL.enter", EnemyState.PATROL),
    ]
    ok("old exit sees old state, new enter sees new state")

    journal.clear()
    enemy.tick(0.1)
    assert journal == [("PATROL.update", EnemyState.PATROL)]
    ok("tick updates only the active state")

    changed = w.res(EventBus).pending("StateChanged")
    assert [(e.old, e.new) for e in changed] == [("NONE", "IDLE"), ("IDLE", "PATROL")]
    ok("StateChanged events queued in order")


def test_reentry():
    print("\n=== 3: re-entering the current state ===")
    w, enemy = _enemy(start=False)
    journal: list = []
    enemy._idle = SpyState(EnemyState.IDLE, journal)
    enemy.start()
    journal.clear()

    enemy.set_state(EnemyState.IDLE)
    assert journal == [("IDLE.exit", EnemyState.IDLE),
                       ("IDLE.enter", EnemyState.IDLE)]
    ok("exit then enter again")

    w2, real = _enemy()
    for _ in range(4):
        real.tick(0.5)
    real.set_state(EnemyState.IDLE)
    for _ in range(4):
        real.tick(0.5)
    assert real.current_state is EnemyState.IDLE
    ok("idle timer restarts on re-entry")


def test_dead_is_terminal():
    print("\n=== 4: DEAD is terminal ===")
    w, enemy = _enemy()
    killer = TrainingDummy(w, Position(-1.0, 0.0), attack_power=500)
    enemy.apply_damage(killer)
    assert enemy.current_state is EnemyState.DEAD

    for target in (EnemyState.IDLE, EnemyState.HIT, EnemyState.DEAD):
        enemy.set_state(target)
        assert enemy.current_state is EnemyState.DEAD
    ok("set_state ignored once dead")

    enemy.on_reaction_finished()
    enemy.on_attack_finished()
    enemy.tick(1.0)
    assert enemy.current_state is EnemyState.DEAD
    ok("callbacks and ticks keep it dead")

    dev = w.res(DevLog)
    log = dev.transitions(enemy.eid)
    assert log[-1].endswith("→ DEAD")
    assert sum(1 for m in log if m.endswith("→ DEAD")) == 1
    ok("exactly one transition into DEAD")

    ignored = [e["msg"] for e in dev.for_cat("ignored") if e["eid"] == enemy.eid]
    assert ignored == ["IDLE while dead", "HIT while dead", "DEAD while dead"]
    ok("ignored requests logged apart from transitions")


def test_invariant_violations():
    print("\n=== 5: invariant violations ===")
    w, enemy = _enemy()
    try:
        enemy.set_state(EnemyState.NONE)
    except InvariantViolation:
        ok("entering NONE raises")
    else:
        raise AssertionError("set_state(NONE) did not raise")

    enemy._trace = None
    try:
        enemy.set_state(EnemyState.TRACE)
    except InvariantViolation:
        pass
    else:
        raise AssertionError("missing TRACE state did not raise")
    assert enemy.current_state is EnemyState.IDLE
    ok("missing state object raises before the old state exits")

    assert issubclass(InvariantViolation, RuntimeError)
    ok("InvariantViolation is a RuntimeError")


# ═══════════════════════════════════════════════════════════════════
#  Timed / callback transitions
# ═══════════════════════════════════════════════════════════════════

def test_idle_to_patrol_timer():
    print("\n=== 6: IDLE → PATROL after max_patrol_wait_time ===")
    w, enemy = _enemy()
    assert enemy.config.max_patrol_wait_time == 3.0
    for i in range(5):
        enemy.tick(0.5)
        assert enemy.current_state is EnemyState.IDLE, f"left IDLE at tick {i}"
    ok("still idle at 2.5 s")

    enemy.tick(0.5)
    assert enemy.current_state is EnemyState.PATROL
    ok("patrol at 3.0 s")

    patrol_entries = [m for m in w.res(DevLog).transitions(enemy.eid)
                      if m == "IDLE → PATROL"]
    assert len(patrol_entries) == 1
    ok("exactly one IDLE → PATROL")

    dest = enemy.state_object(EnemyState.PATROL).destination
    assert dest is not None and enemy.agent.has_path
    d = enemy.home.horizontal_distance(dest)
    assert 1.5 - 1e-9 <= d <= enemy.config.patrol_radius + 1e-9
    ok(f"wander destination {d:.2f} m from home, inside patrol radius")


def test_idle_timer_at_frame_rate():
    print("\n=== 6b: IDLE → PATROL at 60 fps ===")
    w, enemy = _enemy()
    for _ in range(179):
        enemy.tick(1 / 60)
    assert enemy.current_state is EnemyState.IDLE
    ok("still idle one frame short of 3.0 s")

    enemy.tick(1 / 60)
    assert enemy.current_state is EnemyState.PATROL
    transitions = [m for m in w.res(DevLog).transitions(enemy.eid)
                   if m == "IDLE → PATROL"]
    assert len(transitions) == 1
    ok("180 frames of 1/60 s reach the wait time exactly once")


def test_patrol_arrives_back_to_idle():
    print("\n=== 7: PATROL → IDLE on arrival ===")
    w, enemy = _enemy()
    enemy.set_state(EnemyState.PATROL)
    for _ in range(600):
        enemy.tick(1 / 60)
        enemy.animate(1 / 60)
        if enemy.current_state is EnemyState.IDLE:
            break
    assert enemy.current_state is EnemyState.IDLE
    dest = enemy.state_object(EnemyState.PATROL).destination
    assert enemy.position.horizontal_distance(dest) <= enemy.agent.stopping_distance + 1e-6
    ok("walked to the destination and went idle")


def test_hit_reaction_callback():
    print("\n=== 8: HIT → IDLE via reaction-finished ===")
    w, enemy = _enemy()
    hero = TrainingDummy(w, Position(-1.0, 0.0), name="Hero", attack_power=30)

    enemy.set_state(EnemyState.PATROL)
    enemy.apply_damage(hero)
    assert enemy.current_state is EnemyState.HIT
    assert not enemy.agent.has_path
    ok("hit interrupts patrol and stops movement")

    for _ in range(10):
        enemy.tick(0.5)
    assert enemy.current_state is EnemyState.HIT
    ok("HIT has no timer of its own")

    enemy.on_reaction_finished()
    assert enemy.current_state is EnemyState.IDLE
    assert enemy.state_object(EnemyState.HIT).attacker is None
    ok("external callback returns to IDLE, attacker cleared")

    enemy.on_reaction_finished()
    assert enemy.current_state is EnemyState.IDLE
    log = w.res(DevLog).transitions(enemy.eid)
    assert log.count("IDLE → IDLE") == 0
    ok("stray callback outside HIT is ignored")


def test_hit_reaction_clip_end():
    print("\n=== 9: reaction clip drives the exit ===")
    w, enemy = _enemy()
    hero = TrainingDummy(w, Position(-1.0, 0.0), name="Hero", attack_power=30)
    rival = TrainingDummy(w, Position(1.0, 0.0), name="Rival", attack_power=20)

    enemy.apply_damage(hero)
    enemy.animate(0.4)
    assert enemy.current_state is EnemyState.HIT
    enemy.apply_damage(rival)
    assert enemy.state_object(EnemyState.HIT).attacker is rival
    ok("second hit restarts the reaction with the new attacker")

    enemy.animate(0.4)
    assert enemy.current_state is EnemyState.HIT
    ok("replaced clip did not end the reaction early")

    enemy.animate(0.3)
    assert enemy.current_state is EnemyState.IDLE
    assert enemy.health.current == 100 - 25 - 15
    ok("reaction finished after its full length")


if __name__ == "__main__":
    sections = [
        ("Start", test_start),
        ("Switch Ordering", test_switch_ordering),
        ("Re-entry", test_reentry),
        ("Dead Is Terminal", test_dead_is_terminal),
        ("Invariant Violations", test_invariant_violations),
        ("Idle → Patrol Timer", test_idle_to_patrol_timer),
        ("Idle Timer At Frame Rate", test_idle_timer_at_frame_rate),
        ("Patrol Arrival", test_patrol_arrives_back_to_idle),
        ("Hit Reaction Callback", test_hit_reaction_callback),
        ("Hit Reaction Clip End", test_hit_reaction_clip_end),
    ]

    for name, fn in sections:
        try:
            fn()
        except AssertionError:
            fail(name, traceback.format_exc().strip().splitlines()[-2].strip())
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {name} — unhandled exception:")
            traceback.print_exc()

    total = _passed + _failed
    print(f"\n{'=' * 60}")
    print(f"  State Machine Tests: {_passed} passed, {_failed} failed  "
          f"(total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
