"""test_channel.py — Notification channel and the weapon that drives it.

Channel contract: every value goes once to every observer subscribed
when publishing starts, unsubscribed observers hear nothing, error and
complete are terminal, and an observer that raises only hurts itself.
The weapon tests check the once-per-swing rule and the enemy's
observer side (hit forwarding, error logging, teardown).

Run:  python test_channel.py
"""
from __future__ import annotations
import sys, random, traceback

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

from core.constants import LAYER_PLAYER
from core.events import NotificationChannel, EventBus, EnemyDied
from components import Position, Facing, DevLog
from logic.ai.enemy import EnemyController
from logic.targets import TrainingDummy
from logic.tick import new_world
from logic.weapon import WeaponController


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


class Recorder:
    def __init__(self, name: str = "rec", explode_on=None):
        self.name = name
        self.values: list = []
        self.errors: list = []
        self.completed = 0
        self.explode_on = explode_on

    def on_next(self, value):
        if value == self.explode_on:
            raise ValueError(f"{self.name} cannot handle {value!r}")
        self.values.append(value)

    def on_error(self, error):
        self.errors.append(error)

    def on_completed(self):
        self.completed += 1


# ═══════════════════════════════════════════════════════════════════
#  Channel
# ═══════════════════════════════════════════════════════════════════

def test_delivery():
    print("\n=== 1: delivery ===")
    ch = NotificationChannel("test")
    a, b = Recorder("a"), Recorder("b")
    sub_a = ch.subscribe(a)
    ch.subscribe(b)
    assert ch.publish(1) == 2
    assert ch.publish(2) == 2
    assert a.values == [1, 2] and b.values == [1, 2]
    ok("each value exactly once to each observer, in order")

    assert ch.subscribe(a) is sub_a and ch.observer_count == 2
    ch.publish(3)
    assert a.values == [1, 2, 3]
    ok("double subscribe keeps one delivery")

    sub_a.dispose()
    assert not sub_a.active and ch.observer_count == 1
    ch.publish(4)
    assert a.values == [1, 2, 3] and b.values[-1] == 4
    ok("disposed observer receives nothing")

    sub_a.dispose()
    ch.unsubscribe(Recorder("stranger"))
    ok("dispose / unsubscribe are idempotent")


def test_mutation_during_publish():
    print("\n=== 2: subscribe / unsubscribe while publishing ===")
    ch = NotificationChannel()
    late = Recorder("late")
    victim = Recorder("victim")

    class Meddler(Recorder):
        def on_next(self, value):
            super().on_next(value)
            ch.subscribe(late)
            ch.unsubscribe(victim)

    meddler = Meddler("meddler")
    ch.subscribe(meddler)
    ch.subscribe(victim)
    ch.publish("x")
    assert late.values == []
    assert victim.values == []
    ok("joiners wait for the next value, leavers stop at once")

    ch.publish("y")
    assert late.values == ["y"]
    ok("joiner hears the next value")


def test_observer_error_isolated():
    print("\n=== 3: raising observer ===")
    ch = NotificationChannel()
    bad = Recorder("bad", explode_on=2)
    good = Recorder("good")
    ch.subscribe(bad)
    ch.subscribe(good)
    ch.publish(1)
    ch.publish(2)
    ch.publish(3)
    assert good.values == [1, 2, 3]
    ok("other observers unaffected")

    assert bad.values == [1, 3]
    assert len(bad.errors) == 1 and isinstance(bad.errors[0], ValueError)
    assert not ch.closed and ch.is_subscribed(bad)
    ok("failure routed to the raiser's on_error, channel stays open")


def test_terminal_events():
    print("\n=== 4: complete / error are terminal ===")
    ch = NotificationChannel()
    a, b = Recorder("a"), Recorder("b")
    ch.subscribe(a)
    ch.subscribe(b)
    ch.complete()
    ch.complete()
    assert a.completed == 1 and b.completed == 1
    assert ch.closed and ch.observer_count == 0
    ok("on_completed once, observers released")

    assert ch.publish(9) == 0 and a.values == []
    ch.error(RuntimeError("late"))
    assert a.errors == []
    ok("nothing after completion")

    c = Recorder("c")
    ch.subscribe(c)
    assert c.completed == 1 and ch.observer_count == 0
    ok("subscribing to a closed channel completes immediately")

    ch = NotificationChannel()
    ch.subscribe(a)
    boom = RuntimeError("source failed")
    ch.error(boom)
    assert a.errors == [boom] and ch.closed
    ch.complete()
    assert a.completed == 1
    ok("error closes the channel too")


# ═══════════════════════════════════════════════════════════════════
#  Weapon + enemy observer
# ═══════════════════════════════════════════════════════════════════

def test_weapon_once_per_swing():
    print("\n=== 5: weapon reports each target once per swing ===")
    w = new_world()
    dummy = TrainingDummy(w, Position(0.8, 0.0))
    weapon = WeaponController(999, Position(0.0, 0.0), Facing(0.0),
                              LAYER_PLAYER, reach=0.6, radius=0.6)
    rec = Recorder()
    weapon.subscribe(rec)

    assert weapon.check_hits(w) == 0 and rec.values == []
    ok("closed window reports nothing")

    weapon.attack_start()
    assert weapon.check_hits(w) == 1
    assert weapon.check_hits(w) == 0
    assert rec.values == [dummy.eid]
    ok("one report per target per swing")

    weapon.attack_end()
    weapon.attack_start()
    weapon.check_hits(w)
    assert rec.values == [dummy.eid, dummy.eid] and weapon.swings == 2
    ok("a new swing reports again")

    weapon.attack_end()
    dummy.move_to(-0.8, 0.0)
    weapon.attack_start()
    assert weapon.check_hits(w) == 0
    ok("target behind the blade is missed")


def test_enemy_observer():
    print("\n=== 6: enemy as weapon observer ===")
    w = new_world()
    enemy = EnemyController(w, Position(0.0, 0.0), rng=random.Random(2))
    enemy.start()
    dummy = TrainingDummy(w, Position(0.5, 0.0), name="Hero")

    enemy.attack_begin()
    enemy.weapon.check_hits(w)
    assert len(dummy.hits) == 1
    attacker, direction = dummy.hits[0]
    assert attacker is enemy and direction == enemy.facing.forward()
    assert dummy.health.current == 100 - enemy.attack_power
    ok("on_next forwards the hit to the target's receiver")

    enemy.on_next(12345)
    ok("unknown target id is ignored")

    enemy.weapon.channel.error(RuntimeError("blade snapped"))
    errors = w.res(DevLog).for_cat("error")
    assert len(errors) == 1 and "blade snapped" in errors[0]["msg"]
    ok("channel error logged, not raised")


def test_enemy_observer_teardown():
    print("\n=== 7: teardown ===")
    w = new_world()
    enemy = EnemyController(w, Position(0.0, 0.0), rng=random.Random(2))
    enemy.start()
    enemy.weapon.destroy()
    assert not enemy.weapon.channel.is_subscribed(enemy)
    assert enemy._subscription is None
    ok("on_completed drops the subscription")

    w = new_world()
    enemy = EnemyController(w, Position(0.0, 0.0), rng=random.Random(2))
    enemy.start()
    enemy.destroy()
    assert not enemy.weapon.channel.is_subscribed(enemy)
    assert not w.alive(enemy.eid)
    w.purge()
    assert w.get(enemy.eid, EnemyController) is None
    ok("destroy unsubscribes and removes the entity")


def test_event_bus():
    print("\n=== 8: event bus ===")
    bus = EventBus()
    seen = []
    bus.subscribe("EnemyDied", lambda ev: seen.append(ev.eid))
    bus.subscribe("EnemyDied", lambda ev: 1 / 0)
    bus.emit(EnemyDied(4))
    bus.emit(EnemyDied(5))
    assert seen == [] and len(bus.pending("EnemyDied")) == 2
    assert bus.drain() == 2
    assert seen == [4, 5] and bus.stats()["EnemyDied"] == 2
    ok("queued until drain, failing handler does not stop the rest")


if __name__ == "__main__":
    sections = [
        ("Delivery", test_delivery),
        ("Mutation During Publish", test_mutation_during_publish),
        ("Observer Error Isolated", test_observer_error_isolated),
        ("Terminal Events", test_terminal_events),
        ("Weapon Once Per Swing", test_weapon_once_per_swing),
        ("Enemy Observer", test_enemy_observer),
        ("Enemy Observer Teardown", test_enemy_observer_teardown),
        ("Event Bus", test_event_bus),
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
    print(f"  Channel Tests: {_passed} passed, {_failed} failed  "
          f"(total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
