"""logic/tick.py — System tick orchestration.

Runs every enemy through the per-frame pipeline in a fixed order so a
frame is deterministic for a given ``dt``::

    clock → state updates → animation/root motion → weapon hits
          → death physics → event drain → purge

Usage::

    from logic.tick import new_world, tick_systems
    world = new_world()
    tick_systems(world, 1 / 60)
"""

from __future__ import annotations

from core.ecs import World
from core.events import EventBus, EnemyDissolved
from components import GameClock, DevLog
from logic.ai.enemy import EnemyController


def new_world(*, despawn_dissolved: bool = True) -> World:
    """Fresh World with GameClock + EventBus + DevLog resources."""
    world = World()
    world.set_res(GameClock())
    world.set_res(DevLog())
    bus = EventBus()
    world.set_res(bus)
    if despawn_dissolved:
        bus.subscribe("EnemyDissolved",
                      lambda ev: _despawn(world, ev))
    return world


def _despawn(world: World, event: EnemyDissolved) -> None:
    enemy = world.get(event.eid, EnemyController)
    if enemy is not None:
        enemy.destroy()


def enemies(world: World) -> list[EnemyController]:
    return [enemy for _eid, enemy in world.all_of(EnemyController)]


def tick_systems(world: World, dt: float, *,
                 skip_brains: bool = False,
                 drain_events: bool = True) -> None:
    """Run all enemy systems for one frame.

    Parameters
    ----------
    world : World
        The ECS world.
    dt : float
        Elapsed seconds for this frame.
    skip_brains : bool
        Skip behaviour-state updates (animation and physics still run).
    drain_events : bool
        Drain the EventBus at the end of the frame.
    """
    clock = world.res(GameClock)
    if clock:
        clock.time += dt
        clock.frame += 1

    active = enemies(world)

    if not skip_brains:
        for enemy in active:
            enemy.tick(dt)

    for enemy in active:
        enemy.animate(dt)

    for enemy in active:
        enemy.weapon.check_hits(world)

    for enemy in active:
        enemy.simulate_physics(dt)

    if drain_events:
        bus = world.res(EventBus)
        if bus:
            bus.drain()

    world.purge()
