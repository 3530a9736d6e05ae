"""logic/animation.py — Minimal animation collaborator.

Replaces a skeletal animator with the three things the enemy AI
actually depends on:

* **Action clips** — ``play("attack", 1.2, events=[(0.35, fn), ...],
  on_finish=fn)``.  Timed events fire in order as the clip advances;
  ``on_finish`` fires once when it ends.  Playing a new clip or
  ``stop()``-ing replaces the current one silently: a replaced clip
  never calls back.
* **Parameters / triggers** — ``set_float("speed", 1.5)``,
  ``set_trigger("die")``; recorded for inspection.
* **Root motion** — ``root_position`` advances by ``root_velocity``
  every update.  The owner copies it back to the entity.

Locomotion footsteps are a looping cue: while the ``speed`` parameter
is non-zero ``on_step`` fires every ``enemy.clips.step_interval``.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable
from components import Position
from core.tuning import get as _tun


@dataclass
class Clip:
    name: str
    duration: float
    events: list[tuple[float, Callable[[], None]]] = field(default_factory=list)
    on_finish: Callable[[], None] | None = None
    elapsed: float = 0.0
    next_event: int = 0


class Animator:
    def __init__(self, root_position: Position):
        self.enabled = True
        self.root_position = root_position.copy()
        self.root_velocity: tuple[float, float] = (0.0, 0.0)
        self.params: dict[str, float] = {}
        self.triggers: list[str] = []
        self.on_step: Callable[[], None] | None = None
        self._clip: Clip | None = None
        self._step_timer = 0.0

    # ── Parameters ───────────────────────────────────────────────────

    def set_float(self, name: str, value: float) -> None:
        self.params[name] = value

    def get_float(self, name: str, default: float = 0.0) -> float:
        return self.params.get(name, default)

    def set_trigger(self, name: str) -> None:
        self.triggers.append(name)

    # ── Clips ────────────────────────────────────────────────────────

    def play(self, name: str, duration: float, *,
             events: list[tuple[float, Callable[[], None]]] | None = None,
             on_finish: Callable[[], None] | None = None) -> Clip:
        clip = Clip(name, duration, sorted(events or [], key=lambda e: e[0]),
                    on_finish)
        self._clip = clip
        return clip

    def stop(self, name: str | None = None) -> None:
        """Cancel the current clip (only if it is *name*, when given)."""
        if self._clip is None:
            return
        if name is None or self._clip.name == name:
            self._clip = None

    def is_playing(self, name: str | None = None) -> bool:
        if self._clip is None:
            return False
        return name is None or self._clip.name == name

    def rebind(self) -> None:
        """Reset to the bind pose: no clip, no params, no pending triggers."""
        self._clip = None
        self.params.clear()
        self.triggers.clear()
        self.root_velocity = (0.0, 0.0)
        self._step_timer = 0.0

    # ── Per-frame ────────────────────────────────────────────────────

    def update(self, dt: float) -> None:
        if not self.enabled:
            return
        vx, vy = self.root_velocity
        self.root_position.x += vx * dt
        self.root_position.y += vy * dt
        self._tick_steps(dt)

        clip = self._clip
        if clip is None:
            return
        clip.elapsed += dt
        while (clip.next_event < len(clip.events)
               and clip.events[clip.next_event][0] <= clip.elapsed):
            _, fn = clip.events[clip.next_event]
            clip.next_event += 1
            fn()
            if self._clip is not clip:
                return
        if clip.elapsed >= clip.duration:
            self._clip = None
            if clip.on_finish is not None:
                clip.on_finish()

    def _tick_steps(self, dt: float) -> None:
        if self.on_step is None or self.get_float("speed") <= 0.01:
            self._step_timer = 0.0
            return
        self._step_timer += dt
        interval = _tun("enemy.clips", "step_interval", 0.5)
        if self._step_timer >= interval:
            self._step_timer -= interval
            self.on_step()
