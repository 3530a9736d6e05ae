"""core/events.py — Event bus and notification channels.

Two delivery styles live here:

``EventBus`` — fire-and-forget, queued.  Game-level announcements
(an enemy changed state, died, dissolved) are emitted into the bus
and drained once per frame by whoever cares::

    bus = world.res(EventBus)
    bus.subscribe("EnemyDied", on_enemy_died)
    bus.drain()

``NotificationChannel`` — immediate, one-to-many observer link between
a source (a weapon swing) and its listeners (the enemy that holds the
weapon).  Observers implement ``on_next / on_error / on_completed``::

    sub = weapon.channel.subscribe(enemy)
    weapon.channel.publish(target_eid)   # enemy.on_next(target_eid)
    sub.dispose()

Design rules:
  - Events are plain dataclasses — no behaviour.
  - ``emit()`` is O(1) (just appends); ``publish()`` is synchronous.
  - A channel delivers each value once to every observer subscribed
    when ``publish()`` started.
  - ``error()`` and ``complete()`` are terminal: the channel is closed
    and every observer is released.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Protocol
from collections import defaultdict
import traceback


# ═══════════════════════════════════════════════════════════════════
#  Event definitions
# ═══════════════════════════════════════════════════════════════════

@dataclass
class StateChanged:
    """An enemy's behaviour state machine moved from *old* to *new*."""
    eid: int
    old: str = ""
    new: str = ""


@dataclass
class EnemyDied:
    """An enemy's HP reached zero and it entered the Dead state."""
    eid: int
    killer: Any = None


@dataclass
class EnemyDissolved:
    """The death dissolve effect finished — the body can be removed."""
    eid: int


@dataclass
class EnemyCue:
    """Animation cue hook (footstep, grunt).  Reserved for audio / VFX."""
    eid: int
    cue: str = ""


# ═══════════════════════════════════════════════════════════════════
#  Event Bus
# ═══════════════════════════════════════════════════════════════════

class EventBus:
    """Fire-and-forget event bus stored as an ECS resource."""

    def __init__(self):
        self._queue: list[Any] = []
        self._subs: dict[str, list[Callable]] = defaultdict(list)
        self._stats: dict[str, int] = defaultdict(int)

    # ── Public API ───────────────────────────────────────────────────

    def emit(self, event) -> None:
        """Queue an event for processing on next ``drain()``."""
        self._queue.append(event)

    def subscribe(self, event_type: str, handler: Callable) -> None:
        """Register *handler* to receive events of *event_type*.

        *event_type* is the class name, e.g. ``"EnemyDied"``.
        """
        self._subs[event_type].append(handler)

    def drain(self) -> int:
        """Process all queued events.  Returns number processed.

        Handlers may emit new events — those are processed in the
        same drain pass (breadth-first).
        """
        processed = 0
        safety = 1000  # prevent infinite loops
        while self._queue and safety > 0:
            batch = self._queue[:]
            self._queue.clear()
            for event in batch:
                name = type(event).__name__
                self._stats[name] += 1
                for handler in self._subs.get(name, []):
                    try:
                        handler(event)
                    except Exception as exc:
                        print(f"[EVENT] handler error for {name}: {exc}")
                        traceback.print_exc()
            processed += len(batch)
            safety -= 1
        return processed

    def pending(self, event_type: str | None = None) -> list[Any]:
        """Return queued events (optionally only *event_type*) without draining."""
        if event_type is None:
            return list(self._queue)
        return [e for e in self._queue if type(e).__name__ == event_type]

    def clear(self) -> None:
        """Discard all pending events."""
        self._queue.clear()

    def stats(self) -> dict[str, int]:
        """Return cumulative event counts by type."""
        return dict(self._stats)

    def __repr__(self) -> str:
        return f"EventBus(pending={len(self._queue)}, subs={len(self._subs)})"


# ═══════════════════════════════════════════════════════════════════
#  Notification channel
# ═══════════════════════════════════════════════════════════════════

class Observer(Protocol):
    def on_next(self, value: Any) -> None: ...
    def on_error(self, error: Exception) -> None: ...
    def on_completed(self) -> None: ...


class Subscription:
    """Handle returned by :meth:`NotificationChannel.subscribe`."""

    def __init__(self, channel: NotificationChannel, observer: Observer):
        self._channel = channel
        self.observer = observer

    @property
    def active(self) -> bool:
        return self._channel.is_subscribed(self.observer)

    def dispose(self) -> None:
        self._channel.unsubscribe(self.observer)


class NotificationChannel:
    """Synchronous publish/subscribe link with a terminal close event."""

    def __init__(self, name: str = "channel"):
        self.name = name
        self._observers: list[Observer] = []
        self._subs: dict[int, Subscription] = {}
        self.closed = False
        self.published = 0

    def subscribe(self, observer: Observer) -> Subscription:
        """Attach *observer*.  Subscribing twice returns the same handle."""
        existing = self._subs.get(id(observer))
        if existing is not None:
            return existing
        sub = Subscription(self, observer)
        if self.closed:
            observer.on_completed()
            return sub
        self._observers.append(observer)
        self._subs[id(observer)] = sub
        return sub

    def unsubscribe(self, observer: Observer) -> None:
        if self._subs.pop(id(observer), None) is not None:
            self._observers.remove(observer)

    def is_subscribed(self, observer: Observer) -> bool:
        return id(observer) in self._subs

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def publish(self, value: Any) -> int:
        """Deliver *value* to every current observer.  Returns deliveries.

        An observer that raises from ``on_next`` gets the exception on
        its own ``on_error``; the remaining observers still receive the
        value.
        """
        if self.closed:
            return 0
        self.published += 1
        delivered = 0
        for observer in list(self._observers):
            if not self.is_subscribed(observer):
                continue
            try:
                observer.on_next(value)
            except Exception as exc:
                observer.on_error(exc)
            delivered += 1
        return delivered

    def error(self, exc: Exception) -> None:
        """Signal a source failure to every observer and close."""
        if self.closed:
            return
        for observer in self._close():
            observer.on_error(exc)

    def complete(self) -> None:
        """Signal the end of the stream to every observer and close."""
        if self.closed:
            return
        for observer in self._close():
            observer.on_completed()

    def _close(self) -> list[Observer]:
        observers = list(self._observers)
        self.closed = True
        self._observers.clear()
        self._subs.clear()
        return observers

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"NotificationChannel({self.name!r}, {state}, observers={len(self._observers)})"
