"""
core/ecs.py — Entity-Component-System

Entities are ints. Components are any object, stored by type.
Query by component types to get matching entities.

    w = World()
    e = w.spawn()
    w.add(e, Position(5.0, 3.0))
    w.add(e, Layer(LAYER_PLAYER))

    for eid, pos, layer in w.query(Position, Layer):
        ...

The world is also the "physics scene" the enemy AI asks for overlap
queries: :meth:`World.nearby` is the sphere-overlap used by the Sensor
and the weapon hit check.
"""

from __future__ import annotations
from typing import Any, Iterator


class World:
    def __init__(self):
        self._next_id = 0
        self._stores: dict[type, dict[int, Any]] = {}
        self._dead: set[int] = set()
        # zone name → entity ids placed there.  Overlap queries only
        # look inside one zone.
        self._zone_index: dict[str, set[int]] = {}

    # -- Zone helpers --

    def zone_add(self, eid: int, zone: str):
        """Register *eid* in the zone index for *zone*."""
        self._zone_index.setdefault(zone, set()).add(eid)

    def zone_entities(self, zone: str) -> set[int]:
        """Return the set of living entity IDs in *zone*."""
        return self._zone_index.get(zone, set()) - self._dead

    # -- Spatial queries --

    def nearby(self, zone: str, x: float, y: float, z: float,
               radius: float, *types: type) -> Iterator[tuple]:
        """Yield ``(eid, comp1, comp2, ..., dist_sq)`` within *radius*.

        Sphere overlap: the first type must be ``Position`` and the
        distance is measured in 3-D.  The boundary is inclusive.  The
        yield order follows the zone index and carries no meaning;
        callers that care sort on the trailing ``dist_sq``.
        """
        if not types:
            return
        r_sq = radius * radius
        stores = [self._stores.get(t, {}) for t in types]
        for eid in self.zone_entities(zone):
            if not all(eid in s for s in stores):
                continue
            pos = stores[0][eid]
            dx = pos.x - x
            dy = pos.y - y
            dz = pos.z - z
            dsq = dx * dx + dy * dy + dz * dz
            if dsq <= r_sq:
                yield (eid, *(s[eid] for s in stores), dsq)

    # -- Entities --

    def spawn(self) -> int:
        self._next_id += 1
        return self._next_id

    def kill(self, eid: int):
        self._dead.add(eid)

    def alive(self, eid: int) -> bool:
        return eid not in self._dead

    def purge(self):
        """Remove dead entities from all stores. Call once per frame."""
        for store in self._stores.values():
            for eid in self._dead:
                store.pop(eid, None)
        for eids in self._zone_index.values():
            eids -= self._dead
        self._dead.clear()

    # -- Components --

    def add(self, eid: int, comp: Any):
        self._stores.setdefault(type(comp), {})[eid] = comp

    def get(self, eid: int, comp_type: type) -> Any | None:
        return self._stores.get(comp_type, {}).get(eid)

    def has(self, eid: int, comp_type: type) -> bool:
        return eid in self._stores.get(comp_type, {})

    def remove(self, eid: int, comp_type: type):
        store = self._stores.get(comp_type)
        if store and eid in store:
            del store[eid]

    # -- Queries --

    def query(self, *types: type) -> Iterator[tuple]:
        """Yield (eid, comp1, comp2, ...) for entities that have ALL types."""
        if not types:
            return
        buckets = [self._stores.get(t, {}) for t in types]
        smallest = min(buckets, key=len)
        for eid in list(smallest):
            if eid in self._dead or eid < 0:
                continue
            if all(eid in b for b in buckets):
                yield (eid, *(b[eid] for b in buckets))

    def query_one(self, *types: type) -> tuple | None:
        """Return first match or None."""
        for result in self.query(*types):
            return result
        return None

    def all_of(self, comp_type: type) -> Iterator[tuple[int, Any]]:
        """Yield (eid, component) for every entity with this type."""
        for eid, comp in list(self._stores.get(comp_type, {}).items()):
            if eid not in self._dead and eid >= 0:
                yield eid, comp

    # -- Resources (singletons, not tied to entities) --

    def set_res(self, resource: Any):
        self._stores.setdefault(type(resource), {})[-1] = resource

    def res(self, res_type: type) -> Any | None:
        return self._stores.get(res_type, {}).get(-1)
