# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""EntityPool -- recycles short-lived simulation entities.

Architecture
------------
A pool owns a backing list of instances plus the subset currently active.
Every system that creates short-lived entities (projectiles, enemies)
goes through a pool instead of constructing objects per spawn.

Lifecycle of a pooled instance:
  acquire(payload)  -> first inactive slot, or a new one appended (+1)
                       init(payload), active=True, joins the active set
  release(obj)      -> reset(), active=False, leaves the active set
                       (second release of the same object is a no-op)

Growth is unbounded; callers that need a hard cap enforce it themselves.
Capacity never shrinks on its own -- ``shrink()`` is an explicit
maintenance call.

Observers must use ``active_instances()``.  Reading the backing list
directly would expose inert slots.
"""

from __future__ import annotations

from typing import Callable, Generic, Iterable, Protocol, TypeVar

from loguru import logger


class Poolable(Protocol):
    """Interface a pooled entity exposes to its pool."""

    active: bool

    def init(self, payload: dict) -> None: ...

    def reset(self) -> None: ...


T = TypeVar("T", bound=Poolable)


class EntityPool(Generic[T]):
    """Growable object pool with an insertion-ordered active set."""

    def __init__(self, factory: Callable[[], T], initial_size: int = 0) -> None:
        self._factory = factory
        self._pool: list[T] = []
        # id(obj) -> obj, dicts keep acquisition order for deterministic ticks
        self._active: dict[int, T] = {}

        self._total_created = 0
        self._max_active = 0
        self._acquisitions = 0
        self._releases = 0

        self.prewarm(initial_size)

    def __len__(self) -> int:
        return len(self._pool)

    # -- Lifecycle -----------------------------------------------------------

    def acquire(self, payload: dict | None = None) -> T:
        """Return an initialized, active instance."""
        obj = next((item for item in self._pool if not item.active), None)
        if obj is None:
            obj = self._create()

        obj.init(payload or {})
        obj.active = True
        self._active[id(obj)] = obj

        self._acquisitions += 1
        self._max_active = max(self._max_active, len(self._active))
        return obj

    def release(self, obj: T | None) -> bool:
        """Return *obj* to the pool.  False if it was not active here."""
        if obj is None or id(obj) not in self._active:
            return False
        obj.reset()
        obj.active = False
        del self._active[id(obj)]
        self._releases += 1
        return True

    def release_all(self, objs: Iterable[T]) -> int:
        return sum(1 for obj in list(objs) if self.release(obj))

    def release_if(self, predicate: Callable[[T], bool]) -> int:
        """Release every active instance matching *predicate*."""
        doomed = [obj for obj in self._active.values() if predicate(obj)]
        return self.release_all(doomed)

    def clear(self) -> None:
        """Release every active instance.  Capacity is kept."""
        self.release_all(list(self._active.values()))

    # -- Queries -------------------------------------------------------------

    def active_instances(self) -> list[T]:
        """Snapshot of the active instances in acquisition order."""
        return list(self._active.values())

    @property
    def active_count(self) -> int:
        return len(self._active)

    # -- Maintenance ---------------------------------------------------------

    def prewarm(self, count: int) -> None:
        """Seed *count* inert instances."""
        for _ in range(max(0, count)):
            self._create()

    def shrink(self, target_inactive: int) -> int:
        """Drop inactive slots beyond *target_inactive*.  Returns removed count."""
        inactive = [obj for obj in self._pool if not obj.active]
        to_remove = max(0, len(inactive) - max(0, target_inactive))
        if to_remove == 0:
            return 0

        kept: list[T] = []
        removed = 0
        for obj in self._pool:
            if obj.active or removed >= to_remove:
                kept.append(obj)
            else:
                removed += 1
        self._pool = kept
        logger.info(f"EntityPool shrunk by {removed} objects (size now {len(kept)})")
        return removed

    def get_stats(self) -> dict:
        return {
            "pool_size": len(self._pool),
            "active_count": len(self._active),
            "available_count": len(self._pool) - len(self._active),
            "max_active": self._max_active,
            "total_created": self._total_created,
            "acquisitions": self._acquisitions,
            "releases": self._releases,
        }

    # -- Internal ------------------------------------------------------------

    def _create(self) -> T:
        obj = self._factory()
        obj.active = False
        self._pool.append(obj)
        self._total_created += 1
        return obj
