# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Target selection -- one selector function per TargetPattern.

Patterns:
  - NEAREST -- squared-distance-nearest active enemy within weapon range;
               ties go to the first enemy encountered
  - CURSOR  -- among enemies within weapon range AND within the cursor
               influence radius, the one closest to the cursor
  - AOE     -- the cursor position itself, enemies or not (area damage is
               an extension point; the shot simply flies at the cursor)

Selectors return a pixel position to aim at, or None to hold fire.
"""

from __future__ import annotations

import enum
from typing import Callable, Iterable

from . import vector
from .entities import Enemy
from .vector import Vec2


class TargetPattern(str, enum.Enum):
    NEAREST = "NEAREST"
    CURSOR = "CURSOR"
    AOE = "AOE"


def find_nearest_enemy(
    origin: Vec2, enemies: Iterable[Enemy], weapon_range: float
) -> Enemy | None:
    best: Enemy | None = None
    best_d2 = float("inf")
    range_sq = weapon_range * weapon_range
    for enemy in enemies:
        if not enemy.active:
            continue
        d2 = vector.distance_sq(origin, enemy.position)
        if d2 <= range_sq and d2 < best_d2:
            best = enemy
            best_d2 = d2
    return best


def find_cursor_enemy(
    origin: Vec2,
    enemies: Iterable[Enemy],
    cursor: Vec2,
    weapon_range: float,
    cursor_radius: float,
) -> Enemy | None:
    best: Enemy | None = None
    best_d2 = float("inf")
    range_sq = weapon_range * weapon_range
    cursor_sq = cursor_radius * cursor_radius
    for enemy in enemies:
        if not enemy.active:
            continue
        if vector.distance_sq(origin, enemy.position) > range_sq:
            continue
        d2 = vector.distance_sq(cursor, enemy.position)
        if d2 <= cursor_sq and d2 < best_d2:
            best = enemy
            best_d2 = d2
    return best


def _select_nearest(origin, enemies, cursor, weapon_range, cursor_radius):
    enemy = find_nearest_enemy(origin, enemies, weapon_range)
    return enemy.position if enemy is not None else None


def _select_cursor(origin, enemies, cursor, weapon_range, cursor_radius):
    enemy = find_cursor_enemy(origin, enemies, cursor, weapon_range, cursor_radius)
    return enemy.position if enemy is not None else None


def _select_aoe(origin, enemies, cursor, weapon_range, cursor_radius):
    return (float(cursor[0]), float(cursor[1]))


_SELECTORS: dict[TargetPattern, Callable[..., Vec2 | None]] = {
    TargetPattern.NEAREST: _select_nearest,
    TargetPattern.CURSOR: _select_cursor,
    TargetPattern.AOE: _select_aoe,
}

# Adding a pattern without a selector fails at import time
if set(_SELECTORS) != set(TargetPattern):
    raise RuntimeError("every TargetPattern needs a selector")


def select_target(
    pattern: TargetPattern,
    origin: Vec2,
    enemies: Iterable[Enemy],
    cursor: Vec2,
    weapon_range: float,
    cursor_radius: float = 100.0,
) -> Vec2 | None:
    """Return the aim point for *pattern*, or None if the weapon should hold."""
    return _SELECTORS[TargetPattern(pattern)](
        origin, enemies, cursor, weapon_range, cursor_radius
    )
