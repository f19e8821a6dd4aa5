# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""2D vector helpers over plain ``(x, y)`` tuples in pixel space.

All functions are pure.  ``distance_sq`` is what range and collision
checks use so hot loops never call ``sqrt``.
"""

from __future__ import annotations

import math

Vec2 = tuple[float, float]

ZERO: Vec2 = (0.0, 0.0)


def add(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] + b[0], a[1] + b[1])


def sub(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] - b[0], a[1] - b[1])


def scale(v: Vec2, s: float) -> Vec2:
    return (v[0] * s, v[1] * s)


def length_sq(v: Vec2) -> float:
    return v[0] * v[0] + v[1] * v[1]


def length(v: Vec2) -> float:
    return math.hypot(v[0], v[1])


def distance_sq(a: Vec2, b: Vec2) -> float:
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    return dx * dx + dy * dy


def distance(a: Vec2, b: Vec2) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def normalize(v: Vec2) -> Vec2:
    """Unit vector along *v*; the zero vector normalizes to ZERO, not NaN."""
    n = length(v)
    if n == 0.0:
        return ZERO
    return (v[0] / n, v[1] / n)
