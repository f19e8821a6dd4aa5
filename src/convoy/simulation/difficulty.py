# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""JourneyDifficulty -- difficulty scalar for one playthrough journey.

The scalar is fixed when a journey starts and grows linearly with the
journey index:

    scalar = 1.0 + step * (journey - 1)

Spawned enemies are scaled once, at spawn time:
  - hp, max_hp, damage, reward_red, reward_gold  -> * scalar
  - move_speed -> * (1 + (scalar - 1) / 2)

Speed grows at half rate so late journeys get tougher enemies without
them outrunning the weapons' projectiles.
"""

from __future__ import annotations

# Stats that scale with the full scalar
_SCALED_STATS = ("hp", "max_hp", "damage", "reward_red", "reward_gold")


class JourneyDifficulty:
    """Difficulty scalar derived from the journey index."""

    def __init__(self, journey: int = 1, step: float | None = None) -> None:
        if step is None:
            from convoy.config import settings
            step = settings.journey_difficulty_step
        self.step = step
        self.journey = 1
        self.set_journey(journey)

    def set_journey(self, journey: int) -> None:
        """Start journey *journey* (1-based, clamped to >= 1)."""
        self.journey = max(1, int(journey))

    @property
    def multiplier(self) -> float:
        return 1.0 + self.step * (self.journey - 1)

    @property
    def speed_multiplier(self) -> float:
        return 1.0 + (self.multiplier - 1.0) / 2.0

    def scale_stats(self, stats: dict) -> dict:
        """Return a copy of an archetype stat block scaled for this journey."""
        m = self.multiplier
        scaled = dict(stats)
        for key in _SCALED_STATS:
            if key in scaled:
                scaled[key] = scaled[key] * m
        if "move_speed" in scaled:
            scaled["move_speed"] = scaled["move_speed"] * self.speed_multiplier
        return scaled
