# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""WaveScheduler -- the wave state machine and enemy spawning.

States:
  PREPARING      -- no spawning; timer counts to ``preparation_duration``
  WAVE_ACTIVE    -- one enemy every ``spawn_interval`` until the wave's
                    target count has spawned
  WAVE_COMPLETE  -- ``complete_delay`` pause, then the wave index advances
  VICTORY        -- terminal

Transition logic lives in the pure function ``next_wave_state()`` so it can
be tested without timing.  ``WaveScheduler.tick()`` accumulates timers,
feeds a ``WaveInputs`` snapshot through it and performs the side effects
of entering each state.

WAVE_ACTIVE only completes when every enemy of the wave has spawned AND
none is still alive; a wave is never declared clear with enemies in play.

Target count per wave grows linearly: ``base + 2 * (wave - 1)``.
Archetypes are drawn from ``WAVE_ARCHETYPE_TABLE``, a step function of
the wave index.
"""

from __future__ import annotations

import enum
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from .difficulty import JourneyDifficulty
from .entities import ENEMY_ARCHETYPES
from .vector import Vec2

if TYPE_CHECKING:
    from convoy.comms.event_bus import EventBus

    from .entities import Enemy
    from .pool import EntityPool
    from .stats import StatsTracker

# Spawn points sit this far outside the canvas
_SPAWN_MARGIN = 50.0


class WaveState(str, enum.Enum):
    PREPARING = "PREPARING"
    WAVE_ACTIVE = "WAVE_ACTIVE"
    WAVE_COMPLETE = "WAVE_COMPLETE"
    VICTORY = "VICTORY"


@dataclass(frozen=True)
class WaveInputs:
    """Everything the transition function is allowed to look at."""

    timer: float
    spawned: int
    target: int
    active_enemies: int
    wave_index: int
    max_waves: int
    preparation_duration: float
    complete_delay: float


def next_wave_state(state: WaveState, inputs: WaveInputs) -> WaveState:
    """Pure transition function.  Returns *state* when nothing changes."""
    if state == WaveState.PREPARING:
        if inputs.timer >= inputs.preparation_duration:
            return WaveState.WAVE_ACTIVE
        return state

    if state == WaveState.WAVE_ACTIVE:
        if inputs.spawned >= inputs.target and inputs.active_enemies == 0:
            return WaveState.WAVE_COMPLETE
        return state

    if state == WaveState.WAVE_COMPLETE:
        if inputs.timer >= inputs.complete_delay:
            if inputs.wave_index + 1 > inputs.max_waves:
                return WaveState.VICTORY
            return WaveState.PREPARING
        return state

    return WaveState.VICTORY


def target_for_wave(wave: int, base: int = 10) -> int:
    """Enemies to spawn in *wave* (1-based)."""
    return base + 2 * (max(1, wave) - 1)


# (first wave the row applies to, [(archetype, weight), ...]), ascending
WAVE_ARCHETYPE_TABLE: list[tuple[int, list[tuple[str, int]]]] = [
    (1, [("basic_grunt", 100)]),
    (3, [("basic_grunt", 70), ("fast_runner", 30)]),
    (5, [("basic_grunt", 50), ("fast_runner", 30), ("heavy_tank", 20)]),
]


def archetype_weights(wave: int) -> list[tuple[str, int]]:
    """The weighted archetype mix in effect for *wave*."""
    weights = WAVE_ARCHETYPE_TABLE[0][1]
    for first_wave, row in WAVE_ARCHETYPE_TABLE:
        if wave >= first_wave:
            weights = row
    return weights


def choose_archetype(wave: int, rng: random.Random | None = None) -> str:
    rng = rng or random
    weights = archetype_weights(wave)
    roll = rng.random() * sum(weight for _, weight in weights)
    for enemy_type, weight in weights:
        roll -= weight
        if roll < 0:
            return enemy_type
    return weights[-1][0]


class WaveScheduler:
    """Drives waves and owns enemy spawning through the enemy pool."""

    def __init__(
        self,
        enemy_pool: EntityPool[Enemy],
        difficulty: JourneyDifficulty | None = None,
        event_bus: EventBus | None = None,
        stats: StatsTracker | None = None,
        rng: random.Random | None = None,
        canvas_size: tuple[float, float] | None = None,
        preparation_duration: float | None = None,
        spawn_interval: float | None = None,
        complete_delay: float | None = None,
        max_waves: int | None = None,
        base_enemies: int | None = None,
    ) -> None:
        from convoy.config import settings

        self.enemy_pool = enemy_pool
        self.difficulty = difficulty if difficulty is not None else JourneyDifficulty()
        self._event_bus = event_bus
        self._stats = stats
        self._rng = rng or random.Random()

        if canvas_size is None:
            canvas_size = (settings.canvas_width, settings.canvas_height)
        self.canvas_size = canvas_size
        self.preparation_duration = (
            preparation_duration if preparation_duration is not None
            else settings.preparation_duration
        )
        self.spawn_interval = (
            spawn_interval if spawn_interval is not None else settings.spawn_interval
        )
        self.complete_delay = (
            complete_delay if complete_delay is not None else settings.wave_complete_delay
        )
        self.max_waves = max_waves if max_waves is not None else settings.max_waves
        self.base_enemies = (
            base_enemies if base_enemies is not None else settings.base_enemies_per_wave
        )

        self.reset()

    def reset(self) -> None:
        self.state = WaveState.PREPARING
        self.wave = 1
        self.timer = 0.0
        self.spawn_timer = 0.0
        self.spawned = 0
        self.target = target_for_wave(self.wave, self.base_enemies)
        self._wave_elapsed = 0.0

    @property
    def is_victory(self) -> bool:
        return self.state == WaveState.VICTORY

    # -- Tick ----------------------------------------------------------------

    def tick(self, dt: float, goal: Vec2 | None = None) -> WaveState:
        """Advance timers, spawn, move enemies toward *goal*, transition."""
        if self.state == WaveState.VICTORY:
            return self.state

        self.timer += dt
        if self.state == WaveState.WAVE_ACTIVE:
            self._wave_elapsed += dt
            self.spawn_timer += dt
            if self.spawn_timer >= self.spawn_interval and self.spawned < self.target:
                self.spawn_timer = 0.0
                if self.spawn_enemy() is not None:
                    self.spawned += 1

        for enemy in self.enemy_pool.active_instances():
            enemy.update(dt, goal)

        new_state = next_wave_state(self.state, self._inputs())
        if new_state != self.state:
            self._transition(new_state)
        return self.state

    def _inputs(self) -> WaveInputs:
        return WaveInputs(
            timer=self.timer,
            spawned=self.spawned,
            target=self.target,
            active_enemies=self.enemy_pool.active_count,
            wave_index=self.wave,
            max_waves=self.max_waves,
            preparation_duration=self.preparation_duration,
            complete_delay=self.complete_delay,
        )

    def _transition(self, new_state: WaveState) -> None:
        old_state = self.state
        self.state = new_state
        self.timer = 0.0

        if new_state == WaveState.WAVE_ACTIVE:
            self.spawned = 0
            self.spawn_timer = 0.0
            self.target = target_for_wave(self.wave, self.base_enemies)
            self._wave_elapsed = 0.0
            if self._stats is not None:
                self._stats.on_wave_start(self.wave, self.target)
        elif new_state == WaveState.WAVE_COMPLETE:
            if self._stats is not None:
                self._stats.on_wave_end(self._wave_elapsed)
        elif new_state == WaveState.PREPARING:
            self.wave += 1
            self.spawned = 0
            self.target = target_for_wave(self.wave, self.base_enemies)

        logger.info(f"Wave {self.wave}: {old_state.value} -> {new_state.value}")
        if self._event_bus is not None:
            self._event_bus.publish("wave_state_changed", {
                "from": old_state.value,
                "to": new_state.value,
                "wave": self.wave,
                "max_waves": self.max_waves,
            })
            if new_state == WaveState.VICTORY:
                self._event_bus.publish("victory", {"waves": self.max_waves})

    # -- Spawning ------------------------------------------------------------

    def spawn_enemy(
        self, enemy_type: str | None = None, position: Vec2 | None = None
    ) -> Enemy | None:
        """Acquire one enemy from the pool.  None if the archetype is unknown."""
        if enemy_type is None:
            enemy_type = choose_archetype(self.wave, self._rng)
        archetype = ENEMY_ARCHETYPES.get(enemy_type)
        if archetype is None:
            logger.warning(f"Unknown enemy archetype {enemy_type!r}, spawn skipped")
            return None

        stats = dict(archetype)
        stats["max_hp"] = stats["hp"]
        stats = self.difficulty.scale_stats(stats)
        if position is None:
            position = self._random_edge_position()

        enemy = self.enemy_pool.acquire({
            "enemy_type": enemy_type,
            "position": position,
            **stats,
        })
        if self._stats is not None:
            self._stats.on_enemy_spawned()

        logger.debug(f"Spawned {enemy_type} at ({position[0]:.0f}, {position[1]:.0f})")
        if self._event_bus is not None:
            self._event_bus.publish("enemy_spawned", enemy.to_dict())
        return enemy

    def _random_edge_position(self) -> Vec2:
        """Random point just beyond one of the four canvas edges."""
        width, height = self.canvas_size
        edge = self._rng.randint(0, 3)
        if edge == 0:  # top
            return (self._rng.uniform(0, width), -_SPAWN_MARGIN)
        elif edge == 1:  # right
            return (width + _SPAWN_MARGIN, self._rng.uniform(0, height))
        elif edge == 2:  # bottom
            return (self._rng.uniform(0, width), height + _SPAWN_MARGIN)
        else:  # left
            return (-_SPAWN_MARGIN, self._rng.uniform(0, height))

    # -- Status --------------------------------------------------------------

    def get_status(self) -> dict:
        if self.state == WaveState.PREPARING:
            remaining = max(0.0, self.preparation_duration - self.timer)
        elif self.state == WaveState.WAVE_COMPLETE:
            remaining = max(0.0, self.complete_delay - self.timer)
        else:
            remaining = 0.0
        return {
            "wave": self.wave,
            "max_waves": self.max_waves,
            "state": self.state.value,
            "time_remaining": round(remaining, 2),
            "spawned": self.spawned,
            "target": self.target,
            "remaining_to_spawn": max(0, self.target - self.spawned),
            "active_enemies": self.enemy_pool.active_count,
        }
