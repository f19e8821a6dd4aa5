# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""SimulationEngine -- single synchronous tick entry point for the core.

Architecture
------------
The engine wires the subsystems together and drives them in a fixed order
on every ``tick(dt, cursor, ledger)``:

  1. WaveScheduler    -- timers, spawning, enemy movement toward the grid
  2. Weapons          -- cooldown recovery (buffed), targeting, firing
  3. Projectiles      -- movement and off-screen culling
  4. Hits             -- projectile/enemy collisions, kills and rewards
  5. Melee            -- enemies strike the nearest living component
  6. Cleanup          -- destroyed components leave the grid, buffs rebuilt

The order never changes; buff, cooldown and collision interactions are
reproducible because of it.

The engine has no thread, no pause state and performs no delta clamping.
Callers clamp with ``clamp_delta()`` and pause by not calling ``tick()``.

The resource ledger is owned by the caller and passed by reference.  When
``ledger`` is omitted the engine's own session ledger is used, which is
what the HTTP layer and the headless runner rely on.  Projections report
whichever ledger the most recent tick spent from.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from loguru import logger

from .buffs import BuffPropagator
from .combat import CombatResolver
from .components import Component
from .difficulty import JourneyDifficulty
from .entities import Enemy, Projectile
from .grid import GridPlacementEngine
from .ledger import ResourceLedger
from .pool import EntityPool
from .stats import StatsTracker
from .vector import Vec2
from .waves import WaveScheduler

if TYPE_CHECKING:
    from convoy.comms.event_bus import EventBus
    from convoy.config import Settings


def clamp_delta(dt: float, max_dt: float = 0.1) -> float:
    """Clamp a frame delta to ``[0, max_dt]`` to bound per-tick movement."""
    return min(max(dt, 0.0), max_dt)


class SimulationEngine:
    """Owns the grid, pools and combat systems; advances them per tick."""

    def __init__(
        self,
        event_bus: EventBus | None = None,
        config: Settings | None = None,
        journey: int = 1,
        rng: random.Random | None = None,
        ledger: ResourceLedger | None = None,
    ) -> None:
        if config is None:
            from convoy.config import settings as config
        self.config = config
        self._event_bus = event_bus

        self.grid = GridPlacementEngine(
            size=config.grid_size,
            cell_size=config.cell_size_px,
            origin=(config.grid_origin_x_px, config.grid_origin_y_px),
        )
        self.buffs = BuffPropagator(config.buff_per_booster)
        self.projectile_pool: EntityPool[Projectile] = EntityPool(
            Projectile, config.projectile_pool_size
        )
        self.enemy_pool: EntityPool[Enemy] = EntityPool(Enemy, config.enemy_pool_size)
        self.stats = StatsTracker()
        self.difficulty = JourneyDifficulty(journey, config.journey_difficulty_step)

        self.combat = CombatResolver(
            self.grid,
            self.projectile_pool,
            self.enemy_pool,
            event_bus=event_bus,
            stats=self.stats,
            projectile_speed=config.projectile_speed,
            cursor_radius=config.cursor_radius_px,
        )
        self.waves = WaveScheduler(
            self.enemy_pool,
            difficulty=self.difficulty,
            event_bus=event_bus,
            stats=self.stats,
            rng=rng,
            canvas_size=(config.canvas_width, config.canvas_height),
            preparation_duration=config.preparation_duration,
            spawn_interval=config.spawn_interval,
            complete_delay=config.wave_complete_delay,
            max_waves=config.max_waves,
            base_enemies=config.base_enemies_per_wave,
        )

        self.ledger = ledger if ledger is not None else ResourceLedger.starting(config)
        # Ledger the last tick spent from
        self.active_ledger = self.ledger
        self.cursor: Vec2 = self.grid.grid_center()
        self.tick_count = 0
        self.elapsed = 0.0

        logger.info(f"SimulationEngine ready (journey {self.difficulty.journey})")

    @property
    def event_bus(self) -> EventBus | None:
        return self._event_bus

    # -- Tick ----------------------------------------------------------------

    def tick(
        self,
        dt: float,
        cursor: Vec2 | None = None,
        ledger: ResourceLedger | None = None,
    ) -> None:
        """Advance the whole simulation by *dt* seconds."""
        if cursor is not None:
            self.cursor = cursor
        if ledger is None:
            ledger = self.ledger
        self.active_ledger = ledger

        self.waves.tick(dt, self.grid.grid_center())

        enemies = self.enemy_pool.active_instances()
        self.combat.tick_weapons(dt, enemies, self.cursor, ledger)

        self.combat.advance_projectiles(dt, self.config.canvas_width, self.config.canvas_height)
        self.combat.resolve_projectile_hits(ledger)

        destroyed = self.combat.resolve_melee(self.grid.components)
        for component in destroyed:
            self._remove_destroyed(component)

        self.tick_count += 1
        self.elapsed += dt

    def _remove_destroyed(self, component: Component) -> None:
        if self.grid.remove(component):
            self.buffs.on_component_removed(self.grid, component)

    # -- Loadout -------------------------------------------------------------

    def install(self, component: Component, col: int, row: int) -> bool:
        """Place *component* and rebuild buffs.  False if it does not fit."""
        if not self.grid.place(component, col, row):
            return False
        self.buffs.on_component_added(self.grid, component)
        return True

    def uninstall(self, component: Component) -> bool:
        if not self.grid.remove(component):
            return False
        self.buffs.on_component_removed(self.grid, component)
        return True

    # -- Projections ---------------------------------------------------------

    def get_components(self) -> list[dict]:
        return [c.to_dict() for c in self.grid.living_components()]

    def get_enemies(self) -> list[dict]:
        return [e.to_dict() for e in self.enemy_pool.active_instances()]

    def get_projectiles(self) -> list[dict]:
        return [p.to_dict() for p in self.projectile_pool.active_instances()]

    def get_wave_status(self) -> dict:
        return self.waves.get_status()

    def get_stats(self) -> dict:
        return self.stats.to_dict()

    def get_game_state(self) -> dict:
        return {
            "tick": self.tick_count,
            "elapsed": round(self.elapsed, 2),
            "journey": self.difficulty.journey,
            "difficulty": round(self.difficulty.multiplier, 4),
            "cursor": {"x": self.cursor[0], "y": self.cursor[1]},
            "resources": self.active_ledger.to_dict(),
            "wave": self.get_wave_status(),
            "grid": self.grid.to_telemetry(),
            "enemies": self.get_enemies(),
            "projectiles": self.get_projectiles(),
            "stats": self.stats.get_summary(),
        }

    # -- Lifecycle -----------------------------------------------------------

    def reset(self, clear_grid: bool = True) -> None:
        """Start over: pools emptied, waves and stats reset, ledger refilled."""
        self.enemy_pool.clear()
        self.projectile_pool.clear()
        self.waves.reset()
        self.stats.reset()
        if clear_grid:
            self.grid.clear()
        self.buffs.recompute(self.grid)

        fresh = ResourceLedger.starting(self.config)
        self.ledger.red, self.ledger.blue, self.ledger.gold = fresh.red, fresh.blue, fresh.gold
        self.active_ledger = self.ledger
        self.cursor = self.grid.grid_center()
        self.tick_count = 0
        self.elapsed = 0.0
        logger.info("Simulation reset")
