# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""CombatResolver -- weapon fire, projectile hits and enemy melee.

Architecture
------------
The resolver owns no entities.  It reads placed components from the grid
and draws projectiles / releases enemies through the shared pools.  Each
phase is a separate method so the engine controls ordering:

  tick_weapons(dt, enemies, cursor, ledger)
      Every living WEAPON recovers cooldown (scaled by its buff), then
      fires when ready, affordable and holding a target.  Firing spends
      ``ammo_cost`` red, resets the cooldown to its base value and
      launches a projectile from the anchor-cell centre.

  advance_projectiles(dt, width, height)
      Straight-line integration; projectiles leaving the canvas (plus a
      margin) go back to the pool.

  resolve_projectile_hits(ledger)
      Circle overlap test per projectile; the first enemy hit absorbs the
      projectile.  A kill credits the enemy's reward and returns it to the
      enemy pool after a snapshot is published.

  resolve_melee(components)
      Each enemy strikes its nearest living component when touching it and
      its attack cooldown has elapsed.

Events published (when an event bus is attached):
  - enemy_eliminated     -- snapshot of the enemy plus the rewards granted
  - component_destroyed  -- the component's final state
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from . import vector
from .components import Component, ComponentKind
from .stats import StatsTracker
from .targeting import select_target
from .vector import Vec2

if TYPE_CHECKING:
    from convoy.comms.event_bus import EventBus

    from .entities import Enemy, Projectile
    from .grid import GridPlacementEngine
    from .ledger import ResourceLedger
    from .pool import EntityPool


def collides(pos_a: Vec2, radius_a: float, pos_b: Vec2, radius_b: float) -> bool:
    """Circle overlap, touching included.  No square root."""
    reach = radius_a + radius_b
    return vector.distance_sq(pos_a, pos_b) <= reach * reach


class CombatResolver:
    """Resolves one tick's worth of combat between the grid and enemies."""

    def __init__(
        self,
        grid: GridPlacementEngine,
        projectile_pool: EntityPool[Projectile],
        enemy_pool: EntityPool[Enemy],
        event_bus: EventBus | None = None,
        stats: StatsTracker | None = None,
        projectile_speed: float | None = None,
        cursor_radius: float | None = None,
    ) -> None:
        from convoy.config import settings

        self.grid = grid
        self.projectile_pool = projectile_pool
        self.enemy_pool = enemy_pool
        self._event_bus = event_bus
        self.stats = stats if stats is not None else StatsTracker()
        self.projectile_speed = (
            projectile_speed if projectile_speed is not None else settings.projectile_speed
        )
        self.cursor_radius = (
            cursor_radius if cursor_radius is not None else settings.cursor_radius_px
        )

    # -- Weapons -------------------------------------------------------------

    def tick_weapons(
        self,
        dt: float,
        enemies: list[Enemy],
        cursor: Vec2,
        ledger: ResourceLedger,
    ) -> int:
        """Recover cooldowns and fire every ready weapon.  Returns shots fired."""
        shots = 0
        for weapon in self.grid.components_of_kind(ComponentKind.WEAPON):
            if weapon.is_destroyed():
                continue
            weapon.tick_cooldown(dt)
            if not weapon.is_cooldown_ready():
                continue
            # Out of ammo: weapon holds silently until red is credited
            if ledger.red < weapon.ammo_cost:
                continue

            origin = self.grid.component_center(weapon)
            if origin is None:
                continue
            target = select_target(
                weapon.pattern, origin, enemies, cursor,
                weapon.weapon_range, self.cursor_radius,
            )
            if target is None:
                continue

            self.fire(weapon, origin, target, ledger)
            shots += 1
        return shots

    def fire(
        self,
        weapon: Component,
        origin: Vec2,
        target: Vec2,
        ledger: ResourceLedger,
    ) -> Projectile:
        """Spend ammo, reset the cooldown and launch one projectile."""
        ledger.spend(weapon.ammo_cost, "red")
        weapon.reset_cooldown()

        direction = vector.normalize(vector.sub(target, origin))
        projectile = self.projectile_pool.acquire({
            "position": origin,
            "velocity": vector.scale(direction, self.projectile_speed),
            "damage": weapon.damage,
            "team": "player",
            "source_id": weapon.component_id,
        })
        self.stats.on_shot_fired(weapon.component_id)
        return projectile

    # -- Projectiles ---------------------------------------------------------

    def advance_projectiles(self, dt: float, width: float, height: float) -> int:
        """Move every projectile.  Returns the number culled off-screen."""
        culled = 0
        for projectile in self.projectile_pool.active_instances():
            projectile.update(dt)
            if projectile.is_out_of_bounds(width, height):
                self.projectile_pool.release(projectile)
                culled += 1
        return culled

    def resolve_projectile_hits(self, ledger: ResourceLedger) -> tuple[int, int]:
        """Apply projectile/enemy collisions.  Returns (hits, kills)."""
        hits = 0
        kills = 0
        for projectile in self.projectile_pool.active_instances():
            if projectile.team != "player":
                continue
            for enemy in self.enemy_pool.active_instances():
                if not enemy.active:
                    continue
                if not collides(
                    projectile.position, projectile.radius, enemy.position, enemy.radius
                ):
                    continue

                damage = projectile.damage
                source_id = projectile.source_id
                self.projectile_pool.release(projectile)
                hits += 1
                self.stats.on_hit(source_id, damage)

                if enemy.take_damage(damage):
                    self._eliminate(enemy, source_id, ledger)
                    kills += 1
                break
        return hits, kills

    def _eliminate(
        self, enemy: Enemy, source_id: str | None, ledger: ResourceLedger
    ) -> None:
        # Snapshot before release wipes the instance
        snapshot = enemy.to_dict()
        ledger.credit(red=enemy.reward_red, gold=enemy.reward_gold)
        self.enemy_pool.release(enemy)
        self.stats.on_kill(source_id)

        logger.debug(
            f"Enemy {snapshot['enemy_type']} eliminated by {source_id} "
            f"(+{snapshot['reward_red']} red, +{snapshot['reward_gold']} gold)"
        )
        if self._event_bus is not None:
            self._event_bus.publish("enemy_eliminated", {
                "enemy": snapshot,
                "source_id": source_id,
                "reward_red": snapshot["reward_red"],
                "reward_gold": snapshot["reward_gold"],
            })

    # -- Melee ---------------------------------------------------------------

    def resolve_melee(self, components: list[Component]) -> list[Component]:
        """Enemies strike adjacent components.  Returns newly destroyed ones."""
        destroyed: list[Component] = []
        reach_bonus = self.grid.cell_size / 2

        for enemy in self.enemy_pool.active_instances():
            target, d2 = self._nearest_component(enemy.position, components)
            if target is None:
                continue
            reach = enemy.radius + reach_bonus
            if d2 > reach * reach or not enemy.can_attack():
                continue

            damage = enemy.attack()
            self.stats.on_melee(damage)
            if target.take_damage(damage):
                destroyed.append(target)
                self.stats.on_component_destroyed()
                logger.debug(f"Component {target.component_id} destroyed by {enemy.enemy_type}")
                if self._event_bus is not None:
                    self._event_bus.publish("component_destroyed", target.to_dict())
        return destroyed

    def _nearest_component(
        self, position: Vec2, components: list[Component]
    ) -> tuple[Component | None, float]:
        best: Component | None = None
        best_d2 = float("inf")
        for component in components:
            if component.is_destroyed():
                continue
            center = self.grid.component_center(component)
            if center is None:
                continue
            d2 = vector.distance_sq(position, center)
            if d2 < best_d2:
                best = component
                best_d2 = d2
        return best, best_d2

    # -- Stats ---------------------------------------------------------------

    def get_stats(self) -> dict:
        return self.stats.get_summary()
