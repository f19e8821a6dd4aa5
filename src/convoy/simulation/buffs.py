# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""BuffPropagator -- adjacency buffs from BOOSTER components.

Every non-booster component orthogonally beside a booster's cells gains
``buff_per_booster`` (+0.20 by default) on its buff multiplier.  Boosters
stack additively, once per booster: two adjacent boosters give 1.4.

The multiplier scales cooldown *recovery*, not damage: elapsed time is
multiplied by it when a weapon's cooldown decays.

``recompute()`` is a full rebuild rather than an incremental diff.  At
grid scale (16 cells) that is trivially cheap and never drifts.  It runs
after every structural change, whatever kind of component was placed or
removed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .components import Component, ComponentKind

if TYPE_CHECKING:
    from .grid import GridPlacementEngine

_NEIGHBOURS = ((0, -1), (0, 1), (-1, 0), (1, 0))


class BuffPropagator:
    """Derives every component's buff multiplier from booster adjacency."""

    def __init__(self, buff_per_booster: float | None = None) -> None:
        if buff_per_booster is None:
            from convoy.config import settings
            buff_per_booster = settings.buff_per_booster
        self.buff_per_booster = buff_per_booster

    def recompute(self, grid: GridPlacementEngine) -> None:
        components = grid.components
        for component in components:
            component.buff_multiplier = 1.0

        for booster in components:
            if booster.kind != ComponentKind.BOOSTER or booster.is_destroyed():
                continue
            for target in self._buffed_by(grid, booster):
                target.buff_multiplier += self.buff_per_booster

    def adjacent_booster_count(
        self, grid: GridPlacementEngine, component: Component
    ) -> int:
        """Number of distinct live boosters touching *component*."""
        boosters: list[Component] = []
        for neighbour in self._neighbours(grid, component):
            if (
                neighbour.kind == ComponentKind.BOOSTER
                and not neighbour.is_destroyed()
                and not any(b is neighbour for b in boosters)
            ):
                boosters.append(neighbour)
        return len(boosters)

    def describe(self, component: Component) -> str:
        """HUD label such as ``"+20%"``; empty when unbuffed."""
        if component.is_destroyed() or component.buff_multiplier <= 1.0:
            return ""
        return f"+{round((component.buff_multiplier - 1.0) * 100)}%"

    def on_component_added(self, grid: GridPlacementEngine, component: Component) -> None:
        self.recompute(grid)

    def on_component_removed(self, grid: GridPlacementEngine, component: Component) -> None:
        # Off the grid means no neighbours
        component.buff_multiplier = 1.0
        self.recompute(grid)

    # -- Internal ------------------------------------------------------------

    def _neighbours(
        self, grid: GridPlacementEngine, component: Component
    ) -> list[Component]:
        """Components (other than *component*) beside any of its cells."""
        found: list[Component] = []
        for col, row in component.cells():
            for dc, dr in _NEIGHBOURS:
                other = grid.component_at(col + dc, row + dr)
                if other is None or other is component:
                    continue
                if not any(f is other for f in found):
                    found.append(other)
        return found

    def _buffed_by(
        self, grid: GridPlacementEngine, booster: Component
    ) -> list[Component]:
        return [
            c for c in self._neighbours(grid, booster)
            if c.kind != ComponentKind.BOOSTER and not c.is_destroyed()
        ]
