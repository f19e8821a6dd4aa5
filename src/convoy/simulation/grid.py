# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""GridPlacementEngine -- occupancy grid for polyomino components.

Architecture
------------
The grid is an N x N array (``cells[row][col]``) of optional back
references to the Component covering that cell, plus a flat list of
placed components for fast iteration.

Invariant: every cell covered by a placed component's shape points back
to that component, and no cell is referenced by two components.

Placement is all-or-nothing: ``place()`` re-runs ``can_place()`` and
mutates nothing on failure.  Rejections are normal play (a drag that
doesn't fit), so they are booleans, never exceptions.

Coordinate convention:
    Grid space uses (col, row).  Pixel space uses (x, y) with the grid's
    top-left corner at (origin_x, origin_y) and cells ``cell_size`` wide.
"""

from __future__ import annotations

import math
from typing import Iterable

from loguru import logger

from .components import Component, ComponentKind
from .vector import Vec2


class GridPlacementEngine:
    """Owns cell occupancy and the flat list of placed components."""

    def __init__(
        self,
        size: int | None = None,
        cell_size: float | None = None,
        origin: Vec2 | None = None,
    ) -> None:
        from convoy.config import settings

        self.size = size if size is not None else settings.grid_size
        self.cell_size = cell_size if cell_size is not None else settings.cell_size_px
        if origin is None:
            origin = (settings.grid_origin_x_px, settings.grid_origin_y_px)
        self.origin: Vec2 = (float(origin[0]), float(origin[1]))

        if self.size <= 0:
            raise ValueError(f"Grid size must be positive, got {self.size}")
        if self.cell_size <= 0:
            raise ValueError(f"Cell size must be positive, got {self.cell_size}")

        self._cells: list[list[Component | None]] = [
            [None] * self.size for _ in range(self.size)
        ]
        self._components: list[Component] = []

        logger.info(f"Grid initialized: {self.size}x{self.size}, cell {self.cell_size}px")

    # -- Coordinates ---------------------------------------------------------

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.size and 0 <= row < self.size

    def anchor_to_center_pixel(self, col: int, row: int) -> Vec2:
        half = self.cell_size / 2
        return (
            self.origin[0] + col * self.cell_size + half,
            self.origin[1] + row * self.cell_size + half,
        )

    def anchor_to_top_left_pixel(self, col: int, row: int) -> Vec2:
        return (
            self.origin[0] + col * self.cell_size,
            self.origin[1] + row * self.cell_size,
        )

    def screen_to_grid(self, x: float, y: float) -> tuple[int, int]:
        """Pixel -> (col, row).  May be out of bounds; check ``in_bounds``."""
        col = math.floor((x - self.origin[0]) / self.cell_size)
        row = math.floor((y - self.origin[1]) / self.cell_size)
        return (col, row)

    def component_center(self, component: Component) -> Vec2 | None:
        """Pixel centre of the component's anchor cell (None if unplaced)."""
        if component.anchor is None:
            return None
        return self.anchor_to_center_pixel(*component.anchor)

    def grid_center(self) -> Vec2:
        extent = self.size * self.cell_size
        return (self.origin[0] + extent / 2, self.origin[1] + extent / 2)

    # -- Placement -----------------------------------------------------------

    def can_place(self, shape: Iterable[tuple[int, int]], col: int, row: int) -> bool:
        """True iff every translated cell is in bounds and empty."""
        cells = [(col + dc, row + dr) for dc, dr in shape]
        if not cells:
            return False
        for c, r in cells:
            if not self.in_bounds(c, r):
                return False
            if self._cells[r][c] is not None:
                return False
        return True

    def place(self, component: Component, col: int, row: int) -> bool:
        """Commit *component* at anchor (col, row).  False = nothing changed."""
        if any(existing is component for existing in self._components):
            return False
        if not self.can_place(component.shape, col, row):
            return False

        component.anchor = (col, row)
        for c, r in component.cells():
            self._cells[r][c] = component
        self._components.append(component)
        return True

    def remove(self, component: Component) -> bool:
        """Take *component* off the grid.  False if it was not placed here."""
        index = next(
            (i for i, existing in enumerate(self._components) if existing is component),
            None,
        )
        if index is None:
            return False

        for c, r in component.cells():
            # A later placement may have reused the cell
            if self.in_bounds(c, r) and self._cells[r][c] is component:
                self._cells[r][c] = None
        del self._components[index]
        component.anchor = None
        component.buff_multiplier = 1.0
        return True

    def clear(self) -> None:
        """Empty the grid.  Detached components lose their position and buff."""
        for component in self._components:
            component.anchor = None
            component.buff_multiplier = 1.0
        self._cells = [[None] * self.size for _ in range(self.size)]
        self._components = []

    # -- Queries -------------------------------------------------------------

    def component_at(self, col: int, row: int) -> Component | None:
        if not self.in_bounds(col, row):
            return None
        return self._cells[row][col]

    def components_of_kind(self, kind: ComponentKind) -> list[Component]:
        return [c for c in self._components if c.kind == kind]

    @property
    def components(self) -> list[Component]:
        return list(self._components)

    def living_components(self) -> list[Component]:
        return [c for c in self._components if not c.is_destroyed()]

    def get_component(self, component_id: str) -> Component | None:
        return next(
            (c for c in self._components if c.component_id == component_id), None
        )

    def to_telemetry(self) -> dict:
        return {
            "size": self.size,
            "cell_size": self.cell_size,
            "origin": {"x": self.origin[0], "y": self.origin[1]},
            "components": [
                c.to_dict() for c in self._components if not c.is_destroyed()
            ],
        }
