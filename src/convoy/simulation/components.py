# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Components -- polyomino-shaped combat units placed on the vehicle grid.

A component covers one or more cells, expressed as ``(dcol, drow)``
offsets from its anchor cell.  Kinds:
  - CORE    -- the vehicle heart, must be protected
  - WEAPON  -- fires automatically at targets chosen by its pattern
  - ARMOR   -- high hit points, soaks melee
  - BOOSTER -- speeds up cooldown recovery of orthogonal neighbours

``buff_multiplier`` is derived state owned by BuffPropagator; nothing
else writes it.  Destruction is ``hp <= 0``.

Templates mirror the game's base catalogue; ``create_component`` applies
a quality tier on top (hp and damage scaled and floored).
"""

from __future__ import annotations

import enum
import itertools
import math
from dataclasses import dataclass, field

from .targeting import TargetPattern


class ComponentKind(str, enum.Enum):
    CORE = "CORE"
    WEAPON = "WEAPON"
    ARMOR = "ARMOR"
    BOOSTER = "BOOSTER"


@dataclass(eq=False)
class Component:
    """A placed (or placeable) grid component."""

    component_id: str
    kind: ComponentKind
    shape: list[tuple[int, int]] = field(default_factory=lambda: [(0, 0)])
    anchor: tuple[int, int] | None = None
    hp: float = 100.0
    max_hp: float = 100.0

    # Weapon stats (ignored for non-weapons)
    damage: float = 0.0
    cooldown: float = 1.0  # seconds
    weapon_range: float = 200.0  # pixels
    ammo_cost: float = 1.0  # red resource per shot
    pattern: TargetPattern = TargetPattern.NEAREST

    current_cooldown: float = 0.0
    buff_multiplier: float = 1.0

    name: str = ""
    quality: str = "common"

    def is_destroyed(self) -> bool:
        return self.hp <= 0.0

    def take_damage(self, amount: float) -> bool:
        """Apply *amount* damage, clamped at zero.  True if now destroyed."""
        self.hp = max(0.0, self.hp - amount)
        return self.is_destroyed()

    def tick_cooldown(self, dt: float) -> None:
        """Buffed recovery: elapsed time is scaled by the buff multiplier."""
        if self.current_cooldown > 0.0:
            self.current_cooldown = max(
                0.0, self.current_cooldown - dt * self.buff_multiplier
            )

    def is_cooldown_ready(self) -> bool:
        return self.current_cooldown <= 0.0

    def reset_cooldown(self) -> None:
        self.current_cooldown = self.cooldown

    @property
    def health_pct(self) -> float:
        if self.max_hp <= 0:
            return 0.0
        return self.hp / self.max_hp

    def cells(self, anchor: tuple[int, int] | None = None) -> list[tuple[int, int]]:
        """Absolute ``(col, row)`` cells covered at *anchor* (default: own)."""
        base = anchor if anchor is not None else self.anchor
        if base is None:
            return []
        col, row = base
        return [(col + dc, row + dr) for dc, dr in self.shape]

    def to_dict(self) -> dict:
        return {
            "component_id": self.component_id,
            "name": self.name,
            "kind": self.kind.value,
            "quality": self.quality,
            "shape": [list(offset) for offset in self.shape],
            "anchor": (
                {"col": self.anchor[0], "row": self.anchor[1]}
                if self.anchor is not None else None
            ),
            "hp": round(self.hp, 2),
            "max_hp": round(self.max_hp, 2),
            "damage": self.damage,
            "cooldown": self.cooldown,
            "weapon_range": self.weapon_range,
            "ammo_cost": self.ammo_cost,
            "pattern": self.pattern.value,
            "current_cooldown": round(self.current_cooldown, 3),
            "buff_multiplier": round(self.buff_multiplier, 4),
            "destroyed": self.is_destroyed(),
        }


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

COMPONENT_TEMPLATES: dict[str, dict] = {
    "core_main": {
        "name": "Core", "kind": ComponentKind.CORE,
        "shape": [(0, 0)], "hp": 500.0,
    },
    "basic_gun": {
        "name": "Basic Gun", "kind": ComponentKind.WEAPON,
        "shape": [(0, 0)], "hp": 100.0,
        "damage": 10.0, "cooldown": 0.5, "weapon_range": 300.0,
        "ammo_cost": 1.0, "pattern": TargetPattern.NEAREST,
    },
    "heavy_cannon": {
        "name": "Heavy Cannon", "kind": ComponentKind.WEAPON,
        "shape": [(0, 0), (1, 0)], "hp": 150.0,
        "damage": 50.0, "cooldown": 2.0, "weapon_range": 400.0,
        "ammo_cost": 5.0, "pattern": TargetPattern.NEAREST,
    },
    "cursor_laser": {
        "name": "Cursor Laser", "kind": ComponentKind.WEAPON,
        "shape": [(0, 0)], "hp": 80.0,
        "damage": 15.0, "cooldown": 0.3, "weapon_range": 500.0,
        "ammo_cost": 2.0, "pattern": TargetPattern.CURSOR,
    },
    "basic_plate": {
        "name": "Armor Plate", "kind": ComponentKind.ARMOR,
        "shape": [(0, 0)], "hp": 200.0,
    },
    "heavy_plate": {
        "name": "Heavy Plate", "kind": ComponentKind.ARMOR,
        "shape": [(0, 0), (0, 1)], "hp": 400.0,
    },
    "basic_booster": {
        "name": "Booster", "kind": ComponentKind.BOOSTER,
        "shape": [(0, 0)], "hp": 50.0,
    },
}

QUALITY_MULTIPLIERS: dict[str, float] = {
    "common": 1.0,
    "uncommon": 1.3,
    "rare": 1.6,
    "epic": 2.0,
}

_id_counter = itertools.count(1)


def create_component(
    template_id: str,
    quality: str = "common",
    component_id: str | None = None,
) -> Component:
    """Build a fresh Component from *template_id* at *quality*.

    Raises:
        ValueError: unknown template or quality tier.
    """
    template = COMPONENT_TEMPLATES.get(template_id)
    if template is None:
        raise ValueError(f"Unknown component template: {template_id!r}")
    multiplier = QUALITY_MULTIPLIERS.get(quality)
    if multiplier is None:
        raise ValueError(f"Unknown quality tier: {quality!r}")

    hp = float(math.floor(template["hp"] * multiplier))
    damage = float(math.floor(template.get("damage", 0.0) * multiplier))

    return Component(
        component_id=component_id or f"{template_id}_{next(_id_counter)}",
        kind=template["kind"],
        shape=list(template["shape"]),
        hp=hp,
        max_hp=hp,
        damage=damage,
        cooldown=template.get("cooldown", 1.0),
        weapon_range=template.get("weapon_range", 200.0),
        ammo_cost=template.get("ammo_cost", 1.0),
        pattern=template.get("pattern", TargetPattern.NEAREST),
        name=template["name"],
        quality=quality,
    )
