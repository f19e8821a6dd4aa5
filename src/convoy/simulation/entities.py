# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Pooled entities -- enemies and projectiles.

Both are mutable dataclasses managed by an EntityPool: ``init(payload)``
when acquired, ``reset()`` when released.  An instance with
``active=False`` is inert and must not be read by simulation logic.

Coordinates are pixels; velocities are pixels per second.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from . import vector
from .vector import Vec2

# Archetype stat blocks, keyed by enemy_type
ENEMY_ARCHETYPES: dict[str, dict[str, float]] = {
    "basic_grunt": {
        "hp": 50.0, "damage": 10.0, "move_speed": 30.0,
        "reward_red": 5.0, "reward_gold": 1.0, "radius": 15.0,
    },
    "fast_runner": {
        "hp": 30.0, "damage": 5.0, "move_speed": 60.0,
        "reward_red": 3.0, "reward_gold": 2.0, "radius": 12.0,
    },
    "heavy_tank": {
        "hp": 150.0, "damage": 20.0, "move_speed": 15.0,
        "reward_red": 10.0, "reward_gold": 5.0, "radius": 20.0,
    },
}

DEFAULT_ENEMY_RADIUS = 15.0

# Enemies stop this close to their goal
_ARRIVAL_DISTANCE = 10.0

# Projectiles are culled this far outside the canvas
_OUT_OF_BOUNDS_MARGIN = 50.0


@dataclass(eq=False)
class Enemy:
    """A hostile unit walking toward the vehicle grid."""

    active: bool = False
    enemy_type: str = "basic_grunt"
    position: Vec2 = (0.0, 0.0)
    velocity: Vec2 = (0.0, 0.0)
    hp: float = 50.0
    max_hp: float = 50.0
    damage: float = 10.0
    move_speed: float = 30.0
    reward_red: float = 5.0
    reward_gold: float = 1.0
    radius: float = DEFAULT_ENEMY_RADIUS
    attack_cooldown: float = 0.0
    attack_interval: float = 1.0

    def init(self, payload: dict) -> None:
        self.active = True
        self.enemy_type = payload.get("enemy_type", "basic_grunt")
        pos = payload.get("position", (0.0, 0.0))
        self.position = (float(pos[0]), float(pos[1]))
        self.velocity = (0.0, 0.0)
        self.hp = float(payload.get("hp", 50.0))
        self.max_hp = float(payload.get("max_hp", self.hp))
        self.damage = float(payload.get("damage", 10.0))
        self.move_speed = float(payload.get("move_speed", 30.0))
        self.reward_red = float(payload.get("reward_red", 5.0))
        self.reward_gold = float(payload.get("reward_gold", 1.0))
        self.radius = float(payload.get("radius", DEFAULT_ENEMY_RADIUS))
        self.attack_interval = float(payload.get("attack_interval", 1.0))
        self.attack_cooldown = 0.0

    def reset(self) -> None:
        self.active = False
        self.position = (0.0, 0.0)
        self.velocity = (0.0, 0.0)
        self.hp = 50.0
        self.attack_cooldown = 0.0

    def update(self, dt: float, target_pos: Vec2 | None) -> None:
        """Decay the attack cooldown and walk toward *target_pos*."""
        if not self.active:
            return

        if self.attack_cooldown > 0.0:
            self.attack_cooldown = max(0.0, self.attack_cooldown - dt)

        if target_pos is None:
            return
        offset = vector.sub(target_pos, self.position)
        if vector.length(offset) > _ARRIVAL_DISTANCE:
            self.velocity = vector.scale(vector.normalize(offset), self.move_speed)
            self.position = vector.add(self.position, vector.scale(self.velocity, dt))
        else:
            self.velocity = (0.0, 0.0)

    def can_attack(self) -> bool:
        return self.attack_cooldown <= 0.0

    def attack(self) -> float:
        """Return damage dealt and restart the cooldown (0 if not ready)."""
        if not self.can_attack():
            return 0.0
        self.attack_cooldown = self.attack_interval
        return self.damage

    def take_damage(self, amount: float) -> bool:
        """Apply *amount* damage.  True if this killed the enemy."""
        self.hp -= amount
        return self.hp <= 0.0

    def to_dict(self) -> dict:
        return {
            "enemy_type": self.enemy_type,
            "position": {"x": self.position[0], "y": self.position[1]},
            "velocity": {"x": self.velocity[0], "y": self.velocity[1]},
            "hp": round(self.hp, 2),
            "max_hp": round(self.max_hp, 2),
            "damage": self.damage,
            "move_speed": self.move_speed,
            "reward_red": self.reward_red,
            "reward_gold": self.reward_gold,
            "radius": self.radius,
        }


@dataclass(eq=False)
class Projectile:
    """A shot in flight.  Straight-line motion, no homing."""

    active: bool = False
    position: Vec2 = (0.0, 0.0)
    velocity: Vec2 = (0.0, 0.0)
    damage: float = 0.0
    team: str = "player"  # "player" | "enemy"
    radius: float = 3.0
    source_id: str | None = field(default=None)

    def init(self, payload: dict) -> None:
        self.active = True
        pos = payload.get("position", (0.0, 0.0))
        vel = payload.get("velocity", (0.0, 0.0))
        self.position = (float(pos[0]), float(pos[1]))
        self.velocity = (float(vel[0]), float(vel[1]))
        self.damage = float(payload.get("damage", 10.0))
        self.team = payload.get("team", "player")
        self.radius = 3.0 if self.team == "player" else 4.0
        self.source_id = payload.get("source_id")

    def reset(self) -> None:
        self.active = False
        self.position = (0.0, 0.0)
        self.velocity = (0.0, 0.0)
        self.damage = 0.0
        self.team = "player"
        self.source_id = None

    def update(self, dt: float) -> None:
        if not self.active:
            return
        self.position = vector.add(self.position, vector.scale(self.velocity, dt))

    def is_out_of_bounds(
        self, width: float, height: float, margin: float = _OUT_OF_BOUNDS_MARGIN
    ) -> bool:
        x, y = self.position
        return x < -margin or x > width + margin or y < -margin or y > height + margin

    def to_dict(self) -> dict:
        return {
            "position": {"x": self.position[0], "y": self.position[1]},
            "velocity": {"x": self.velocity[0], "y": self.velocity[1]},
            "damage": self.damage,
            "team": self.team,
            "radius": self.radius,
            "source_id": self.source_id,
        }
