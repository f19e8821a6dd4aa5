# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""StatsTracker -- cumulative combat statistics for the HUD and debriefs.

Architecture
------------
StatsTracker keeps three layers of counters, all updated synchronously
from the combat resolver and wave scheduler inside the tick:

Totals:
  hits, kills, damage dealt, shots fired, melee attacks received,
  damage taken by components, components destroyed.

Per-component stats (ComponentStats):
  shots fired, hits, damage dealt and kills credited to the weapon that
  fired the projectile.  Computed property: accuracy.

Per-wave stats (WaveStats):
  enemies spawned / eliminated, damage dealt / taken and duration for
  each wave.  Opened on WAVE_ACTIVE, closed on WAVE_COMPLETE.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ComponentStats:
    """Per-weapon combat statistics."""

    component_id: str
    shots_fired: int = 0
    hits: int = 0
    damage_dealt: float = 0.0
    kills: int = 0

    @property
    def accuracy(self) -> float:
        """Hit rate: hits / shots_fired.  0 if no shots fired."""
        return self.hits / self.shots_fired if self.shots_fired > 0 else 0.0

    def to_dict(self) -> dict:
        return {
            "component_id": self.component_id,
            "shots_fired": self.shots_fired,
            "hits": self.hits,
            "damage_dealt": round(self.damage_dealt, 2),
            "kills": self.kills,
            "accuracy": round(self.accuracy, 4),
        }


@dataclass
class WaveStats:
    """Per-wave aggregate statistics."""

    wave_number: int
    target_count: int
    enemies_spawned: int = 0
    enemies_eliminated: int = 0
    damage_dealt: float = 0.0
    damage_taken: float = 0.0
    components_lost: int = 0
    duration: float = 0.0

    def to_dict(self) -> dict:
        return {
            "wave_number": self.wave_number,
            "target_count": self.target_count,
            "enemies_spawned": self.enemies_spawned,
            "enemies_eliminated": self.enemies_eliminated,
            "damage_dealt": round(self.damage_dealt, 2),
            "damage_taken": round(self.damage_taken, 2),
            "components_lost": self.components_lost,
            "duration": round(self.duration, 2),
        }


class StatsTracker:
    """Tracks totals, per-weapon and per-wave statistics."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.total_hits = 0
        self.total_kills = 0
        self.total_damage = 0.0
        self.shots_fired = 0
        self.melee_attacks = 0
        self.damage_taken = 0.0
        self.components_destroyed = 0
        self._components: dict[str, ComponentStats] = {}
        self._waves: list[WaveStats] = []
        self._current_wave: WaveStats | None = None

    # -- Combat events -------------------------------------------------------

    def on_shot_fired(self, component_id: str) -> None:
        self.shots_fired += 1
        self._component(component_id).shots_fired += 1

    def on_hit(self, source_id: str | None, damage: float) -> None:
        self.total_hits += 1
        self.total_damage += damage
        if source_id is not None:
            stats = self._component(source_id)
            stats.hits += 1
            stats.damage_dealt += damage
        if self._current_wave is not None:
            self._current_wave.damage_dealt += damage

    def on_kill(self, source_id: str | None) -> None:
        self.total_kills += 1
        if source_id is not None:
            self._component(source_id).kills += 1
        if self._current_wave is not None:
            self._current_wave.enemies_eliminated += 1

    def on_melee(self, damage: float) -> None:
        self.melee_attacks += 1
        self.damage_taken += damage
        if self._current_wave is not None:
            self._current_wave.damage_taken += damage

    def on_component_destroyed(self) -> None:
        self.components_destroyed += 1
        if self._current_wave is not None:
            self._current_wave.components_lost += 1

    # -- Wave events ---------------------------------------------------------

    def on_wave_start(self, wave_number: int, target_count: int) -> None:
        self._current_wave = WaveStats(wave_number=wave_number, target_count=target_count)

    def on_enemy_spawned(self) -> None:
        if self._current_wave is not None:
            self._current_wave.enemies_spawned += 1

    def on_wave_end(self, duration: float) -> WaveStats | None:
        wave = self._current_wave
        if wave is None:
            return None
        wave.duration = duration
        self._waves.append(wave)
        self._current_wave = None
        return wave

    # -- Queries -------------------------------------------------------------

    def get_component_stats(self, component_id: str) -> ComponentStats | None:
        return self._components.get(component_id)

    @property
    def wave_history(self) -> list[WaveStats]:
        return list(self._waves)

    def get_summary(self) -> dict:
        return {
            "total_hits": self.total_hits,
            "total_kills": self.total_kills,
            "total_damage": round(self.total_damage, 2),
            "shots_fired": self.shots_fired,
            "melee_attacks": self.melee_attacks,
            "damage_taken": round(self.damage_taken, 2),
            "components_destroyed": self.components_destroyed,
        }

    def to_dict(self) -> dict:
        return {
            "summary": self.get_summary(),
            "components": [s.to_dict() for s in self._components.values()],
            "waves": [w.to_dict() for w in self._waves],
        }

    # -- Internal ------------------------------------------------------------

    def _component(self, component_id: str) -> ComponentStats:
        stats = self._components.get(component_id)
        if stats is None:
            stats = ComponentStats(component_id=component_id)
            self._components[component_id] = stats
        return stats
