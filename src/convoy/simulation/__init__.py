# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Simulation subsystem — grid, buffs, pools, combat, waves."""
from .buffs import BuffPropagator
from .combat import CombatResolver, collides
from .components import (
    COMPONENT_TEMPLATES,
    QUALITY_MULTIPLIERS,
    Component,
    ComponentKind,
    create_component,
)
from .difficulty import JourneyDifficulty
from .engine import SimulationEngine, clamp_delta
from .entities import ENEMY_ARCHETYPES, Enemy, Projectile
from .grid import GridPlacementEngine
from .ledger import ResourceLedger
from .pool import EntityPool
from .stats import StatsTracker
from .targeting import TargetPattern, select_target
from .waves import (
    WAVE_ARCHETYPE_TABLE,
    WaveInputs,
    WaveScheduler,
    WaveState,
    next_wave_state,
    target_for_wave,
)

__all__ = [
    "BuffPropagator",
    "COMPONENT_TEMPLATES",
    "CombatResolver",
    "Component",
    "ComponentKind",
    "ENEMY_ARCHETYPES",
    "Enemy",
    "EntityPool",
    "GridPlacementEngine",
    "JourneyDifficulty",
    "Projectile",
    "QUALITY_MULTIPLIERS",
    "ResourceLedger",
    "SimulationEngine",
    "StatsTracker",
    "TargetPattern",
    "WAVE_ARCHETYPE_TABLE",
    "WaveInputs",
    "WaveScheduler",
    "WaveState",
    "clamp_delta",
    "collides",
    "create_component",
    "next_wave_state",
    "select_target",
    "target_for_wave",
]
