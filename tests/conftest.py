# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Root conftest — shared fixtures for the simulation tests."""

from __future__ import annotations

import queue

import pytest

from convoy.config import Settings
from convoy.simulation.entities import Enemy, Projectile
from convoy.simulation.grid import GridPlacementEngine
from convoy.simulation.ledger import ResourceLedger
from convoy.simulation.pool import EntityPool


class SimpleEventBus:
    """Minimal EventBus that records every publish for assertions."""

    def __init__(self) -> None:
        self.published: list[tuple[str, object]] = []
        self._subscribers: dict[str, list[queue.Queue]] = {}

    def publish(self, topic: str, data: object = None) -> None:
        self.published.append((topic, data))
        for q in self._subscribers.get(topic, []):
            q.put(data)

    def subscribe(self, topic: str) -> queue.Queue:
        q: queue.Queue = queue.Queue()
        self._subscribers.setdefault(topic, []).append(q)
        return q

    def topics(self) -> list[str]:
        return [topic for topic, _ in self.published]

    def of(self, topic: str) -> list[object]:
        return [data for t, data in self.published if t == topic]


@pytest.fixture
def test_settings() -> Settings:
    """Settings with defaults only (no .env, no environment leakage)."""
    return Settings(_env_file=None)


@pytest.fixture
def event_bus() -> SimpleEventBus:
    return SimpleEventBus()


@pytest.fixture
def grid() -> GridPlacementEngine:
    """4x4 grid, 80 px cells, origin (100, 200)."""
    return GridPlacementEngine(size=4, cell_size=80.0, origin=(100.0, 200.0))


@pytest.fixture
def enemy_pool() -> EntityPool[Enemy]:
    return EntityPool(Enemy)


@pytest.fixture
def projectile_pool() -> EntityPool[Projectile]:
    return EntityPool(Projectile)


@pytest.fixture
def ledger() -> ResourceLedger:
    return ResourceLedger(red=100.0, blue=50.0, gold=0.0)
