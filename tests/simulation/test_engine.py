# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Tests for SimulationEngine — tick ordering and end-to-end behaviour."""

from __future__ import annotations

import random

import pytest

from convoy.config import Settings
from convoy.simulation.components import create_component
from convoy.simulation.engine import SimulationEngine, clamp_delta
from convoy.simulation.ledger import ResourceLedger
from convoy.simulation.waves import WaveState

pytestmark = pytest.mark.unit


@pytest.fixture
def engine(test_settings, event_bus) -> SimulationEngine:
    return SimulationEngine(event_bus=event_bus, config=test_settings, rng=random.Random(3))


def _enemy_at(engine: SimulationEngine, x: float, y: float, **overrides):
    enemy = engine.waves.spawn_enemy("basic_grunt", position=(x, y))
    for key, value in overrides.items():
        setattr(enemy, key, value)
    return enemy


class TestClampDelta:
    def test_clamps_long_frames(self):
        assert clamp_delta(0.5) == 0.1
        assert clamp_delta(0.5, max_dt=0.2) == 0.2

    def test_passes_short_frames(self):
        assert clamp_delta(0.016) == 0.016

    def test_negative_becomes_zero(self):
        assert clamp_delta(-1.0) == 0.0


class TestConstruction:
    def test_wires_config(self, engine):
        assert engine.grid.size == 4
        assert engine.grid.cell_size == 80.0
        assert engine.waves.state == WaveState.PREPARING
        assert engine.ledger.to_dict() == {"red": 100, "blue": 50, "gold": 0}
        assert len(engine.projectile_pool) == 200
        assert len(engine.enemy_pool) == 100

    def test_custom_config(self):
        config = Settings(_env_file=None, grid_size=6, max_waves=3, initial_red=7)
        engine = SimulationEngine(config=config)
        assert engine.grid.size == 6
        assert engine.waves.max_waves == 3
        assert engine.ledger.red == 7

    def test_journey_applied(self, test_settings):
        engine = SimulationEngine(config=test_settings, journey=3)
        enemy = engine.waves.spawn_enemy("basic_grunt")
        assert enemy.hp == pytest.approx(60.0)


class TestInstall:
    def test_install_applies_buffs(self, engine):
        gun = create_component("basic_gun")
        assert engine.install(gun, 1, 1)
        assert engine.install(create_component("basic_booster"), 2, 1)
        assert gun.buff_multiplier == pytest.approx(1.2)

    def test_install_beside_existing_booster(self, engine):
        engine.install(create_component("basic_booster"), 2, 1)
        gun = create_component("basic_gun")
        engine.install(gun, 1, 1)
        assert gun.buff_multiplier == pytest.approx(1.2)

    def test_install_rejected(self, engine):
        engine.install(create_component("basic_plate"), 0, 0)
        assert not engine.install(create_component("basic_plate"), 0, 0)

    def test_uninstall_booster_drops_buff(self, engine):
        gun = create_component("basic_gun")
        booster = create_component("basic_booster")
        engine.install(gun, 1, 1)
        engine.install(booster, 2, 1)
        assert engine.uninstall(booster)
        assert gun.buff_multiplier == 1.0
        assert not engine.uninstall(booster)

    def test_reinstall_after_reset_drops_old_buff(self, engine):
        gun = create_component("basic_gun")
        engine.install(gun, 0, 0)
        engine.install(create_component("basic_booster"), 1, 0)
        assert gun.buff_multiplier == pytest.approx(1.2)
        engine.reset()
        assert engine.install(gun, 3, 3)
        assert gun.buff_multiplier == 1.0

    def test_reinstall_after_grid_remove_drops_old_buff(self, engine):
        gun = create_component("basic_gun")
        engine.install(gun, 0, 0)
        engine.install(create_component("basic_booster"), 1, 0)
        engine.grid.remove(gun)
        assert engine.install(gun, 3, 3)
        assert gun.buff_multiplier == 1.0

    def test_stale_buff_does_not_speed_cooldown(self, engine):
        gun = create_component("basic_gun")
        gun.buff_multiplier = 1.4
        engine.install(gun, 3, 3)
        gun.reset_cooldown()
        engine.tick(0.1)
        assert gun.current_cooldown == pytest.approx(gun.cooldown - 0.1)


class TestTick:
    def test_tick_counts_time(self, engine):
        engine.tick(0.1)
        engine.tick(0.1)
        assert engine.tick_count == 2
        assert engine.elapsed == pytest.approx(0.2)

    def test_weapon_kills_enemy_and_earns_reward(self, engine, event_bus):
        gun = create_component("basic_gun", component_id="g1")
        engine.install(gun, 0, 0)  # centre (140, 240)
        _enemy_at(engine, 140.0, 120.0, hp=5.0)

        ledger = ResourceLedger(red=10.0)
        for _ in range(5):
            engine.tick(0.1, (0.0, 0.0), ledger)

        assert engine.enemy_pool.active_count == 0
        assert ledger.red == pytest.approx(10.0 - 1.0 + 5.0)
        assert ledger.gold == pytest.approx(1.0)
        assert "enemy_eliminated" in event_bus.topics()
        assert engine.get_stats()["summary"]["total_kills"] == 1

    def test_external_ledger_left_alone_when_omitted(self, engine):
        engine.install(create_component("basic_gun"), 0, 0)
        _enemy_at(engine, 140.0, 120.0)
        engine.tick(0.1)
        assert engine.ledger.red == 99.0

    def test_no_fire_without_red(self, engine):
        engine.install(create_component("basic_gun"), 0, 0)
        _enemy_at(engine, 140.0, 120.0)
        ledger = ResourceLedger(red=0.0)
        engine.tick(0.1, None, ledger)
        assert engine.projectile_pool.active_count == 0
        assert ledger.red == 0.0

    def test_destroyed_component_removed_and_buffs_rebuilt(self, engine, event_bus):
        gun = create_component("basic_gun")
        booster = create_component("basic_booster", component_id="b1")
        engine.install(gun, 1, 1)
        engine.install(booster, 2, 1)  # centre (300, 320)
        assert gun.buff_multiplier == pytest.approx(1.2)

        # Enemy parked on the booster, hitting hard enough to kill it
        _enemy_at(engine, 330.0, 320.0, damage=100.0, move_speed=0.0)
        engine.tick(0.1, (0.0, 0.0), ResourceLedger())

        assert engine.grid.get_component("b1") is None
        assert engine.grid.component_at(2, 1) is None
        assert gun.buff_multiplier == 1.0
        assert "component_destroyed" in event_bus.topics()
        assert all(c["component_id"] != "b1" for c in engine.get_components())

    def test_wave_runs_on_engine_clock(self, engine, event_bus):
        for _ in range(81):
            engine.tick(0.1)
        assert engine.waves.state == WaveState.WAVE_ACTIVE
        assert "wave_state_changed" in event_bus.topics()

    def test_cursor_remembered(self, engine):
        engine.tick(0.1, (500.0, 600.0))
        engine.tick(0.1)
        assert engine.cursor == (500.0, 600.0)


class TestTickOrder:
    def test_enemy_killed_by_projectile_does_not_strike(self, engine):
        gun = create_component("basic_gun")
        engine.install(gun, 0, 0)  # centre (140, 240)
        # Within melee reach of the gun, one shot from death
        _enemy_at(engine, 140.0, 270.0, hp=5.0, move_speed=0.0)

        engine.tick(0.1)

        summary = engine.get_stats()["summary"]
        assert summary["total_kills"] == 1
        assert summary["melee_attacks"] == 0
        assert gun.hp == gun.max_hp

    def test_surviving_enemy_strikes_after_hit(self, engine):
        gun = create_component("basic_gun")
        engine.install(gun, 0, 0)
        _enemy_at(engine, 140.0, 270.0, hp=1000.0, move_speed=0.0)

        engine.tick(0.1)

        summary = engine.get_stats()["summary"]
        assert summary["total_hits"] == 1
        assert summary["melee_attacks"] == 1
        assert gun.hp == pytest.approx(gun.max_hp - 10.0)

    def test_enemy_spawned_this_tick_is_targeted(self, event_bus):
        config = Settings(_env_file=None, canvas_width=300.0, canvas_height=300.0)
        engine = SimulationEngine(event_bus=event_bus, config=config, rng=random.Random(3))
        cannon = create_component("heavy_cannon", component_id="c1")
        engine.install(cannon, 0, 0)  # centre (140, 240), reaches every spawn edge
        engine.waves.state = WaveState.WAVE_ACTIVE
        engine.waves.spawn_timer = engine.waves.spawn_interval

        engine.tick(0.1)

        assert len(event_bus.of("enemy_spawned")) == 1
        (projectile,) = engine.projectile_pool.active_instances()
        assert projectile.source_id == "c1"
        assert engine.get_stats()["summary"]["shots_fired"] == 1

    def test_game_state_reports_ledger_in_use(self, engine):
        ledger = ResourceLedger(red=42.0)
        engine.tick(0.1, None, ledger)
        assert engine.get_game_state()["resources"]["red"] == 42
        engine.reset()
        assert engine.get_game_state()["resources"]["red"] == 100


class TestProjections:
    def test_game_state_shape(self, engine):
        engine.install(create_component("core_main"), 1, 1)
        state = engine.get_game_state()
        for key in ("tick", "elapsed", "journey", "resources", "wave", "grid",
                    "enemies", "projectiles", "stats", "cursor"):
            assert key in state
        assert state["wave"]["state"] == "PREPARING"
        assert len(state["grid"]["components"]) == 1

    def test_enemy_and_projectile_lists(self, engine):
        engine.install(create_component("basic_gun"), 0, 0)
        _enemy_at(engine, 140.0, 0.0)
        engine.tick(0.1)
        assert len(engine.get_enemies()) == 1
        assert len(engine.get_projectiles()) == 1
        assert engine.get_wave_status()["active_enemies"] == 1


class TestReset:
    def test_reset_restores_everything(self, engine):
        engine.install(create_component("basic_gun"), 0, 0)
        _enemy_at(engine, 140.0, 120.0)
        for _ in range(3):
            engine.tick(0.1)
        engine.reset()
        assert engine.enemy_pool.active_count == 0
        assert engine.projectile_pool.active_count == 0
        assert engine.grid.components == []
        assert engine.ledger.to_dict() == {"red": 100, "blue": 50, "gold": 0}
        assert engine.tick_count == 0
        assert engine.get_stats()["summary"]["shots_fired"] == 0

    def test_reset_keeping_grid(self, engine):
        gun = create_component("basic_gun")
        engine.install(gun, 0, 0)
        engine.reset(clear_grid=False)
        assert engine.grid.components == [gun]
