# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Unit tests for convoy/config.py — Settings defaults, env parsing, validation.

Tests the pydantic-settings model: default values, type coercion from
``CONVOY_*`` environment variables, and field constraints.
"""
from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from convoy.config import Settings


@pytest.mark.unit
class TestSettingsDefaults:
    """Default values without any environment variables."""

    def test_app_name(self):
        with patch.dict(os.environ, {}, clear=True):
            s = Settings(_env_file=None)
            assert s.app_name == "CONVOY"
            assert s.debug is False

    def test_grid_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            s = Settings(_env_file=None)
            assert s.grid_size == 4
            assert s.cell_size_px == 80.0
            assert (s.grid_origin_x_px, s.grid_origin_y_px) == (100.0, 200.0)

    def test_combat_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            s = Settings(_env_file=None)
            assert s.buff_per_booster == 0.2
            assert s.projectile_speed == 400.0
            assert s.cursor_radius_px == 100.0

    def test_wave_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            s = Settings(_env_file=None)
            assert s.preparation_duration == 8.0
            assert s.spawn_interval == 3.0
            assert s.wave_complete_delay == 2.0
            assert s.max_waves == 10
            assert s.base_enemies_per_wave == 10
            assert s.journey_difficulty_step == 0.10

    def test_tick_and_resources(self):
        with patch.dict(os.environ, {}, clear=True):
            s = Settings(_env_file=None)
            assert s.max_delta_time == 0.1
            assert (s.initial_red, s.initial_blue, s.initial_gold) == (100.0, 50.0, 0.0)


@pytest.mark.unit
class TestSettingsEnvOverride:
    """Environment variables with the CONVOY_ prefix override defaults."""

    def test_int_coercion(self):
        with patch.dict(os.environ, {"CONVOY_GRID_SIZE": "6"}, clear=True):
            s = Settings(_env_file=None)
            assert s.grid_size == 6

    def test_float_coercion(self):
        with patch.dict(os.environ, {"CONVOY_PROJECTILE_SPEED": "550.5"}, clear=True):
            s = Settings(_env_file=None)
            assert s.projectile_speed == 550.5

    def test_bool_coercion(self):
        with patch.dict(os.environ, {"CONVOY_DEBUG": "true"}, clear=True):
            s = Settings(_env_file=None)
            assert s.debug is True

    def test_unprefixed_ignored(self):
        with patch.dict(os.environ, {"GRID_SIZE": "9"}, clear=True):
            s = Settings(_env_file=None)
            assert s.grid_size == 4

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("CONVOY_MAX_WAVES=3\nUNRELATED=1\n")
        with patch.dict(os.environ, {}, clear=True):
            s = Settings(_env_file=str(env_file))
            assert s.max_waves == 3


@pytest.mark.unit
class TestSettingsValidation:
    def test_grid_size_must_be_positive(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValidationError):
                Settings(_env_file=None, grid_size=0)

    def test_cell_size_must_be_positive(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValidationError):
                Settings(_env_file=None, cell_size_px=0)
