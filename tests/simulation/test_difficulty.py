# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Unit tests for JourneyDifficulty — per-journey enemy scaling."""

from __future__ import annotations

import pytest

from convoy.simulation.difficulty import JourneyDifficulty
from convoy.simulation.entities import ENEMY_ARCHETYPES

pytestmark = pytest.mark.unit


class TestMultiplier:
    def test_first_journey_is_one(self):
        assert JourneyDifficulty(1, 0.1).multiplier == 1.0

    def test_linear_growth(self):
        assert JourneyDifficulty(2, 0.1).multiplier == pytest.approx(1.1)
        assert JourneyDifficulty(5, 0.1).multiplier == pytest.approx(1.4)

    def test_speed_grows_at_half_rate(self):
        difficulty = JourneyDifficulty(5, 0.1)
        assert difficulty.speed_multiplier == pytest.approx(1.2)

    def test_journey_clamped(self):
        assert JourneyDifficulty(0, 0.1).journey == 1
        assert JourneyDifficulty(-3, 0.1).multiplier == 1.0

    def test_set_journey(self):
        difficulty = JourneyDifficulty(1, 0.1)
        difficulty.set_journey(3)
        assert difficulty.multiplier == pytest.approx(1.2)

    def test_step_from_settings(self):
        assert JourneyDifficulty(2).multiplier == pytest.approx(1.1)


class TestScaleStats:
    def test_identity_on_first_journey(self):
        stats = dict(ENEMY_ARCHETYPES["basic_grunt"])
        assert JourneyDifficulty(1, 0.1).scale_stats(stats) == stats

    def test_scales_hp_damage_rewards(self):
        scaled = JourneyDifficulty(3, 0.1).scale_stats(
            {"hp": 100.0, "max_hp": 100.0, "damage": 10.0,
             "reward_red": 5.0, "reward_gold": 2.0, "move_speed": 40.0, "radius": 15.0}
        )
        assert scaled["hp"] == pytest.approx(120.0)
        assert scaled["max_hp"] == pytest.approx(120.0)
        assert scaled["damage"] == pytest.approx(12.0)
        assert scaled["reward_red"] == pytest.approx(6.0)
        assert scaled["reward_gold"] == pytest.approx(2.4)
        assert scaled["move_speed"] == pytest.approx(44.0)
        assert scaled["radius"] == 15.0

    def test_does_not_mutate_input(self):
        stats = {"hp": 50.0, "move_speed": 30.0}
        JourneyDifficulty(4, 0.1).scale_stats(stats)
        assert stats == {"hp": 50.0, "move_speed": 30.0}

    def test_missing_keys_tolerated(self):
        assert JourneyDifficulty(2, 0.1).scale_stats({"radius": 12.0}) == {"radius": 12.0}
