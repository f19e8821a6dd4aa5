# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Settings — tunables for the simulation core.

Every value can be overridden through ``CONVOY_*`` environment variables
or a ``.env`` file.  Constructors across the package default to the
module-level ``settings`` instance; explicit arguments always win.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CONVOY_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "CONVOY"
    debug: bool = False

    # Grid (immutable after engine construction)
    grid_size: int = Field(default=4, ge=1)
    cell_size_px: float = Field(default=80.0, gt=0)
    grid_origin_x_px: float = 100.0
    grid_origin_y_px: float = 200.0

    # Viewport, used only for spawn positions and projectile culling
    canvas_width: float = 1920.0
    canvas_height: float = 1080.0

    # Buffs
    buff_per_booster: float = 0.2

    # Combat
    projectile_speed: float = 400.0
    cursor_radius_px: float = 100.0
    projectile_pool_size: int = 200
    enemy_pool_size: int = 100

    # Waves
    preparation_duration: float = 8.0
    spawn_interval: float = 3.0
    wave_complete_delay: float = 2.0
    max_waves: int = 10
    base_enemies_per_wave: int = 10

    # Journey difficulty
    journey_difficulty_step: float = 0.10

    # Tick
    max_delta_time: float = 0.1

    # Starting resources
    initial_red: float = 100.0
    initial_blue: float = 50.0
    initial_gold: float = 0.0


settings = Settings()
