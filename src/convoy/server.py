# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""FastAPI application factory.

The simulation has no clock of its own: a renderer (or any client) polls
the read-only projections and advances the world through ``POST
/api/game/tick``.
"""

from __future__ import annotations

from fastapi import FastAPI

from convoy import __version__
from convoy.comms import EventBus
from convoy.routers.game import router as game_router
from convoy.simulation.engine import SimulationEngine


def create_app(engine: SimulationEngine | None = None) -> FastAPI:
    """Build the API app.  A default engine is created when none is given."""
    from convoy.config import settings

    if engine is None:
        engine = SimulationEngine(event_bus=EventBus())

    app = FastAPI(title=settings.app_name, version=__version__, debug=settings.debug)
    app.state.simulation_engine = engine
    app.state.event_bus = engine.event_bus
    app.include_router(game_router)
    return app
