# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Game API — read-only projections of the simulation plus loadout edits."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

router = APIRouter(prefix="/api/game", tags=["game"])


class PlaceComponent(BaseModel):
    template: str  # key of COMPONENT_TEMPLATES
    col: int
    row: int
    quality: str = "common"
    component_id: str | None = Field(default=None, max_length=64)


class TickRequest(BaseModel):
    dt: float = Field(default=0.1, ge=0.0)
    cursor_x: float | None = None
    cursor_y: float | None = None


def _get_engine(request: Request):
    """Retrieve the SimulationEngine from app state."""
    engine = getattr(request.app.state, "simulation_engine", None)
    if engine is None:
        raise HTTPException(503, "Simulation engine not available")
    return engine


@router.get("/state")
async def get_game_state(request: Request):
    """Full snapshot: wave, resources, grid, enemies, projectiles, stats."""
    return _get_engine(request).get_game_state()


@router.get("/components")
async def get_components(request: Request):
    return _get_engine(request).get_components()


@router.get("/enemies")
async def get_enemies(request: Request):
    return _get_engine(request).get_enemies()


@router.get("/projectiles")
async def get_projectiles(request: Request):
    return _get_engine(request).get_projectiles()


@router.get("/wave")
async def get_wave_status(request: Request):
    return _get_engine(request).get_wave_status()


@router.get("/stats")
async def get_stats(request: Request):
    return _get_engine(request).get_stats()


@router.post("/place")
async def place_component(body: PlaceComponent, request: Request):
    """Build a component from a template and install it on the grid."""
    from convoy.simulation.components import create_component

    engine = _get_engine(request)
    if body.component_id and engine.grid.get_component(body.component_id) is not None:
        raise HTTPException(409, f"Component id already placed: {body.component_id}")
    try:
        component = create_component(body.template, body.quality, body.component_id)
    except ValueError as exc:
        raise HTTPException(400, str(exc)) from exc

    if not engine.install(component, body.col, body.row):
        raise HTTPException(409, f"Cannot place {body.template} at ({body.col}, {body.row})")
    return {"status": "placed", "component": component.to_dict()}


@router.delete("/components/{component_id}")
async def remove_component(component_id: str, request: Request):
    engine = _get_engine(request)
    component = engine.grid.get_component(component_id)
    if component is None:
        raise HTTPException(404, f"Component not found: {component_id}")
    engine.uninstall(component)
    return {"status": "removed", "component_id": component_id}


@router.post("/tick")
async def tick(body: TickRequest, request: Request):
    """Advance the simulation one step.  The delta is clamped here."""
    from convoy.simulation.engine import clamp_delta

    engine = _get_engine(request)
    cursor = None
    if body.cursor_x is not None and body.cursor_y is not None:
        cursor = (body.cursor_x, body.cursor_y)
    dt = clamp_delta(body.dt, engine.config.max_delta_time)
    engine.tick(dt, cursor)
    return {"tick": engine.tick_count, "dt": dt, "wave": engine.get_wave_status()}


@router.post("/reset")
async def reset_game(request: Request):
    """Reset waves, pools, stats and resources.  The grid is emptied."""
    engine = _get_engine(request)
    engine.reset()
    return {"status": "reset", "state": engine.get_wave_status()["state"]}
