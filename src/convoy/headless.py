# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Headless runner — drive the simulation at a fixed step and print a summary.

Usage::

    python -m convoy.headless --seconds 120 --journey 1 --seed 7

Builds a default loadout, ticks at 0.1 s until the time runs out or the
waves are won, then prints a JSON summary to stdout.  Log output goes to
stderr.
"""

from __future__ import annotations

import argparse
import json
import queue
import random
import sys

from loguru import logger

from convoy.comms import EventBus
from convoy.simulation.components import create_component
from convoy.simulation.engine import SimulationEngine

FIXED_STEP = 0.1

# (template, col, row) for a 4x4 grid
DEFAULT_LOADOUT: list[tuple[str, int, int]] = [
    ("basic_gun", 0, 0),
    ("basic_booster", 1, 0),
    ("basic_gun", 2, 0),
    ("cursor_laser", 3, 0),
    ("heavy_cannon", 0, 1),
    ("core_main", 2, 1),
    ("basic_plate", 3, 1),
    ("basic_plate", 0, 2),
    ("basic_gun", 1, 2),
    ("basic_booster", 2, 2),
    ("basic_gun", 3, 2),
    ("basic_plate", 1, 3),
    ("basic_plate", 2, 3),
]


def install_loadout(
    engine: SimulationEngine, loadout: list[tuple[str, int, int]] = DEFAULT_LOADOUT
) -> int:
    """Install every entry that fits.  Returns the number installed."""
    installed = 0
    for template, col, row in loadout:
        if engine.install(create_component(template), col, row):
            installed += 1
        else:
            logger.warning(f"Loadout entry {template} at ({col}, {row}) does not fit")
    return installed


def _drain(events: queue.Queue, counts: dict[str, int]) -> None:
    while True:
        try:
            topic = events.get_nowait()["type"]
        except queue.Empty:
            return
        counts[topic] = counts.get(topic, 0) + 1


def run(seconds: float, journey: int = 1, seed: int | None = None) -> dict:
    """Run one headless session and return its summary."""
    bus = EventBus()
    events = bus.subscribe()
    engine = SimulationEngine(event_bus=bus, journey=journey, rng=random.Random(seed))
    install_loadout(engine)

    # Drained every tick so the bounded queue never drops an event
    counts: dict[str, int] = {}
    for _ in range(round(seconds / FIXED_STEP)):
        if engine.waves.is_victory:
            break
        engine.tick(FIXED_STEP)
        _drain(events, counts)
    bus.unsubscribe(events)

    return {
        "elapsed": round(engine.elapsed, 2),
        "ticks": engine.tick_count,
        "journey": journey,
        "victory": engine.waves.is_victory,
        "wave": engine.get_wave_status(),
        "resources": engine.ledger.to_dict(),
        "components_remaining": len(engine.grid.living_components()),
        "stats": engine.get_stats(),
        "events": counts,
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run the convoy simulation headless and print a summary"
    )
    parser.add_argument(
        "--seconds", type=float, default=120.0,
        help="Simulated seconds to run (default: 120)",
    )
    parser.add_argument(
        "--journey", type=int, default=1,
        help="Journey index for difficulty scaling (default: 1)",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Random seed for spawn positions and archetypes",
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        help="loguru level for stderr output (default: WARNING)",
    )
    args = parser.parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=args.log_level.upper())

    summary = run(args.seconds, journey=args.journey, seed=args.seed)
    print(json.dumps(summary, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
