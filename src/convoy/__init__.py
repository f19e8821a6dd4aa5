# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Convoy — tactical simulation core for the grid-based vehicle defense game.

This package contains the simulation engine (grid placement, adjacency
buffs, entity pooling, combat resolution, wave scheduling), the event bus
that carries simulation events to collaborators, configuration, and a thin
HTTP projection layer for rendering clients.
"""

__version__ = "0.1.0"
