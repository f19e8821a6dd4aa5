# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Communication primitives shared by the simulation and its collaborators."""

from .event_bus import EventBus

__all__ = ["EventBus"]
