# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""ResourceLedger -- the three fungible currencies.

  - red  -- ammunition / energy, spent per weapon shot
  - blue -- building material (repairs, external)
  - gold -- coins / chips

The ledger belongs to the caller and is passed into every tick.  The core
spends red on weapon fire and credits kill rewards; values are floats in
the simulation and floored only for display.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

RESOURCES = ("red", "blue", "gold")


@dataclass
class ResourceLedger:
    red: float = 0.0
    blue: float = 0.0
    gold: float = 0.0

    @classmethod
    def starting(cls, settings=None) -> ResourceLedger:
        """Ledger seeded with the configured starting resources."""
        if settings is None:
            from convoy.config import settings
        return cls(
            red=settings.initial_red,
            blue=settings.initial_blue,
            gold=settings.initial_gold,
        )

    def _check(self, resource: str) -> None:
        if resource not in RESOURCES:
            raise ValueError(f"Unknown resource: {resource!r}")

    def can_afford(self, amount: float, resource: str = "red") -> bool:
        self._check(resource)
        return getattr(self, resource) >= amount

    def spend(self, amount: float, resource: str = "red") -> bool:
        """Deduct *amount*.  Leaves the ledger untouched when short."""
        if not self.can_afford(amount, resource):
            return False
        setattr(self, resource, getattr(self, resource) - amount)
        return True

    def credit(self, red: float = 0.0, blue: float = 0.0, gold: float = 0.0) -> None:
        self.red += red
        self.blue += blue
        self.gold += gold

    def to_dict(self) -> dict:
        return {
            "red": math.floor(self.red),
            "blue": math.floor(self.blue),
            "gold": math.floor(self.gold),
        }
