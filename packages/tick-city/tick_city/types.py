"""Shared types for the city tick: context, ledger and errors."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from tick_city.config import CityConfig


@dataclass
class TickLedger:
    """Scratch totals shared by the systems of a single tick."""

    visit_revenue: int = 0
    visit_count: int = 0
    income_mult: float = 1.0
    happiness_add: float = 0.0
    pop_add: int = 0
    upkeep: int = 0
    revenue: int = 0


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    random: _random.Random
    config: CityConfig
    ledger: TickLedger


class SnapshotError(Exception):
    """Raised on restore failures (version mismatch, missing or malformed grid)."""


if TYPE_CHECKING:
    from tick_city.state import WorldState

System = Callable[["WorldState", TickContext], None]
