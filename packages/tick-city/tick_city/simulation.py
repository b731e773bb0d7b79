"""Tick orchestrator: one call advances the whole city by one step."""
from __future__ import annotations

import copy
import logging
import random
from typing import TYPE_CHECKING, Sequence

from tick_city.achievements import make_achievement_system
from tick_city.citizens import citizen_system
from tick_city.config import DEFAULT_CONFIG, CityConfig
from tick_city.daynight import day_night_system
from tick_city.economy import income_system, upkeep_system
from tick_city.events import event_effects_system, make_event_spawn_system
from tick_city.fire import fire_system
from tick_city.grid import count_non_empty
from tick_city.happiness import happiness_system
from tick_city.particles import smoke_system
from tick_city.population import manage_population
from tick_city.types import System, TickContext, TickLedger

if TYPE_CHECKING:
    from tick_city.state import WorldState

logger = logging.getLogger(__name__)


def bookkeeping_system(state: WorldState, ctx: TickContext) -> None:
    state.total_buildings = count_non_empty(state.grid)


def default_systems() -> list[System]:
    """The fixed per-tick order. Fires resolve and population settles before agents act."""
    return [
        day_night_system,
        fire_system,
        event_effects_system,
        manage_population,
        citizen_system,
        upkeep_system,
        make_event_spawn_system(),
        income_system,
        happiness_system,
        smoke_system,
        bookkeeping_system,
        make_achievement_system(),
    ]


def game_tick(
    state: WorldState,
    rng: random.Random,
    config: CityConfig = DEFAULT_CONFIG,
    systems: Sequence[System] | None = None,
) -> WorldState:
    """Return the world one tick later. *state* is left untouched.

    A paused world is returned as is.
    """
    if state.paused:
        return state

    new_state = copy.deepcopy(state)
    new_state.tick += 1
    ctx = TickContext(tick_number=new_state.tick, random=rng, config=config,
                      ledger=TickLedger())
    for system in (systems if systems is not None else default_systems()):
        system(new_state, ctx)

    logger.debug("tick %d: money=%d pop=%d happiness=%d revenue=%d upkeep=%d",
                 new_state.tick, new_state.money, new_state.population,
                 new_state.happiness, ctx.ledger.revenue, ctx.ledger.upkeep)
    return new_state
