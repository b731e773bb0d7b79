"""Population management: spawn and remove citizens to match housing."""
from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from tick_city.catalog import RESIDENTIAL, info, level_multiplier
from tick_city.citizens import create_citizen
from tick_city.grid import Grid, is_residential, iter_tiles, residential_tiles
from tick_city.state import IDLE

if TYPE_CHECKING:
    from tick_city.state import WorldState
    from tick_city.types import TickContext

logger = logging.getLogger(__name__)


def population_capacity(grid: Grid) -> int:
    per_home = info(RESIDENTIAL).pop_capacity
    cap = sum(
        per_home * level_multiplier(tile.level)
        for _, _, tile in iter_tiles(grid)
        if tile.building_type == RESIDENTIAL
    )
    return math.floor(cap)


def manage_population(state: WorldState, ctx: TickContext) -> None:
    """Spawn toward capacity (rate limited), trim above it, drop the homeless.

    Capacity includes any population bonus from active events. Trimming
    removes idle citizens first, then the most recently added.
    """
    cap = max(0, population_capacity(state.grid) + ctx.ledger.pop_add)
    citizens = state.citizens
    homes = residential_tiles(state.grid)

    spawned = 0
    while len(citizens) < cap and homes and spawned < ctx.config.max_spawns_per_tick:
        home_r, home_c = ctx.random.choice(homes)
        citizens.append(create_citizen(state.next_citizen_id, home_r, home_c,
                                       ctx.random, ctx.config))
        state.next_citizen_id += 1
        spawned += 1

    removed = 0
    while len(citizens) > cap:
        idle_idx = next((i for i, c in enumerate(citizens) if c.state == IDLE), None)
        if idle_idx is not None:
            del citizens[idle_idx]
        else:
            citizens.pop()
        removed += 1

    before = len(citizens)
    state.citizens = [c for c in citizens if is_residential(state.grid, c.home_r, c.home_c)]
    homeless = before - len(state.citizens)

    if spawned or removed or homeless:
        logger.debug("tick %d population: +%d -%d homeless %d (cap %d)",
                     ctx.tick_number, spawned, removed, homeless, cap)
