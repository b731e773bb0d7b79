"""Fire damage: burning tiles count down, then lose one level."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tick_city.catalog import ROAD
from tick_city.grid import Grid, iter_tiles

if TYPE_CHECKING:
    from tick_city.state import WorldState
    from tick_city.types import TickContext

logger = logging.getLogger(__name__)


def tick_fire_timers(grid: Grid) -> list[tuple[int, int]]:
    """Advance every fire by one tick. Returns the tiles that burned out."""
    burned_out: list[tuple[int, int]] = []
    for r, c, tile in iter_tiles(grid):
        if not tile.on_fire:
            continue
        tile.fire_timer = (tile.fire_timer or 1) - 1
        if tile.fire_timer <= 0:
            tile.on_fire = False
            tile.fire_timer = None
            if tile.level > 1:
                tile.level -= 1
            burned_out.append((r, c))
    return burned_out


def fire_candidates(grid: Grid) -> list[tuple[int, int]]:
    return [
        (r, c) for r, c, tile in iter_tiles(grid)
        if not tile.is_empty and tile.building_type != ROAD and not tile.on_fire
    ]


def ignite(grid: Grid, row: int, col: int, duration: int) -> None:
    tile = grid[row][col]
    tile.on_fire = True
    tile.fire_timer = duration


def fire_system(state: WorldState, ctx: TickContext) -> None:
    for r, c in tick_fire_timers(state.grid):
        logger.info("fire at (%d, %d) burned out, level now %d", r, c, state.grid[r][c].level)
