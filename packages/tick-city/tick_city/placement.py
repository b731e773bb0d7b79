"""Player actions on the grid: build, demolish, upgrade.

Every action returns a new ``WorldState`` on success and ``None`` when
rejected. The input state is never modified. Rejections carry no reason;
``placement_problem`` and ``upgrade_problem`` re-derive one from the
current state for callers that need to show it.
"""
from __future__ import annotations

import copy
import dataclasses
import logging
from typing import TYPE_CHECKING, Any

from tick_city.catalog import EMPTY, MAX_LEVEL, ROAD, info, level_multiplier, round_half_up, upgrade_cost
from tick_city.config import DEFAULT_CONFIG, CityConfig
from tick_city.grid import Tile, tile_at

if TYPE_CHECKING:
    from tick_city.state import WorldState

logger = logging.getLogger(__name__)


def _with_tile(state: WorldState, row: int, col: int, tile: Tile, money: int) -> WorldState:
    new_state = copy.deepcopy(state)
    new_state.grid[row][col] = tile
    new_state.money = money
    return new_state


def place_building(
    state: WorldState, row: int, col: int, building_type: str,
    config: CityConfig = DEFAULT_CONFIG,
) -> WorldState | None:
    """Build *building_type* at (row, col), or demolish when it is ``"empty"``."""
    current = tile_at(state.grid, row, col)
    entry = info(building_type)

    if building_type == EMPTY:
        if current.is_empty:
            logger.debug("demolish rejected at (%d, %d): nothing to demolish", row, col)
            return None
        refund = round_half_up(info(current.building_type).cost * config.demolish_refund)
        return _with_tile(state, row, col, Tile(), state.money + refund)

    if not current.is_empty:
        logger.debug("place %s rejected at (%d, %d): occupied", building_type, row, col)
        return None
    if state.money < entry.cost:
        logger.debug("place %s rejected at (%d, %d): cannot afford", building_type, row, col)
        return None
    return _with_tile(state, row, col, Tile(building_type=building_type), state.money - entry.cost)


def upgrade_building(state: WorldState, row: int, col: int) -> WorldState | None:
    current = tile_at(state.grid, row, col)
    if current.building_type in (EMPTY, ROAD) or current.level >= MAX_LEVEL:
        return None
    cost = upgrade_cost(current.building_type, current.level)
    if cost is None or state.money < cost:
        return None
    upgraded = dataclasses.replace(current, level=current.level + 1)
    return _with_tile(state, row, col, upgraded, state.money - cost)


def placement_problem(state: WorldState, row: int, col: int, building_type: str) -> str | None:
    current = tile_at(state.grid, row, col)
    if building_type == EMPTY:
        return "Nothing to demolish" if current.is_empty else None
    if not current.is_empty:
        return "Tile occupied"
    if state.money < info(building_type).cost:
        return "Not enough $"
    return None


def upgrade_problem(state: WorldState, row: int, col: int) -> str | None:
    current = tile_at(state.grid, row, col)
    if current.is_empty:
        return "Nothing to upgrade"
    if current.building_type == ROAD:
        return "Roads cannot be upgraded"
    if current.level >= MAX_LEVEL:
        return "Already max level"
    cost = upgrade_cost(current.building_type, current.level)
    if cost is None:
        return "Cannot be upgraded"
    if state.money < cost:
        return "Not enough $"
    return None


def building_stats(state: WorldState, row: int, col: int) -> dict[str, Any] | None:
    """Effective figures for the building at (row, col), ``None`` if empty."""
    tile = tile_at(state.grid, row, col)
    if tile.is_empty:
        return None
    entry = info(tile.building_type)
    mult = level_multiplier(tile.level)
    return {
        "revenue_per_visit": round_half_up(entry.revenue_per_visit * mult),
        "upkeep": round_half_up(entry.upkeep_per_tick * mult),
        "capacity": tile.capacity,
        "visitors": tile.visitors,
        "total_visits": tile.total_visits,
        "happiness_effect": round_half_up(entry.happiness_effect * mult),
        "level": tile.level,
        "upgrade_cost": upgrade_cost(tile.building_type, tile.level),
        "need_fulfilled": entry.need_fulfilled,
    }
