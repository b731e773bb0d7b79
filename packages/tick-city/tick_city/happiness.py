from __future__ import annotations

from typing import TYPE_CHECKING

from tick_city.catalog import COMMERCIAL, INDUSTRIAL, POLICE, RESIDENTIAL, info, level_multiplier, round_half_up
from tick_city.config import DEFAULT_CONFIG, CityConfig
from tick_city.grid import count_buildings, iter_tiles

if TYPE_CHECKING:
    from tick_city.state import WorldState
    from tick_city.types import TickContext


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def average_satisfaction(state: WorldState) -> float:
    if not state.citizens:
        return 50.0
    return sum(c.satisfaction for c in state.citizens) / len(state.citizens)


def building_bonus(state: WorldState, config: CityConfig = DEFAULT_CONFIG) -> float:
    bonus = 0.0
    for _, _, tile in iter_tiles(state.grid):
        if tile.is_empty:
            continue
        bonus += (info(tile.building_type).happiness_effect
                  * level_multiplier(tile.level) * config.building_happiness_factor)
        if tile.on_fire:
            bonus -= config.fire_penalty

    counts = count_buildings(state.grid)
    if counts[RESIDENTIAL] > 0 and counts[COMMERCIAL] > 0 and counts[INDUSTRIAL] > 0:
        bonus += config.diversity_bonus
    bonus += counts[POLICE] * config.police_bonus
    return bonus


def calculate_happiness(state: WorldState, config: CityConfig = DEFAULT_CONFIG) -> int:
    combined = (average_satisfaction(state) * config.satisfaction_weight
                + (50 + building_bonus(state, config)) * config.building_weight)
    return round_half_up(clamp(combined))


def happiness_system(state: WorldState, ctx: TickContext) -> None:
    base = calculate_happiness(state, ctx.config)
    state.happiness = round_half_up(clamp(base + ctx.ledger.happiness_add))
