"""Treasury accounting: upkeep, scaled visit revenue, net income."""
from __future__ import annotations

from typing import TYPE_CHECKING

from tick_city.catalog import SCHOOL, info, level_multiplier, round_half_up
from tick_city.grid import Grid, count_buildings, iter_tiles

if TYPE_CHECKING:
    from tick_city.state import WorldState
    from tick_city.types import TickContext


def calculate_upkeep(grid: Grid) -> int:
    upkeep = 0.0
    for _, _, tile in iter_tiles(grid):
        if tile.is_empty:
            continue
        upkeep += info(tile.building_type).upkeep_per_tick * level_multiplier(tile.level)
    return round_half_up(upkeep)


def school_bonus(grid: Grid, per_school: float) -> float:
    return 1 + count_buildings(grid)[SCHOOL] * per_school


def scaled_revenue(visit_revenue: int, income_mult: float, bonus: float) -> int:
    return round_half_up(visit_revenue * income_mult * bonus)


def net_income(state: WorldState) -> int:
    """Net result of the most recent tick, as shown in the HUD."""
    return state.income_this_tick - state.upkeep_this_tick


def upkeep_system(state: WorldState, ctx: TickContext) -> None:
    ctx.ledger.upkeep = calculate_upkeep(state.grid)


def income_system(state: WorldState, ctx: TickContext) -> None:
    ledger = ctx.ledger
    bonus = school_bonus(state.grid, ctx.config.school_revenue_bonus)
    ledger.revenue = scaled_revenue(ledger.visit_revenue, ledger.income_mult, bonus)

    state.money += ledger.revenue - ledger.upkeep
    state.income_this_tick = ledger.revenue
    state.upkeep_this_tick = ledger.upkeep
    state.total_money_earned += max(0, ledger.revenue)
    state.total_visits += ledger.visit_count
