from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tick_city.state import WorldState
    from tick_city.types import TickContext

# (upper bound, label), checked in order.
DAY_BANDS: tuple[tuple[float, str], ...] = (
    (0.2, "night"),
    (0.3, "dawn"),
    (0.7, "day"),
    (0.8, "dusk"),
    (1.0, "night"),
)


def advance_day_time(day_time: float, step: float) -> float:
    return (day_time + step) % 1


def day_phase_label(day_time: float) -> str:
    for upper, label in DAY_BANDS:
        if day_time < upper:
            return label
    return DAY_BANDS[-1][1]


def day_night_system(state: WorldState, ctx: TickContext) -> None:
    state.day_time = advance_day_time(state.day_time, ctx.config.day_step)
