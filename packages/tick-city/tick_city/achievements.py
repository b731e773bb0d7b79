"""Achievements: pure predicates over the world state, unlocked once."""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from tick_city.catalog import (
    COMMERCIAL, EMPTY, FIRE_STATION, HOSPITAL, INDUSTRIAL, MAX_LEVEL, PARK,
    POLICE, POWER, RESIDENTIAL, SCHOOL,
)
from tick_city.grid import count_buildings, iter_tiles
from tick_city.notifications import GOOD, notify

if TYPE_CHECKING:
    from tick_city.state import WorldState
    from tick_city.types import TickContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Achievement:
    id: str
    label: str
    description: str
    check: Callable[[WorldState], bool]


def _count(state: WorldState, building_type: str) -> int:
    return count_buildings(state.grid)[building_type]


def _any_max_level(state: WorldState) -> bool:
    return any(tile.level >= MAX_LEVEL for _, _, tile in iter_tiles(state.grid))


_EVERY_TYPE = (RESIDENTIAL, COMMERCIAL, INDUSTRIAL, PARK, POWER,
               HOSPITAL, SCHOOL, FIRE_STATION, POLICE)

ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement("first_house", "First Home", "Build your first house",
                lambda s: _count(s, RESIDENTIAL) >= 1),
    Achievement("growing_town", "Growing Town", "Reach 20 citizens",
                lambda s: s.population >= 20),
    Achievement("thriving_city", "Thriving City", "Reach 60 citizens",
                lambda s: s.population >= 60),
    Achievement("wealthy", "Wealthy", "Accumulate $10,000",
                lambda s: s.money >= 10000),
    Achievement("tycoon", "Tycoon", "Earn $50,000 total",
                lambda s: s.total_money_earned >= 50000),
    Achievement("happy_citizens", "Happy Citizens", "Reach 90% happiness",
                lambda s: s.happiness >= 90),
    Achievement("busy_city", "Busy City", "Reach 500 total visits",
                lambda s: s.total_visits >= 500),
    Achievement("green_city", "Green City", "Build 5 parks",
                lambda s: _count(s, PARK) >= 5),
    Achievement("diversified", "Diversified", "Build one of every type",
                lambda s: all(_count(s, t) >= 1 for t in _EVERY_TYPE)),
    Achievement("full_grid", "Metropolis", "Fill every tile",
                lambda s: _count(s, EMPTY) == 0),
    Achievement("upgrader", "Upgrader", "Upgrade any building to level 3",
                _any_max_level),
    Achievement("safe_city", "Safe City", "Build a fire station and police station",
                lambda s: _count(s, FIRE_STATION) >= 1 and _count(s, POLICE) >= 1),
)


def unlock_achievements(
    state: WorldState,
    achievements: tuple[Achievement, ...] = ACHIEVEMENTS,
) -> list[Achievement]:
    """Mark newly satisfied achievements on *state* in place.

    Already-unlocked achievements are skipped, so repeated calls are no-ops.
    """
    unlocked: list[Achievement] = []
    for ach in achievements:
        if ach.id in state.achievements_unlocked:
            continue
        if ach.check(state):
            state.achievements_unlocked.append(ach.id)
            notify(state, f"Achievement: {ach.label}", GOOD)
            logger.info("achievement unlocked: %s", ach.id)
            unlocked.append(ach)
    return unlocked


def check_achievements(
    state: WorldState,
    achievements: tuple[Achievement, ...] = ACHIEVEMENTS,
) -> WorldState:
    """Pure variant: returns *state* itself when nothing new unlocks."""
    if not any(a.id not in state.achievements_unlocked and a.check(state) for a in achievements):
        return state
    new_state = copy.deepcopy(state)
    unlock_achievements(new_state, achievements)
    return new_state


def make_achievement_system(
    achievements: tuple[Achievement, ...] = ACHIEVEMENTS,
    on_unlock: Callable[[WorldState, TickContext, Achievement], None] | None = None,
) -> Callable[[WorldState, TickContext], None]:
    def achievement_system(state: WorldState, ctx: TickContext) -> None:
        for ach in unlock_achievements(state, achievements):
            if on_unlock is not None:
                on_unlock(state, ctx, ach)

    return achievement_system
