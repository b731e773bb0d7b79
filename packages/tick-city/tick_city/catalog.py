"""Building catalog: static reference data per building type."""
from __future__ import annotations

import math
from dataclasses import dataclass

EMPTY = "empty"
RESIDENTIAL = "residential"
COMMERCIAL = "commercial"
INDUSTRIAL = "industrial"
PARK = "park"
ROAD = "road"
POWER = "power"
HOSPITAL = "hospital"
SCHOOL = "school"
FIRE_STATION = "fire_station"
POLICE = "police"

BUILDING_TYPES: tuple[str, ...] = (
    EMPTY, RESIDENTIAL, COMMERCIAL, INDUSTRIAL, PARK, ROAD,
    POWER, HOSPITAL, SCHOOL, FIRE_STATION, POLICE,
)

# Order matters: ties on the highest need resolve to the earliest name.
NEEDS: tuple[str, ...] = ("shopping", "entertainment", "work", "health", "education")

MAX_LEVEL = 3


@dataclass(frozen=True)
class BuildingInfo:
    """Catalog entry for one building type. Never mutated."""

    type: str
    label: str
    cost: int
    description: str
    capacity: int
    revenue_per_visit: int
    upkeep_per_tick: int
    happiness_effect: int
    pop_capacity: int
    need_fulfilled: str | None
    fulfill_amount: int
    visit_duration: int
    category: str
    upgrade_cost_mult: float


BUILDINGS: dict[str, BuildingInfo] = {
    EMPTY: BuildingInfo(
        type=EMPTY, label="Clear", cost=0, description="Demolish building",
        capacity=0, revenue_per_visit=0, upkeep_per_tick=0, happiness_effect=0,
        pop_capacity=0, need_fulfilled=None, fulfill_amount=0, visit_duration=0,
        category="special", upgrade_cost_mult=0,
    ),
    RESIDENTIAL: BuildingInfo(
        type=RESIDENTIAL, label="House", cost=100, description="Home for 4 citizens",
        capacity=0, revenue_per_visit=0, upkeep_per_tick=2, happiness_effect=0,
        pop_capacity=4, need_fulfilled=None, fulfill_amount=0, visit_duration=0,
        category="zone", upgrade_cost_mult=1.5,
    ),
    COMMERCIAL: BuildingInfo(
        type=COMMERCIAL, label="Shop", cost=200, description="Citizens shop here for $8/visit",
        capacity=6, revenue_per_visit=8, upkeep_per_tick=3, happiness_effect=1,
        pop_capacity=0, need_fulfilled="shopping", fulfill_amount=40, visit_duration=3,
        category="zone", upgrade_cost_mult=1.5,
    ),
    INDUSTRIAL: BuildingInfo(
        type=INDUSTRIAL, label="Factory", cost=300, description="Workers earn $12/shift",
        capacity=8, revenue_per_visit=12, upkeep_per_tick=5, happiness_effect=-3,
        pop_capacity=0, need_fulfilled="work", fulfill_amount=50, visit_duration=5,
        category="zone", upgrade_cost_mult=1.5,
    ),
    PARK: BuildingInfo(
        type=PARK, label="Park", cost=50, description="Free entertainment, +6 happy",
        capacity=10, revenue_per_visit=0, upkeep_per_tick=1, happiness_effect=6,
        pop_capacity=0, need_fulfilled="entertainment", fulfill_amount=35, visit_duration=2,
        category="infrastructure", upgrade_cost_mult=1.2,
    ),
    ROAD: BuildingInfo(
        type=ROAD, label="Road", cost=25, description="Connects areas, speeds travel",
        capacity=0, revenue_per_visit=0, upkeep_per_tick=0, happiness_effect=0,
        pop_capacity=0, need_fulfilled=None, fulfill_amount=0, visit_duration=0,
        category="infrastructure", upgrade_cost_mult=0,
    ),
    POWER: BuildingInfo(
        type=POWER, label="Power", cost=500, description="Powers 20 buildings",
        capacity=0, revenue_per_visit=0, upkeep_per_tick=8, happiness_effect=-2,
        pop_capacity=0, need_fulfilled=None, fulfill_amount=0, visit_duration=0,
        category="infrastructure", upgrade_cost_mult=2,
    ),
    HOSPITAL: BuildingInfo(
        type=HOSPITAL, label="Hospital", cost=400, description="Heals citizens, +4 happy",
        capacity=4, revenue_per_visit=0, upkeep_per_tick=6, happiness_effect=4,
        pop_capacity=0, need_fulfilled="health", fulfill_amount=60, visit_duration=4,
        category="service", upgrade_cost_mult=1.8,
    ),
    SCHOOL: BuildingInfo(
        type=SCHOOL, label="School", cost=350, description="Educates citizens, +10% revenue",
        capacity=6, revenue_per_visit=0, upkeep_per_tick=4, happiness_effect=3,
        pop_capacity=0, need_fulfilled="education", fulfill_amount=45, visit_duration=4,
        category="service", upgrade_cost_mult=1.6,
    ),
    FIRE_STATION: BuildingInfo(
        type=FIRE_STATION, label="Fire Stn", cost=250, description="Prevents fires, +3 happy",
        capacity=0, revenue_per_visit=0, upkeep_per_tick=3, happiness_effect=3,
        pop_capacity=0, need_fulfilled=None, fulfill_amount=0, visit_duration=0,
        category="service", upgrade_cost_mult=1.4,
    ),
    POLICE: BuildingInfo(
        type=POLICE, label="Police", cost=300, description="+4 happy, reduces crime",
        capacity=0, revenue_per_visit=0, upkeep_per_tick=4, happiness_effect=4,
        pop_capacity=0, need_fulfilled=None, fulfill_amount=0, visit_duration=0,
        category="service", upgrade_cost_mult=1.5,
    ),
}

BUILD_ORDER: tuple[str, ...] = (
    RESIDENTIAL, COMMERCIAL, INDUSTRIAL,
    PARK, ROAD, POWER,
    HOSPITAL, SCHOOL, FIRE_STATION, POLICE,
    EMPTY,
)

# (baseline, jitter) added to each need per tick.
NEED_GROWTH: dict[str, tuple[float, float]] = {
    "shopping": (2.0, 1.5),
    "entertainment": (1.5, 1.0),
    "work": (2.5, 1.0),
    "health": (0.3, 0.3),
    "education": (0.8, 0.5),
}


def info(building_type: str) -> BuildingInfo:
    """Look up a catalog entry. Raises KeyError for unknown types."""
    try:
        return BUILDINGS[building_type]
    except KeyError:
        raise KeyError(f"Unknown building type {building_type!r}") from None


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return math.floor(value + 0.5)


def level_multiplier(level: int) -> float:
    return 1 + (level - 1) * 0.5


def effective_capacity(building_type: str, level: int) -> int:
    return int(info(building_type).capacity * level_multiplier(level))


def upgrade_cost(building_type: str, current_level: int) -> int | None:
    """Cost of the next level, or ``None`` if the building cannot be upgraded."""
    entry = info(building_type)
    if entry.upgrade_cost_mult == 0 or current_level >= MAX_LEVEL:
        return None
    return round_half_up(entry.cost * entry.upgrade_cost_mult * current_level)


def buildings_for_need(need: str) -> list[str]:
    return [t for t, entry in BUILDINGS.items() if entry.need_fulfilled == need]
