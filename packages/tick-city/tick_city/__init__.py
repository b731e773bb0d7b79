"""tick-city - Tile-based city simulation core on a fixed tick."""
from __future__ import annotations

# Static data and configuration
from tick_city.config import CityConfig, DEFAULT_CONFIG
from tick_city.catalog import (
    BUILDINGS, BUILD_ORDER, BUILDING_TYPES, NEEDS, BuildingInfo,
    effective_capacity, level_multiplier, upgrade_cost,
)

# World state
from tick_city.grid import Tile, count_buildings, count_non_empty
from tick_city.state import (
    Citizen, GameEvent, Notification, Particle, WorldState, create_initial_state,
)
from tick_city.types import SnapshotError, TickContext, TickLedger

# Player actions
from tick_city.placement import (
    building_stats, place_building, placement_problem, upgrade_building, upgrade_problem,
)

# Simulation
from tick_city.simulation import default_systems, game_tick
from tick_city.engine import CityEngine
from tick_city.events import DEFAULT_EVENTS, EventDef, EventGuards, make_event_spawn_system
from tick_city.achievements import ACHIEVEMENTS, Achievement, check_achievements
from tick_city.daynight import day_phase_label
from tick_city.economy import net_income

# Frame cadence
from tick_city.motion import update_citizens
from tick_city.particles import update_particles

# Persistence
from tick_city.persistence import dumps, loads, restore, snapshot

__all__ = [
    "CityConfig", "DEFAULT_CONFIG",
    "BUILDINGS", "BUILD_ORDER", "BUILDING_TYPES", "NEEDS", "BuildingInfo",
    "effective_capacity", "level_multiplier", "upgrade_cost",
    "Tile", "count_buildings", "count_non_empty",
    "Citizen", "GameEvent", "Notification", "Particle", "WorldState", "create_initial_state",
    "SnapshotError", "TickContext", "TickLedger",
    "building_stats", "place_building", "placement_problem", "upgrade_building", "upgrade_problem",
    "default_systems", "game_tick", "CityEngine",
    "DEFAULT_EVENTS", "EventDef", "EventGuards", "make_event_spawn_system",
    "ACHIEVEMENTS", "Achievement", "check_achievements",
    "day_phase_label", "net_income",
    "update_citizens", "update_particles",
    "dumps", "loads", "restore", "snapshot",
]
