"""Save/load of the persistent subset of the world state.

Citizens, particles, events and notifications are not saved; citizens
respawn from housing after load. Fields missing from a payload take their
initial-state values. Payloads written by the original camelCase save
format are accepted.
"""
from __future__ import annotations

import dataclasses
import json
from typing import Any

from tick_city.catalog import BUILDING_TYPES, MAX_LEVEL
from tick_city.config import DEFAULT_CONFIG, CityConfig
from tick_city.grid import Grid, Tile
from tick_city.state import SPEEDS, WorldState, create_initial_state
from tick_city.types import SnapshotError

_SNAPSHOT_VERSION = 1

_FIELD_ALIASES = {
    "dayTime": "day_time",
    "totalBuildings": "total_buildings",
    "totalMoneyEarned": "total_money_earned",
    "totalVisits": "total_visits",
    "achievementsUnlocked": "achievements_unlocked",
}

_TILE_ALIASES = {
    "type": "building_type",
    "onFire": "on_fire",
    "fireTimer": "fire_timer",
    "totalVisits": "total_visits",
}

_TILE_FIELDS = {f.name for f in dataclasses.fields(Tile)}
_INT_TILE_FIELDS = ("level", "fire_timer", "visitors", "total_visits", "revenue")


def snapshot(state: WorldState) -> dict[str, Any]:
    return {
        "version": _SNAPSHOT_VERSION,
        "grid": [[dataclasses.asdict(tile) for tile in row] for row in state.grid],
        "money": state.money,
        "population": state.population,
        "happiness": state.happiness,
        "tick": state.tick,
        "speed": state.speed,
        "day_time": state.day_time,
        "total_buildings": state.total_buildings,
        "total_money_earned": state.total_money_earned,
        "total_visits": state.total_visits,
        "achievements_unlocked": list(state.achievements_unlocked),
    }


def _restore_tile(data: Any) -> Tile:
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot tiles must be objects")
    fields = {_TILE_ALIASES.get(k, k): v for k, v in data.items()}
    fields = {k: v for k, v in fields.items() if k in _TILE_FIELDS}
    for name in _INT_TILE_FIELDS:
        value = fields.get(name)
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            raise SnapshotError(f"Tile field {name!r} must be an integer, got {value!r}")
    tile = Tile(**fields)
    if not isinstance(tile.building_type, str) or tile.building_type not in BUILDING_TYPES:
        raise SnapshotError(f"Unknown building type in snapshot: {tile.building_type!r}")
    if not 1 <= tile.level <= MAX_LEVEL:
        raise SnapshotError(f"Tile level {tile.level} out of range")
    if not tile.on_fire:
        tile.fire_timer = None
    return tile


def _restore_grid(data: Any, size: int) -> Grid:
    if not isinstance(data, list) or len(data) != size:
        raise SnapshotError(f"Snapshot grid must have {size} rows")
    grid: Grid = []
    for row in data:
        if not isinstance(row, list) or len(row) != size:
            raise SnapshotError(f"Snapshot grid rows must have {size} tiles")
        grid.append([_restore_tile(cell) for cell in row])
    return grid


def restore(data: dict[str, Any], config: CityConfig = DEFAULT_CONFIG) -> WorldState:
    version = data.get("version", _SNAPSHOT_VERSION)
    if version != _SNAPSHOT_VERSION:
        raise SnapshotError(
            f"Unsupported snapshot version {version!r}, expected {_SNAPSHOT_VERSION}"
        )
    if "grid" not in data:
        raise SnapshotError("Snapshot has no grid")

    fields = {_FIELD_ALIASES.get(k, k): v for k, v in data.items()}
    state = create_initial_state(config)
    state.grid = _restore_grid(fields["grid"], config.grid_size)
    for name in ("money", "happiness", "tick", "day_time", "total_buildings",
                 "total_money_earned", "total_visits"):
        if fields.get(name) is not None:
            setattr(state, name, fields[name])
    speed = fields.get("speed")
    if speed in SPEEDS:
        state.speed = speed
    state.achievements_unlocked = list(fields.get("achievements_unlocked") or [])
    return state


def dumps(state: WorldState) -> str:
    return json.dumps(snapshot(state))


def loads(text: str, config: CityConfig = DEFAULT_CONFIG) -> WorldState:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"Snapshot is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot must be a JSON object")
    return restore(data, config)
