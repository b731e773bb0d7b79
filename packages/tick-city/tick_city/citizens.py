"""Citizen agents: needs, destination choice and the visit state machine.

Each tick a citizen first grows its needs, then acts on its state::

    idle --(pressing need, building found)--> walking
    walking --(arrived, room left)--> visiting
    walking --(arrived, full or changed)--> returning
    visiting --(timer done or evicted)--> returning
    returning --(arrived home)--> idle

Movement itself happens in the frame update (``tick_city.motion``); the
tick only tests whether a citizen has arrived.
"""
from __future__ import annotations

import random
from typing import TYPE_CHECKING

from tick_city.catalog import NEED_GROWTH, NEEDS, info, level_multiplier, round_half_up
from tick_city.config import CityConfig
from tick_city.grid import Grid, Tile, in_bounds, iter_tiles
from tick_city.projection import distance, grid_to_screen, point_near_tile
from tick_city.state import IDLE, RETURNING, VISITING, WALKING, Citizen

if TYPE_CHECKING:
    from tick_city.state import WorldState
    from tick_city.types import TickContext, TickLedger

CITIZEN_COLORS = (
    "#e74c3c", "#3498db", "#2ecc71", "#f39c12", "#9b59b6",
    "#1abc9c", "#e67e22", "#e84393", "#00b894", "#fdcb6e",
)


def create_citizen(citizen_id: int, home_r: int, home_c: int,
                   rng: random.Random, config: CityConfig) -> Citizen:
    hx, hy = grid_to_screen(home_r, home_c, config)
    return Citizen(
        id=citizen_id,
        x=hx + (rng.random() - 0.5) * config.half_width * 0.6,
        y=hy + config.half_height + (rng.random() - 0.5) * config.half_height * 0.4,
        tx=hx,
        ty=hy + config.half_height,
        home_r=home_r,
        home_c=home_c,
        color=rng.choice(CITIZEN_COLORS),
        speed=0.3 + rng.random() * 0.4,
        needs={
            "shopping": 20 + rng.random() * 30,
            "entertainment": 10 + rng.random() * 20,
            "work": 30 + rng.random() * 20,
            "health": 0.0,
            "education": 5 + rng.random() * 15,
        },
        satisfaction=70.0,
        wallet=50.0,
    )


def grow_needs(citizen: Citizen, rng: random.Random) -> None:
    for name in NEEDS:
        base, jitter = NEED_GROWTH[name]
        citizen.needs[name] = min(100.0, citizen.needs[name] + base + rng.random() * jitter)


def highest_need(needs: dict[str, float]) -> tuple[str, float]:
    best, best_val = NEEDS[0], 0.0
    for name in NEEDS:
        if needs[name] > best_val:
            best, best_val = name, needs[name]
    return best, best_val


def find_building_for_need(grid: Grid, need: str,
                           rng: random.Random) -> tuple[int, int] | None:
    candidates = [
        (r, c) for r, c, tile in iter_tiles(grid)
        if not tile.is_empty and tile.need_fulfilled == need and tile.has_room
    ]
    if not candidates:
        return None
    return rng.choice(candidates)


def _target_tile(grid: Grid, citizen: Citizen) -> Tile | None:
    if not citizen.has_target or not in_bounds(grid, citizen.target_r, citizen.target_c):
        return None
    return grid[citizen.target_r][citizen.target_c]


def _still_serves(tile: Tile | None, citizen: Citizen) -> bool:
    """The target still fulfills the need the citizen set out for."""
    if tile is None or tile.is_empty or citizen.target_type is None:
        return False
    wanted = info(citizen.target_type).need_fulfilled
    return wanted is not None and tile.need_fulfilled == wanted


def _arrived(citizen: Citizen, config: CityConfig) -> bool:
    return distance(citizen.x, citizen.y, citizen.tx, citizen.ty) < config.arrival_radius


def _head_home(citizen: Citizen, rng: random.Random, config: CityConfig,
               penalty: float = 0.0) -> None:
    citizen.tx, citizen.ty = point_near_tile(citizen.home_r, citizen.home_c, rng, config)
    citizen.state = RETURNING
    citizen.clear_target()
    if penalty:
        citizen.satisfaction = max(0.0, citizen.satisfaction - penalty)


def decide(citizen: Citizen, grid: Grid, rng: random.Random, config: CityConfig) -> None:
    need, value = highest_need(citizen.needs)

    if value < config.need_threshold:
        if rng.random() < config.wander_chance:
            citizen.tx, citizen.ty = point_near_tile(citizen.home_r, citizen.home_c, rng, config)
        return

    target = find_building_for_need(grid, need, rng)
    if target is None:
        citizen.satisfaction = max(0.0, citizen.satisfaction - config.no_destination_penalty)
        return

    tr, tc = target
    citizen.state = WALKING
    citizen.target_r, citizen.target_c = tr, tc
    citizen.target_type = grid[tr][tc].building_type
    citizen.tx, citizen.ty = point_near_tile(tr, tc, rng, config)


def _walk(citizen: Citizen, grid: Grid, rng: random.Random, config: CityConfig) -> None:
    if not citizen.has_target or not _arrived(citizen, config):
        return
    tile = _target_tile(grid, citizen)
    if tile is not None and tile.has_room and _still_serves(tile, citizen):
        tile.visitors += 1
        citizen.state = VISITING
        citizen.visit_timer = info(tile.building_type).visit_duration
    else:
        _head_home(citizen, rng, config, penalty=config.give_up_penalty)


def _visit(citizen: Citizen, grid: Grid, ledger: TickLedger,
           rng: random.Random, config: CityConfig) -> None:
    citizen.visit_timer -= 1
    if citizen.visit_timer > 0:
        return

    tile = _target_tile(grid, citizen)
    if tile is not None:
        entry = info(tile.building_type)
        mult = level_multiplier(tile.level)
        if entry.need_fulfilled:
            need = entry.need_fulfilled
            citizen.needs[need] = max(0.0, citizen.needs[need] - entry.fulfill_amount * mult)
        revenue = round_half_up(entry.revenue_per_visit * mult)
        ledger.visit_revenue += revenue
        ledger.visit_count += 1
        tile.revenue += revenue
        tile.total_visits += 1
        citizen.satisfaction = min(100.0, citizen.satisfaction + config.visit_bonus)
    _head_home(citizen, rng, config)


def reset_tile_counters(grid: Grid) -> None:
    for _, _, tile in iter_tiles(grid):
        tile.visitors = 0
        tile.revenue = 0


def assert_occupancy(citizens: list[Citizen], grid: Grid) -> set[int]:
    """Count visiting citizens into their tiles. Returns ids that no longer fit."""
    evicted: set[int] = set()
    for citizen in citizens:
        if citizen.state != VISITING:
            continue
        tile = _target_tile(grid, citizen)
        if tile is not None and tile.has_room and _still_serves(tile, citizen):
            tile.visitors += 1
        else:
            evicted.add(citizen.id)
    return evicted


def citizen_system(state: WorldState, ctx: TickContext) -> None:
    grid = state.grid
    rng = ctx.random
    config = ctx.config

    # Visitor counts are a per-tick census: zero everything before anyone counts in.
    reset_tile_counters(grid)
    evicted = assert_occupancy(state.citizens, grid)

    for citizen in state.citizens:
        grow_needs(citizen, rng)

        if citizen.state == IDLE:
            decide(citizen, grid, rng, config)
        elif citizen.state == WALKING:
            _walk(citizen, grid, rng, config)
        elif citizen.state == VISITING:
            if citizen.id in evicted:
                _head_home(citizen, rng, config, penalty=config.give_up_penalty)
            else:
                _visit(citizen, grid, ctx.ledger, rng, config)
        elif citizen.state == RETURNING:
            if _arrived(citizen, config):
                citizen.state = IDLE
