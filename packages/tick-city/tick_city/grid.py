from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterator

from tick_city.catalog import BUILDING_TYPES, EMPTY, RESIDENTIAL, effective_capacity, info

Grid = list[list["Tile"]]


@dataclass
class Tile:
    building_type: str = EMPTY
    level: int = 1
    on_fire: bool = False
    fire_timer: int | None = None
    visitors: int = 0
    total_visits: int = 0
    revenue: int = 0

    @property
    def is_empty(self) -> bool:
        return self.building_type == EMPTY

    @property
    def capacity(self) -> int:
        return effective_capacity(self.building_type, self.level)

    @property
    def has_room(self) -> bool:
        return self.visitors < self.capacity

    @property
    def need_fulfilled(self) -> str | None:
        return info(self.building_type).need_fulfilled


def make_grid(size: int) -> Grid:
    return [[Tile() for _ in range(size)] for _ in range(size)]


def check_bounds(grid: Grid, row: int, col: int) -> None:
    size = len(grid)
    if not (0 <= row < size and 0 <= col < size):
        raise ValueError(f"({row}, {col}) out of bounds for {size}x{size} grid")


def tile_at(grid: Grid, row: int, col: int) -> Tile:
    check_bounds(grid, row, col)
    return grid[row][col]


def in_bounds(grid: Grid, row: int, col: int) -> bool:
    return 0 <= row < len(grid) and 0 <= col < len(grid)


def iter_tiles(grid: Grid) -> Iterator[tuple[int, int, Tile]]:
    for r, row in enumerate(grid):
        for c, tile in enumerate(row):
            yield r, c, tile


def count_buildings(grid: Grid) -> Counter[str]:
    """Tile count per building type. Every type is present, zero included."""
    counts: Counter[str] = Counter({t: 0 for t in BUILDING_TYPES})
    for _, _, tile in iter_tiles(grid):
        counts[tile.building_type] += 1
    return counts


def count_non_empty(grid: Grid) -> int:
    return sum(1 for _, _, tile in iter_tiles(grid) if not tile.is_empty)


def residential_tiles(grid: Grid) -> list[tuple[int, int]]:
    return [(r, c) for r, c, tile in iter_tiles(grid) if tile.building_type == RESIDENTIAL]


def is_residential(grid: Grid, row: int, col: int) -> bool:
    return in_bounds(grid, row, col) and grid[row][col].building_type == RESIDENTIAL
