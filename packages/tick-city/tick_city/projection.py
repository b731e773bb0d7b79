"""Isometric grid/screen projection used for citizen positions."""
from __future__ import annotations

import random

from tick_city.config import CityConfig


def grid_to_screen(row: int, col: int, config: CityConfig) -> tuple[float, float]:
    x = (col - row) * config.half_width
    y = (col + row) * config.half_height
    return x, y


def screen_to_grid(sx: float, sy: float, config: CityConfig) -> tuple[float, float]:
    """Inverse of grid_to_screen. Returns fractional (row, col)."""
    col = (sx / config.half_width + sy / config.half_height) / 2
    row = (sy / config.half_height - sx / config.half_width) / 2
    return row, col


def point_near_tile(row: int, col: int, rng: random.Random,
                    config: CityConfig) -> tuple[float, float]:
    """Random standing point on the ground area of a tile."""
    sx, sy = grid_to_screen(row, col, config)
    return (
        sx + (rng.random() - 0.5) * config.half_width * 0.8,
        sy + config.half_height + (rng.random() - 0.5) * config.half_height * 0.5,
    )


def distance(x0: float, y0: float, x1: float, y1: float) -> float:
    return ((x1 - x0) ** 2 + (y1 - y0) ** 2) ** 0.5
