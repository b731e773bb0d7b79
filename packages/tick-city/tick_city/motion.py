"""Per-frame citizen movement. Touches positions only."""
from __future__ import annotations

import dataclasses

from tick_city.config import DEFAULT_CONFIG, CityConfig
from tick_city.projection import distance
from tick_city.state import VISITING, Citizen


def move_citizen(citizen: Citizen, dt_ms: float, config: CityConfig = DEFAULT_CONFIG) -> Citizen:
    if citizen.state == VISITING or dt_ms <= 0:
        return citizen
    dist = distance(citizen.x, citizen.y, citizen.tx, citizen.ty)
    if dist < config.snap_radius:
        if (citizen.x, citizen.y) == (citizen.tx, citizen.ty):
            return citizen
        return dataclasses.replace(citizen, x=citizen.tx, y=citizen.ty)
    # Never overshoot the target on a long frame.
    step = min(citizen.speed * dt_ms * config.movement_factor, dist)
    dx = (citizen.tx - citizen.x) / dist
    dy = (citizen.ty - citizen.y) / dist
    return dataclasses.replace(citizen, x=citizen.x + dx * step, y=citizen.y + dy * step)


def update_citizens(citizens: list[Citizen], dt_ms: float,
                    config: CityConfig = DEFAULT_CONFIG) -> list[Citizen]:
    """Interpolate every citizen toward its target. Pure."""
    return [move_citizen(c, dt_ms, config) for c in citizens]
