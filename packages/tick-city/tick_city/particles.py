"""Smoke particles: spawned by the tick, advanced by the frame update."""
from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

from tick_city.catalog import INDUSTRIAL
from tick_city.grid import iter_tiles
from tick_city.projection import grid_to_screen
from tick_city.state import Particle

if TYPE_CHECKING:
    from tick_city.state import WorldState
    from tick_city.types import TickContext


def smoke_system(state: WorldState, ctx: TickContext) -> None:
    rng = ctx.random
    for r, c, tile in iter_tiles(state.grid):
        if tile.building_type == INDUSTRIAL and rng.random() < 0.4 + tile.visitors * 0.1:
            sx, sy = grid_to_screen(r, c, ctx.config)
            stack = -8 if rng.random() > 0.5 else 6
            state.particles.append(Particle(
                x=sx + stack + (rng.random() - 0.5) * 3,
                y=sy - 14 + (rng.random() - 0.5) * 2,
                vx=(rng.random() - 0.3) * 0.3,
                vy=-0.4 - rng.random() * 0.3,
                age=0.0,
                max_age=60 + rng.random() * 40,
                size=3 + rng.random() * 3,
            ))
        if tile.on_fire and rng.random() < 0.4:
            sx, sy = grid_to_screen(r, c, ctx.config)
            state.particles.append(Particle(
                x=sx + (rng.random() - 0.5) * 10,
                y=sy - 5 + (rng.random() - 0.5) * 5,
                vx=(rng.random() - 0.5) * 0.5,
                vy=-0.6 - rng.random() * 0.4,
                age=0.0,
                max_age=40 + rng.random() * 30,
                size=4 + rng.random() * 4,
            ))

    # Only the frame update ages particles; headless runs rely on the cap.
    limit = ctx.config.particle_limit
    alive = [p for p in state.particles if p.age < p.max_age]
    state.particles = alive[-limit:] if limit > 0 else []


def update_particles(particles: list[Particle], dt_ms: float,
                     factor: float = 0.06) -> list[Particle]:
    """Advance particles by *dt_ms* and drop the expired ones. Pure."""
    step = dt_ms * factor
    moved = (
        dataclasses.replace(p, x=p.x + p.vx * step, y=p.y + p.vy * step, age=p.age + step)
        for p in particles
    )
    return [p for p in moved if p.age < p.max_age]
