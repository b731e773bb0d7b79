"""CityEngine - owns the live world state, the seeded RNG and the speed setting."""

from __future__ import annotations

import dataclasses
import os
import random
from typing import Any, Callable

from tick_city import persistence
from tick_city.achievements import check_achievements
from tick_city.config import DEFAULT_CONFIG, CityConfig
from tick_city.motion import update_citizens
from tick_city.particles import update_particles
from tick_city.placement import place_building, upgrade_building
from tick_city.simulation import default_systems, game_tick
from tick_city.state import SPEEDS, WorldState, create_initial_state
from tick_city.types import System


class CityEngine:
    """Session controller for one city.

    The driver calls ``step`` at ``tick_interval_ms`` and ``frame`` on every
    display refresh; player input goes through ``place`` and ``upgrade``.
    """

    def __init__(self, seed: int | None = None, config: CityConfig = DEFAULT_CONFIG,
                 state: WorldState | None = None,
                 systems: list[System] | None = None) -> None:
        self._config = config
        self._state = state if state is not None else create_initial_state(config)
        self._systems: list[System] = list(systems) if systems is not None else default_systems()
        self._tick_hooks: list[Callable[[WorldState, WorldState], None]] = []

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def state(self) -> WorldState:
        return self._state

    @property
    def config(self) -> CityConfig:
        return self._config

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def tick_interval_ms(self) -> int | None:
        return dict(self._config.tick_intervals).get(self._state.speed)

    def add_system(self, system: System) -> None:
        """Append a system that runs after the built-in ones."""
        self._systems.append(system)

    def on_tick(self, hook: Callable[[WorldState, WorldState], None]) -> None:
        """Register ``hook(previous, current)``, called after every non-paused tick."""
        self._tick_hooks.append(hook)

    def step(self) -> WorldState:
        previous = self._state
        self._state = game_tick(previous, self._rng, self._config, self._systems)
        if self._state is not previous:
            for hook in self._tick_hooks:
                hook(previous, self._state)
        return self._state

    def run(self, n: int) -> WorldState:
        for _ in range(n):
            self.step()
        return self._state

    def frame(self, dt_ms: float) -> WorldState:
        """Advance citizen and particle animation by *dt_ms* (frozen while paused)."""
        if self._state.paused:
            dt_ms = 0.0
        if dt_ms <= 0:
            return self._state
        self._state = dataclasses.replace(
            self._state,
            citizens=update_citizens(self._state.citizens, dt_ms, self._config),
            particles=update_particles(self._state.particles, dt_ms,
                                       self._config.movement_factor),
        )
        return self._state

    def set_speed(self, speed: int) -> None:
        if speed not in SPEEDS:
            raise ValueError(f"speed must be one of {SPEEDS}, got {speed!r}")
        self._state = dataclasses.replace(self._state, speed=speed)

    def place(self, row: int, col: int, building_type: str) -> bool:
        result = place_building(self._state, row, col, building_type, self._config)
        if result is None:
            return False
        self._state = check_achievements(result)
        return True

    def upgrade(self, row: int, col: int) -> bool:
        result = upgrade_building(self._state, row, col)
        if result is None:
            return False
        self._state = check_achievements(result)
        return True

    def snapshot(self) -> dict[str, Any]:
        return persistence.snapshot(self._state)

    def restore(self, data: dict[str, Any]) -> None:
        self._state = persistence.restore(data, self._config)
