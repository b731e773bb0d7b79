"""City simulation configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CityConfig:
    """Immutable game-design constants for the city simulation.

    Attributes:
        grid_size: Rows and columns of the square building grid.
        tile_width: Screen width of one isometric tile.
        tile_height: Screen height of one isometric tile.
        starting_money: Treasury of a fresh city.
        starting_happiness: Happiness of a fresh city.
        starting_day_time: Day phase of a fresh city.
        need_threshold: Highest need below which an idle citizen does not travel.
        wander_chance: Chance an idle citizen picks a new spot near home.
        no_destination_penalty: Satisfaction lost when no building serves the need.
        give_up_penalty: Satisfaction lost when a destination is unusable on arrival.
        visit_bonus: Satisfaction gained per completed visit.
        arrival_radius: Screen distance at which the tick treats a citizen as arrived.
        snap_radius: Screen distance at which the frame update snaps to target.
        movement_factor: Screen units per millisecond per unit of citizen speed.
        max_spawns_per_tick: Citizens created per tick at most.
        demolish_refund: Share of the catalog cost returned on demolition.
        fire_penalty: Building happiness lost per burning tile.
        diversity_bonus: Building happiness gained with homes, shops and factories.
        police_bonus: Building happiness per police station.
        satisfaction_weight: Weight of mean citizen satisfaction in happiness.
        building_weight: Weight of the building score in happiness.
        building_happiness_factor: Scale of each tile's happiness effect.
        school_revenue_bonus: Revenue multiplier added per school.
        max_active_events: Concurrent events at most.
        event_chance: Per-tick chance of trying to spawn an event.
        event_min_buildings: Buildings required before events spawn.
        fire_min_buildings: Buildings that must be exceeded for a fire.
        day_step: Day phase advance per tick.
        notification_limit: Notifications kept in the log, 0 keeps all.
        particle_limit: Smoke particles kept after each tick at most.
        tick_intervals: ``(speed, milliseconds)`` pairs, ``None`` when paused.
    """

    grid_size: int = 14
    tile_width: int = 64
    tile_height: int = 32
    starting_money: int = 1000
    starting_happiness: int = 50
    starting_day_time: float = 0.35
    need_threshold: float = 40.0
    wander_chance: float = 0.3
    no_destination_penalty: float = 2.0
    give_up_penalty: float = 5.0
    visit_bonus: float = 8.0
    arrival_radius: float = 4.0
    snap_radius: float = 2.0
    movement_factor: float = 0.06
    max_spawns_per_tick: int = 2
    demolish_refund: float = 0.25
    fire_penalty: float = 5.0
    diversity_bonus: float = 5.0
    police_bonus: float = 2.0
    satisfaction_weight: float = 0.7
    building_weight: float = 0.3
    building_happiness_factor: float = 0.5
    school_revenue_bonus: float = 0.1
    max_active_events: int = 2
    event_chance: float = 0.08
    event_min_buildings: int = 5
    fire_min_buildings: int = 3
    day_step: float = 1 / 120
    notification_limit: int = 20
    particle_limit: int = 200
    tick_intervals: tuple[tuple[int, int | None], ...] = (
        (0, None), (1, 2000), (2, 1000), (3, 500),
    )

    @property
    def half_width(self) -> float:
        return self.tile_width / 2

    @property
    def half_height(self) -> float:
        return self.tile_height / 2


DEFAULT_CONFIG = CityConfig()
