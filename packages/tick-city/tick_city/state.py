"""World state aggregate and the records it owns."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from tick_city.catalog import NEEDS
from tick_city.config import DEFAULT_CONFIG, CityConfig
from tick_city.grid import Grid, make_grid

IDLE = "idle"
WALKING = "walking"
VISITING = "visiting"
RETURNING = "returning"

PAUSED = 0
SPEEDS = (0, 1, 2, 3)


@dataclass
class Citizen:
    """An agent living in a residential tile.

    ``x, y`` and ``tx, ty`` are screen-space coordinates; tiles are
    referenced by (row, col) only and may change under the citizen.
    """

    id: int
    x: float
    y: float
    tx: float
    ty: float
    home_r: int
    home_c: int
    color: str = "#3498db"
    speed: float = 0.5
    state: str = IDLE
    target_r: int | None = None
    target_c: int | None = None
    target_type: str | None = None
    needs: dict[str, float] = field(default_factory=lambda: {n: 0.0 for n in NEEDS})
    satisfaction: float = 70.0
    visit_timer: int = 0
    wallet: float = 50.0

    @property
    def has_target(self) -> bool:
        return self.target_r is not None and self.target_c is not None

    def clear_target(self) -> None:
        self.target_r = None
        self.target_c = None
        self.target_type = None


@dataclass
class GameEvent:
    type: str
    label: str
    description: str
    duration: int
    effect: dict[str, float] = field(default_factory=dict)


@dataclass
class Notification:
    text: str
    kind: str
    tick: int


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    age: float
    max_age: float
    size: float


@dataclass
class WorldState:
    grid: Grid
    money: int
    happiness: int
    tick: int = 0
    citizens: list[Citizen] = field(default_factory=list)
    particles: list[Particle] = field(default_factory=list)
    speed: int = 1
    events: list[GameEvent] = field(default_factory=list)
    day_time: float = 0.35
    total_buildings: int = 0
    total_money_earned: int = 0
    total_visits: int = 0
    income_this_tick: int = 0
    upkeep_this_tick: int = 0
    notifications: deque[Notification] = field(default_factory=lambda: deque(maxlen=20))
    achievements_unlocked: list[str] = field(default_factory=list)
    next_citizen_id: int = 1

    @property
    def population(self) -> int:
        return len(self.citizens)

    @property
    def paused(self) -> bool:
        return self.speed == PAUSED


def create_initial_state(config: CityConfig = DEFAULT_CONFIG) -> WorldState:
    return WorldState(
        grid=make_grid(config.grid_size),
        money=config.starting_money,
        happiness=config.starting_happiness,
        day_time=config.starting_day_time,
        notifications=deque(maxlen=config.notification_limit or None),
    )
