"""Random city events: fires, booms, storms, festivals, population surges.

Tick execution order:
1. ``event_effects_system`` - fold the effects of every event active at the
   start of the tick into the ledger, then count durations down and drop
   expired events.
2. ``make_event_spawn_system`` - roll for a new event, append it, notify,
   and ignite a building when the new event is a fire.
"""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from tick_city.catalog import FIRE_STATION
from tick_city.fire import fire_candidates, ignite
from tick_city.grid import count_buildings, count_non_empty
from tick_city.notifications import kind_for_event, notify
from tick_city.state import GameEvent

if TYPE_CHECKING:
    from tick_city.state import WorldState
    from tick_city.types import TickContext

logger = logging.getLogger(__name__)

FIRE = "fire"
BOOM = "boom"
STORM = "storm"
FESTIVAL = "festival"
POPULATION_SURGE = "population_surge"


@dataclass(frozen=True)
class EventDef:
    """Definition of a random event. Not serialized.

    ``roll_below`` is the upper bound of the event's slice of the spawn
    roll; definitions are checked in order, so a roll that lands in an
    event whose conditions fail falls through to the next one.
    """

    type: str
    label: str
    description: str
    duration: int
    roll_below: float
    effect: dict[str, float] = field(default_factory=dict)
    conditions: tuple[str, ...] = ()

    def instantiate(self) -> GameEvent:
        return GameEvent(type=self.type, label=self.label, description=self.description,
                         duration=self.duration, effect=dict(self.effect))


DEFAULT_EVENTS: tuple[EventDef, ...] = (
    EventDef(FIRE, "Fire!", "A building caught fire!", 8, 0.2,
             conditions=("no_fire_station", "enough_buildings_for_fire")),
    EventDef(BOOM, "Economic Boom", "Visitors spending more! +50% revenue", 15, 0.45,
             effect={"income_mult": 1.5}),
    EventDef(STORM, "Storm", "Bad weather! Citizens stay home", 10, 0.65,
             effect={"happiness_add": -10}),
    EventDef(FESTIVAL, "Festival!", "Citizens celebrate! More visits", 12, 0.85,
             effect={"happiness_add": 12}),
    EventDef(POPULATION_SURGE, "Population Surge", "New residents!", 10, 1.0,
             effect={"pop_add": 20}),
)


class EventGuards:
    """Maps guard name strings to predicates over the world state."""

    def __init__(self) -> None:
        self._guards: dict[str, Callable[[WorldState, TickContext], bool]] = {}

    def register(self, name: str, fn: Callable[[WorldState, TickContext], bool]) -> None:
        """Register a named guard. Overwrites if already registered."""
        self._guards[name] = fn

    def check(self, name: str, state: WorldState, ctx: TickContext) -> bool:
        """Evaluate a guard. Raises KeyError if not registered."""
        return self._guards[name](state, ctx)


def default_guards() -> EventGuards:
    guards = EventGuards()
    guards.register("no_fire_station",
                    lambda s, ctx: count_buildings(s.grid)[FIRE_STATION] == 0)
    guards.register("enough_buildings_for_fire",
                    lambda s, ctx: count_non_empty(s.grid) > ctx.config.fire_min_buildings)
    return guards


def event_effects_system(state: WorldState, ctx: TickContext) -> None:
    ledger = ctx.ledger
    surviving: list[GameEvent] = []
    for event in state.events:
        ledger.income_mult *= event.effect.get("income_mult", 1.0)
        ledger.happiness_add += event.effect.get("happiness_add", 0.0)
        ledger.pop_add += int(event.effect.get("pop_add", 0))
        remaining = dataclasses.replace(event, duration=event.duration - 1)
        if remaining.duration > 0:
            surviving.append(remaining)
    state.events = surviving


def roll_event(state: WorldState, ctx: TickContext,
               definitions: tuple[EventDef, ...], guards: EventGuards) -> EventDef | None:
    """Pick the event to spawn this tick, or ``None``."""
    config = ctx.config
    if count_non_empty(state.grid) < config.event_min_buildings:
        return None
    if len(state.events) >= config.max_active_events:
        return None
    if ctx.random.random() > config.event_chance:
        return None

    roll = ctx.random.random()
    for defn in definitions:
        if roll >= defn.roll_below:
            continue
        if all(guards.check(name, state, ctx) for name in defn.conditions):
            return defn
    return None


def start_fire(state: WorldState, ctx: TickContext, duration: int) -> tuple[int, int] | None:
    candidates = fire_candidates(state.grid)
    if not candidates:
        return None
    row, col = ctx.random.choice(candidates)
    ignite(state.grid, row, col, duration)
    return row, col


def make_event_spawn_system(
    definitions: tuple[EventDef, ...] = DEFAULT_EVENTS,
    guards: EventGuards | None = None,
    on_start: Callable[[WorldState, TickContext, GameEvent], None] | None = None,
) -> Callable[[WorldState, TickContext], None]:
    """Return a system that may start one new event per tick."""
    guards_reg = guards if guards is not None else default_guards()

    def event_spawn_system(state: WorldState, ctx: TickContext) -> None:
        defn = roll_event(state, ctx, definitions, guards_reg)
        if defn is None:
            return
        event = defn.instantiate()
        state.events.append(event)
        notify(state, f"{event.label}: {event.description}", kind_for_event(event.type))
        logger.info("tick %d event started: %s", ctx.tick_number, event.type)
        if event.type == FIRE:
            spot = start_fire(state, ctx, event.duration)
            if spot is not None:
                logger.info("fire started at (%d, %d)", *spot)
        if on_start is not None:
            on_start(state, ctx, event)

    return event_spawn_system
