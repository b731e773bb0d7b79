"""Tests for tick_city.citizens - needs and the visit state machine."""

import random

from tick_city.citizens import (
    citizen_system, create_citizen, decide, find_building_for_need, grow_needs, highest_need,
)
from tick_city.config import DEFAULT_CONFIG
from tick_city.state import Citizen, create_initial_state
from tick_city.types import TickContext, TickLedger


def _ctx(seed=42):
    return TickContext(tick_number=1, random=random.Random(seed),
                       config=DEFAULT_CONFIG, ledger=TickLedger())


def _needs(**overrides):
    needs = {"shopping": 0.0, "entertainment": 0.0, "work": 0.0, "health": 0.0, "education": 0.0}
    needs.update(overrides)
    return needs


def _citizen(cid, state="idle", target=None, target_type=None, **kw):
    c = Citizen(id=cid, x=0.0, y=0.0, tx=0.0, ty=0.0, home_r=0, home_c=0, state=state, **kw)
    if target is not None:
        c.target_r, c.target_c = target
        c.target_type = target_type
    return c


def _city(*buildings):
    state = create_initial_state()
    state.grid[0][0].building_type = "residential"
    for building_type, r, c in buildings:
        state.grid[r][c].building_type = building_type
    return state


class TestCreateCitizen:
    def test_fresh_citizen(self):
        rng = random.Random(1)
        c = create_citizen(7, 3, 4, rng, DEFAULT_CONFIG)
        assert c.id == 7
        assert (c.home_r, c.home_c) == (3, 4)
        assert c.state == "idle"
        assert not c.has_target
        assert c.satisfaction == 70.0
        assert c.needs["health"] == 0.0
        assert 20 <= c.needs["shopping"] <= 50
        assert 30 <= c.needs["work"] <= 50
        assert 0.3 <= c.speed <= 0.7

    def test_same_seed_same_citizen(self):
        a = create_citizen(1, 2, 2, random.Random(5), DEFAULT_CONFIG)
        b = create_citizen(1, 2, 2, random.Random(5), DEFAULT_CONFIG)
        assert a == b


class TestNeeds:
    def test_needs_grow(self):
        c = _citizen(1, needs=_needs())
        grow_needs(c, random.Random(0))
        assert 2.0 <= c.needs["shopping"] <= 3.5
        assert 1.5 <= c.needs["entertainment"] <= 2.5
        assert 2.5 <= c.needs["work"] <= 3.5
        assert 0.3 <= c.needs["health"] <= 0.6
        assert 0.8 <= c.needs["education"] <= 1.3

    def test_needs_saturate_at_100(self):
        c = _citizen(1, needs=_needs(shopping=99.5, work=100.0))
        grow_needs(c, random.Random(0))
        assert c.needs["shopping"] == 100.0
        assert c.needs["work"] == 100.0

    def test_highest_need(self):
        assert highest_need(_needs(work=55, health=20)) == ("work", 55)

    def test_highest_need_tie_prefers_first(self):
        assert highest_need(_needs(entertainment=50, education=50))[0] == "entertainment"

    def test_highest_need_all_zero(self):
        assert highest_need(_needs()) == ("shopping", 0.0)


class TestFindBuilding:
    def test_none_without_candidates(self):
        state = _city(("park", 1, 1))
        assert find_building_for_need(state.grid, "shopping", random.Random(0)) is None

    def test_skips_full_tiles(self):
        state = _city(("commercial", 1, 1), ("commercial", 2, 2))
        state.grid[1][1].visitors = 6
        assert find_building_for_need(state.grid, "shopping", random.Random(0)) == (2, 2)

    def test_level_raises_room(self):
        state = _city(("commercial", 1, 1))
        state.grid[1][1].visitors = 6
        state.grid[1][1].level = 2
        assert find_building_for_need(state.grid, "shopping", random.Random(0)) == (1, 1)


class TestDecide:
    def test_below_threshold_stays_idle(self):
        state = _city(("commercial", 1, 1))
        c = _citizen(1, needs=_needs(shopping=39.9))
        decide(c, state.grid, random.Random(0), DEFAULT_CONFIG)
        assert c.state == "idle"
        assert c.satisfaction == 70.0

    def test_pressing_need_walks_to_building(self):
        state = _city(("commercial", 1, 1))
        c = _citizen(1, needs=_needs(shopping=40))
        decide(c, state.grid, random.Random(0), DEFAULT_CONFIG)
        assert c.state == "walking"
        assert (c.target_r, c.target_c) == (1, 1)
        assert c.target_type == "commercial"

    def test_no_destination_costs_satisfaction(self):
        state = _city()
        c = _citizen(1, needs=_needs(work=80))
        decide(c, state.grid, random.Random(0), DEFAULT_CONFIG)
        assert c.state == "idle"
        assert c.satisfaction == 68.0

    def test_penalty_floors_at_zero(self):
        c = _citizen(1, needs=_needs(work=80), satisfaction=1.0)
        decide(c, _city().grid, random.Random(0), DEFAULT_CONFIG)
        assert c.satisfaction == 0.0


class TestCitizenSystem:
    def test_full_shop_leaves_idle_citizen_unhappy(self):
        state = _city(("commercial", 2, 2))
        for cid in range(1, 7):
            state.citizens.append(_citizen(cid, "visiting", (2, 2), "commercial", visit_timer=3))
        seeker = _citizen(7, needs=_needs(shopping=60))
        state.citizens.append(seeker)

        citizen_system(state, _ctx())

        assert state.grid[2][2].visitors == 6
        assert seeker.state == "idle"
        assert seeker.satisfaction == 68.0

    def test_arrival_starts_visit(self):
        state = _city(("commercial", 2, 2))
        walker = _citizen(1, "walking", (2, 2), "commercial")
        state.citizens.append(walker)

        citizen_system(state, _ctx())

        assert walker.state == "visiting"
        assert walker.visit_timer == 3
        assert state.grid[2][2].visitors == 1

    def test_not_arrived_keeps_walking(self):
        state = _city(("commercial", 2, 2))
        walker = _citizen(1, "walking", (2, 2), "commercial")
        walker.tx = 100.0
        state.citizens.append(walker)

        citizen_system(state, _ctx())

        assert walker.state == "walking"
        assert state.grid[2][2].visitors == 0

    def test_arrival_at_full_building_gives_up(self):
        state = _city(("park", 2, 2))
        for cid in range(1, 11):
            state.citizens.append(_citizen(cid, "visiting", (2, 2), "park", visit_timer=5))
        walker = _citizen(11, "walking", (2, 2), "park")
        state.citizens.append(walker)

        citizen_system(state, _ctx())

        assert walker.state == "returning"
        assert not walker.has_target
        assert walker.satisfaction == 65.0
        assert state.grid[2][2].visitors == 10

    def test_arrival_at_demolished_building_gives_up(self):
        state = _city()
        walker = _citizen(1, "walking", (2, 2), "commercial")
        state.citizens.append(walker)

        citizen_system(state, _ctx())

        assert walker.state == "returning"
        assert walker.satisfaction == 65.0

    def test_visit_completes(self):
        state = _city(("commercial", 2, 2))
        state.grid[2][2].level = 2
        visitor = _citizen(1, "visiting", (2, 2), "commercial",
                           visit_timer=1, needs=_needs(shopping=90))
        state.citizens.append(visitor)
        ctx = _ctx()

        citizen_system(state, ctx)

        tile = state.grid[2][2]
        assert visitor.state == "returning"
        assert not visitor.has_target
        assert 32.0 <= visitor.needs["shopping"] <= 33.5
        assert visitor.satisfaction == 78.0
        assert ctx.ledger.visit_revenue == 12
        assert ctx.ledger.visit_count == 1
        assert tile.revenue == 12
        assert tile.total_visits == 1
        assert tile.visitors == 1

    def test_visit_counts_down(self):
        state = _city(("hospital", 2, 2))
        visitor = _citizen(1, "visiting", (2, 2), "hospital", visit_timer=4)
        state.citizens.append(visitor)
        ctx = _ctx()

        citizen_system(state, ctx)

        assert visitor.state == "visiting"
        assert visitor.visit_timer == 3
        assert ctx.ledger.visit_count == 0
        assert state.grid[2][2].visitors == 1

    def test_free_visit_reduces_need_without_revenue(self):
        state = _city(("park", 2, 2))
        visitor = _citizen(1, "visiting", (2, 2), "park",
                           visit_timer=1, needs=_needs(entertainment=20))
        state.citizens.append(visitor)
        ctx = _ctx()

        citizen_system(state, ctx)

        assert visitor.needs["entertainment"] == 0.0
        assert ctx.ledger.visit_revenue == 0
        assert ctx.ledger.visit_count == 1

    def test_visitor_evicted_when_building_changes(self):
        state = _city(("park", 2, 2))
        visitor = _citizen(1, "visiting", (2, 2), "commercial", visit_timer=2)
        state.citizens.append(visitor)

        citizen_system(state, _ctx())

        assert visitor.state == "returning"
        assert visitor.satisfaction == 65.0
        assert state.grid[2][2].visitors == 0

    def test_visitor_evicted_when_capacity_shrinks(self):
        state = _city(("hospital", 2, 2))
        for cid in range(1, 6):
            state.citizens.append(_citizen(cid, "visiting", (2, 2), "hospital", visit_timer=3))

        citizen_system(state, _ctx())

        assert state.grid[2][2].visitors == 4
        assert [c.state for c in state.citizens].count("returning") == 1

    def test_returning_arrives_home(self):
        state = _city()
        c = _citizen(1, "returning")
        state.citizens.append(c)

        citizen_system(state, _ctx())

        assert c.state == "idle"

    def test_visitor_counts_recomputed_each_tick(self):
        state = _city(("commercial", 2, 2))
        state.grid[2][2].visitors = 5
        state.grid[2][2].revenue = 40

        citizen_system(state, _ctx())

        assert state.grid[2][2].visitors == 0
        assert state.grid[2][2].revenue == 0
