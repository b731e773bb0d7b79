"""Tests for tick_city.achievements."""

from tick_city.achievements import ACHIEVEMENTS, check_achievements, unlock_achievements
from tick_city.state import create_initial_state


class TestAchievements:
    def test_ids_unique(self):
        ids = [a.id for a in ACHIEVEMENTS]
        assert len(ids) == len(set(ids)) == 12

    def test_fresh_city_unlocks_nothing(self):
        state = create_initial_state()
        assert unlock_achievements(state) == []
        assert state.achievements_unlocked == []

    def test_first_house(self):
        state = create_initial_state()
        state.grid[0][0].building_type = "residential"
        unlocked = unlock_achievements(state)
        assert [a.id for a in unlocked] == ["first_house"]
        assert state.achievements_unlocked == ["first_house"]
        assert state.notifications[-1].text == "Achievement: First Home"
        assert state.notifications[-1].kind == "good"

    def test_unlock_is_permanent_and_idempotent(self):
        state = create_initial_state()
        state.grid[0][0].building_type = "residential"
        unlock_achievements(state)
        state.grid[0][0].building_type = "empty"
        assert unlock_achievements(state) == []
        assert state.achievements_unlocked == ["first_house"]
        assert len(state.notifications) == 1

    def test_state_based_predicates(self):
        state = create_initial_state()
        state.money = 10000
        state.total_money_earned = 50000
        state.happiness = 90
        state.total_visits = 500
        ids = {a.id for a in unlock_achievements(state)}
        assert ids == {"wealthy", "tycoon", "happy_citizens", "busy_city"}

    def test_grid_predicates(self):
        state = create_initial_state()
        types = ["residential", "commercial", "industrial", "park", "power",
                 "hospital", "school", "fire_station", "police"]
        for c, t in enumerate(types):
            state.grid[0][c].building_type = t
        state.grid[1][0].level = 3
        ids = {a.id for a in unlock_achievements(state)}
        assert {"diversified", "safe_city", "upgrader", "first_house"} <= ids
        assert "full_grid" not in ids

    def test_check_achievements_is_pure(self):
        state = create_initial_state()
        state.money = 10000
        result = check_achievements(state)
        assert result is not state
        assert result.achievements_unlocked == ["wealthy"]
        assert state.achievements_unlocked == []

    def test_check_achievements_returns_same_state_when_nothing_new(self):
        state = create_initial_state()
        assert check_achievements(state) is state
