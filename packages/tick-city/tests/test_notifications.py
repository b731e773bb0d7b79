"""Tests for tick_city.notifications."""

from tick_city.config import CityConfig
from tick_city.notifications import kind_for_event, notify, recent
from tick_city.state import create_initial_state


def test_event_kinds():
    assert kind_for_event("fire") == "danger"
    assert kind_for_event("storm") == "danger"
    assert kind_for_event("boom") == "good"
    assert kind_for_event("festival") == "info"


def test_notify_stamps_tick():
    state = create_initial_state()
    state.tick = 12
    notify(state, "Hello", "good")
    (n,) = state.notifications
    assert (n.text, n.kind, n.tick) == ("Hello", "good", 12)


def test_log_is_bounded():
    state = create_initial_state()
    for i in range(25):
        notify(state, f"n{i}")
    assert len(state.notifications) == 20
    assert state.notifications[0].text == "n5"
    assert state.notifications[-1].text == "n24"


def test_recent_filters():
    state = create_initial_state()
    notify(state, "a", "danger")
    state.tick = 5
    notify(state, "b", "good")
    notify(state, "c", "danger")
    assert [n.text for n in recent(state, kind="danger")] == ["a", "c"]
    assert [n.text for n in recent(state, after=0)] == ["b", "c"]


def test_log_size_follows_config():
    state = create_initial_state(CityConfig(notification_limit=3))
    for i in range(5):
        notify(state, f"n{i}")
    assert [n.text for n in state.notifications] == ["n2", "n3", "n4"]


def test_zero_limit_keeps_everything():
    state = create_initial_state(CityConfig(notification_limit=0))
    for i in range(30):
        notify(state, f"n{i}")
    assert len(state.notifications) == 30
