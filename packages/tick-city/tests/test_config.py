"""Tests for tick_city.config."""

import dataclasses

import pytest
from tick_city.config import DEFAULT_CONFIG, CityConfig
from tick_city.engine import CityEngine


def test_config_is_hashable():
    assert hash(DEFAULT_CONFIG) == hash(CityConfig())


def test_config_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_CONFIG.grid_size = 20


def test_tick_intervals_are_immutable():
    assert dict(DEFAULT_CONFIG.tick_intervals) == {0: None, 1: 2000, 2: 1000, 3: 500}
    assert isinstance(DEFAULT_CONFIG.tick_intervals, tuple)


def test_custom_intervals_reach_the_engine():
    config = CityConfig(tick_intervals=((0, None), (1, 100), (2, 50), (3, 25)))
    engine = CityEngine(seed=1, config=config)
    engine.set_speed(3)
    assert engine.tick_interval_ms == 25
