"""Unit tests for analysis module."""

import numpy as np
import pytest

from smartcity.analysis.history import CityHistory
from smartcity.analysis.signal import covered_area_fraction, signal_field
from smartcity.core import AchievementId, BuildingKind, EngineConfig, EventConfig, SimulationEngine, Tower
from smartcity.driver import CityDriver


class TestCityHistory:
    """Tests for CityHistory."""

    def test_records_series(self, engine):
        history = CityHistory()
        for _ in range(3):
            history.record(engine.tick())

        assert len(history) == 3
        assert history.days.tolist() == [2, 3, 4]
        assert history.population[0] == 1008
        assert history.satisfaction[0] == pytest.approx(73.0)
        assert history.money.tolist() == [20000, 20000, 20000]
        assert not history.event_active.any()

    def test_subscribes_to_driver(self, engine):
        history = CityHistory()
        driver = CityDriver(engine)
        driver.subscribe(history)
        driver.run(5)
        assert len(history) == 5

    def test_summary(self):
        engine = SimulationEngine(
            EngineConfig(initial_money=100000, events=EventConfig(probability=0.0)),
            rng=np.random.default_rng(0),
        )
        engine.place_tower((0, 0))
        engine.place_building(BuildingKind.RESIDENTIAL, (5, 5))

        history = CityHistory()
        for _ in range(4):
            history.record(engine.tick())
        summary = history.summary()

        assert summary.days == 4
        assert summary.final_population == history.population[-1]
        assert summary.peak_population == history.population.max()
        assert summary.mean_coverage == 100.0
        assert summary.event_days == 0
        assert summary.game_over_day is None
        assert summary.achievement_days[AchievementId.FULL_COVERAGE] == 2

    def test_game_over_day(self):
        engine = SimulationEngine(
            EngineConfig(initial_satisfaction=3.0, events=EventConfig(probability=0.0)),
            rng=np.random.default_rng(0),
        )
        history = CityHistory()
        for _ in range(3):
            history.record(engine.tick())
        assert history.summary().game_over_day == 2

    def test_empty_summary_raises(self):
        with pytest.raises(ValueError):
            CityHistory().summary()

    def test_clear(self, engine):
        history = CityHistory()
        history.record(engine.tick())
        history.clear()
        assert len(history) == 0
        assert history.achievement_days == {}
        assert history.game_over_day is None
        assert history.population.size == 0

        history.record(engine.tick())
        assert history.days.tolist() == [3]


class TestSignalField:
    """Tests for signal_field."""

    def test_no_towers(self):
        field = signal_field([], 60.0, width=20, height=10)
        assert field.shape == (10, 20)
        assert np.all(field == 0)

    def test_single_tower_strict_radius(self):
        field = signal_field([Tower(position=(0, 0))], base_radius=5.0, width=10, height=10)
        assert field[0, 4] == 1
        assert field[0, 5] == 0  # exactly on the boundary
        assert field[4, 0] == 1
        assert field[9, 9] == 0

    def test_overlapping_towers_add(self):
        towers = [Tower(position=(0, 0)), Tower(position=(2, 0))]
        field = signal_field(towers, base_radius=5.0, width=10, height=10)
        assert field[0, 1] == 2

    def test_resolution_changes_grid(self):
        field = signal_field([Tower(position=(0, 0))], 60.0, width=400, height=180, resolution=10.0)
        assert field.shape == (18, 40)

    def test_covered_area_fraction(self):
        assert covered_area_fraction([], 60.0, 100, 100) == 0.0
        full = covered_area_fraction([Tower(position=(50, 50), level=3)], 60.0, 100, 100)
        assert full == 1.0
