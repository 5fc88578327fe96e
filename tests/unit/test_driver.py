"""Unit tests for CityDriver."""

import logging
import threading
import time

import numpy as np

from smartcity.core import ActionResult, BuildingKind, EngineConfig, SimulationEngine
from smartcity.driver import CityDriver


class TestActions:
    """Tests for actions routed through the driver."""

    def test_random_positions_when_none_given(self, engine):
        driver = CityDriver(engine)
        assert driver.place_tower() is ActionResult.OK
        assert driver.place_building(BuildingKind.RESIDENTIAL) is ActionResult.OK

        snap = driver.snapshot()
        x, y = snap.buildings[0].position
        assert 0.0 <= x <= 376.0 and 0.0 <= y <= 156.0
        x, y = snap.towers[0].position
        assert 0.0 <= x <= 368.0 and 0.0 <= y <= 148.0

    def test_explicit_position_is_used(self, engine):
        driver = CityDriver(engine)
        driver.place_building("commercial", (12, 34))
        assert driver.snapshot().buildings[0].position == (12.0, 34.0)

    def test_upgrades_and_reset(self, engine):
        driver = CityDriver(engine)
        driver.place_building(BuildingKind.RESIDENTIAL, (0, 0))
        driver.place_tower((0, 0))
        assert driver.upgrade_building(0) is ActionResult.OK
        assert driver.upgrade_tower(0) is ActionResult.OK
        assert driver.upgrade_tower(5) is ActionResult.INDEX_OUT_OF_RANGE

        snap = driver.reset()
        assert snap.money == 20000
        assert snap.buildings == ()


class TestTicking:
    """Tests for synchronous and threaded ticking."""

    def test_listeners_receive_snapshots(self, engine):
        driver = CityDriver(engine)
        days = []
        driver.subscribe(lambda snap: days.append(snap.day))
        driver.tick()
        driver.tick()
        assert days == [2, 3]

    def test_run_stops_at_game_over(self, quiet_config):
        config = EngineConfig(initial_satisfaction=3.0, events=quiet_config.events)
        driver = CityDriver(SimulationEngine(config, rng=np.random.default_rng(0)))
        snap = driver.run(50)
        assert snap.game_over is True
        assert snap.day == 2

    def test_background_loop(self, engine):
        driver = CityDriver(engine)
        reached = threading.Event()
        driver.subscribe(lambda snap: reached.set() if snap.day >= 4 else None)

        driver.start(interval=0.01)
        assert driver.running
        try:
            assert reached.wait(timeout=5.0)
        finally:
            driver.stop()
        assert not driver.running
        assert driver.snapshot().day >= 4

    def test_actions_during_background_loop(self, engine):
        driver = CityDriver(engine)
        driver.start(interval=0.001)
        try:
            results = [driver.place_building(BuildingKind.RESIDENTIAL) for _ in range(5)]
        finally:
            driver.stop()
        assert results == [ActionResult.OK] * 5
        assert len(driver.snapshot().buildings) == 5

    def test_loop_halts_on_game_over(self, quiet_config):
        config = EngineConfig(initial_satisfaction=3.0, events=quiet_config.events)
        driver = CityDriver(SimulationEngine(config, rng=np.random.default_rng(0)))
        done = threading.Event()
        driver.subscribe(lambda snap: done.set() if snap.game_over else None)

        driver.start(interval=0.01)
        try:
            assert done.wait(timeout=5.0)
        finally:
            driver.stop()
        assert driver.snapshot().day == 2

    def test_failing_listener_halts_loop_and_allows_restart(self, engine, caplog):
        driver = CityDriver(engine)
        calls = []

        def flaky(snap):
            calls.append(snap.day)
            if len(calls) == 1:
                raise RuntimeError("listener failed")

        driver.subscribe(flaky)
        with caplog.at_level(logging.ERROR, logger="smartcity.driver"):
            driver.start(interval=0.01)
            deadline = time.monotonic() + 5.0
            while driver.running and time.monotonic() < deadline:
                time.sleep(0.01)
        assert not driver.running
        assert driver.snapshot().day == 2
        assert any("Tick failed" in r.getMessage() for r in caplog.records)

        reached = threading.Event()
        driver.subscribe(lambda snap: reached.set() if snap.day >= 3 else None)
        driver.start(interval=0.01)
        try:
            assert driver.running
            assert reached.wait(timeout=5.0)
        finally:
            driver.stop()

    def test_stop_waits_for_slow_listener(self, engine):
        driver = CityDriver(engine)
        entered = threading.Event()
        finished = []

        def slow(snap):
            entered.set()
            time.sleep(0.3)
            finished.append(snap.day)

        driver.subscribe(slow)
        driver.start(interval=0.01)
        assert entered.wait(timeout=5.0)
        driver.stop()

        assert not driver.running
        assert finished  # the in-flight tick completed before stop() returned
        assert not any(t.name == "city-tick" and t.is_alive() for t in threading.enumerate())
