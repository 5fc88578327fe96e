"""
CityDriver: the outside world's handle on a running city.

The engine itself is single-threaded. The driver is the boundary that makes
it safe to tick on a background timer while a player issues actions from
another thread: every call goes through one lock, so a tick and an action
never interleave. Readers get CitySnapshots, never the live state.

Typical use::

    driver = CityDriver(create_default_engine(seed=1))
    driver.place_tower()
    driver.place_building("residential")
    driver.start(interval=1.0)   # one simulated day per second
    ...
    driver.stop()
"""

from __future__ import annotations
import logging
import threading
from typing import Callable

from smartcity.core.engine import SimulationEngine
from smartcity.core.entities import ActionResult, BuildingKind
from smartcity.core.placement import RandomPlacement
from smartcity.core.state import CitySnapshot

logger = logging.getLogger(__name__)

TickListener = Callable[[CitySnapshot], None]


class CityDriver:
    """Serializes ticks and player actions on one engine."""

    def __init__(
        self,
        engine: SimulationEngine,
        placement: RandomPlacement | None = None,
    ):
        self._engine = engine
        # Share the engine's generator so one seed fixes the whole game
        self._placement = placement if placement is not None else RandomPlacement(rng=engine.rng)
        self._lock = threading.Lock()
        self._listeners: list[TickListener] = []
        self._running = False
        self._stop_requested = threading.Event()
        self._thread: threading.Thread | None = None

    # -- Reading ------------------------------------------------------------

    def snapshot(self) -> CitySnapshot:
        with self._lock:
            return self._engine.snapshot()

    def subscribe(self, listener: TickListener) -> None:
        """Call listener with the new snapshot after every tick."""
        self._listeners.append(listener)

    @property
    def running(self) -> bool:
        return self._running

    # -- Actions ------------------------------------------------------------

    def place_building(self, kind: BuildingKind | str, position=None) -> ActionResult:
        """Place a building, drawing a random position if none is given."""
        with self._lock:
            if position is None:
                position = self._placement.building_position()
            return self._engine.place_building(kind, position)

    def place_tower(self, position=None) -> ActionResult:
        """Place a tower, drawing a random position if none is given."""
        with self._lock:
            if position is None:
                position = self._placement.tower_position()
            return self._engine.place_tower(position)

    def upgrade_building(self, index: int) -> ActionResult:
        with self._lock:
            return self._engine.upgrade_building(index)

    def upgrade_tower(self, index: int) -> ActionResult:
        with self._lock:
            return self._engine.upgrade_tower(index)

    def reset(self) -> CitySnapshot:
        with self._lock:
            self._engine.reset()
            return self._engine.snapshot()

    # -- Ticking ------------------------------------------------------------

    def tick(self) -> CitySnapshot:
        """Advance one day and notify listeners (outside the lock)."""
        with self._lock:
            snapshot = self._engine.tick()
        for listener in self._listeners:
            listener(snapshot)
        return snapshot

    def run(self, n_ticks: int) -> CitySnapshot:
        """
        Tick synchronously, stopping early once the game is over.

        Returns:
            The last snapshot
        """
        snapshot = self.snapshot()
        for _ in range(n_ticks):
            if snapshot.game_over:
                break
            snapshot = self.tick()
        return snapshot

    def start(self, interval: float = 1.0) -> None:
        """Tick on a background thread every `interval` seconds until stopped or game over."""
        if self._running:
            return
        self._running = True
        self._stop_requested.clear()
        self._thread = threading.Thread(
            target=self._tick_loop, args=(interval,), name="city-tick", daemon=True
        )
        self._thread.start()
        logger.info("Driver started (interval=%.2fs)", interval)

    def stop(self) -> None:
        """Stop the background loop and wait for the current tick to finish."""
        self._stop_requested.set()
        thread = self._thread
        # A listener may call stop() from the tick thread itself; the loop exits on its own
        if thread is not None and thread is not threading.current_thread():
            thread.join()
            self._running = False
            logger.info("Driver stopped")
        self._thread = None

    def _tick_loop(self, interval: float) -> None:
        try:
            # wait() returns True once stop() is called
            while not self._stop_requested.wait(interval):
                try:
                    snapshot = self.tick()
                except Exception:
                    logger.exception("Tick failed, halting driver")
                    break
                if snapshot.game_over:
                    logger.info("Driver halting: game over on day %d", snapshot.day)
                    break
        finally:
            self._running = False
