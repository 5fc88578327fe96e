"""
SimulationEngine: owns the city and advances it one day per tick.

Each tick runs a fixed pipeline (the order is part of the contract, since
every step reads what the previous one wrote):

    1. population growth     ∝ population × satisfaction
    2. money                 += income - maintenance
    3. satisfaction          += (coverage - 70) / 10, clamped to [0, 100]
    4. event                 active: effect + countdown, idle: random roll
    5. day                   += 1
    6. game over             satisfaction <= 0 or population <= 0
    7. achievements          unlock whatever now holds

The engine is synchronous and not thread-safe. Callers that tick from a
timer while also taking player input must serialize at the boundary
(see smartcity.driver.CityDriver).

All randomness comes from one injected numpy Generator, so a seeded engine
replays identically.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import math
from typing import Sequence

import numpy as np

from smartcity.core.achievements import AchievementThresholds, evaluate_achievements
from smartcity.core.coverage import COVERAGE_MODES, CoverageMode, counter_coverage, coverage
from smartcity.core.economy import Economy, EconomyConfig
from smartcity.core.entities import ActionResult, Building, BuildingKind, Position, Tower
from smartcity.core.events import EventConfig, EventController
from smartcity.core.state import CitySnapshot, CityState

logger = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    """Configuration for the simulation engine."""

    coverage_mode: CoverageMode = "spatial"
    base_radius: float = 60.0  # Signal radius of a level-1 tower
    coverage_per_tower: float = 10.0  # Counter mode only

    # Starting values restored by reset()
    initial_population: int = 1000
    initial_satisfaction: float = 80.0
    initial_money: int = 20000

    growth_rate: float = 0.01  # Daily growth at 100% satisfaction
    satisfaction_target: float = 70.0  # Coverage above this raises satisfaction
    satisfaction_divisor: float = 10.0  # Damping of the coverage pull

    economy: EconomyConfig = field(default_factory=EconomyConfig)
    events: EventConfig = field(default_factory=EventConfig)

    # None picks the mode default: population milestone 10000 (spatial) or 5000 (counter)
    achievements: AchievementThresholds | None = None

    def __post_init__(self):
        if self.coverage_mode not in COVERAGE_MODES:
            raise ValueError(
                f"coverage_mode must be one of {COVERAGE_MODES}, got {self.coverage_mode!r}"
            )
        if self.base_radius <= 0:
            raise ValueError(f"base_radius must be positive, got {self.base_radius}")
        if self.satisfaction_divisor <= 0:
            raise ValueError(f"satisfaction_divisor must be positive, got {self.satisfaction_divisor}")
        if not 0.0 <= self.initial_satisfaction <= 100.0:
            raise ValueError(
                f"initial_satisfaction must be in [0, 100], got {self.initial_satisfaction}"
            )
        if self.initial_population < 0:
            raise ValueError(f"initial_population must be >= 0, got {self.initial_population}")

        if self.achievements is None:
            milestone = 10000 if self.coverage_mode == "spatial" else 5000
            self.achievements = AchievementThresholds(population=milestone)


class SimulationEngine:
    """
    The city simulation.

    Player actions (place/upgrade) return an ActionResult and never raise;
    a failed action leaves the state untouched.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        rng: np.random.Generator | None = None,
    ):
        self.config = config or EngineConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.economy = Economy(self.config.economy)
        self.events = EventController(self.config.events, self.rng)
        self._state: CityState
        self.reset()

    # ─── Lifecycle ──────────────────────────────────────────────────────

    def reset(self):
        """Throw the city away and start over from the configured values."""
        cfg = self.config
        self._state = CityState(
            population=cfg.initial_population,
            satisfaction=float(cfg.initial_satisfaction),
            money=cfg.initial_money,
            day=1,
        )
        logger.info(
            "City reset: population=%d satisfaction=%.1f money=%d",
            self._state.population, self._state.satisfaction, self._state.money,
        )

    # ─── Queries ────────────────────────────────────────────────────────

    def coverage(self) -> float:
        """Current network coverage in percent."""
        if self.config.coverage_mode == "counter":
            return self._state.stored_coverage
        return coverage(self._state.buildings, self._state.towers, self.config.base_radius)

    @property
    def state(self) -> CityState:
        """
        The live state, for inspection in tests and debugging.

        There is no setter. Views should use snapshot(), which cannot be
        used to bypass the player actions.
        """
        return self._state

    def building_upgrade_cost(self, index: int) -> int | None:
        """Cost of the next upgrade for a building, or None for a bad index."""
        if not 0 <= index < len(self._state.buildings):
            return None
        return self.economy.building_upgrade_cost(self._state.buildings[index])

    def snapshot(self) -> CitySnapshot:
        """Read-only projection of the current state."""
        s = self._state
        return CitySnapshot(
            population=s.population,
            satisfaction=s.satisfaction,
            money=s.money,
            day=s.day,
            coverage=self.coverage(),
            buildings=tuple(s.buildings),
            towers=tuple(s.towers),
            active_event=s.active_event,
            unlocked_achievements=frozenset(s.unlocked_achievements),
            game_over=s.game_over,
            building_upgrade_costs=tuple(
                self.economy.building_upgrade_cost(b) for b in s.buildings
            ),
            tower_upgrade_cost=self.config.economy.tower_upgrade_cost,
        )

    # ─── Player actions ─────────────────────────────────────────────────

    def _spend(self, cost: int, action: str) -> bool:
        if self._state.money < cost:
            logger.debug("%s rejected: need %d, have %d", action, cost, self._state.money)
            return False
        self._state.money -= cost
        return True

    def place_building(self, kind: BuildingKind | str, position: Sequence[float]) -> ActionResult:
        """Build a level-1 building at position."""
        kind = BuildingKind.parse(kind)
        position = _as_position(position)
        if not self._spend(self.config.economy.building_cost, f"place {kind.value}"):
            return ActionResult.INSUFFICIENT_FUNDS
        self._state.buildings.append(Building(kind=kind, position=position))
        return ActionResult.OK

    def place_tower(self, position: Sequence[float]) -> ActionResult:
        """Build a level-1 tower at position."""
        position = _as_position(position)
        if not self._spend(self.config.economy.tower_cost, "place tower"):
            return ActionResult.INSUFFICIENT_FUNDS
        self._state.towers.append(Tower(position=position))
        if self.config.coverage_mode == "counter":
            self._state.stored_coverage = counter_coverage(
                self._state.stored_coverage, self.config.coverage_per_tower
            )
        return ActionResult.OK

    def upgrade_building(self, index: int) -> ActionResult:
        """Raise a building's level by one. Costs unit * current level."""
        buildings = self._state.buildings
        if not 0 <= index < len(buildings):
            logger.debug("upgrade building rejected: no building at index %d", index)
            return ActionResult.INDEX_OUT_OF_RANGE
        building = buildings[index]
        if not self._spend(self.economy.building_upgrade_cost(building), "upgrade building"):
            return ActionResult.INSUFFICIENT_FUNDS
        buildings[index] = building.upgraded()
        return ActionResult.OK

    def upgrade_tower(self, index: int) -> ActionResult:
        """Raise a tower's level by one. Flat cost."""
        towers = self._state.towers
        if not 0 <= index < len(towers):
            logger.debug("upgrade tower rejected: no tower at index %d", index)
            return ActionResult.INDEX_OUT_OF_RANGE
        if not self._spend(self.config.economy.tower_upgrade_cost, "upgrade tower"):
            return ActionResult.INSUFFICIENT_FUNDS
        towers[index] = towers[index].upgraded()
        return ActionResult.OK

    # ─── Simulation ─────────────────────────────────────────────────────

    def tick(self) -> CitySnapshot:
        """Advance the city by one day. Returns the resulting snapshot."""
        s = self._state
        cfg = self.config

        # 1. Growth uses the satisfaction left over from yesterday
        growth = math.floor(s.population * cfg.growth_rate * (s.satisfaction / 100))
        s.population += growth

        # 2. Economy
        s.money += self.economy.net(s.buildings, len(s.towers))

        # 3. Coverage pulls satisfaction toward the target
        cov = self.coverage()
        s.satisfaction = _clamp(
            s.satisfaction + (cov - cfg.satisfaction_target) / cfg.satisfaction_divisor,
            0.0, 100.0,
        )

        # 4. Events
        self.events.step(s)

        # 5.
        s.day += 1

        # 6. Terminal state, but ticking stays legal
        if not s.game_over and (s.satisfaction <= 0 or s.population <= 0):
            s.game_over = True
            logger.info(
                "Game over on day %d (population=%d, satisfaction=%.1f)",
                s.day, s.population, s.satisfaction,
            )

        # 7. Buildings and towers are unchanged since step 3, so cov is current
        evaluate_achievements(s, cov, cfg.achievements)

        logger.debug(
            "Day %d: population=%d satisfaction=%.1f money=%d coverage=%.1f",
            s.day, s.population, s.satisfaction, s.money, cov,
        )
        return self.snapshot()

    def run(self, n_ticks: int, stop_on_game_over: bool = False) -> dict:
        """
        Run several ticks back to back.

        Args:
            n_ticks: Maximum number of ticks to run
            stop_on_game_over: Stop early once the game is lost

        Returns:
            Statistics dictionary
        """
        ticks_run = 0
        for _ in range(n_ticks):
            if stop_on_game_over and self._state.game_over:
                break
            self.tick()
            ticks_run += 1

        s = self._state
        return {
            "n_ticks": ticks_run,
            "day": s.day,
            "population": s.population,
            "satisfaction": s.satisfaction,
            "money": s.money,
            "coverage": self.coverage(),
            "achievements": len(s.unlocked_achievements),
            "game_over": s.game_over,
        }


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def _as_position(position: Sequence[float]) -> Position:
    if len(position) != 2:
        raise ValueError(f"position must be an (x, y) pair, got {position!r}")
    x, y = position
    return float(x), float(y)


def create_default_engine(
    seed: int | None = None,
    coverage_mode: CoverageMode = "spatial",
) -> SimulationEngine:
    """
    Factory for an engine with default balancing.

    Args:
        seed: Seed for the random source (None for fresh entropy)
        coverage_mode: "spatial" (tower geometry) or "counter" (flat meter)
    """
    return SimulationEngine(
        EngineConfig(coverage_mode=coverage_mode),
        rng=np.random.default_rng(seed),
    )
