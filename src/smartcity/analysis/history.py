"""
CityHistory: a day-by-day record of a running city.

Subscribe it to a driver (or call record() after each tick) and it keeps
one row per snapshot. Series come back as numpy arrays for plotting and
summary statistics.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from smartcity.core.state import CitySnapshot
    from smartcity.core.achievements import AchievementId


@dataclass
class HistorySummary:
    """Headline numbers for a run."""

    days: int
    final_population: int
    peak_population: int
    final_money: int
    min_money: int
    mean_satisfaction: float
    min_satisfaction: float
    mean_coverage: float
    event_days: int  # Days on which some event was active
    achievement_days: dict["AchievementId", int] = field(default_factory=dict)
    game_over_day: int | None = None


class CityHistory:
    """Accumulates snapshots as parallel series."""

    def __init__(self):
        self._day: list[int] = []
        self._population: list[int] = []
        self._satisfaction: list[float] = []
        self._money: list[int] = []
        self._coverage: list[float] = []
        self._event: list[bool] = []
        self.achievement_days: dict["AchievementId", int] = {}
        self.game_over_day: int | None = None

    def __len__(self) -> int:
        return len(self._day)

    def __call__(self, snapshot: "CitySnapshot") -> None:
        """Allows passing the history straight to CityDriver.subscribe()."""
        self.record(snapshot)

    def record(self, snapshot: "CitySnapshot") -> None:
        self._day.append(snapshot.day)
        self._population.append(snapshot.population)
        self._satisfaction.append(snapshot.satisfaction)
        self._money.append(snapshot.money)
        self._coverage.append(snapshot.coverage)
        self._event.append(snapshot.active_event is not None)

        for achievement in snapshot.unlocked_achievements:
            self.achievement_days.setdefault(achievement, snapshot.day)
        if snapshot.game_over and self.game_over_day is None:
            self.game_over_day = snapshot.day

    def clear(self) -> None:
        for series in (self._day, self._population, self._satisfaction,
                       self._money, self._coverage, self._event):
            series.clear()
        self.achievement_days.clear()
        self.game_over_day = None

    # Series

    @property
    def days(self) -> np.ndarray:
        return np.array(self._day, dtype=np.int64)

    @property
    def population(self) -> np.ndarray:
        return np.array(self._population, dtype=np.int64)

    @property
    def satisfaction(self) -> np.ndarray:
        return np.array(self._satisfaction, dtype=np.float64)

    @property
    def money(self) -> np.ndarray:
        return np.array(self._money, dtype=np.int64)

    @property
    def coverage(self) -> np.ndarray:
        return np.array(self._coverage, dtype=np.float64)

    @property
    def event_active(self) -> np.ndarray:
        return np.array(self._event, dtype=bool)

    def summary(self) -> HistorySummary:
        """Summarize the recorded run. Raises ValueError if nothing was recorded."""
        if not self._day:
            raise ValueError("No snapshots recorded")

        population = self.population
        money = self.money
        satisfaction = self.satisfaction

        return HistorySummary(
            days=len(self._day),
            final_population=int(population[-1]),
            peak_population=int(population.max()),
            final_money=int(money[-1]),
            min_money=int(money.min()),
            mean_satisfaction=float(satisfaction.mean()),
            min_satisfaction=float(satisfaction.min()),
            mean_coverage=float(self.coverage.mean()),
            event_days=int(self.event_active.sum()),
            achievement_days=dict(self.achievement_days),
            game_over_day=self.game_over_day,
        )
