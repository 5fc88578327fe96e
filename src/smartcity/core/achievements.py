"""
Achievements: one-way flags that unlock when the city crosses a threshold.

Predicates are pure functions of the current state (plus the coverage value
computed this tick). Unlocking is a set union, so evaluation order never
matters and nothing is ever taken back short of a full reset.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from smartcity.core.state import CityState

logger = logging.getLogger(__name__)


class AchievementId(str, Enum):
    POPULATION_MILESTONE = "population-milestone"
    SATISFACTION_STAR = "satisfaction-star"
    BUILDER_MASTER = "builder-master"
    NETWORK_EXPERT = "network-expert"
    FULL_COVERAGE = "full-coverage"
    WEALTH_MILESTONE = "wealth-milestone"


@dataclass
class AchievementThresholds:
    """Unlock thresholds."""

    population: int = 10000
    satisfaction: float = 90.0
    buildings: int = 20
    towers: int = 10
    coverage: float = 100.0
    money: int = 100000


Predicate = Callable[["CityState", float, AchievementThresholds], bool]

PREDICATES: dict[AchievementId, Predicate] = {
    AchievementId.POPULATION_MILESTONE: lambda s, cov, t: s.population >= t.population,
    AchievementId.SATISFACTION_STAR: lambda s, cov, t: s.satisfaction >= t.satisfaction,
    AchievementId.BUILDER_MASTER: lambda s, cov, t: len(s.buildings) >= t.buildings,
    AchievementId.NETWORK_EXPERT: lambda s, cov, t: len(s.towers) >= t.towers,
    AchievementId.FULL_COVERAGE: lambda s, cov, t: cov >= t.coverage,
    AchievementId.WEALTH_MILESTONE: lambda s, cov, t: s.money >= t.money,
}


def evaluate_achievements(
    state: "CityState",
    coverage: float,
    thresholds: AchievementThresholds,
) -> set[AchievementId]:
    """
    Unlock every locked achievement whose predicate holds.

    Mutates state.unlocked_achievements (only ever adding to it).

    Returns:
        The achievements unlocked by this call
    """
    newly = {
        achievement
        for achievement, predicate in PREDICATES.items()
        if achievement not in state.unlocked_achievements
        and predicate(state, coverage, thresholds)
    }
    if newly:
        state.unlocked_achievements |= newly
        for achievement in sorted(newly, key=lambda a: a.value):
            logger.info("Day %d: achievement unlocked: %s", state.day, achievement.value)
    return newly
