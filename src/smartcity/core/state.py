"""
CityState: the mutable root of the simulation, and its read-only snapshot.

The engine exclusively owns one CityState. Everything outside the engine
(views, drivers, history recorders) sees a CitySnapshot instead: a frozen
copy built from tuples and frozen entities, so nothing a reader does can
break the engine's invariants.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from smartcity.core.entities import Building, Tower
    from smartcity.core.events import ActiveEvent
    from smartcity.core.achievements import AchievementId


@dataclass
class CityState:
    """Everything that changes from tick to tick."""

    population: int = 1000
    satisfaction: float = 80.0  # Always within [0, 100]
    money: int = 20000  # May go negative
    day: int = 1

    buildings: list["Building"] = field(default_factory=list)
    towers: list["Tower"] = field(default_factory=list)

    active_event: "ActiveEvent | None" = None
    unlocked_achievements: set["AchievementId"] = field(default_factory=set)
    game_over: bool = False

    # Only meaningful in counter mode; spatial mode derives coverage on demand
    stored_coverage: float = 0.0


@dataclass(frozen=True)
class CitySnapshot:
    """Immutable projection of CityState for rendering and analysis."""

    population: int
    satisfaction: float
    money: int
    day: int
    coverage: float
    buildings: tuple["Building", ...]
    towers: tuple["Tower", ...]
    active_event: "ActiveEvent | None"
    unlocked_achievements: frozenset["AchievementId"]
    game_over: bool
    building_upgrade_costs: tuple[int, ...] = ()
    tower_upgrade_cost: int = 0

    @property
    def building_count(self) -> int:
        return len(self.buildings)

    @property
    def tower_count(self) -> int:
        return len(self.towers)

    def as_dict(self) -> dict:
        """Plain-data view (enums as their string values)."""
        return {
            "population": self.population,
            "satisfaction": self.satisfaction,
            "money": self.money,
            "day": self.day,
            "coverage": self.coverage,
            "buildings": [
                {"kind": b.kind.value, "level": b.level, "x": b.x, "y": b.y}
                for b in self.buildings
            ],
            "towers": [
                {"level": t.level, "x": t.x, "y": t.y}
                for t in self.towers
            ],
            "active_event": (
                None if self.active_event is None else {
                    "kind": self.active_event.kind.value,
                    "remaining_ticks": self.active_event.remaining_ticks,
                }
            ),
            "unlocked_achievements": sorted(a.value for a in self.unlocked_achievements),
            "game_over": self.game_over,
        }
