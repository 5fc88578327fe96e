"""
Economy: what buildings earn, what the city costs to run, and what things
cost to build.

Net money per tick = income - maintenance. There is no floor: a city that
overbuilds towers runs a deficit and stays in the red until income catches up.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Sequence, TYPE_CHECKING

from smartcity.core.entities import BuildingKind

if TYPE_CHECKING:
    from smartcity.core.entities import Building


def _default_income() -> dict[BuildingKind, int]:
    return {
        BuildingKind.RESIDENTIAL: 80,
        BuildingKind.COMMERCIAL: 160,
        BuildingKind.INDUSTRIAL: 240,
    }


@dataclass
class EconomyConfig:
    """Prices, income and upkeep."""

    building_cost: int = 2000  # Flat, any kind
    tower_cost: int = 4000
    building_upgrade_unit: int = 2000  # Upgrade cost = unit * current level
    tower_upgrade_cost: int = 3000  # Flat, regardless of level

    income_per_level: dict[BuildingKind, int] = field(default_factory=_default_income)

    building_maintenance: int = 100  # Per building per tick
    tower_maintenance: int = 200  # Per tower per tick

    def __post_init__(self):
        costs = {
            "building_cost": self.building_cost,
            "tower_cost": self.tower_cost,
            "building_upgrade_unit": self.building_upgrade_unit,
            "tower_upgrade_cost": self.tower_upgrade_cost,
            "building_maintenance": self.building_maintenance,
            "tower_maintenance": self.tower_maintenance,
        }
        for name, value in costs.items():
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

        missing = set(BuildingKind) - set(self.income_per_level)
        if missing:
            names = ", ".join(sorted(k.value for k in missing))
            raise ValueError(f"income_per_level is missing kinds: {names}")


class Economy:
    """Stateless calculator over an EconomyConfig."""

    def __init__(self, config: EconomyConfig | None = None):
        self.config = config or EconomyConfig()

    def income(self, buildings: Sequence["Building"]) -> int:
        """Sum of base income * level over all buildings."""
        table = self.config.income_per_level
        return sum(table[b.kind] * b.level for b in buildings)

    def maintenance(self, building_count: int, tower_count: int) -> int:
        """Upkeep for the whole inventory."""
        return (
            self.config.building_maintenance * building_count
            + self.config.tower_maintenance * tower_count
        )

    def net(self, buildings: Sequence["Building"], tower_count: int) -> int:
        """Money delta for one tick."""
        return self.income(buildings) - self.maintenance(len(buildings), tower_count)

    def building_upgrade_cost(self, building: "Building") -> int:
        return self.config.building_upgrade_unit * building.level
