"""
Entities: the things a player places on the city map.

Buildings and towers are immutable records. An upgrade never edits one in
place; the engine swaps in a copy with the level raised by one. This keeps
every snapshot handed to a reader safe from later mutation.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum


class BuildingKind(str, Enum):
    """Zoning type of a building. Determines its income."""

    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"

    @classmethod
    def parse(cls, value: "BuildingKind | str") -> "BuildingKind":
        """Accept either an enum member or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(k.value for k in cls)
            raise ValueError(f"Unknown building kind {value!r} (expected one of: {valid})") from None


class ActionResult(str, Enum):
    """
    Outcome of a player action.

    Failed actions are no-ops: the engine reports them, it never raises.
    """

    OK = "ok"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INDEX_OUT_OF_RANGE = "index_out_of_range"


Position = tuple[float, float]


@dataclass(frozen=True)
class Building:
    """A placed building."""

    kind: BuildingKind
    position: Position
    level: int = 1

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]

    def upgraded(self) -> Building:
        return replace(self, level=self.level + 1)


@dataclass(frozen=True)
class Tower:
    """A placed network tower. Its signal radius scales with level."""

    position: Position
    level: int = 1

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]

    def radius(self, base_radius: float) -> float:
        """Effective coverage radius for the given base radius."""
        return base_radius * self.level

    def upgraded(self) -> Tower:
        return replace(self, level=self.level + 1)
