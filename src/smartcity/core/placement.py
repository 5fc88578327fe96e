"""
Placement: where new buildings and towers go.

The engine accepts whatever position it is given. This module is the
stochastic input that the interactive game used: a uniform draw inside the
game area, keeping one icon's width clear of the right and bottom edges so
the icon stays on the map.
"""

from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from smartcity.core.entities import Position


@dataclass
class PlacementConfig:
    """Bounds of the placement area."""

    width: float = 400.0  # 20:9 game area
    height: float = 180.0
    building_margin: float = 24.0  # Building icon size
    tower_margin: float = 32.0  # Tower icon size

    def __post_init__(self):
        for name, margin in (("building_margin", self.building_margin), ("tower_margin", self.tower_margin)):
            if margin < 0 or margin >= min(self.width, self.height):
                raise ValueError(f"{name}={margin} does not fit a {self.width}x{self.height} area")


class RandomPlacement:
    """Uniform random positions inside the placement area."""

    def __init__(self, config: PlacementConfig | None = None, rng: np.random.Generator | None = None):
        self.config = config or PlacementConfig()
        self.rng = rng if rng is not None else np.random.default_rng()

    def _draw(self, margin: float) -> Position:
        x = self.rng.uniform(0.0, self.config.width - margin)
        y = self.rng.uniform(0.0, self.config.height - margin)
        return float(x), float(y)

    def building_position(self) -> Position:
        return self._draw(self.config.building_margin)

    def tower_position(self) -> Position:
        return self._draw(self.config.tower_margin)
