"""
Signal field: tower reach sampled over the whole map.

Coverage in the engine only asks "is this building reached?". For views and
for planning where the next building should go, it helps to know how many
towers reach every point of the map. This builds that field on a regular
grid, using the same strict-inequality rule as the engine.
"""

from __future__ import annotations
from typing import Sequence, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from smartcity.core.entities import Tower


def signal_field(
    towers: Sequence["Tower"],
    base_radius: float,
    width: float,
    height: float,
    resolution: float = 1.0,
) -> np.ndarray:
    """
    Count of towers reaching each grid cell.

    Args:
        towers: Towers on the map
        base_radius: Radius of a level-1 tower
        width, height: Map extent
        resolution: Grid spacing in map units

    Returns:
        [ny, nx] int array, row index = y
    """
    nx = int(np.ceil(width / resolution))
    ny = int(np.ceil(height / resolution))
    field = np.zeros((ny, nx), dtype=np.int64)

    yy, xx = np.ogrid[:ny, :nx]
    xx = xx * resolution
    yy = yy * resolution
    for tower in towers:
        dist = np.sqrt((xx - tower.x) ** 2 + (yy - tower.y) ** 2)
        field += dist < tower.radius(base_radius)
    return field


def covered_area_fraction(
    towers: Sequence["Tower"],
    base_radius: float,
    width: float,
    height: float,
    resolution: float = 1.0,
) -> float:
    """Fraction of the map reached by at least one tower."""
    field = signal_field(towers, base_radius, width, height, resolution)
    if field.size == 0:
        return 0.0
    return float((field > 0).mean())
