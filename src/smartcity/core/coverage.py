"""
Coverage: how much of the city sits inside tower signal range.

Two modes share one contract (a percentage in [0, 100]):
- "spatial": a geometric query. A building is covered when at least one
  tower lies strictly closer than base_radius * tower.level.
- "counter": no geometry at all. Coverage is a stored scalar that grows by
  a fixed amount per tower built.

The geometric query is recomputed from scratch every call. Entity counts are
small, so the full building x tower distance matrix is fine.
"""

from __future__ import annotations
from typing import Literal, Sequence, TYPE_CHECKING

import numpy as np
from scipy.spatial.distance import cdist

if TYPE_CHECKING:
    from smartcity.core.entities import Building, Tower


CoverageMode = Literal["spatial", "counter"]
COVERAGE_MODES = ("spatial", "counter")


def _positions(entities: Sequence) -> np.ndarray:
    """Stack entity positions into an [n, 2] float array."""
    return np.array([e.position for e in entities], dtype=np.float64).reshape(-1, 2)


def covered_mask(
    buildings: Sequence["Building"],
    towers: Sequence["Tower"],
    base_radius: float,
) -> np.ndarray:
    """
    Boolean mask over buildings: True where some tower reaches the building.

    Args:
        buildings: Buildings to test
        towers: Towers providing signal
        base_radius: Radius of a level-1 tower

    Returns:
        [n_buildings] bool array
    """
    if len(buildings) == 0 or len(towers) == 0:
        return np.zeros(len(buildings), dtype=bool)

    # dist[i, j] = distance from building i to tower j
    dist = cdist(_positions(buildings), _positions(towers))
    radii = base_radius * np.array([t.level for t in towers], dtype=np.float64)

    # Strict inequality: a building exactly on the boundary is uncovered
    return np.any(dist < radii[np.newaxis, :], axis=1)


def coverage(
    buildings: Sequence["Building"],
    towers: Sequence["Tower"],
    base_radius: float,
) -> float:
    """
    Percentage of buildings inside at least one tower's radius.

    Returns 0.0 for an empty city, whatever the towers.
    """
    if len(buildings) == 0:
        return 0.0
    mask = covered_mask(buildings, towers, base_radius)
    return 100.0 * float(mask.sum()) / len(buildings)


def counter_coverage(current: float, per_tower: float) -> float:
    """Counter mode: stored coverage after one more tower, capped at 100."""
    return min(100.0, current + per_tower)
