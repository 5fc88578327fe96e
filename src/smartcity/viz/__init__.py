"""
Visualization utilities.

- City map (buildings, towers, signal field)
- Time series of a recorded run
"""

from smartcity.viz.city import (
    BUILDING_COLORS,
    plot_city_map,
    plot_history,
    save_figure,
)

__all__ = [
    "BUILDING_COLORS",
    "plot_city_map",
    "plot_history",
    "save_figure",
]
