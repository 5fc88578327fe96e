"""
Analysis layer: derived quantities computed FROM engine snapshots.

The engine never reads anything defined here.
- CityHistory: per-day series and run summaries
- signal_field: tower reach sampled over the map
"""

from smartcity.analysis.history import CityHistory, HistorySummary
from smartcity.analysis.signal import signal_field, covered_area_fraction

__all__ = [
    "CityHistory",
    "HistorySummary",
    "signal_field",
    "covered_area_fraction",
]
