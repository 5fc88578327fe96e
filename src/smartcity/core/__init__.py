"""
Core engine primitives.

This layer knows NOTHING about rendering or timers.
It only knows:
- Buildings and towers (immutable entities)
- Coverage of buildings by tower signal (spatial or counter mode)
- Income and maintenance
- The random event state machine
- Achievement predicates
- The tick pipeline that composes them

All randomness flows through one injected numpy Generator.
"""

from smartcity.core.entities import ActionResult, Building, BuildingKind, Tower
from smartcity.core.coverage import coverage, covered_mask
from smartcity.core.economy import Economy, EconomyConfig
from smartcity.core.events import ActiveEvent, EventConfig, EventController, EventKind, EventSpec
from smartcity.core.achievements import AchievementId, AchievementThresholds, evaluate_achievements
from smartcity.core.state import CitySnapshot, CityState
from smartcity.core.placement import PlacementConfig, RandomPlacement
from smartcity.core.engine import EngineConfig, SimulationEngine, create_default_engine

__all__ = [
    "ActionResult",
    "Building",
    "BuildingKind",
    "Tower",
    "coverage",
    "covered_mask",
    "Economy",
    "EconomyConfig",
    "ActiveEvent",
    "EventConfig",
    "EventController",
    "EventKind",
    "EventSpec",
    "AchievementId",
    "AchievementThresholds",
    "evaluate_achievements",
    "CitySnapshot",
    "CityState",
    "PlacementConfig",
    "RandomPlacement",
    "EngineConfig",
    "SimulationEngine",
    "create_default_engine",
]
