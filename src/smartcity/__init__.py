"""
smartcity: a tick-based smart-city simulation engine.

A player spends money placing buildings and network towers on a 2D map.
Once per simulated day the engine:
- Grows the population in proportion to satisfaction
- Collects income and pays maintenance
- Nudges satisfaction toward how well the towers cover the buildings
- Runs (or rolls for) a random city event
- Unlocks achievements

Rendering and wall-clock scheduling live outside the engine; see
smartcity.driver for a thread-safe ticking wrapper and smartcity.viz for
matplotlib views.
"""

__version__ = "0.1.0"
