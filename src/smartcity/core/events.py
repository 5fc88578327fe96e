"""
Random city events: a two-state machine (idle / active).

While idle, each tick rolls for a new event. While active, each tick applies
the event's effect once and counts its duration down; the event clears when
the count reaches zero. The roll and the effect never happen in the same
tick, so an event that just started does its first damage on the next tick.

Effects are integer percentages so that "floor(money * 0.95)" is computed
exactly as money * 95 // 100, including for negative balances.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
import logging
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from smartcity.core.state import CityState

logger = logging.getLogger(__name__)


class EventKind(str, Enum):
    NETWORK_OUTAGE = "network_outage"
    POPULATION_BOOM = "population_boom"
    ECONOMIC_CRISIS = "economic_crisis"


@dataclass(frozen=True)
class EventSpec:
    """Duration and per-tick effect of one event kind."""

    duration: int  # Ticks the event stays active
    satisfaction_delta: float = 0.0  # Added each tick, result clamped to [0, 100]
    money_pct: int = 100  # money = floor(money * pct / 100)
    population_pct: int = 100  # population = floor(population * pct / 100)


def _default_specs() -> dict[EventKind, EventSpec]:
    return {
        EventKind.NETWORK_OUTAGE: EventSpec(duration=3, satisfaction_delta=-5.0, money_pct=95),
        EventKind.POPULATION_BOOM: EventSpec(duration=5, satisfaction_delta=-3.0, population_pct=110),
        EventKind.ECONOMIC_CRISIS: EventSpec(duration=4, money_pct=85, population_pct=95),
    }


@dataclass
class EventConfig:
    """Configuration for random events."""

    probability: float = 0.05  # Chance per idle tick that an event starts
    specs: dict[EventKind, EventSpec] = field(default_factory=_default_specs)

    def __post_init__(self):
        if not 0.0 <= self.probability <= 1.0:
            raise ValueError(f"probability must be in [0, 1], got {self.probability}")
        if not self.specs:
            raise ValueError("at least one event kind is required")
        for kind, spec in self.specs.items():
            if spec.duration < 1:
                raise ValueError(f"{kind.value} duration must be >= 1, got {spec.duration}")


@dataclass(frozen=True)
class ActiveEvent:
    """The event currently in effect."""

    kind: EventKind
    remaining_ticks: int


class EventController:
    """
    Drives the idle/active event state stored on a CityState.

    The controller itself holds no city state, only the configuration and
    the random source, so reset() on the engine never has to touch it.
    """

    def __init__(self, config: EventConfig | None = None, rng: np.random.Generator | None = None):
        self.config = config or EventConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self._kinds = tuple(self.config.specs)

    def start(self, state: "CityState", kind: EventKind) -> ActiveEvent:
        """Force an event to begin (used by the random trigger and by tests)."""
        event = ActiveEvent(kind=kind, remaining_ticks=self.config.specs[kind].duration)
        state.active_event = event
        logger.info("Day %d: %s started (%d ticks)", state.day, kind.value, event.remaining_ticks)
        return event

    def roll(self, state: "CityState") -> ActiveEvent | None:
        """Maybe start a random event. Only valid while idle."""
        if state.active_event is not None:
            return None
        if self.rng.random() >= self.config.probability:
            return None
        kind = self._kinds[int(self.rng.integers(len(self._kinds)))]
        return self.start(state, kind)

    def apply(self, state: "CityState", kind: EventKind):
        """Apply one tick's worth of an event's effect."""
        spec = self.config.specs[kind]
        if spec.satisfaction_delta:
            state.satisfaction = max(0.0, min(100.0, state.satisfaction + spec.satisfaction_delta))
        if spec.money_pct != 100:
            state.money = state.money * spec.money_pct // 100
        if spec.population_pct != 100:
            state.population = state.population * spec.population_pct // 100

    def step(self, state: "CityState") -> ActiveEvent | None:
        """
        Advance the event machine by one tick.

        Active: apply the effect, then count down (clearing at zero).
        Idle: roll for a new event.

        Returns:
            The event that is active after this tick, if any
        """
        event = state.active_event
        if event is None:
            return self.roll(state)

        self.apply(state, event.kind)
        remaining = event.remaining_ticks - 1
        if remaining > 0:
            state.active_event = replace(event, remaining_ticks=remaining)
        else:
            state.active_event = None
            logger.info("Day %d: %s ended", state.day, event.kind.value)
        return state.active_event
