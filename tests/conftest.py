"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def quiet_config():
    """Engine configuration with random events switched off."""
    from smartcity.core import EngineConfig, EventConfig
    return EngineConfig(events=EventConfig(probability=0.0))


@pytest.fixture
def engine(quiet_config):
    """Deterministic engine: default balancing, no random events."""
    from smartcity.core import SimulationEngine
    return SimulationEngine(quiet_config, rng=np.random.default_rng(seed=42))


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)
