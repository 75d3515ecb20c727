"""
Pytest configuration and shared fixtures.
"""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


class ConstantSource:
    """
    Deterministic random source.

    Every draw returns low + fraction * (high - low): 0.5 gives a jitter
    factor of exactly 1 and never triggers falling mode, 0.0 always does.
    """

    def __init__(self, fraction: float = 0.5):
        self.fraction = fraction

    def uniform(self, low=0.0, high=1.0, size=None):
        value = low + self.fraction * (high - low)
        if size is None:
            return value
        return np.full(size, value, dtype=np.float64)


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)


@pytest.fixture
def midpoint_source():
    """Random source that always returns the middle of the range."""
    return ConstantSource(0.5)


@pytest.fixture
def low_source():
    """Random source that always returns the bottom of the range."""
    return ConstantSource(0.0)


@pytest.fixture
def default_params():
    from lavasim.core import SimulationParameters
    return SimulationParameters()


@pytest.fixture
def still_params():
    """Parameters with no jitter, unit speed scale and red base colour."""
    from lavasim.core import SimulationParameters
    return SimulationParameters(
        speed_scale=1.0,
        jitter_fraction=0.0,
        base_color=(255, 0, 0),
    )
