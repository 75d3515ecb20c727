"""
Random sources for initialization, jitter and falling-mode transitions.

Every call site takes the source explicitly so tests can inject a
deterministic sequence. numpy's Generator already satisfies the protocol.
"""

from __future__ import annotations
from typing import Protocol

import numpy as np


class RandomSource(Protocol):
    """Protocol for uniform random draws in a caller-given range."""

    def uniform(self, low=0.0, high=1.0, size=None):
        """
        Draw uniform values from [low, high).

        Args:
            low, high: Range bounds
            size: None for a single float, otherwise an int or shape

        Returns:
            A float, or an array of the requested size
        """
        ...


def create_random_source(seed: int | None = None) -> np.random.Generator:
    """Factory for the default random source (numpy PCG64 generator)."""
    return np.random.default_rng(seed)
