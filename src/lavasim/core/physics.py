"""
Per-tick blob physics: buoyancy, falling mode, reflection and jitter.

NOT a fluid solver. The motion model is a stylized lava lamp:
- Blobs drift upward, most strongly near the bottom of the viewport
- Near the top they may randomly enter "falling" mode and sink
- Viewport edges reflect velocity elastically, each axis on its own
- Displacement is scaled by a small random factor for texture

Sign convention: displacement is always ADDED to position. Falling mode
moves a blob down through a negative pull on its vertical velocity.

Buoyancy and the falling pull act on the per-tick resultant only. The
stored velocity changes by sign alone: on reflection, and when a blob
carrying downward drift relaxes back to near-zero vertical resultant
(it turns upward instead of hovering at the height where buoyancy
cancels its drift).

Known limit: velocities well above the nominal range (roughly 3x) can
overshoot a boundary in a single tick before reflection fires.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from lavasim.core.blobs import BlobSet

if TYPE_CHECKING:
    from lavasim.core.params import SimulationParameters
    from lavasim.core.random_source import RandomSource

logger = logging.getLogger(__name__)

# Lift at y = 0: just below 1 so the bottom edge is not degenerate
_BOTTOM_LIFT = float(np.nextafter(1.0, 0.0))


def height_factor(y, height: float) -> np.ndarray:
    """
    Interpolation factor that maps y = 0 -> 1 and y = height -> 0.

    Values are clipped to [0, 1]; y <= 0 maps to a value just below 1.

    Args:
        y: Vertical position(s)
        height: Viewport height in cells

    Returns:
        Array of factors with the shape of y
    """
    y = np.asarray(y, dtype=np.float64)
    lift = np.clip(1.0 - y / height, 0.0, 1.0)
    return np.where(y <= 0.0, _BOTTOM_LIFT, lift)


def step(
    blobs: BlobSet,
    width: int,
    height: int,
    params: "SimulationParameters",
    rng: "RandomSource",
) -> BlobSet:
    """
    Advance every blob by one tick.

    The input set is left untouched; a new BlobSet of the same size is
    returned. Blobs do not interact with each other.

    Per blob:
    1. resultant = velocity + (0, speed_scale * buoyancy * lift)
    2. Falling transition and pull, upward turn of relaxed sinking blobs
    3. Per-axis reflection of velocity and resultant
    4. Jitter factor U(1 - j, 1 + j) shared by both axes
    5. position += factor * resultant

    Args:
        blobs: Current state
        width, height: Current viewport extent in cells
        params: Simulation parameters
        rng: Random source for transitions and jitter

    Returns:
        Next state
    """
    n = len(blobs)
    if n == 0:
        return BlobSet.empty()

    positions = blobs.positions.copy()
    velocities = blobs.velocities.copy()
    falling = blobs.falling.copy()
    extent = np.array([width, height], dtype=np.float64)

    # 1. Buoyancy: upward drift that weakens toward the top
    lift = height_factor(positions[:, 1], height)
    resultant = velocities.copy()
    resultant[:, 1] += params.speed_scale * params.buoyancy * lift

    # 2. Falling mode
    draws = rng.uniform(0.0, 1.0, size=n)
    high_enough = positions[:, 1] / height > params.fall_trigger
    started = ~falling & high_enough & (draws < params.fall_probability)
    falling |= started

    pull = params.speed_scale * params.fall_strength * (1.0 - lift)
    resultant[:, 1] -= np.where(falling, pull, 0.0)

    # Exit once the vertical resultant has relaxed back to near zero
    epsilon = rng.uniform(0.0, params.fall_epsilon, size=n)
    relaxed = resultant[:, 1] > -epsilon
    settled = falling & relaxed
    resultant[:, 1] += np.where(settled, pull, 0.0)
    falling &= ~settled

    # A relaxed blob with downward stored drift turns it upward again.
    # Sign flip only, so speed is unchanged.
    sinking = relaxed & (velocities[:, 1] < 0.0)
    resultant[:, 1] -= np.where(sinking, 2.0 * velocities[:, 1], 0.0)
    velocities[:, 1] = np.where(sinking, -velocities[:, 1], velocities[:, 1])

    if started.any() or settled.any() or sinking.any():
        logger.debug(
            "Falling mode: %d started, %d settled, %d active, %d turned up",
            int(started.sum()), int(settled.sum()), int(falling.sum()),
            int(sinking.sum()),
        )

    # 3. Reflection, only when heading out through that edge
    projected = positions + resultant
    bounce = ((projected < 0.0) & (resultant < 0.0)) | (
        (projected >= extent) & (resultant > 0.0)
    )
    velocities = np.where(bounce, -velocities, velocities)
    resultant = np.where(bounce, -resultant, resultant)

    # 4. Jitter
    if params.jitter_fraction > 0.0:
        j = params.jitter_fraction
        factor = np.asarray(rng.uniform(1.0 - j, 1.0 + j, size=n), dtype=np.float64)
    else:
        factor = np.ones(n, dtype=np.float64)

    # 5. Displacement
    positions += resultant * factor[:, None]

    return BlobSet(positions, velocities, falling)


@dataclass
class PhysicsIntegrator:
    """Binds parameters and a random source to the per-tick step."""

    params: "SimulationParameters"
    rng: "RandomSource"

    def advance(self, blobs: BlobSet, width: int, height: int) -> BlobSet:
        """Return the blob set one tick later."""
        return step(blobs, width, height, self.params, self.rng)

    def advance_n(self, blobs: BlobSet, width: int, height: int, n: int) -> BlobSet:
        """Advance n ticks at a fixed viewport extent."""
        for _ in range(n):
            blobs = self.advance(blobs, width, height)
        return blobs
