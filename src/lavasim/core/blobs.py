"""
BlobSet: the simulated point sources and their kinematic state.

Positions are continuous viewport coordinates (x, y) with y = 0 at the
bottom of the viewport. Velocities are in cells per tick.

The number of blobs is fixed when the set is created. The physics step
returns a new set of the same size rather than mutating this one.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator

import numpy as np

if TYPE_CHECKING:
    from lavasim.core.params import SimulationParameters
    from lavasim.core.random_source import RandomSource

logger = logging.getLogger(__name__)


@dataclass
class Blob:
    """One simulated source, for inspection and hand-built scenarios."""

    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    falling: bool = False

    @property
    def position(self) -> tuple[float, float]:
        return self.x, self.y

    @property
    def velocity(self) -> tuple[float, float]:
        return self.vx, self.vy

    @property
    def speed(self) -> float:
        return float(np.hypot(self.vx, self.vy))


class BlobSet:
    """
    Array-backed collection of blobs.

    Attributes:
        positions: [N, 2] float64, columns (x, y)
        velocities: [N, 2] float64, columns (vx, vy)
        falling: [N] bool falling-mode flags
    """

    def __init__(
        self,
        positions: np.ndarray,
        velocities: np.ndarray,
        falling: np.ndarray | None = None,
    ):
        self.positions = np.asarray(positions, dtype=np.float64).reshape(-1, 2)
        self.velocities = np.asarray(velocities, dtype=np.float64).reshape(-1, 2)
        n = len(self.positions)
        if len(self.velocities) != n:
            raise ValueError(
                f"positions and velocities must have the same length ({n} != {len(self.velocities)})"
            )
        if falling is None:
            self.falling = np.zeros(n, dtype=bool)
        else:
            self.falling = np.asarray(falling, dtype=bool).reshape(n)

    @classmethod
    def empty(cls) -> BlobSet:
        return cls(np.zeros((0, 2)), np.zeros((0, 2)))

    @classmethod
    def from_blobs(cls, blobs: Iterable[Blob]) -> BlobSet:
        """Build a set from individual Blob records."""
        blobs = list(blobs)
        if not blobs:
            return cls.empty()
        return cls(
            positions=[(b.x, b.y) for b in blobs],
            velocities=[(b.vx, b.vy) for b in blobs],
            falling=[b.falling for b in blobs],
        )

    @property
    def count(self) -> int:
        return len(self.positions)

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[Blob]:
        for (x, y), (vx, vy), falling in zip(
            self.positions, self.velocities, self.falling
        ):
            yield Blob(float(x), float(y), float(vx), float(vy), bool(falling))

    def __getitem__(self, index: int) -> Blob:
        x, y = self.positions[index]
        vx, vy = self.velocities[index]
        return Blob(float(x), float(y), float(vx), float(vy), bool(self.falling[index]))

    def copy(self) -> BlobSet:
        return BlobSet(self.positions.copy(), self.velocities.copy(), self.falling.copy())

    def speeds(self) -> np.ndarray:
        """Speed magnitude of each blob's stored velocity."""
        return np.hypot(self.velocities[:, 0], self.velocities[:, 1])


def blob_count(width: int, height: int, density: float) -> int:
    """
    Number of blobs for a viewport: floor((W * H / D) ** (1/3)).

    Cube-root scaling keeps the count sub-linear in area so large screens
    stay sparse.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"viewport must be positive, got {width}x{height}")
    if density <= 0:
        raise ValueError(f"density must be positive, got {density}")
    return int(np.floor(np.cbrt((width * height) / density)))


def create_blobs(
    width: int,
    height: int,
    params: "SimulationParameters",
    rng: "RandomSource",
) -> BlobSet:
    """
    Create the initial blob set for a viewport.

    Args:
        width, height: Viewport extent in cells
        params: Simulation parameters (density, velocity ranges, speed_scale)
        rng: Random source for positions and velocities

    Returns:
        BlobSet with blob_count(width, height, params.density) blobs,
        possibly empty
    """
    n = blob_count(width, height, params.density)
    logger.info("Creating %d blobs for a %dx%d viewport", n, width, height)
    if n == 0:
        return BlobSet.empty()

    xs = rng.uniform(0.0, width, size=n)
    ys = rng.uniform(0.0, height, size=n)
    vxs = rng.uniform(-params.velocity_range_x, params.velocity_range_x, size=n)
    vys = rng.uniform(-params.velocity_range_y, params.velocity_range_y, size=n)

    positions = np.column_stack([xs, ys])
    velocities = np.column_stack([vxs, vys]) * params.speed_scale
    return BlobSet(positions, velocities)
