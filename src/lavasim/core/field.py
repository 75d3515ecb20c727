"""
Metaball field: inverse-distance influence of every blob on every cell.

    value(i, j) = Σ_blobs 1 / |(j, i) - blob.position|

Row i corresponds to y = i, so row 0 is the bottom of the viewport.
Distances are clamped below by min_distance so a cell that coincides with
a blob saturates instead of producing Inf/NaN.
"""

from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from lavasim.core.blobs import BlobSet

DEFAULT_MIN_DISTANCE = 1e-3


def evaluate_field(
    blobs: BlobSet,
    width: int,
    height: int,
    min_distance: float = DEFAULT_MIN_DISTANCE,
) -> np.ndarray:
    """
    Compute the raw influence field.

    Args:
        blobs: Point sources
        width, height: Grid dimensions in cells
        min_distance: Lower bound on distance for the 1/d term

    Returns:
        Influence values, shape [height, width]; all zeros for an empty set
    """
    values = np.zeros((height, width), dtype=np.float64)
    if len(blobs) == 0 or width == 0 or height == 0:
        return values

    yy, xx = np.ogrid[:height, :width]
    # Accumulate one blob at a time to keep memory at one grid
    for bx, by in blobs.positions:
        dist = np.sqrt((xx - bx) ** 2 + (yy - by) ** 2)
        values += 1.0 / np.maximum(dist, min_distance)
    return values


def inside_mask(values: np.ndarray, threshold: float) -> np.ndarray:
    """Boolean mask of cells whose influence reaches the threshold."""
    return values >= threshold


def clamp_influence(values: np.ndarray) -> np.ndarray:
    """Influence clamped to at most 1.0, as consumed by colour mapping."""
    return np.minimum(values, 1.0)


@dataclass
class FieldEvaluator:
    """
    Evaluates and classifies the metaball field.

    threshold: inside/outside cutoff (observed useful range 0.5-0.8)
    min_distance: distance clamp for the singular term
    """

    threshold: float = 0.5
    min_distance: float = DEFAULT_MIN_DISTANCE

    def compute(self, blobs: BlobSet, width: int, height: int) -> np.ndarray:
        """Raw influence field, shape [height, width]."""
        return evaluate_field(blobs, width, height, self.min_distance)

    def inside(self, values: np.ndarray) -> np.ndarray:
        """Mask of inside cells."""
        return inside_mask(values, self.threshold)

    def clamp(self, values: np.ndarray) -> np.ndarray:
        return clamp_influence(values)
