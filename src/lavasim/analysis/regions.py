"""
Connected inside-regions of a thresholded field.

Used to observe metaball merge/split behaviour: two unit blobs at distance
d have midpoint influence 2 / (d/2) = 4/d, so they form one region while
4/d >= threshold and split into two once d exceeds 4/threshold.
"""

from __future__ import annotations

import numpy as np
from scipy.ndimage import label

from lavasim.core.blobs import Blob, BlobSet
from lavasim.core.field import evaluate_field, inside_mask


def count_regions(mask: np.ndarray) -> int:
    """Number of 4-connected True regions in a boolean mask."""
    _, n_regions = label(np.asarray(mask, dtype=bool))
    return int(n_regions)


def region_sizes(mask: np.ndarray) -> list[int]:
    """Cell count of each 4-connected region, largest first."""
    labels, n_regions = label(np.asarray(mask, dtype=bool))
    if n_regions == 0:
        return []
    counts = np.bincount(labels.ravel())[1:]
    return sorted((int(c) for c in counts), reverse=True)


def merge_separation(threshold: float) -> float:
    """Critical distance between two unit blobs above which they split."""
    if threshold <= 0:
        raise ValueError(f"threshold must be positive, got {threshold}")
    return 4.0 / threshold


def two_blob_regions(
    separation: float,
    threshold: float = 0.5,
    width: int = 60,
    height: int = 30,
) -> int:
    """
    Place two blobs `separation` cells apart (horizontally, centred on the
    grid) and count the inside regions of their field.
    """
    cx, cy = width / 2.0, float(height // 2)
    blobs = BlobSet.from_blobs([
        Blob(cx - separation / 2.0, cy),
        Blob(cx + separation / 2.0, cy),
    ])
    values = evaluate_field(blobs, width, height)
    return count_regions(inside_mask(values, threshold))
