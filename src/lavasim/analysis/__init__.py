"""
Analysis layer: derived measurements for tests and demos.

IMPORTANT: Nothing here feeds back into the simulation.

- count_regions / region_sizes: connected inside-regions of a mask
- merge_separation: distance at which two unit blobs split
- two_blob_regions: region count for a two-blob scenario
"""

from lavasim.analysis.regions import (
    count_regions,
    region_sizes,
    merge_separation,
    two_blob_regions,
)

__all__ = [
    "count_regions",
    "region_sizes",
    "merge_separation",
    "two_blob_regions",
]
