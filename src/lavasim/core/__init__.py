"""
Core simulation primitives.

This layer knows NOTHING about colours, terminals or frame pacing.
It only knows:
- Blobs with positions, velocities and a falling flag
- How to advance them one tick inside a viewport
- How to turn them into an inverse-distance influence field
"""

from lavasim.core.random_source import RandomSource, create_random_source
from lavasim.core.params import SimulationParameters, PRESETS, get_preset
from lavasim.core.blobs import Blob, BlobSet, blob_count, create_blobs
from lavasim.core.physics import PhysicsIntegrator, height_factor, step
from lavasim.core.field import FieldEvaluator, evaluate_field, inside_mask, clamp_influence

__all__ = [
    "RandomSource",
    "create_random_source",
    "SimulationParameters",
    "PRESETS",
    "get_preset",
    "Blob",
    "BlobSet",
    "blob_count",
    "create_blobs",
    "PhysicsIntegrator",
    "height_factor",
    "step",
    "FieldEvaluator",
    "evaluate_field",
    "inside_mask",
    "clamp_influence",
]
