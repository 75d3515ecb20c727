"""
SimulationParameters: every tunable constant of a run in one place.

Parameters are read-only during simulation. Operators adjust them by
deriving a new instance (with_overrides) between ticks.
"""

from __future__ import annotations
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class SimulationParameters:
    """Configuration for blob generation, physics and colouring."""

    # Blob-count scaling: N = floor((W * H / density) ** (1/3))
    density: float = 1.25
    threshold: float = 0.5  # Inside/outside cutoff on the influence value

    speed_scale: float = 0.5  # Multiplies initial velocities and vertical terms
    jitter_fraction: float = 0.1  # Displacement scaled by U(1-j, 1+j) per tick

    base_color: tuple[int, int, int] = (255, 96, 32)  # Full-influence colour
    background_enabled: bool = True  # Tint sub-threshold cells

    # Initial velocity ranges (symmetric, per axis); vertical is narrower
    velocity_range_x: float = 1.0
    velocity_range_y: float = 0.25

    # Vertical motion
    buoyancy: float = 0.3  # Upward drift coefficient, strongest at the bottom
    fall_strength: float = 1.2  # Downward pull coefficient while falling
    fall_trigger: float = 0.75  # Normalized height above which falling may start
    fall_probability: float = 0.015  # Per-tick chance of entering falling mode
    fall_epsilon: float = 0.05  # Upper bound of the random exit tolerance

    # Colour mapping
    hue_shift: float = 0.12  # Hue rotation at the bottom row (fraction of a turn)
    background_scale: float = 0.2  # Scale of the inverted background tint

    min_distance: float = 1e-3  # Clamp for the singular 1/d term

    def __post_init__(self):
        if self.density <= 0:
            raise ValueError(f"density must be positive, got {self.density}")
        if self.threshold <= 0:
            raise ValueError(f"threshold must be positive, got {self.threshold}")
        if self.speed_scale < 0:
            raise ValueError(f"speed_scale must be >= 0, got {self.speed_scale}")
        if not 0.0 <= self.jitter_fraction < 1.0:
            raise ValueError(
                f"jitter_fraction must be in [0, 1), got {self.jitter_fraction}"
            )
        if len(self.base_color) != 3 or any(
            not 0 <= c <= 255 for c in self.base_color
        ):
            raise ValueError(
                f"base_color must be three channels in [0, 255], got {self.base_color}"
            )
        if not 0.0 <= self.fall_trigger <= 1.0:
            raise ValueError(f"fall_trigger must be in [0, 1], got {self.fall_trigger}")
        if not 0.0 <= self.fall_probability <= 1.0:
            raise ValueError(
                f"fall_probability must be in [0, 1], got {self.fall_probability}"
            )
        if self.min_distance <= 0:
            raise ValueError(f"min_distance must be positive, got {self.min_distance}")

    def with_overrides(self, **changes) -> SimulationParameters:
        """Return a copy with the given fields replaced (validated again)."""
        return replace(self, **changes)


PRESETS: dict[str, dict] = {
    "lava": {},
    "ocean": {
        "base_color": (40, 140, 255),
        "hue_shift": 0.08,
        "speed_scale": 0.4,
    },
    "mono": {
        "base_color": (230, 230, 230),
        "background_enabled": False,
        "jitter_fraction": 0.0,
    },
}


def get_preset(name: str, **overrides) -> SimulationParameters:
    """
    Build parameters for a named preset.

    Args:
        name: Key in PRESETS
        **overrides: Fields applied on top of the preset

    Raises:
        KeyError: if the preset does not exist
    """
    if name not in PRESETS:
        raise KeyError(f"Unknown preset {name!r}; available: {', '.join(PRESETS)}")
    return SimulationParameters(**{**PRESETS[name], **overrides})
