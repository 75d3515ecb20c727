"""
Colour mapping from influence value and row position.

Inside cells (value >= threshold):
    base_color * value -> HSV -> hue shifted down by hue_shift * (1 - row/H)
    -> RGB -> truncated to 8 bits
Outside cells, background enabled:
    background_scale * (255 - shaded), a dim complementary wash
Outside cells, background disabled:
    no colour (terminal default)

Row 0 is the bottom of the viewport, so the bottom rows get the largest
hue shift.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from lavasim.color.hsv import rgb_to_hsv, hsv_to_rgb, shift_hue
from lavasim.core.field import clamp_influence, inside_mask

if TYPE_CHECKING:
    from lavasim.core.params import SimulationParameters


@dataclass
class ColorGrid:
    """
    A frame of cell colours.

    rgb: [H, W, 3] uint8 channel values
    filled: [H, W] bool, False where the cell keeps the terminal default
    """

    rgb: np.ndarray
    filled: np.ndarray

    @classmethod
    def blank(cls, height: int, width: int) -> ColorGrid:
        return cls(
            np.zeros((height, width, 3), dtype=np.uint8),
            np.zeros((height, width), dtype=bool),
        )

    @property
    def shape(self) -> tuple[int, int]:
        """Return (height, width)."""
        return self.filled.shape

    def flipped(self) -> ColorGrid:
        """Rows in reverse order (bottom row last)."""
        return ColorGrid(self.rgb[::-1].copy(), self.filled[::-1].copy())

    def cell(self, row: int, col: int) -> tuple[int, int, int] | None:
        """Colour of one cell, or None for the terminal default."""
        if not self.filled[row, col]:
            return None
        r, g, b = self.rgb[row, col]
        return int(r), int(g), int(b)


def _shade(clamped: np.ndarray, height_norm: np.ndarray, params: "SimulationParameters") -> np.ndarray:
    """Scaled, hue-shifted RGB (float, truncated, [0, 255]) for each value."""
    base = np.asarray(params.base_color, dtype=np.float64)
    scaled = np.asarray(clamped, dtype=np.float64)[..., None] * base
    hsv = rgb_to_hsv(scaled)
    shift = params.hue_shift * (1.0 - np.asarray(height_norm, dtype=np.float64))
    rgb = hsv_to_rgb(shift_hue(hsv, shift))
    return np.clip(np.trunc(rgb), 0.0, 255.0)


def _background(shaded: np.ndarray, params: "SimulationParameters") -> np.ndarray:
    return np.clip(np.trunc(params.background_scale * (255.0 - shaded)), 0.0, 255.0)


def scaled_brightness(value: float, params: "SimulationParameters") -> float:
    """Brightest channel of base_color * value, before any hue shift."""
    clamped = float(np.clip(value, 0.0, 1.0))
    return clamped * max(params.base_color)


def map_colors(values: np.ndarray, params: "SimulationParameters") -> ColorGrid:
    """
    Colour every cell of an influence field.

    Args:
        values: Raw influence field, shape [H, W]
        params: Threshold, base colour, hue shift and background settings

    Returns:
        ColorGrid of the same shape
    """
    values = np.asarray(values, dtype=np.float64)
    height, width = values.shape
    if height == 0 or width == 0:
        return ColorGrid.blank(height, width)

    clamped = clamp_influence(np.maximum(values, 0.0))
    rows = np.arange(height, dtype=np.float64)[:, None] / height
    shaded = _shade(clamped, rows, params)
    inside = inside_mask(values, params.threshold)

    if params.background_enabled:
        rgb = np.where(inside[..., None], shaded, _background(shaded, params))
        filled = np.ones((height, width), dtype=bool)
    else:
        rgb = np.where(inside[..., None], shaded, 0.0)
        filled = inside

    return ColorGrid(rgb.astype(np.uint8), filled)


@dataclass
class ColorMapper:
    """Colour mapping bound to one set of simulation parameters."""

    params: "SimulationParameters"

    def map(self, values: np.ndarray) -> ColorGrid:
        """Colour a whole field."""
        return map_colors(values, self.params)

    def map_cell(self, value: float, row: int, height: int) -> tuple[int, int, int] | None:
        """
        Colour a single cell.

        Returns:
            (r, g, b), or None when the cell is outside and the background
            is disabled
        """
        inside = value >= self.params.threshold
        if not inside and not self.params.background_enabled:
            return None
        clamped = min(max(value, 0.0), 1.0)
        shaded = _shade(np.array(clamped), np.array(row / height), self.params)
        if not inside:
            shaded = _background(shaded, self.params)
        r, g, b = shaded.astype(np.uint8)
        return int(r), int(g), int(b)
