"""
RGB <-> HSV conversion on 8-bit channel values.

Thin wrapper over matplotlib.colors, which works on arrays of shape
[..., 3] in [0, 1] and already guards black (zero value) and grey (zero
saturation) inputs. Inputs are clipped so out-of-range channels never
reach the converter.
"""

from __future__ import annotations

import numpy as np
import matplotlib.colors as mcolors


def rgb_to_hsv(rgb) -> np.ndarray:
    """
    Convert RGB channels in [0, 255] to HSV in [0, 1].

    Args:
        rgb: Array-like of shape [..., 3]

    Returns:
        HSV array of the same shape
    """
    rgb = np.clip(np.asarray(rgb, dtype=np.float64), 0.0, 255.0) / 255.0
    return mcolors.rgb_to_hsv(rgb)


def hsv_to_rgb(hsv) -> np.ndarray:
    """
    Convert HSV in [0, 1] to float RGB channels in [0, 255].

    Hue wraps around; saturation and value are clipped.
    """
    hsv = np.array(hsv, dtype=np.float64)
    hsv[..., 0] = np.mod(hsv[..., 0], 1.0)
    hsv[..., 1:] = np.clip(hsv[..., 1:], 0.0, 1.0)
    return mcolors.hsv_to_rgb(hsv) * 255.0


def shift_hue(hsv, shift) -> np.ndarray:
    """Rotate hue downward by shift (fraction of a turn), wrapping at 0."""
    hsv = np.array(hsv, dtype=np.float64)
    hsv[..., 0] = np.mod(hsv[..., 0] - shift, 1.0)
    return hsv
