"""
Colour layer: turns influence values into cell colours.

- rgb_to_hsv / hsv_to_rgb: 8-bit RGB <-> HSV conversion
- ColorMapper / map_colors: threshold, hue-by-height and background tint
- ColorGrid: the per-frame colour matrix handed to the renderer
"""

from lavasim.color.hsv import rgb_to_hsv, hsv_to_rgb, shift_hue
from lavasim.color.mapper import ColorGrid, ColorMapper, map_colors, scaled_brightness

__all__ = [
    "rgb_to_hsv",
    "hsv_to_rgb",
    "shift_hue",
    "ColorGrid",
    "ColorMapper",
    "map_colors",
    "scaled_brightness",
]
