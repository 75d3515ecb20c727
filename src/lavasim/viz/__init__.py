"""
Visualization utilities.

- Influence heatmaps with threshold contours
- Coloured frame images
- Blob overlays
"""

from lavasim.viz.fields import (
    CMAP_INFLUENCE,
    color_grid_to_image,
    plot_influence,
    plot_color_grid,
    plot_blobs,
    plot_frame,
    save_figure,
)

__all__ = [
    "CMAP_INFLUENCE",
    "color_grid_to_image",
    "plot_influence",
    "plot_color_grid",
    "plot_blobs",
    "plot_frame",
    "save_figure",
]
