"""
2D visualization of simulation frames.

Provides snapshots of:
- the raw influence field with its threshold contour
- the coloured frame as the terminal would show it
- blob positions and velocities

All plots use origin="lower" so y = 0 (the bottom of the lamp) is at the
bottom of the image, matching the simulation's coordinates.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.colors import LinearSegmentedColormap
from matplotlib.figure import Figure
from matplotlib.axes import Axes

if TYPE_CHECKING:
    from lavasim.core.blobs import BlobSet
    from lavasim.color.mapper import ColorGrid
    from lavasim.driver.frame_driver import FrameResult


def _create_influence_cmap():
    """Colormap from near black through deep red to warm white."""
    colors = [
        (0.05, 0.02, 0.02),     # Near black (no influence)
        (0.329, 0.075, 0.098),  # Dark red
        (0.855, 0.345, 0.114),  # Orange-red
        (0.988, 0.812, 0.498),  # Light orange
        (0.993, 0.978, 0.925),  # Warm white (saturated)
    ]
    return LinearSegmentedColormap.from_list("influence", colors)


CMAP_INFLUENCE = _create_influence_cmap()

# Default terminal background, for cells with no colour
DEFAULT_BACKGROUND = (0, 0, 0)


def color_grid_to_image(grid: "ColorGrid", default=DEFAULT_BACKGROUND) -> np.ndarray:
    """RGB image [H, W, 3] in [0, 1]; unfilled cells take `default`."""
    image = grid.rgb.astype(np.float64) / 255.0
    image[~grid.filled] = np.asarray(default, dtype=np.float64) / 255.0
    return image


def plot_influence(
    values: np.ndarray,
    threshold: float | None = None,
    title: str = "Influence",
    ax: Axes | None = None,
    colorbar: bool = True,
    figsize: tuple[float, float] = (8, 4),
) -> tuple[Figure, Axes]:
    """
    Plot the influence field clamped to [0, 1], with the threshold contour.

    Args:
        values: Raw influence field [H, W]
        threshold: Draw the inside/outside boundary at this level
        title: Plot title
        ax: Existing axes to plot on (creates new figure if None)
        colorbar: Whether to add a colorbar
        figsize: Figure size if creating new figure

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    clamped = np.clip(values, 0.0, 1.0)
    im = ax.imshow(clamped, origin="lower", cmap=CMAP_INFLUENCE, vmin=0, vmax=1, aspect="equal")

    if threshold is not None and threshold <= 1.0 and clamped.min() < threshold < clamped.max():
        ax.contour(clamped, levels=[threshold], colors="white", linewidths=0.8)

    if colorbar:
        plt.colorbar(im, ax=ax, fraction=0.046, pad=0.04)

    ax.set_title(title)
    ax.set_xlabel("x")
    ax.set_ylabel("y")

    return fig, ax


def plot_color_grid(
    grid: "ColorGrid",
    title: str = "Frame",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 4),
) -> tuple[Figure, Axes]:
    """Plot a colour grid (row 0 = bottom) as an image."""
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    ax.imshow(color_grid_to_image(grid), origin="lower", aspect="equal", interpolation="nearest")
    ax.set_title(title)
    ax.set_xlabel("x")
    ax.set_ylabel("y")

    return fig, ax


def plot_blobs(
    blobs: "BlobSet",
    ax: Axes,
    show_velocity: bool = True,
) -> Axes:
    """Overlay blob centres (falling blobs hollow) and velocity arrows."""
    if len(blobs) == 0:
        return ax

    xs, ys = blobs.positions[:, 0], blobs.positions[:, 1]
    rising = ~blobs.falling
    ax.scatter(xs[rising], ys[rising], s=12, c="cyan", label="rising")
    ax.scatter(
        xs[blobs.falling], ys[blobs.falling],
        s=12, facecolors="none", edgecolors="cyan", label="falling",
    )
    if show_velocity:
        ax.quiver(
            xs, ys, blobs.velocities[:, 0], blobs.velocities[:, 1],
            color="cyan", angles="xy", scale_units="xy", scale=0.2, width=0.003,
        )
    return ax


def plot_frame(
    result: "FrameResult",
    threshold: float,
    figsize: tuple[float, float] = (14, 4),
) -> Figure:
    """Side-by-side influence field (with blobs) and coloured frame."""
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=figsize)

    plot_influence(result.field, threshold=threshold, ax=ax1, title="Influence field")
    plot_blobs(result.blobs, ax1)
    ax1.set_xlim(-0.5, result.width - 0.5)
    ax1.set_ylim(-0.5, result.height - 0.5)

    plot_color_grid(result.colors, ax=ax2, title=f"Frame ({result.width}x{result.height})")

    fig.tight_layout()
    return fig


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file."""
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
