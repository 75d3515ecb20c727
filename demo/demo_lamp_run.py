#!/usr/bin/env python3
"""
Demo: Headless Lamp Run

Runs the full tick loop against an in-memory surface and records:
1. Mean blob height over time (rising drift vs. falling episodes)
2. Fraction of blobs in falling mode
3. Number of inside regions per frame
4. The final frame, as the terminal would show it
"""

import numpy as np
import matplotlib.pyplot as plt
from pathlib import Path

from lavasim.core import SimulationParameters, create_random_source
from lavasim.driver import FrameDriver, MemorySurface
from lavasim.analysis import count_regions
from lavasim.viz.fields import plot_color_grid


def main():
    print("=" * 60)
    print("  HEADLESS LAMP RUN")
    print("=" * 60)

    width, height = 120, 40
    n_ticks = 1500
    params = SimulationParameters()
    rng = create_random_source(seed=42)

    surface = MemorySurface(width, height, keep_frames=False)
    driver = FrameDriver(surface, params, rng, frame_interval=0.0)
    blobs = driver.start()

    print(f"\n1. Setup:")
    print(f"   Viewport: {width}x{height}")
    print(f"   Blobs: {len(blobs)} (density={params.density})")
    print(f"   Speed scale: {params.speed_scale}, jitter: {params.jitter_fraction}")

    print(f"\n2. Running {n_ticks} ticks...")
    mean_height, falling_share, regions = [], [], []
    for _ in range(n_ticks):
        result = driver.tick()
        mean_height.append(result.blobs.positions[:, 1].mean() / height)
        falling_share.append(result.blobs.falling.mean())
        regions.append(count_regions(result.field >= params.threshold))

    print(f"   Mean normalized height: {np.mean(mean_height):.3f}")
    print(f"   Mean falling share:     {np.mean(falling_share):.3f}")
    print(f"   Regions per frame:      {np.min(regions)}-{np.max(regions)}")

    print("\n3. Creating visualization...")
    fig, axes = plt.subplots(2, 2, figsize=(14, 8))
    ticks = np.arange(1, n_ticks + 1)

    axes[0, 0].plot(ticks, mean_height, "b-", linewidth=1)
    axes[0, 0].set_title("Mean blob height (normalized)")
    axes[0, 0].set_ylim(0, 1)

    axes[0, 1].plot(ticks, falling_share, "r-", linewidth=1)
    axes[0, 1].set_title("Share of blobs falling")
    axes[0, 1].set_ylim(0, 1)

    axes[1, 0].plot(ticks, regions, "k-", linewidth=1)
    axes[1, 0].set_title("Inside regions per frame")

    plot_color_grid(result.colors, ax=axes[1, 1], title=f"Frame {n_ticks}")

    for ax in axes.ravel()[:3]:
        ax.set_xlabel("tick")
        ax.grid(True, alpha=0.3)

    fig.tight_layout()

    output_dir = Path("output/demo_lamp_run")
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / "lamp_run.png"
    fig.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close()
    print(f"   Saved: {output_path}")


if __name__ == "__main__":
    main()
