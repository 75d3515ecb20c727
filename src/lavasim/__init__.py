"""
lavasim: terminal metaball lava lamp

A small simulator that animates a set of moving point sources ("blobs")
and renders the inverse-distance field they produce as a grid of coloured
terminal cells.

Core concepts:
- Blobs drift upward, bounce off the viewport edges and occasionally fall
- Each cell sums 1/distance to every blob (the metaball kernel)
- Cells above a threshold take the base colour, hue-shifted by height
- Cells below it get a dim complementary background wash

The simulation is a single in-memory snapshot redrawn every tick.
"""

__version__ = "0.1.0"
