"""
Driver layer: the tick loop and the surfaces it paints on.

- FrameDriver: extent -> physics -> field -> colours -> render, per tick
- ViewportSurface: protocol for display surfaces
- MemorySurface: in-memory surface for headless runs
- TerminalSurface lives in lavasim.driver.terminal (POSIX terminals only)
"""

from lavasim.driver.surface import ViewportSurface, ViewportUnavailableError, MemorySurface
from lavasim.driver.frame_driver import FrameDriver, FrameResult

__all__ = [
    "ViewportSurface",
    "ViewportUnavailableError",
    "MemorySurface",
    "FrameDriver",
    "FrameResult",
]
