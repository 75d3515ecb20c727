"""
Boundary contracts between the simulation and the display.

The frame driver only talks to a ViewportSurface. Concrete surfaces:
- TerminalSurface (lavasim.driver.terminal): ANSI terminal
- MemorySurface: fixed-size, in-memory, used for headless runs and tests
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from lavasim.color.mapper import ColorGrid


class ViewportUnavailableError(RuntimeError):
    """The viewport extent cannot be determined; the run cannot continue."""


class ViewportSurface(Protocol):
    """Protocol for display surfaces."""

    def get_viewport_extent(self) -> tuple[int, int]:
        """
        Current (width, height) in cells.

        Raises:
            ViewportUnavailableError: if the extent cannot be measured
        """
        ...

    def render(self, grid: "ColorGrid") -> None:
        """Paint a fully computed colour grid, row 0 at the top."""
        ...

    def poll_cancellation(self, timeout: float) -> str | None:
        """
        Wait up to timeout seconds for input.

        Returns:
            The input received (a single key), or None on timeout
        """
        ...


@dataclass
class MemorySurface:
    """
    In-memory surface with a scripted extent and input.

    extents: successive extents returned per query; the last one repeats
    keys: successive poll results; None once exhausted
    """

    width: int
    height: int
    extents: list[tuple[int, int]] = field(default_factory=list)
    keys: list[str | None] = field(default_factory=list)
    frames: list["ColorGrid"] = field(default_factory=list, init=False)
    keep_frames: bool = True

    def get_viewport_extent(self) -> tuple[int, int]:
        if self.extents:
            self.width, self.height = self.extents.pop(0)
        if self.width <= 0 or self.height <= 0:
            raise ViewportUnavailableError(
                f"viewport has no area ({self.width}x{self.height})"
            )
        return self.width, self.height

    def render(self, grid: "ColorGrid") -> None:
        if self.keep_frames:
            self.frames.append(grid)
        else:
            self.frames[:] = [grid]

    def poll_cancellation(self, timeout: float) -> str | None:
        if self.keys:
            return self.keys.pop(0)
        return None

    @property
    def last_frame(self) -> "ColorGrid | None":
        return self.frames[-1] if self.frames else None
