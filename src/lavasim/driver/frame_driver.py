"""
FrameDriver: the per-tick loop that ties simulation to a display surface.

Each tick, strictly in sequence on one thread:
    extent -> physics step -> field -> colours -> render
then a bounded wait for a quit key, which doubles as frame pacing.

The blob count is fixed from the first extent measurement. Later resizes
only change the grid dimensions (unless reinit_on_resize is set).
Rendering is bottom-to-top: the grid is flipped so the renderer's row 0
is the top of the screen (highest y).
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from lavasim.core.blobs import BlobSet, create_blobs
from lavasim.core.physics import PhysicsIntegrator
from lavasim.core.field import FieldEvaluator
from lavasim.color.mapper import ColorGrid, ColorMapper
from lavasim.driver.surface import ViewportUnavailableError

if TYPE_CHECKING:
    from lavasim.core.params import SimulationParameters
    from lavasim.core.random_source import RandomSource
    from lavasim.driver.surface import ViewportSurface

logger = logging.getLogger(__name__)


@dataclass
class FrameResult:
    """Everything computed for one tick."""

    blobs: BlobSet
    field: np.ndarray  # Raw influence, [height, width], row 0 = bottom
    colors: ColorGrid  # Same orientation as field
    width: int
    height: int


@dataclass
class FrameDriver:
    """
    Single-threaded poll-render loop.

    Cancellation is cooperative: the quit key is checked once per tick,
    after that tick's render has completed.
    """

    surface: "ViewportSurface"
    params: "SimulationParameters"
    rng: "RandomSource"
    frame_interval: float = 0.016  # Seconds to wait for input per tick
    quit_signal: str = "q"
    reinit_on_resize: bool = False

    # Loop state
    blobs: BlobSet | None = field(default=None, init=False)
    extent: tuple[int, int] | None = field(default=None, init=False)
    current_tick: int = field(default=0, init=False)

    def __post_init__(self):
        self._integrator = PhysicsIntegrator(self.params, self.rng)
        self._evaluator = FieldEvaluator(self.params.threshold, self.params.min_distance)
        self._mapper = ColorMapper(self.params)

    def _measure(self) -> tuple[int, int]:
        width, height = self.surface.get_viewport_extent()
        if width <= 0 or height <= 0:
            raise ViewportUnavailableError(f"viewport has no area ({width}x{height})")
        return int(width), int(height)

    def start(self) -> BlobSet:
        """
        Measure the viewport and create the blob set.

        Raises:
            ViewportUnavailableError: if the surface cannot report its size
        """
        self.extent = self._measure()
        width, height = self.extent
        self.blobs = create_blobs(width, height, self.params, self.rng)
        self.current_tick = 0
        logger.info(
            "Started on a %dx%d viewport with %d blobs", width, height, len(self.blobs)
        )
        return self.blobs

    def tick(self) -> FrameResult:
        """Run one full tick and hand the frame to the surface."""
        if self.blobs is None:
            self.start()
            width, height = self.extent
        else:
            width, height = self._measure()

        if (width, height) != self.extent:
            logger.info(
                "Viewport resized from %dx%d to %dx%d", *self.extent, width, height
            )
            self.extent = (width, height)
            if self.reinit_on_resize:
                self.blobs = create_blobs(width, height, self.params, self.rng)

        self.blobs = self._integrator.advance(self.blobs, width, height)
        values = self._evaluator.compute(self.blobs, width, height)
        colors = self._mapper.map(values)
        self.surface.render(colors.flipped())
        self.current_tick += 1

        return FrameResult(self.blobs, values, colors, width, height)

    def run(self, max_ticks: int | None = None) -> int:
        """
        Tick until the quit key arrives or max_ticks frames have rendered.

        Other input is ignored.

        Returns:
            Number of ticks rendered
        """
        if self.blobs is None:
            self.start()

        rendered = 0
        while max_ticks is None or rendered < max_ticks:
            self.tick()
            rendered += 1
            key = self.surface.poll_cancellation(self.frame_interval)
            if key == self.quit_signal:
                logger.info("Quit requested after %d ticks", rendered)
                break
            if key is not None:
                logger.debug("Ignoring input %r", key)
        return rendered
