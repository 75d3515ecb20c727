"""Unit tests for FrameDriver and MemorySurface."""

import numpy as np
import pytest

from lavasim.core.blobs import blob_count
from lavasim.core.params import SimulationParameters
from lavasim.driver.frame_driver import FrameDriver
from lavasim.driver.surface import MemorySurface, ViewportUnavailableError


@pytest.fixture
def surface():
    return MemorySurface(width=40, height=20)


class TestMemorySurface:
    """Tests for the in-memory surface."""

    def test_scripted_extents(self):
        s = MemorySurface(10, 5, extents=[(12, 6)])
        assert s.get_viewport_extent() == (12, 6)
        assert s.get_viewport_extent() == (12, 6)

    def test_no_area_raises(self):
        with pytest.raises(ViewportUnavailableError):
            MemorySurface(0, 5).get_viewport_extent()

    def test_scripted_keys(self):
        s = MemorySurface(10, 5, keys=["a", "q"])
        assert s.poll_cancellation(0.0) == "a"
        assert s.poll_cancellation(0.0) == "q"
        assert s.poll_cancellation(0.0) is None


class TestFrameDriver:
    """Tests for the tick loop."""

    def test_start_creates_blobs(self, surface, default_params, rng):
        driver = FrameDriver(surface, default_params, rng)
        blobs = driver.start()
        assert len(blobs) == blob_count(40, 20, default_params.density)
        assert driver.extent == (40, 20)

    def test_start_fails_without_viewport(self, default_params, rng):
        driver = FrameDriver(MemorySurface(0, 0), default_params, rng)
        with pytest.raises(ViewportUnavailableError):
            driver.start()

    def test_tick_renders_flipped_grid(self, surface, default_params, rng):
        driver = FrameDriver(surface, default_params, rng)
        result = driver.tick()
        assert result.field.shape == (20, 40)
        assert result.colors.shape == (20, 40)
        rendered = surface.last_frame
        assert np.array_equal(rendered.rgb, result.colors.rgb[::-1])
        assert np.array_equal(rendered.filled, result.colors.filled[::-1])

    def test_tick_advances_blobs(self, surface, default_params, rng):
        driver = FrameDriver(surface, default_params, rng)
        before = driver.start().positions.copy()
        result = driver.tick()
        assert not np.array_equal(result.blobs.positions, before)
        assert driver.current_tick == 1

    def test_run_max_ticks(self, surface, default_params, rng):
        driver = FrameDriver(surface, default_params, rng, frame_interval=0.0)
        assert driver.run(max_ticks=5) == 5
        assert len(surface.frames) == 5

    def test_quit_after_current_tick(self, default_params, rng):
        s = MemorySurface(30, 10, keys=["x", None, "q", None])
        driver = FrameDriver(s, default_params, rng, frame_interval=0.0)
        assert driver.run(max_ticks=100) == 3
        assert len(s.frames) == 3

    def test_custom_quit_signal(self, default_params, rng):
        s = MemorySurface(30, 10, keys=["q", "\x1b"])
        driver = FrameDriver(s, default_params, rng, frame_interval=0.0, quit_signal="\x1b")
        assert driver.run(max_ticks=10) == 2

    def test_resize_keeps_blob_count(self, default_params, rng):
        s = MemorySurface(40, 20, extents=[(40, 20), (40, 20), (30, 10)])
        driver = FrameDriver(s, default_params, rng)
        count = len(driver.start())
        driver.tick()
        result = driver.tick()
        assert result.field.shape == (10, 30)
        assert s.last_frame.shape == (10, 30)
        assert len(result.blobs) == count
        assert driver.extent == (30, 10)

    def test_first_tick_measures_once(self, default_params, rng):
        s = MemorySurface(40, 20, extents=[(40, 20), (30, 10)])
        driver = FrameDriver(s, default_params, rng)
        first = driver.tick()
        assert first.field.shape == (20, 40)
        second = driver.tick()
        assert second.field.shape == (10, 30)

    def test_resize_reinitializes_when_enabled(self, default_params, rng):
        s = MemorySurface(80, 40, extents=[(80, 40), (20, 10)])
        driver = FrameDriver(s, default_params, rng, reinit_on_resize=True)
        driver.start()
        result = driver.tick()
        assert len(result.blobs) == blob_count(20, 10, default_params.density)

    def test_no_blobs_renders_default_frame(self, rng):
        params = SimulationParameters(density=1e9, background_enabled=False)
        s = MemorySurface(25, 8)
        driver = FrameDriver(s, params, rng)
        result = driver.tick()
        assert len(result.blobs) == 0
        assert np.all(result.field == 0.0)
        assert not s.last_frame.filled.any()

    def test_frames_are_finite(self, surface, default_params, rng):
        driver = FrameDriver(surface, default_params, rng, frame_interval=0.0)
        driver.run(max_ticks=20)
        assert np.all(np.isfinite(driver.blobs.positions))
