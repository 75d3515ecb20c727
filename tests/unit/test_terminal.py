"""Unit tests for the ANSI terminal surface."""

import io

import numpy as np
import pytest

from lavasim.color.mapper import ColorGrid
from lavasim.driver.surface import ViewportUnavailableError
from lavasim.driver.terminal import (
    ENTER_ALT_SCREEN,
    HOME,
    LEAVE_ALT_SCREEN,
    RESET,
    TerminalSurface,
    background_escape,
    frame_to_ansi,
)


def _grid():
    grid = ColorGrid.blank(2, 3)
    grid.rgb[0, 0] = (255, 0, 0)
    grid.rgb[0, 1] = (255, 0, 0)
    grid.filled[0, :2] = True
    return grid


class TestFrameToAnsi:
    """Tests for frame formatting."""

    def test_background_escape(self):
        assert background_escape((1, 2, 3)) == "\033[48;2;1;2;3m"

    def test_starts_at_home(self):
        assert frame_to_ansi(_grid()).startswith(HOME)

    def test_one_line_per_row(self):
        assert len(frame_to_ansi(_grid()).split("\r\n")) == 2

    def test_escape_only_on_colour_change(self):
        first_row = frame_to_ansi(_grid()).split("\r\n")[0]
        assert first_row.count(background_escape((255, 0, 0))) == 1
        assert first_row.count(" ") == 3

    def test_default_cells_reset(self):
        second_row = frame_to_ansi(_grid()).split("\r\n")[1]
        assert "48;2" not in second_row
        assert second_row.endswith(RESET)


class TestTerminalSurface:
    """Tests for TerminalSurface on non-terminal streams."""

    def test_context_manager_switches_screens(self):
        out = io.StringIO()
        with TerminalSurface(stream=out, input_stream=io.StringIO()):
            pass
        text = out.getvalue()
        assert text.startswith(ENTER_ALT_SCREEN)
        assert text.endswith(LEAVE_ALT_SCREEN)

    def test_extent_unavailable(self):
        surface = TerminalSurface(stream=io.StringIO(), input_stream=io.StringIO())
        with pytest.raises(ViewportUnavailableError):
            surface.get_viewport_extent()

    def test_render_writes_frame(self):
        out = io.StringIO()
        TerminalSurface(stream=out, input_stream=io.StringIO()).render(_grid())
        assert out.getvalue() == frame_to_ansi(_grid())

    def test_poll_without_tty_times_out(self):
        surface = TerminalSurface(stream=io.StringIO(), input_stream=io.StringIO("q"))
        assert surface.poll_cancellation(0.0) is None
