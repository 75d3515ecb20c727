"""
ANSI terminal surface.

Paints each cell as a space with a 24-bit background colour. Uses the
alternate screen, hides the cursor and puts the input in cbreak mode so a
single key press can be polled without Enter. Everything is restored on
exit, including after an exception.
"""

from __future__ import annotations
import logging
import os
import select
import sys
import termios
import time
import tty
from typing import TYPE_CHECKING, TextIO

from lavasim.driver.surface import ViewportUnavailableError

if TYPE_CHECKING:
    from lavasim.color.mapper import ColorGrid

logger = logging.getLogger(__name__)

CSI = "\033["
RESET = f"{CSI}0m"
HOME = f"{CSI}H"
ENTER_ALT_SCREEN = f"{CSI}?1049h"
LEAVE_ALT_SCREEN = f"{CSI}?1049l"
HIDE_CURSOR = f"{CSI}?25l"
SHOW_CURSOR = f"{CSI}?25h"
CELL_GLYPH = " "


def background_escape(color: tuple[int, int, int]) -> str:
    r, g, b = color
    return f"{CSI}48;2;{r};{g};{b}m"


def frame_to_ansi(grid: "ColorGrid") -> str:
    """
    Format a colour grid as one ANSI frame.

    Row 0 is written first (top of the screen). Escapes are only emitted
    when the colour changes along a row; unfilled cells use the terminal
    default background.
    """
    height, width = grid.shape
    lines = []
    for row in range(height):
        parts = []
        current = None
        for col in range(width):
            color = grid.cell(row, col)
            if color != current:
                parts.append(RESET if color is None else background_escape(color))
                current = color
            parts.append(CELL_GLYPH)
        parts.append(RESET)
        lines.append("".join(parts))
    return HOME + RESET + "\r\n".join(lines)


class TerminalSurface:
    """
    Terminal implementation of ViewportSurface.

    Use as a context manager:

        with TerminalSurface() as surface:
            FrameDriver(surface, params, rng).run()
    """

    def __init__(self, stream: TextIO | None = None, input_stream: TextIO | None = None):
        self.stream = stream if stream is not None else sys.stdout
        self.input_stream = input_stream if input_stream is not None else sys.stdin
        self._saved_attrs = None

    def _input_is_tty(self) -> bool:
        try:
            return self.input_stream.isatty()
        except ValueError:
            return False

    def __enter__(self) -> TerminalSurface:
        self.stream.write(ENTER_ALT_SCREEN + HIDE_CURSOR)
        self.stream.flush()
        if self._input_is_tty():
            fd = self.input_stream.fileno()
            self._saved_attrs = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._saved_attrs is not None:
            termios.tcsetattr(self.input_stream.fileno(), termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None
        self.stream.write(RESET + SHOW_CURSOR + LEAVE_ALT_SCREEN)
        self.stream.flush()
        return False

    def get_viewport_extent(self) -> tuple[int, int]:
        try:
            size = os.get_terminal_size(self.stream.fileno())
        except (OSError, ValueError) as exc:
            raise ViewportUnavailableError(f"cannot determine terminal size: {exc}") from exc
        if size.columns <= 0 or size.lines <= 0:
            raise ViewportUnavailableError(
                f"terminal has no area ({size.columns}x{size.lines})"
            )
        return size.columns, size.lines

    def render(self, grid: "ColorGrid") -> None:
        self.stream.write(frame_to_ansi(grid))
        self.stream.flush()

    def poll_cancellation(self, timeout: float) -> str | None:
        """Wait up to timeout seconds for one key press."""
        if not self._input_is_tty():
            time.sleep(timeout)
            return None
        fd = self.input_stream.fileno()
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None
        data = os.read(fd, 1)
        if not data:
            return None
        return data.decode(errors="ignore") or None
