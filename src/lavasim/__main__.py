"""
Lava lamp - Entry Point

Usage:
    python -m lavasim [--preset NAME] [options]

Examples:
    python -m lavasim
    python -m lavasim --preset ocean --fps 30
    python -m lavasim --color 255,40,120 --no-background
    python -m lavasim --snapshot frame.png --ticks 200 --size 120x40

Press q to quit.
"""

from __future__ import annotations
import argparse
import logging
import sys

from lavasim.core.params import PRESETS, get_preset
from lavasim.core.random_source import create_random_source
from lavasim.driver.frame_driver import FrameDriver
from lavasim.driver.surface import MemorySurface, ViewportUnavailableError

logger = logging.getLogger("lavasim")


def _parse_color(text: str) -> tuple[int, int, int]:
    try:
        r, g, b = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected R,G,B, got {text!r}")
    return r, g, b


def _parse_size(text: str) -> tuple[int, int]:
    try:
        width, height = (int(part) for part in text.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WxH, got {text!r}")
    return width, height


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lavasim",
        description="Animated metaball lava lamp for the terminal.",
    )
    parser.add_argument("--preset", default="lava", choices=sorted(PRESETS))
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--density", type=float, help="blob-count scaling (larger = fewer blobs)")
    parser.add_argument("--threshold", type=float, help="inside/outside cutoff")
    parser.add_argument("--speed", type=float, dest="speed_scale", help="speed multiplier")
    parser.add_argument("--jitter", type=float, dest="jitter_fraction", help="displacement noise in [0, 1)")
    parser.add_argument("--color", type=_parse_color, dest="base_color", help="base colour as R,G,B")
    parser.add_argument(
        "--no-background", action="store_false", dest="background_enabled", default=None,
        help="leave cells below the threshold blank",
    )
    parser.add_argument("--fps", type=float, default=60.0, help="target frames per second")
    parser.add_argument(
        "--log-level", default="WARNING", type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    parser.add_argument("--log-file", default=None, help="write logs here (default: stderr)")
    parser.add_argument("--snapshot", default=None, help="run headless and save a PNG here")
    parser.add_argument("--ticks", type=int, default=100, help="ticks to run before a snapshot")
    parser.add_argument("--size", type=_parse_size, default=(120, 40), help="snapshot viewport WxH")
    return parser


def _configure_logging(level: str, log_file: str | None) -> None:
    logging.basicConfig(
        level=level.upper(),
        filename=log_file,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def snapshot(driver: FrameDriver, ticks: int, path: str) -> None:
    """Headless mode: run N ticks, save the last frame, exit."""
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    from lavasim.viz.fields import plot_frame, save_figure

    result = None
    driver.start()
    for _ in range(max(ticks, 1)):
        result = driver.tick()

    fig = plot_frame(result, threshold=driver.params.threshold)
    save_figure(fig, path)
    plt.close(fig)
    print(f"Saved {result.width}x{result.height} frame after {driver.current_tick} ticks to {path}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.log_level, args.log_file)

    overrides = {
        key: getattr(args, key)
        for key in ("density", "threshold", "speed_scale", "jitter_fraction",
                    "base_color", "background_enabled")
        if getattr(args, key) is not None
    }
    try:
        params = get_preset(args.preset, **overrides)
    except ValueError as exc:
        print(f"lavasim: {exc}", file=sys.stderr)
        return 2

    rng = create_random_source(args.seed)
    frame_interval = 1.0 / args.fps if args.fps > 0 else 0.0

    if args.snapshot:
        width, height = args.size
        surface = MemorySurface(width, height, keep_frames=False)
        driver = FrameDriver(surface, params, rng, frame_interval=0.0)
        try:
            snapshot(driver, args.ticks, args.snapshot)
        except ViewportUnavailableError as exc:
            print(f"lavasim: {exc}", file=sys.stderr)
            return 1
        return 0

    from lavasim.driver.terminal import TerminalSurface

    try:
        with TerminalSurface() as surface:
            driver = FrameDriver(surface, params, rng, frame_interval=frame_interval)
            ticks = driver.run()
    except ViewportUnavailableError as exc:
        print(f"lavasim: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130

    logger.info("Rendered %d ticks", ticks)
    return 0


if __name__ == "__main__":
    sys.exit(main())
