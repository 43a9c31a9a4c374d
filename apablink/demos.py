"""Demonstration patterns for a Blinkt! board or APA102/SK9822 strip."""

from __future__ import annotations

import argparse
import random
import signal
import sys
import threading
import time
from collections.abc import Callable, Iterator

from .blinkt import CLK, DAT, NUM_PIXELS, Blinkt
from .output import DEFAULT_SYSFS_GPIO, BlinktError, GpioOutput, SpiMode, SpiOutput

SOLID_DELAY = 0.25
RANDOM_DELAY = 0.1
RANDOM_BRIGHTNESS = 0.1


def color_cycle() -> Iterator[tuple[int, int, int]]:
    """Yield red, green and blue, over and over."""
    red, green, blue = 255, 0, 0
    while True:
        yield red, green, blue
        red, green = green, red
        red, blue = blue, red


def _forever() -> bool:
    return True


def run_solid(
    blinkt: Blinkt,
    running: Callable[[], bool] | None = None,
    delay: float = SOLID_DELAY,
) -> int:
    """Show all pixels in red, green, blue in turn while ``running()`` is true.

    Returns the number of frames shown.
    """
    keep_going = running or _forever
    shown = 0
    colors = color_cycle()
    while keep_going():
        blinkt.set_all_pixels(*next(colors))
        blinkt.show()
        shown += 1
        time.sleep(delay)
    return shown


def run_random(
    blinkt: Blinkt,
    running: Callable[[], bool] | None = None,
    delay: float = RANDOM_DELAY,
    rng: random.Random | None = None,
) -> int:
    """Give every pixel a random colour each frame while ``running()`` is true.

    Returns the number of frames shown.
    """
    keep_going = running or _forever
    rng = rng or random.Random()
    blinkt.set_all_pixels_brightness(RANDOM_BRIGHTNESS)
    shown = 0
    while keep_going():
        for pixel in blinkt:
            pixel.set_rgb(rng.randrange(256), rng.randrange(256), rng.randrange(256))
        blinkt.show()
        shown += 1
        time.sleep(delay)
    return shown


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apablink", description="Run a demonstration pattern on an LED chain."
    )
    parser.add_argument("pattern", nargs="?", choices=("solid", "random"), default="solid")
    parser.add_argument("--pixels", type=int, default=NUM_PIXELS, help="number of pixels")
    parser.add_argument("--data-pin", type=int, default=DAT, help="BCM data pin")
    parser.add_argument("--clock-pin", type=int, default=CLK, help="BCM clock pin")
    parser.add_argument("--sysfs-root", default=DEFAULT_SYSFS_GPIO, help="sysfs GPIO directory")
    parser.add_argument("--spi", action="store_true", help="use hardware SPI")
    parser.add_argument("--spi-bus", type=int, default=0)
    parser.add_argument("--spi-slave", type=int, default=0)
    parser.add_argument("--spi-speed", type=int, default=1_000_000, help="clock speed in Hz")
    parser.add_argument("--spi-mode", type=int, choices=range(4), default=0)
    parser.add_argument("--delay", type=float, default=None, help="seconds between frames")
    parser.add_argument("--frames", type=int, default=None, help="stop after this many frames")
    parser.add_argument("--no-clear", action="store_true", help="leave pixels lit on exit")
    return parser


def _open(args: argparse.Namespace) -> Blinkt:
    if args.spi:
        output = SpiOutput(args.spi_bus, args.spi_slave, args.spi_speed, SpiMode(args.spi_mode))
    else:
        output = GpioOutput(args.data_pin, args.clock_pin, args.sysfs_root)
    try:
        return Blinkt(output, args.pixels)
    except ValueError:
        output.close()
        raise


def main(argv: list[str] | None = None) -> int:
    """Run the chosen pattern until interrupted, then clear the pixels."""
    args = _parser().parse_args(argv)
    if args.pixels < 0:
        print("apablink: --pixels must be non-negative", file=sys.stderr)
        return 2

    stop = threading.Event()
    shown = 0

    def running() -> bool:
        nonlocal shown
        if stop.is_set() or (args.frames is not None and shown >= args.frames):
            return False
        shown += 1
        return True

    def handle(signum, frame) -> None:
        stop.set()

    previous = {}
    for signum in (signal.SIGINT, signal.SIGTERM):
        previous[signum] = signal.signal(signum, handle)
    try:
        with _open(args) as blinkt:
            blinkt.clear_on_drop = not args.no_clear
            if args.pattern == "random":
                delay = RANDOM_DELAY if args.delay is None else args.delay
                run_random(blinkt, running, delay)
            else:
                delay = SOLID_DELAY if args.delay is None else args.delay
                run_solid(blinkt, running, delay)
    except BlinktError as err:
        print(f"apablink: {err}", file=sys.stderr)
        return 1
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)
    return 0


if __name__ == "__main__":
    sys.exit(main())