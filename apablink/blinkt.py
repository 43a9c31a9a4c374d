"""Buffered control of an APA102/SK9822 pixel chain such as the Blinkt! board."""

from __future__ import annotations

from collections.abc import Iterator

from .output import BlinktError, GpioOutput, SerialOutput, SpiOutput
from .pixel import Pixel

DAT = 23
CLK = 24
NUM_PIXELS = 8

_START_FRAME = bytes(4)


def end_frame_length(num_pixels: int) -> int:
    """Return the number of zero bytes sent after the LED frames.

    One byte per 16 pixels (rounded up) plus a 4-byte SK9822 reset frame.
    """
    if isinstance(num_pixels, bool) or not isinstance(num_pixels, int):
        raise TypeError(f"num_pixels must be an int, not {type(num_pixels).__name__}")
    if num_pixels < 0:
        raise ValueError(f"num_pixels must be non-negative, got {num_pixels}")
    return 4 + int(num_pixels / 16.0 + 0.94)


class Blinkt:
    """A chain of pixels held in a local buffer and sent with :meth:`show`.

    By default all pixels are cleared when the object is closed, either
    explicitly or on leaving a ``with`` block. Set ``clear_on_drop`` to
    ``False`` to leave them lit.
    """

    def __init__(self, output: SerialOutput, num_pixels: int = NUM_PIXELS) -> None:
        self._end_frame = bytes(end_frame_length(num_pixels))
        self._output = output
        self._pixels = [Pixel() for _ in range(num_pixels)]
        self.clear_on_drop = True
        self._closed = False

    @classmethod
    def board(cls) -> Blinkt:
        """Open a Pimoroni Blinkt! board: data on GPIO 23, clock on GPIO 24, 8 pixels."""
        return cls.with_settings(DAT, CLK, NUM_PIXELS)

    @classmethod
    def with_settings(cls, pin_data: int, pin_clock: int, num_pixels: int) -> Blinkt:
        """Open a chain in bit-banging mode on the given BCM GPIO pins."""
        end_frame_length(num_pixels)
        return cls(GpioOutput(pin_data, pin_clock), num_pixels)

    @classmethod
    def with_spi(cls, spi: SpiOutput | None, num_pixels: int) -> Blinkt:
        """Open a chain on hardware SPI; ``None`` selects SPI0, slave 0 at 1 MHz."""
        end_frame_length(num_pixels)
        return cls(spi if spi is not None else SpiOutput.default(), num_pixels)

    def __iter__(self) -> Iterator[Pixel]:
        return iter(self._pixels)

    def __len__(self) -> int:
        return len(self._pixels)

    def __getitem__(self, index: int) -> Pixel:
        return self._pixels[index]

    def _pixel_at(self, pixel: int) -> Pixel | None:
        if isinstance(pixel, int) and 0 <= pixel < len(self._pixels):
            return self._pixels[pixel]
        return None

    def set_pixel(self, pixel: int, red: int, green: int, blue: int) -> None:
        """Set one pixel's colour; indices outside the chain are ignored."""
        target = self._pixel_at(pixel)
        if target is not None:
            target.set_rgb(red, green, blue)

    def set_pixel_rgbb(
        self, pixel: int, red: int, green: int, blue: int, brightness: float
    ) -> None:
        """Set one pixel's colour and brightness; indices outside the chain are ignored."""
        target = self._pixel_at(pixel)
        if target is not None:
            target.set_rgbb(red, green, blue, brightness)

    def set_pixel_brightness(self, pixel: int, brightness: float) -> None:
        """Set one pixel's brightness; indices outside the chain are ignored."""
        target = self._pixel_at(pixel)
        if target is not None:
            target.brightness = brightness

    def set_all_pixels(self, red: int, green: int, blue: int) -> None:
        """Set every pixel's colour."""
        for pixel in self._pixels:
            pixel.set_rgb(red, green, blue)

    def set_all_pixels_rgbb(
        self, red: int, green: int, blue: int, brightness: float
    ) -> None:
        """Set every pixel's colour and brightness."""
        for pixel in self._pixels:
            pixel.set_rgbb(red, green, blue, brightness)

    def set_all_pixels_brightness(self, brightness: float) -> None:
        """Set every pixel's brightness."""
        for pixel in self._pixels:
            pixel.brightness = brightness

    def clear(self) -> None:
        """Set every pixel's colour to black, keeping brightness."""
        self.set_all_pixels(0, 0, 0)

    def frame(self) -> bytes:
        """Return the bytes :meth:`show` sends: start frame, LED frames, end frame."""
        return b"".join(
            [_START_FRAME, *(pixel.to_bytes() for pixel in self._pixels), self._end_frame]
        )

    def show(self) -> None:
        """Send the buffered colours and brightness to the pixels."""
        if self._closed:
            raise BlinktError("Blinkt is closed")
        self._output.write(self.frame())

    def close(self) -> None:
        """Clear the pixels if ``clear_on_drop`` is set, then release the output."""
        if self._closed:
            return
        try:
            if self.clear_on_drop:
                self.clear()
                try:
                    self._output.write(self.frame())
                except BlinktError:
                    pass
        finally:
            self._closed = True
            self._output.close()

    def __enter__(self) -> Blinkt:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Blinkt(num_pixels={len(self._pixels)}, clear_on_drop={self.clear_on_drop})"