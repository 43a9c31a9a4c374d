"""A single APA102/SK9822 pixel held in its wire format."""

from __future__ import annotations

import math

DEFAULT_BRIGHTNESS = 7

_HEADER = 0b1110_0000
_BRIGHTNESS_MASK = 0b0001_1111
_BRIGHTNESS_STEPS = 31.0

_IDX_BRIGHTNESS = 0
_IDX_BLUE = 1
_IDX_GREEN = 2
_IDX_RED = 3


def _channel(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, not {type(value).__name__}")
    if not 0 <= value <= 255:
        raise ValueError(f"{name} must be between 0 and 255, got {value}")
    return value


def _brightness_byte(brightness: float) -> int:
    level = float(brightness)
    if math.isnan(level):
        level = 0.0
    level = min(max(level, 0.0), 1.0)
    return _HEADER | int(_BRIGHTNESS_STEPS * level)


class Pixel:
    """A pixel on an LED strip or board.

    Colour channels are 8-bit values (0-255). Brightness is a float between
    0.0 and 1.0, stored as a 5-bit value; values outside that range are clamped.
    """

    __slots__ = ("_value",)

    def __init__(
        self,
        red: int = 0,
        green: int = 0,
        blue: int = 0,
        brightness: float | None = None,
    ) -> None:
        self._value = bytearray([_HEADER | DEFAULT_BRIGHTNESS, 0, 0, 0])
        self.set_rgb(red, green, blue)
        if brightness is not None:
            self.brightness = brightness

    def rgb(self) -> tuple[int, int, int]:
        """Return the red, green and blue values."""
        return (
            self._value[_IDX_RED],
            self._value[_IDX_GREEN],
            self._value[_IDX_BLUE],
        )

    def set_rgb(self, red: int, green: int, blue: int) -> None:
        """Set the red, green and blue values."""
        red = _channel("red", red)
        green = _channel("green", green)
        blue = _channel("blue", blue)
        self._value[_IDX_RED] = red
        self._value[_IDX_GREEN] = green
        self._value[_IDX_BLUE] = blue

    def rgbb(self) -> tuple[int, int, int, float]:
        """Return the red, green, blue and brightness values."""
        return (*self.rgb(), self.brightness)

    def set_rgbb(self, red: int, green: int, blue: int, brightness: float) -> None:
        """Set the red, green, blue and brightness values."""
        self.set_rgb(red, green, blue)
        self.brightness = brightness

    @property
    def red(self) -> int:
        """The red value."""
        return self._value[_IDX_RED]

    @red.setter
    def red(self, value: int) -> None:
        self._value[_IDX_RED] = _channel("red", value)

    @property
    def green(self) -> int:
        """The green value."""
        return self._value[_IDX_GREEN]

    @green.setter
    def green(self, value: int) -> None:
        self._value[_IDX_GREEN] = _channel("green", value)

    @property
    def blue(self) -> int:
        """The blue value."""
        return self._value[_IDX_BLUE]

    @blue.setter
    def blue(self, value: int) -> None:
        self._value[_IDX_BLUE] = _channel("blue", value)

    @property
    def brightness(self) -> float:
        """The brightness, between 0.0 and 1.0, quantised to 5 bits."""
        return (self._value[_IDX_BRIGHTNESS] & _BRIGHTNESS_MASK) / _BRIGHTNESS_STEPS

    @brightness.setter
    def brightness(self, value: float) -> None:
        self._value[_IDX_BRIGHTNESS] = _brightness_byte(value)

    def clear(self) -> None:
        """Set red, green and blue to 0, leaving brightness unchanged."""
        self.set_rgb(0, 0, 0)

    def to_bytes(self) -> bytes:
        """Return the LED frame: brightness byte, then blue, green, red."""
        return bytes(self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pixel):
            return NotImplemented
        return self._value == other._value

    __hash__ = None  # type: ignore[assignment]

    def __copy__(self) -> Pixel:
        clone = Pixel.__new__(Pixel)
        clone._value = bytearray(self._value)
        return clone

    def __repr__(self) -> str:
        red, green, blue, brightness = self.rgbb()
        return (
            f"Pixel(red={red}, green={green}, blue={blue}, "
            f"brightness={brightness:.3f})"
        )