# apablink

Control a Pimoroni Blinkt! board, or any similar APA102 or SK9822 LED strip,
from a Raspberry Pi running Linux.

Two outputs are provided in `apablink.output`:

- `GpioOutput` bitbangs the data on any two GPIO pins (BCM numbering) through
  the sysfs GPIO interface (`/sys/class/gpio` by default). The Blinkt! board
  uses GPIO 23 for data and GPIO 24 for clock.
- `SpiOutput` uses hardware SPI through a `/dev/spidevB.S` device, with data on
  GPIO 10 and clock on GPIO 11. `SpiOutput.default()` opens bus 0, slave 0 at
  1 MHz in `SpiMode.MODE0`.

Every color and brightness change goes into a local buffer; call `show()` to
send it to the pixels.

## Installation

```
pip install apablink
```

The package has no dependencies beyond the standard library.

## Usage

### Blinkt! board

```python
import time
from apablink.blinkt import Blinkt

with Blinkt.board() as blinkt:
    blinkt.set_all_pixels(255, 0, 0)
    blinkt.show()
    time.sleep(1)
```

`Blinkt.board()` is the same as `Blinkt.with_settings(23, 24, 8)`.

### LED strip over SPI

```python
from apablink.blinkt import Blinkt
from apablink.output import SpiOutput

with Blinkt.with_spi(SpiOutput.default(), 144) as strip:
    strip.set_all_pixels_rgbb(0, 0, 255, 0.5)
    strip.show()
```

Passing `None` as the first argument of `Blinkt.with_spi` also opens the
default SPI output. Bitbanging on other pins works too, though it is slower
and less reliable on long strips:

```python
strip = Blinkt.with_settings(17, 27, 30)
```

A `Blinkt` can also be built directly around any `SerialOutput`:
`Blinkt(output, num_pixels)`.

### Working with pixels

Pixels can be set through the `Blinkt` methods, addressed by index, or
iterated over:

```python
blinkt.set_pixel(0, 255, 255, 0)
blinkt.set_pixel_brightness(0, 0.2)

for pixel in blinkt:
    pixel.set_rgb(255, 0, 255)

blinkt[1].red = 128
print(blinkt[0].rgbb())
```

- Colour values are integers from 0 to 255; anything else raises `ValueError`
  or `TypeError`.
- Brightness is a float from 0.0 to 1.0, clamped to that range and stored as a
  5-bit value, so reading it back gives a multiple of 1/31. New pixels start at
  brightness 7/31.
- The `set_pixel*` methods ignore indices outside the chain.
- `clear()` sets every colour to black and keeps the brightness.
- `frame()` returns the exact bytes `show()` sends: a 4-byte start frame, one
  4-byte frame per pixel, and an end frame of zero bytes (one per 16 pixels,
  rounded up, plus a 4-byte SK9822 reset frame; see `end_frame_length`).

### Closing

`close()` (or leaving a `with` block) clears all pixels, sends that to the
chain, and releases the output. Set `clear_on_drop = False` to leave the
pixels lit. After closing, `show()` raises `BlinktError`.

Errors from the GPIO or SPI layer are raised as `GpioError` or `SpiError`,
both subclasses of `BlinktError`.

## Demos

The package installs a demo command:

```
apablink-demo
```

By default it cycles all pixels through red, green and blue every 0.25 s,
using GPIO 23 and 24 for 8 pixels, until interrupted with Ctrl-C or SIGTERM,
and then clears the pixels. `apablink-demo random` gives every pixel a random
colour every 0.1 s at brightness 0.1.

Options:

- `--pixels N`, `--data-pin N`, `--clock-pin N`, `--sysfs-root DIR`
- `--spi`, `--spi-bus N`, `--spi-slave N`, `--spi-speed HZ`, `--spi-mode 0-3`
- `--delay SECONDS` between frames, `--frames N` to stop after N frames
- `--no-clear` to leave the pixels lit on exit

The same patterns are available from Python as `apablink.demos.run_solid` and
`apablink.demos.run_random`, which take a `Blinkt`, an optional `running()`
callable and a delay, and return the number of frames shown.

## Limitations

GPIO access goes only through the sysfs interface; the package does not map
the GPIO registers through `/dev/gpiomem` or `/dev/mem`, so a kernel with sysfs
GPIO support is required for bitbanging mode. Hardware SPI needs a Linux
spidev device.