"""Serial outputs that clock bytes into an APA102/SK9822 chain."""

from __future__ import annotations

import abc
import enum
import os
import time
from pathlib import Path

DEFAULT_SYSFS_GPIO = "/sys/class/gpio"

_CLOCK_PULSE = 10e-6
_EXPORT_TIMEOUT = 1.0
_EXPORT_POLL = 0.01


class BlinktError(Exception):
    """Base class for errors raised while driving pixels."""

    _prefix = "I/O error"

    def __str__(self) -> str:
        return f"{self._prefix}: {super().__str__()}"


class GpioError(BlinktError):
    """Accessing the GPIO peripheral failed."""

    _prefix = "GPIO error"


class SpiError(BlinktError):
    """Accessing the SPI peripheral failed."""

    _prefix = "SPI error"


class SpiMode(enum.IntEnum):
    """SPI clock polarity and phase."""

    MODE0 = 0
    MODE1 = 1
    MODE2 = 2
    MODE3 = 3


class SerialOutput(abc.ABC):
    """Something bytes can be shifted out through."""

    @abc.abstractmethod
    def write(self, data: bytes) -> None:
        """Send ``data`` most significant bit first."""

    @abc.abstractmethod
    def close(self) -> None:
        """Release the underlying device."""

    def __enter__(self) -> SerialOutput:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class _SysfsPin:
    """An output pin driven through the sysfs GPIO interface."""

    def __init__(self, root: Path, number: int) -> None:
        if isinstance(number, bool) or not isinstance(number, int) or not 0 <= number <= 255:
            raise GpioError(f"invalid pin number {number!r}")
        self.number = number
        self._root = root
        self._dir = root / f"gpio{number}"
        self.exported = False
        try:
            if not self._dir.exists():
                (root / "export").write_text(str(number))
                self.exported = True
            self._wait_for_direction()
            self._value = open(self._dir / "value", "wb", buffering=0)
        except OSError as err:
            raise GpioError(f"pin {number}: {err}") from err

    def _wait_for_direction(self) -> None:
        deadline = time.monotonic() + _EXPORT_TIMEOUT
        direction = self._dir / "direction"
        while True:
            try:
                direction.write_text("out")
                return
            except OSError:
                if time.monotonic() >= deadline:
                    raise
                time.sleep(_EXPORT_POLL)

    def set(self, high: bool) -> None:
        try:
            self._value.seek(0)
            self._value.write(b"1" if high else b"0")
        except (OSError, ValueError) as err:
            raise GpioError(f"pin {self.number}: {err}") from err

    def close(self) -> None:
        self._value.close()
        if self.exported:
            try:
                (self._root / "unexport").write_text(str(self.number))
            except OSError:
                pass


class GpioOutput(SerialOutput):
    """Bit-banged output on any two GPIO pins (BCM numbering)."""

    def __init__(
        self,
        pin_data: int,
        pin_clock: int,
        sysfs_root: str | os.PathLike[str] = DEFAULT_SYSFS_GPIO,
    ) -> None:
        root = Path(sysfs_root)
        self._data = _SysfsPin(root, pin_data)
        try:
            self._clock = _SysfsPin(root, pin_clock)
        except GpioError:
            self._data.close()
            raise
        self._closed = False
        self._data.set(False)
        self._clock.set(False)

    def write(self, data: bytes) -> None:
        if self._closed:
            raise GpioError("output is closed")
        for byte in bytes(data):
            for shift in range(7, -1, -1):
                self._data.set(bool(byte >> shift & 1))
                self._clock.set(True)
                time.sleep(_CLOCK_PULSE)
                self._clock.set(False)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._data.close()
        self._clock.close()


def _iow(number: int, size: int) -> int:
    return (1 << 30) | (size << 16) | (ord("k") << 8) | number


_SPI_IOC_WR_MODE = _iow(1, 1)
_SPI_IOC_WR_BITS_PER_WORD = _iow(3, 1)
_SPI_IOC_WR_MAX_SPEED_HZ = _iow(4, 4)


class SpiOutput(SerialOutput):
    """Hardware SPI output through a spidev device."""

    def __init__(
        self,
        bus: int,
        slave: int,
        clock_speed_hz: int,
        mode: SpiMode | int = SpiMode.MODE0,
    ) -> None:
        mode = SpiMode(mode)
        if not 0 <= clock_speed_hz <= 0xFFFF_FFFF:
            raise ValueError(f"clock speed out of range: {clock_speed_hz}")
        if bus < 0 or slave < 0:
            raise ValueError("bus and slave must be non-negative")
        self.device = f"/dev/spidev{bus}.{slave}"
        self.clock_speed_hz = clock_speed_hz
        self.mode = mode
        try:
            self._fd = os.open(self.device, os.O_RDWR)
        except OSError as err:
            raise SpiError(f"{self.device}: {err}") from err
        try:
            import fcntl
            import struct

            fcntl.ioctl(self._fd, _SPI_IOC_WR_MODE, struct.pack("B", int(mode)))
            fcntl.ioctl(self._fd, _SPI_IOC_WR_BITS_PER_WORD, struct.pack("B", 8))
            fcntl.ioctl(
                self._fd, _SPI_IOC_WR_MAX_SPEED_HZ, struct.pack("I", clock_speed_hz)
            )
        except (OSError, ImportError) as err:
            os.close(self._fd)
            raise SpiError(f"{self.device}: {err}") from err
        self._closed = False

    @classmethod
    def default(cls) -> SpiOutput:
        """Open SPI0, slave 0 at 1 MHz in mode 0."""
        return cls(0, 0, 1_000_000, SpiMode.MODE0)

    def write(self, data: bytes) -> None:
        if self._closed:
            raise SpiError("output is closed")
        view = memoryview(bytes(data))
        try:
            while view:
                written = os.write(self._fd, view)
                view = view[written:]
        except OSError as err:
            raise SpiError(f"{self.device}: {err}") from err

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        os.close(self._fd)