import pytest

from apablink.blinkt import Blinkt, end_frame_length
from apablink.output import BlinktError, GpioError, SerialOutput
from apablink.pixel import Pixel


class RecordingOutput(SerialOutput):
    def __init__(self, fail=False):
        self.writes = []
        self.closed = 0
        self.fail = fail

    def write(self, data):
        if self.fail:
            raise BlinktError("write failed")
        self.writes.append(bytes(data))

    def close(self):
        self.closed += 1


def make(num_pixels=8, fail=False):
    output = RecordingOutput(fail)
    return Blinkt(output, num_pixels), output


def test_end_frame_length_board():
    assert end_frame_length(8) == 5


def test_end_frame_length_grows_with_pixels():
    lengths = [end_frame_length(n) for n in range(0, 200)]
    assert lengths == sorted(lengths)
    assert all(length >= 4 + n // 16 for n, length in enumerate(lengths))


def test_end_frame_length_rejects_negative():
    with pytest.raises(ValueError):
        end_frame_length(-1)


def test_negative_pixel_count_rejected():
    with pytest.raises(ValueError):
        Blinkt(RecordingOutput(), -3)


def test_default_pixels():
    blinkt, _ = make()
    assert len(blinkt) == 8
    assert all(pixel == Pixel() for pixel in blinkt)
    assert blinkt[0].to_bytes() == bytes([0b1110_0111, 0, 0, 0])


def test_set_pixel():
    blinkt, _ = make()
    blinkt.set_pixel(2, 10, 20, 30)
    assert blinkt[2].rgb() == (10, 20, 30)
    assert blinkt[1].rgb() == (0, 0, 0)


def test_set_pixel_out_of_range_is_ignored():
    blinkt, _ = make(4)
    before = blinkt.frame()
    blinkt.set_pixel(4, 1, 2, 3)
    blinkt.set_pixel(-1, 1, 2, 3)
    blinkt.set_pixel_rgbb(99, 1, 2, 3, 1.0)
    blinkt.set_pixel_brightness(99, 1.0)
    assert blinkt.frame() == before


def test_set_pixel_rgbb_and_brightness():
    blinkt, _ = make()
    blinkt.set_pixel_rgbb(1, 5, 6, 7, 1.0)
    assert blinkt[1].rgbb() == (5, 6, 7, 1.0)
    blinkt.set_pixel_brightness(1, 0.0)
    assert blinkt[1].brightness == 0.0
    assert blinkt[1].rgb() == (5, 6, 7)


def test_set_all_pixels():
    blinkt, _ = make(3)
    blinkt.set_all_pixels(1, 2, 3)
    assert [pixel.rgb() for pixel in blinkt] == [(1, 2, 3)] * 3


def test_set_all_pixels_rgbb_and_brightness():
    blinkt, _ = make(3)
    blinkt.set_all_pixels_rgbb(9, 8, 7, 1.0)
    assert all(pixel.rgbb() == (9, 8, 7, 1.0) for pixel in blinkt)
    blinkt.set_all_pixels_brightness(0.5)
    assert all(pixel.brightness == Pixel(brightness=0.5).brightness for pixel in blinkt)


def test_clear_keeps_brightness():
    blinkt, _ = make(2)
    blinkt.set_all_pixels_rgbb(100, 100, 100, 1.0)
    blinkt.clear()
    assert all(pixel.rgbb() == (0, 0, 0, 1.0) for pixel in blinkt)


def test_iteration_modifies_buffer():
    blinkt, _ = make(3)
    for pixel in blinkt:
        pixel.set_rgb(255, 0, 255)
    assert all(pixel.rgb() == (255, 0, 255) for pixel in blinkt)


def test_frame_layout():
    blinkt, _ = make(2)
    blinkt.set_pixel(0, 1, 2, 3)
    frame = blinkt.frame()
    assert frame[:4] == bytes(4)
    assert frame[4:8] == blinkt[0].to_bytes()
    assert frame[8:12] == blinkt[1].to_bytes()
    assert frame[12:] == bytes(end_frame_length(2))
    assert frame[5:8] == bytes([3, 2, 1])


def test_show_sends_frame():
    blinkt, output = make()
    blinkt.set_all_pixels(255, 0, 0)
    blinkt.show()
    assert b"".join(output.writes) == blinkt.frame()
    assert len(blinkt.frame()) == 4 + 4 * len(blinkt) + end_frame_length(len(blinkt))


def test_close_clears_and_closes():
    blinkt, output = make(2)
    blinkt.set_all_pixels(10, 20, 30)
    blinkt.close()
    assert output.closed == 1
    assert output.writes[-1][4:8] == Pixel().to_bytes()
    assert all(pixel.rgb() == (0, 0, 0) for pixel in blinkt)


def test_close_without_clearing():
    blinkt, output = make(2)
    blinkt.clear_on_drop = False
    blinkt.set_all_pixels(10, 20, 30)
    blinkt.close()
    assert output.writes == []
    assert output.closed == 1
    assert blinkt[0].rgb() == (10, 20, 30)


def test_close_is_idempotent():
    blinkt, output = make()
    blinkt.close()
    blinkt.close()
    assert output.closed == 1
    assert len(output.writes) == 1


def test_show_after_close_raises():
    blinkt, _ = make()
    blinkt.close()
    with pytest.raises(BlinktError):
        blinkt.show()


def test_close_survives_write_failure():
    blinkt, output = make(fail=True)
    blinkt.close()
    assert output.closed == 1


def test_context_manager_closes():
    output = RecordingOutput()
    with Blinkt(output, 4) as blinkt:
        blinkt.set_all_pixels(1, 1, 1)
        blinkt.show()
    assert output.closed == 1
    assert len(output.writes) == 2
    assert output.writes[-1][4:8] == Pixel().to_bytes()


def test_with_settings_invalid_pin():
    with pytest.raises(GpioError):
        Blinkt.with_settings(300, 24, 8)


def test_with_settings_invalid_count():
    with pytest.raises(ValueError):
        Blinkt.with_settings(23, 24, -1)