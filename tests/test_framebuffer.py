import pytest
from hypothesis import given
from hypothesis import strategies as st

from rdpcore.coverage import CvgDest
from rdpcore.framebuffer import (
    Color,
    Framebuffer,
    ImageFormat,
    PipelineCrash,
    PixelSize,
)
from rdpcore.rdram import Rdram


def make_fb(fmt, size, address=0x100, width=16):
    fb = Framebuffer(Rdram(0x1000))
    fb.set_color_image([(fmt << 21) | (size << 19) | (width - 1), address])
    return fb


def test_defaults():
    fb = Framebuffer(Rdram(0x100))
    assert fb.size is PixelSize.BITS_4
    assert fb.format == ImageFormat.RGBA
    assert fb.width == 0
    assert fb.address == 0


def test_set_color_image_fields():
    fb = Framebuffer(Rdram(0x100))
    fb.set_color_image([(ImageFormat.I << 21) | (2 << 19) | 319, 0x1234567])
    assert fb.format == ImageFormat.I
    assert fb.size is PixelSize.BITS_16
    assert fb.width == 320
    assert fb.address == 0x234567


def test_set_fill_color():
    fb = Framebuffer(Rdram(0x100))
    fb.set_fill_color([0, 0xDEADBEEF])
    assert fb.fill_color == 0xDEADBEEF


def test_rgba16_round_trip_with_coverage():
    fb = make_fb(ImageFormat.RGBA, PixelSize.BITS_16)
    fb.write(3, 0xF8, 0x80, 0x40, 0, 8, 0, CvgDest.ZAP)
    color, memcvg = fb.read(3, True)
    assert color == Color(0xF8, 0x80, 0x40, 0xE0)
    assert memcvg == 7


def test_rgba16_save_keeps_memory_coverage():
    fb = make_fb(ImageFormat.RGBA, PixelSize.BITS_16)
    fb.write(0, 0x10, 0x20, 0x30, 0, 1, 5, CvgDest.SAVE)
    color, memcvg = fb.read(0, True)
    assert memcvg == 5
    assert color.a == 5 << 5


def test_read_without_image_read_reports_full_coverage():
    fb = make_fb(ImageFormat.RGBA, PixelSize.BITS_16)
    fb.write(0, 0x10, 0x20, 0x30, 0, 1, 2, CvgDest.SAVE)
    color, memcvg = fb.read(0, False)
    assert memcvg == 7
    assert color.a == 0xE0
    assert (color.r, color.g, color.b) == (0x10, 0x20, 0x30)


def test_intensity16_round_trip():
    fb = make_fb(ImageFormat.I, PixelSize.BITS_16)
    fb.write(1, 0xAB, 0, 0, 0, 8, 0, CvgDest.ZAP)
    color, memcvg = fb.read(1, True)
    assert (color.r, color.g, color.b) == (0xAB, 0xAB, 0xAB)
    assert memcvg == 7


def test_clamp_with_blend_saturates():
    fb = make_fb(ImageFormat.RGBA, PixelSize.BITS_32)
    fb.write(0, 1, 2, 3, 1, 3, 6, CvgDest.CLAMP)
    _, memcvg = fb.read(0, True)
    assert memcvg == 7


@given(
    st.integers(0, 255),
    st.integers(0, 255),
    st.integers(0, 255),
    st.integers(0, 7),
)
def test_rgba32_round_trip(r, g, b, memcvg):
    fb = make_fb(ImageFormat.RGBA, PixelSize.BITS_32)
    fb.write(2, r, g, b, 0, 1, memcvg, CvgDest.SAVE)
    color, cvg = fb.read(2, True)
    assert (color.r, color.g, color.b) == (r, g, b)
    assert cvg == memcvg
    assert color.a == memcvg << 5
    hidden = fb.rdram.hidden[((0x100 >> 2) + 2) << 1]
    assert hidden == (3 if g & 1 else 0)


def test_write8_uses_green_on_odd_byte():
    fb = make_fb(ImageFormat.I, PixelSize.BITS_8)
    fb.write(0, 0x11, 0x22, 0x33, 0, 8, 0, CvgDest.ZAP)
    fb.write(1, 0x11, 0x23, 0x33, 0, 8, 0, CvgDest.ZAP)
    assert fb.rdram.read8(0x100) == 0x11
    assert fb.rdram.read8(0x101) == 0x23
    assert fb.rdram.hidden[0x101 >> 1] == 3
    color, memcvg = fb.read(1, True)
    assert color == Color(0x23, 0x23, 0x23, 0xE0)
    assert memcvg == 7


def test_write4_stores_zero():
    fb = make_fb(ImageFormat.RGBA, PixelSize.BITS_4)
    fb.rdram.write8(0x105, 0x77)
    fb.write(5, 0xFF, 0xFF, 0xFF, 0, 8, 0, CvgDest.ZAP)
    assert fb.rdram.read8(0x105) == 0
    color, memcvg = fb.read(5, True)
    assert color == Color(0, 0, 0, 0xE0)
    assert memcvg == 7


def test_fill_4bit_crashes():
    fb = make_fb(ImageFormat.RGBA, PixelSize.BITS_4)
    with pytest.raises(PipelineCrash):
        fb.fill(0)


def test_fill_8bit_reproduces_fill_word():
    fb = make_fb(ImageFormat.I, PixelSize.BITS_8)
    fb.set_fill_color([0, 0x11223344])
    for pixel in range(4):
        fb.fill(pixel)
    assert fb.rdram.read32(0x100 >> 2) == 0x11223344


def test_fill_16bit_alternates_halves():
    fb = make_fb(ImageFormat.RGBA, PixelSize.BITS_16)
    fb.set_fill_color([0, 0x12355678])
    fb.fill(0)
    fb.fill(1)
    base = 0x100 >> 1
    assert fb.rdram.read_pair16(base) == (0x1235, 3)
    assert fb.rdram.read_pair16(base + 1) == (0x5678, 0)


def test_fill_32bit_writes_word_and_hidden_bits():
    fb = make_fb(ImageFormat.RGBA, PixelSize.BITS_32)
    fb.set_fill_color([0, 0x00010001])
    fb.fill(1)
    idx = (0x100 >> 2) + 1
    assert fb.rdram.read32(idx) == 0x00010001
    assert fb.rdram.hidden[idx << 1] == 3
    assert fb.rdram.hidden[(idx << 1) + 1] == 3


def test_out_of_range_read_is_zero():
    fb = make_fb(ImageFormat.RGBA, PixelSize.BITS_32, address=0x800000)
    color, memcvg = fb.read(0, True)
    assert (color.r, color.g, color.b, color.a) == (0, 0, 0, 0)
    assert memcvg == 0