"""Colour image (framebuffer) state and pixel read, write and fill."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from rdpcore.coverage import finalize_span_alpha
from rdpcore.rdram import Rdram


class ImageFormat(IntEnum):
    """Image formats understood by the RDP."""

    RGBA = 0
    YUV = 1
    CI = 2
    IA = 3
    I = 4  # noqa: E741


class PixelSize(IntEnum):
    """Pixel sizes, as encoded in image commands."""

    BITS_4 = 0
    BITS_8 = 1
    BITS_16 = 2
    BITS_32 = 3


@dataclass
class Color:
    """A colour with red, green, blue and alpha components."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0


class PipelineCrash(RuntimeError):
    """Raised when a command would hang the real pipeline."""


def _rgba16(word: int) -> tuple[int, int, int]:
    return (word >> 8) & 0xF8, (word & 0x7C0) >> 3, (word & 0x3E) << 2


def _rgba32(word: int) -> tuple[int, int, int]:
    return (word >> 24) & 0xFF, (word >> 16) & 0xFF, (word >> 8) & 0xFF


class Framebuffer:
    """The current colour image: its layout in RDRAM and the fill colour."""

    def __init__(self, rdram: Rdram) -> None:
        self.rdram = rdram
        self.format: int = ImageFormat.RGBA
        self.size: PixelSize = PixelSize.BITS_4
        self.width = 0
        self.address = 0
        self.fill_color = 0

    def set_color_image(self, args) -> None:
        """Decode a Set Color Image command."""
        self.format = (args[0] >> 21) & 0x7
        self.size = PixelSize((args[0] >> 19) & 0x3)
        self.width = (args[0] & 0x3FF) + 1
        self.address = args[1] & 0x0FFFFFF

    def set_fill_color(self, args) -> None:
        """Decode a Set Fill Color command."""
        self.fill_color = args[1] & 0xFFFFFFFF

    def write(self, pixel, r, g, b, blend_en, cvg, memcvg, cvg_dest) -> None:
        """Store a blended pixel at pixel index ``pixel``."""
        if self.size is PixelSize.BITS_4:
            self.rdram.write8(self.address + pixel, 0)
        elif self.size is PixelSize.BITS_8:
            fb = self.address + pixel
            col = g if fb & 1 else r
            self.rdram.write_pair8(fb, col & 0xFF, 3 if col & 1 else 0)
        elif self.size is PixelSize.BITS_16:
            fb = (self.address >> 1) + pixel
            finalcvg = finalize_span_alpha(cvg_dest, blend_en, cvg, memcvg)
            if self.format == ImageFormat.RGBA:
                color = ((r & ~7) << 8) | ((g & ~7) << 3) | ((b & ~7) >> 2)
            else:
                color = (r << 8) | (finalcvg << 5)
                finalcvg = 0
            value = (color | (finalcvg >> 2)) & 0xFFFF
            self.rdram.write_pair16(fb, value, finalcvg & 3)
        else:
            fb = (self.address >> 2) + pixel
            finalcvg = finalize_span_alpha(cvg_dest, blend_en, cvg, memcvg)
            color = (r << 24) | (g << 16) | (b << 8) | (finalcvg << 5)
            self.rdram.write_pair32(fb, color & 0xFFFFFFFF, 3 if g & 1 else 0, 0)

    def read(self, pixel, image_read_en) -> tuple[Color, int]:
        """Return the memory colour and coverage at pixel index ``pixel``."""
        if self.size is PixelSize.BITS_4:
            return Color(0, 0, 0, 0xE0), 7
        if self.size is PixelSize.BITS_8:
            mem = self.rdram.read8(self.address + pixel)
            return Color(mem, mem, mem, 0xE0), 7
        if self.size is PixelSize.BITS_16:
            addr = (self.address >> 1) + pixel
            rgba = self.format == ImageFormat.RGBA
            if image_read_en:
                word, hidden = self.rdram.read_pair16(addr)
                if rgba:
                    r, g, b = _rgba16(word)
                    lowbits = (((word & 1) << 2) | hidden) & 0xFF
                else:
                    r = g = b = word >> 8
                    lowbits = (word >> 5) & 7
                return Color(r, g, b, (lowbits << 5) & 0xFF), lowbits
            word = self.rdram.read16(addr)
            if rgba:
                r, g, b = _rgba16(word)
            else:
                r = g = b = word >> 8
            return Color(r, g, b, 0xE0), 7
        mem = self.rdram.read32((self.address >> 2) + pixel)
        r, g, b = _rgba32(mem)
        if image_read_en:
            return Color(r, g, b, mem & 0xE0), (mem >> 5) & 7
        return Color(r, g, b, 0xE0), 7

    def fill(self, pixel) -> None:
        """Write the fill colour at pixel index ``pixel``."""
        if self.size is PixelSize.BITS_4:
            raise PipelineCrash("fill with a 4-bit colour image")
        fill = self.fill_color
        if self.size is PixelSize.BITS_8:
            fb = self.address + pixel
            val = (fill >> (((fb & 3) ^ 3) << 3)) & 0xFF
            self.rdram.write_pair8(fb, val, ((val & 1) << 1) | (val & 1))
        elif self.size is PixelSize.BITS_16:
            fb = (self.address >> 1) + pixel
            val = fill & 0xFFFF if fb & 1 else (fill >> 16) & 0xFFFF
            self.rdram.write_pair16(fb, val, ((val & 1) << 1) | (val & 1))
        else:
            fb = (self.address >> 2) + pixel
            self.rdram.write_pair32(
                fb,
                fill,
                3 if fill & 0x10000 else 0,
                3 if fill & 0x1 else 0,
            )