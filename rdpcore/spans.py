"""Span records, per-primitive state and fixed-point helpers for rasterising."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from rdpcore.coverage import CvgDest


class CycleType(IntEnum):
    """Pipeline cycle modes."""

    ONE = 0
    TWO = 1
    COPY = 2
    FILL = 3


@dataclass
class OtherModes:
    """The subset of the other-modes register that the rasteriser consults."""

    cycle_type: CycleType = CycleType.ONE
    image_read_en: bool = False
    z_compare_en: bool = False
    z_update_en: bool = False
    z_source_sel: bool = False
    alpha_compare_en: bool = False
    dither_alpha_en: bool = False
    cvg_dest: CvgDest = CvgDest.CLAMP


def _four(value: int) -> list[int]:
    return [value] * 4


@dataclass
class Span:
    """One scanline of a primitive, as produced by the edge walker."""

    lx: int = 0
    rx: int = 0
    unscrx: int = 0
    validline: bool = False
    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0
    s: int = 0
    t: int = 0
    w: int = 0
    z: int = 0
    majorx: list[int] = field(default_factory=lambda: _four(0))
    minorx: list[int] = field(default_factory=lambda: _four(0))
    invalyscan: list[int] = field(default_factory=lambda: _four(0))


@dataclass
class Clip:
    """Scissor rectangle in 10.2 fixed point."""

    xh: int = 0x2000
    yh: int = 0x2000
    xl: int = 0
    yl: int = 0


@dataclass
class SpanDerivatives:
    """Per-pixel and per-line increments shared by all spans of a primitive."""

    ds: int = 0
    dt: int = 0
    dw: int = 0
    dr: int = 0
    dg: int = 0
    db: int = 0
    da: int = 0
    dz: int = 0
    drdy: int = 0
    dgdy: int = 0
    dbdy: int = 0
    dady: int = 0
    dzdy: int = 0
    cdr: int = 0
    cdg: int = 0
    cdb: int = 0
    cda: int = 0
    cdz: int = 0
    dsdy: int = 0
    dtdy: int = 0
    dwdy: int = 0
    dzpix: int = 0


def sign_extend(value: int, bits: int) -> int:
    """Interpret the low ``bits`` bits of ``value`` as a signed number."""
    if not 1 <= bits <= 32:
        raise ValueError(f"bit width must be 1..32, got {bits}")
    mask = (1 << bits) - 1
    v = value & mask
    if v & (1 << (bits - 1)):
        v -= 1 << bits
    return v


def sign16(value: int) -> int:
    """Sign-extend the low 16 bits of ``value``."""
    return sign_extend(value, 16)


def wrap32(value: int) -> int:
    """Wrap ``value`` to a signed 32-bit integer."""
    return sign_extend(value, 32)


def normalize_dzpix(total: int) -> int:
    """Round a depth slope sum up to the power of two the hardware uses."""
    if total & 0xC000:
        return 0x8000
    if not total & 0xFFFF:
        return 1
    if total == 1:
        return 3
    count = 0x2000
    while count > 0:
        if total & count:
            return count << 1
        count >>= 1
    raise ValueError(f"cannot normalise depth slope {total:#x}")


def new_span_table(count: int = 1024) -> list[Span]:
    """Return ``count`` independent, cleared spans."""
    if count < 0:
        raise ValueError(f"span count must not be negative, got {count}")
    return [Span() for _ in range(count)]