"""Subpixel coverage masks and coverage value finalisation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class CvgDest(IntEnum):
    """How the coverage written to memory is derived."""

    CLAMP = 0
    WRAP = 1
    ZAP = 2
    SAVE = 3


@dataclass(frozen=True)
class CoverageInfo:
    """Derived values for one 8-bit coverage mask."""

    cvg: int
    cvbit: int
    xoff: int
    yoff: int


def right_cvg_hex(x: int, fmask: int) -> int:
    """Coverage bits to the right of a subpixel x position."""
    covered = ((x & 7) + 1) >> 1
    return (0xF0 >> covered) & fmask


def left_cvg_hex(x: int, fmask: int) -> int:
    """Coverage bits to the left of a subpixel x position."""
    covered = ((x & 7) + 1) >> 1
    return (0xF >> covered) & fmask


def _clear(buf: bytearray, start: int, end: int, bits: int) -> None:
    keep = ~bits & 0xFF
    for k in range(start, end + 1):
        buf[k] &= keep


def compute_coverage(buf: bytearray, span: Any, flip: bool) -> None:
    """Fill ``buf`` with coverage masks for one scanline.

    ``span`` needs ``lx``, ``rx`` and four-entry ``minorx``, ``majorx`` and
    ``invalyscan`` sequences.
    """
    if flip:
        start, end = span.rx, span.lx
    else:
        start, end = span.lx, span.rx
    if end < start:
        return

    buf[start : end + 1] = b"\xff" * (end - start + 1)

    for i in range(4):
        fmask = 0xA >> (i & 1)
        shift = (i - 2) & 4
        bits = fmask << shift

        if span.invalyscan[i]:
            _clear(buf, start, end, bits)
            continue

        minorcur = span.minorx[i]
        majorcur = span.majorx[i]
        minorint = minorcur >> 3
        majorint = majorcur >> 3

        if flip:
            _clear(buf, start, majorint, bits)
            _clear(buf, minorint, end, bits)
            if minorint > majorint:
                buf[minorint] |= right_cvg_hex(minorcur, fmask) << shift
                buf[majorint] |= left_cvg_hex(majorcur, fmask) << shift
            elif minorint == majorint:
                same = right_cvg_hex(minorcur, fmask) & left_cvg_hex(majorcur, fmask)
                buf[majorint] |= same << shift
        else:
            _clear(buf, start, minorint, bits)
            _clear(buf, majorint, end, bits)
            if majorint > minorint:
                buf[minorint] |= left_cvg_hex(minorcur, fmask) << shift
                buf[majorint] |= right_cvg_hex(majorcur, fmask) << shift
            elif minorint == majorint:
                same = left_cvg_hex(minorcur, fmask) & right_cvg_hex(majorcur, fmask)
                buf[majorint] |= same << shift


def finalize_span_alpha(cvg_dest: int, blend_en: int, cvg: int, memcvg: int) -> int:
    """Compute the 3-bit coverage value stored to the framebuffer."""
    dest = CvgDest(cvg_dest)
    if dest is CvgDest.CLAMP:
        final = cvg + memcvg if blend_en else cvg - 1
        return 7 if final & 8 else final & 7
    if dest is CvgDest.WRAP:
        return (cvg + memcvg) & 7
    if dest is CvgDest.ZAP:
        return 7
    return memcvg


def decompress_cvmask(x: int) -> int:
    """Expand an 8-bit coverage mask into its 4x4 16-bit layout."""
    return ((x & 0x5) | ((x & 0x5A) << 4) | ((x & 0xA0) << 8)) & 0xFFFF


_YARRAY = (0, 0, 1, 0, 2, 0, 1, 0, 3, 0, 1, 0, 2, 0, 1, 0)
_XARRAY = (0, 3, 2, 2, 1, 1, 1, 1, 0, 0, 0, 0, 0, 0, 0, 0)


def _build_table() -> tuple[CoverageInfo, ...]:
    table = []
    for i in range(0x100):
        mask = decompress_cvmask(i)
        masky = 0
        for k in range(4):
            if mask & (0xF000 >> (k << 2)):
                masky |= 1 << k
        offy = _YARRAY[masky]
        maskx = (mask & (0xF000 >> (offy << 2))) >> ((offy ^ 3) << 2)
        table.append(
            CoverageInfo(
                cvg=bin(i).count("1"),
                cvbit=(i >> 7) & 1,
                xoff=_XARRAY[maskx],
                yoff=offy,
            )
        )
    return tuple(table)


_CV_TABLE = _build_table()


def lookup_cvmask_derivatives(mask: int) -> CoverageInfo:
    """Return coverage count, top bit and sample offsets for a mask byte."""
    return _CV_TABLE[mask & 0xFF]