"""Fill-mode span rendering: write the fill colour across each span."""

from __future__ import annotations

import logging
from typing import Sequence

from rdpcore.framebuffer import Framebuffer, PipelineCrash, PixelSize
from rdpcore.spans import OtherModes, Span

_log = logging.getLogger(__name__)
_warned_fill_crash = False


def _crash(message: str) -> PipelineCrash:
    global _warned_fill_crash
    if not _warned_fill_crash:
        _log.warning("%s. RDP crashed", message)
        _warned_fill_crash = True
    return PipelineCrash(message)


def render_fill(
    framebuffer: Framebuffer,
    spans: Sequence[Span],
    start: int,
    end: int,
    flip: bool,
    modes: OtherModes,
) -> int:
    """Fill the valid spans ``start..end`` with the fill colour.

    Returns the number of pixels written. Raises :class:`PipelineCrash` for
    a 4-bit colour image and for mode bits that hang fill mode on hardware.
    """
    if framebuffer.size is PixelSize.BITS_4:
        raise PipelineCrash("fill with a 4-bit colour image")

    fastkill = bool(modes.image_read_en or modes.z_compare_en)
    slowkill = bool(modes.z_update_en and not modes.z_source_sel and not fastkill)
    xinc = 1 if flip else -1
    written = 0

    for i in range(start, end + 1):
        span = spans[i]
        xstart, xendsc = span.lx, span.rx
        length = xstart - xendsc if flip else xendsc - xstart

        if not span.validline:
            continue

        if fastkill and length >= 0:
            raise _crash(
                f"render_fill: image_read_en {int(modes.image_read_en)} "
                f"z_update_en {int(modes.z_update_en)} "
                f"z_compare_en {int(modes.z_compare_en)}"
            )

        pixel = framebuffer.width * i + xendsc
        for _ in range(length + 1):
            framebuffer.fill(pixel)
            pixel += xinc
            written += 1

        if slowkill and length >= 0:
            raise _crash(
                f"render_fill: image_read_en {int(modes.image_read_en)} "
                f"z_update_en {int(modes.z_update_en)} "
                f"z_compare_en {int(modes.z_compare_en)} "
                f"z_source_sel {int(modes.z_source_sel)}"
            )

    return written