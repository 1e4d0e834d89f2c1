"""Edge walking: turn primitive edge data into clipped per-scanline spans."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from rdpcore.spans import (
    Clip,
    CycleType,
    Span,
    SpanDerivatives,
    normalize_dzpix,
    sign_extend,
    wrap32,
)

EDGE_DATA_WORDS = 44

_ATTRS = ("s", "t", "w", "r", "g", "b", "a", "z")


@dataclass
class WalkContext:
    """Render state the edge walker consults: scissor, image width and modes."""

    clip: Clip = field(default_factory=Clip)
    fb_width: int = 0
    cycle_type: CycleType = CycleType.ONE
    scfield: int = 0
    sckeepodd: int = 0
    stride: int = 0
    offset: int = 0


@dataclass
class WalkResult:
    """What the edge walker decoded and the scanline range it produced."""

    flip: bool
    tilenum: int
    max_level: int
    start: int
    end: int
    derivatives: SpanDerivatives


def _hi(e: list[int], a: int, b: int) -> int:
    return wrap32((e[a] & 0xFFFF0000) | ((e[b] >> 16) & 0xFFFF))


def _lo(e: list[int], a: int, b: int) -> int:
    return wrap32(((e[a] << 16) & 0xFFFF0000) | (e[b] & 0xFFFF))


def _attribute_block(e: list[int], rgba: int, stw: int, z: int) -> dict[str, int]:
    """Decode one group of eight attribute values (start, d/dx, d/de or d/dy)."""
    return {
        "r": _hi(e, rgba, rgba + 4),
        "g": _lo(e, rgba, rgba + 4),
        "b": _hi(e, rgba + 1, rgba + 5),
        "a": _lo(e, rgba + 1, rgba + 5),
        "s": _hi(e, stw, stw + 4),
        "t": _lo(e, stw, stw + 4),
        "w": _hi(e, stw + 1, stw + 5),
        "z": e[z],
    }


def _depth_slope_part(value: int) -> int:
    part = (value >> 16) & 0xFFFF
    return (~part) & 0x7FFF if part & 0x8000 else part


def _derivatives(dx: dict[str, int], dy: dict[str, int]) -> SpanDerivatives:
    d = SpanDerivatives(
        ds=dx["s"] & ~0x1F,
        dt=dx["t"] & ~0x1F,
        dw=dx["w"] & ~0x1F,
        dr=dx["r"] & ~0x1F,
        dg=dx["g"] & ~0x1F,
        db=dx["b"] & ~0x1F,
        da=dx["a"] & ~0x1F,
        dz=dx["z"],
        drdy=sign_extend(dy["r"] >> 14, 13),
        dgdy=sign_extend(dy["g"] >> 14, 13),
        dbdy=sign_extend(dy["b"] >> 14, 13),
        dady=sign_extend(dy["a"] >> 14, 13),
        dzdy=sign_extend(dy["z"] >> 10, 22),
        dsdy=dy["s"] & ~0x7FFF,
        dtdy=dy["t"] & ~0x7FFF,
        dwdy=dy["w"] & ~0x7FFF,
    )
    d.cdr = sign_extend(d.dr >> 14, 13)
    d.cdg = sign_extend(d.dg >> 14, 13)
    d.cdb = sign_extend(d.db >> 14, 13)
    d.cda = sign_extend(d.da >> 14, 13)
    d.cdz = sign_extend(d.dz >> 10, 22)
    total = _depth_slope_part(dy["z"]) + _depth_slope_part(dx["z"])
    d.dzpix = normalize_dzpix(total & 0xFFFF) & 0xFFFF
    return d


def _clip_x(x: int, clip_lo: int, clip_hi: int) -> tuple[int, bool, bool]:
    """Scissor one edge position; return (clipped x, under, over)."""
    sticky = 1 if (x >> 1) & 0x1FFF else 0
    xsc = ((x >> 13) & 0x1FFE) | sticky
    under = bool(x & 0x8000000) or (xsc < clip_lo and not x & 0x4000000)
    xsc = clip_lo if under else (((x >> 13) & 0x3FFE) | sticky)
    over = bool(xsc & 0x2000) or (xsc & 0x1FFF) >= clip_hi
    xsc = clip_hi if over else xsc
    return xsc, under, over


def _cross_key(x: int) -> int:
    return (x ^ (1 << 27)) & (0x3FFF << 14)


def walk_edges(
    ewdata: Sequence[int], spans: list[Span], context: WalkContext
) -> WalkResult:
    """Walk the edges in ``ewdata`` and fill ``spans`` with scanline records."""
    if len(ewdata) < EDGE_DATA_WORDS:
        raise ValueError(
            f"edge data needs {EDGE_DATA_WORDS} words, got {len(ewdata)}"
        )
    e = [wrap32(v) for v in ewdata[:EDGE_DATA_WORDS]]

    flip = bool(e[0] & 0x800000)
    max_level = (e[0] >> 19) & 7
    tilenum = (e[0] >> 16) & 7

    yl = sign_extend(e[0], 14)
    ym = sign_extend(e[1] >> 16, 14)
    yh = sign_extend(e[1], 14)
    xl = sign_extend(e[2], 28)
    xh = sign_extend(e[4], 28)
    xm = sign_extend(e[6], 28)
    dxldy = sign_extend(e[3], 30)
    dxhdy = sign_extend(e[5], 30)
    dxmdy = sign_extend(e[7], 30)

    current = _attribute_block(e, 8, 24, 40)
    dx = _attribute_block(e, 10, 26, 41)
    de = _attribute_block(e, 16, 32, 42)
    dy = _attribute_block(e, 18, 34, 43)

    derivs = _derivatives(dx, dy)

    xleft_inc = (dxmdy >> 2) & ~1
    xright_inc = (dxhdy >> 2) & ~1
    xright = xh & ~1
    xleft = xm & ~1

    sign_dxhdy = e[5] < 0
    if not (sign_dxhdy ^ flip):
        diff = {}
        for name in _ATTRS:
            deh = de[name] & ~0x1FF
            dyh = dy[name] & ~0x1FF
            diff[name] = wrap32(deh - (deh >> 2) - dyh + (dyh >> 2))
    else:
        diff = dict.fromkeys(_ATTRS, 0)

    if context.cycle_type != CycleType.COPY:
        dxh = {name: (dx[name] >> 8) & ~1 for name in _ATTRS}
    else:
        dxh = dict.fromkeys(_ATTRS, 0)

    clip = context.clip
    ldflag = 0 if (sign_dxhdy ^ flip) else 3

    if yl & 0x2000:
        use_yl = True
    elif yl & 0x1000:
        use_yl = False
    else:
        use_yl = (yl & 0xFFF) < clip.yl
    yllimit = yl if use_yl else clip.yl

    ylfar = yllimit | 3
    if (yl >> 2) > (ylfar >> 2):
        ylfar += 4
    elif 0 <= (yllimit >> 2) < 1023:
        spans[(yllimit >> 2) + 1].validline = False

    if yh & 0x2000:
        use_yh = False
    elif yh & 0x1000:
        use_yh = True
    else:
        use_yh = yh >= clip.yh
    yhlimit = yh if use_yh else clip.yh
    yhclose = yhlimit & ~3

    clip_hi = clip.xl << 1
    clip_lo = clip.xh << 1

    if flip:
        minor_pick, major_pick = max, min
        minor_init, major_init = 0, 0xFFF
    else:
        minor_pick, major_pick = min, max
        minor_init, major_init = 0xFFF, 0

    minor_acc, major_acc = minor_init, major_init
    allover = allunder = allinval = True
    xfrac = (xright >> 8) & 0xFF

    for k in range(yh & ~3, ylfar + 1):
        if k == ym:
            xleft = xl & ~1
            xleft_inc = (dxldy >> 2) & ~1

        spix = k & 3

        if k >= yhclose:
            invaly = k < yhlimit or k >= yllimit
            j = k >> 2
            span = spans[j]

            if spix == 0:
                minor_acc, major_acc = minor_init, major_init
                allover = allunder = allinval = True

            xrsc, under, over = _clip_x(xright, clip_lo, clip_hi)
            span.majorx[spix] = xrsc & 0x1FFF
            allover &= over
            allunder &= under

            xlsc, under, over = _clip_x(xleft, clip_lo, clip_hi)
            span.minorx[spix] = xlsc & 0x1FFF
            allover &= over
            allunder &= under

            if flip:
                crossed = _cross_key(xleft) < _cross_key(xright)
            else:
                crossed = _cross_key(xright) < _cross_key(xleft)
            invaly = invaly or crossed
            span.invalyscan[spix] = int(invaly)
            allinval &= invaly

            if not invaly:
                minor_acc = minor_pick(minor_acc, (xlsc >> 3) & 0xFFF)
                major_acc = major_pick(major_acc, (xrsc >> 3) & 0xFFF)

            if spix == ldflag:
                span.unscrx = sign_extend(xright >> 16, 12)
                xfrac = (xright >> 8) & 0xFF
                for name in _ATTRS:
                    value = (current[name] & ~0x1FF) + diff[name] - xfrac * dxh[name]
                    setattr(span, name, wrap32(value & ~0x3FF))

            if spix == 3:
                span.lx = minor_acc
                span.rx = major_acc
                span.validline = (
                    not allinval
                    and not allover
                    and not allunder
                    and (not context.scfield or not (context.sckeepodd ^ (j & 1)))
                    and (not context.stride or j % context.stride == context.offset)
                )
                if span.lx >= context.fb_width:
                    span.lx = context.fb_width - 1
                if span.rx >= context.fb_width:
                    span.rx = context.fb_width - 1

        if spix == 3:
            for name in _ATTRS:
                current[name] = wrap32(current[name] + de[name])

        xleft = wrap32(xleft + xleft_inc)
        xright = wrap32(xright + xright_inc)

    return WalkResult(
        flip=flip,
        tilenum=tilenum,
        max_level=max_level,
        start=yhlimit >> 2,
        end=yllimit >> 2,
        derivatives=derivs,
    )