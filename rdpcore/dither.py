"""Deterministic noise and ordered dither patterns."""

from __future__ import annotations

_MASK32 = 0xFFFFFFFF
_NOISE_PRIME = 1103515245

BAYER_MATRIX = (0, 4, 1, 5, 4, 0, 5, 1, 3, 7, 2, 6, 7, 3, 6, 2)
MAGIC_MATRIX = (0, 6, 1, 7, 4, 2, 5, 3, 3, 5, 2, 4, 7, 1, 6, 0)


def reseed_noise(x: int, y: int, offset: int) -> int:
    """Derive a 16-bit noise seed from a pixel position and primitive count."""
    sx, sy, sz = x & _MASK32, y & _MASK32, offset & _MASK32
    for _ in range(3):
        sx, sy, sz = (
            (((sx >> 8) ^ sy) * _NOISE_PRIME) & _MASK32,
            (((sy >> 8) ^ sz) * _NOISE_PRIME) & _MASK32,
            (((sz >> 8) ^ sx) * _NOISE_PRIME) & _MASK32,
        )
    return sx >> 16


def noise_combiner(seed: int) -> int:
    """Combiner noise value for a seed."""
    return ((seed & 7) << 6) | 0x20


def noise_dither_alpha(seed: int) -> int:
    """Alpha dither value for a seed."""
    return seed & 7


def noise_dither_color(seed: int) -> int:
    """Colour dither value for a seed."""
    return seed & 0x1FF


def noise_blend_threshold(seed: int) -> int:
    """Blend threshold for a seed."""
    return seed & 0xFF


def rgb_dither(sel: int, r: int, g: int, b: int, dith: int) -> tuple[int, int, int]:
    """Apply colour dithering and return the new ``(r, g, b)``."""
    if sel != 2:
        comps = (dith, dith, dith)
    else:
        comps = (dith & 7, (dith >> 3) & 7, (dith >> 6) & 7)

    def channel(value: int, comp: int) -> int:
        if comp >= (value & 7):
            return value
        return 255 if value > 247 else (value & 0xF8) + 8

    return channel(r, comps[0]), channel(g, comps[1]), channel(b, comps[2])


def dither_noise(mode: int, x: int, y: int, seed: int, scfield: int) -> tuple[int, int]:
    """Return ``(color_dither, alpha_dither)`` for an rgb/alpha dither mode."""
    if not 0 <= mode <= 15:
        raise ValueError(f"dither mode must be 0..15, got {mode}")
    y >>= scfield
    index = ((y & 3) << 2) | (x & 3)
    group, sub = mode >> 2, mode & 3

    if group == 0:
        color = pattern = MAGIC_MATRIX[index]
    elif group == 1:
        color = pattern = BAYER_MATRIX[index]
    elif group == 2:
        color = noise_dither_color(seed)
        pattern = MAGIC_MATRIX[index]
    else:
        color = 7
        pattern = BAYER_MATRIX[index]

    if sub == 0:
        alpha = pattern
    elif sub == 1:
        alpha = ~pattern & 7
    elif sub == 2:
        alpha = noise_dither_alpha(seed)
    else:
        alpha = 0
    return color, alpha