"""Bit-exact model of display processor rasterizer building blocks."""

__version__ = "0.1.0"
__all__ = ["rdram", "coverage", "dither", "framebuffer", "spans", "edgewalker", "fill"]