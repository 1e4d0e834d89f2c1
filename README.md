# rdpcore

A pure-Python, bit-exact model of building blocks of a rasterizing
display processor: the RDRAM interface with its hidden bits, coverage
masks, dither and noise generation, framebuffer pixel access, the
primitive edge walker and fill-mode span rendering.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `rdpcore.rdram.Rdram` is big-endian memory addressed by byte, halfword
  or word index (`read8`/`read16`/`read32`, `write8`/`write16`/`write32`),
  with a hidden two-bit value per halfword (`read_pair16`, `write_pair8`,
  `write_pair16`, `write_pair32`). Hidden bits start at 3. Accesses
  beyond the configured size read as zero and writes there are dropped.
- `rdpcore.coverage` has `compute_coverage`, which fills a buffer with
  per-pixel coverage masks for one scanline, `finalize_span_alpha` for
  the stored coverage value under each `CvgDest` mode,
  `decompress_cvmask`, and `lookup_cvmask_derivatives`, which returns a
  `CoverageInfo` (coverage count, top bit and sample offsets) for a mask
  byte.
- `rdpcore.dither` has the deterministic noise seed (`reseed_noise`),
  the noise accessors (`noise_combiner`, `noise_dither_alpha`,
  `noise_dither_color`, `noise_blend_threshold`), `rgb_dither`, and
  `dither_noise`, which returns the colour and alpha dither values for
  one of the sixteen rgb/alpha dither modes.
- `rdpcore.framebuffer.Framebuffer` decodes Set Color Image and Set Fill
  Color (`set_color_image`, `set_fill_color`) and reads, writes and fills
  pixels for 4, 8, 16 and 32-bit images. `ImageFormat`, `PixelSize` and
  `Color` describe images and colours.
- `rdpcore.spans` holds `Span`, `Clip`, `OtherModes`, `CycleType`,
  `SpanDerivatives`, `new_span_table` and the fixed-point helpers
  `sign_extend`, `sign16`, `wrap32` and `normalize_dzpix`.
- `rdpcore.edgewalker.walk_edges` takes 44 words of edge data, a span
  table and a `WalkContext` (scissor, image width, cycle type, field and
  stride settings), fills the spans, and returns a `WalkResult` with the
  flip flag, tile number, mip level count, scanline range and
  `SpanDerivatives`.
- `rdpcore.fill.render_fill` writes the fill colour across the valid
  spans in a scanline range and returns the number of pixels written.

A state that would hang the hardware (filling a 4-bit image, or fill
mode with image reads, depth compare or depth update switched on) raises
`rdpcore.framebuffer.PipelineCrash`.

## Example

```python
from rdpcore.rdram import Rdram
from rdpcore.framebuffer import Framebuffer
from rdpcore.spans import CycleType, OtherModes, Span, new_span_table
from rdpcore.fill import render_fill

ram = Rdram(0x400000)
fb = Framebuffer(ram)
fb.set_color_image([(2 << 19) | (320 - 1), 0x100000])   # 16-bit, 320 wide
fb.set_fill_color([0, 0xF801F801])

spans = new_span_table()
for y in range(10, 21):
    spans[y] = Span(lx=39, rx=10, validline=True)

written = render_fill(fb, spans, 10, 20, True, OtherModes(cycle_type=CycleType.FILL))
assert written == 11 * 30
assert ram.read16((0x100000 >> 1) + 320 * 10 + 12) == 0xF801
```

## What it does not do

The package stops at spans, framebuffer access and fill mode. It has no
command decoder or command-level entry points for triangles and
rectangles, no one-cycle, two-cycle or copy-mode span rendering, no
texture loading or sampling, no colour combiner or blender, and no depth
buffer. Edge data for `walk_edges` has to be built by the caller.