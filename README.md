# jpegenc

The front half of a baseline JPEG encoder in plain Python: reading and
writing uncompressed 24-bit Windows bitmaps, splitting an image into
Y/Cb/Cr sample planes, the forward 8x8 DCT, and IJG-style quality-scaled
quantization. Arithmetic is carried out in single precision throughout.

## Installation

```
pip install .
```

Nothing outside the Python standard library is needed.

## Modules

### `jpegenc.bitmap`

- `Image` — abstract picture addressed from the top-left corner, with
  `width`, `height`, `get_rgb_components(x, y)` returning `(red, green, blue)`
  and `get_rgb(x, y)` returning `0xRRGGBB`.
- `Bitmap(path=None, width=0, height=0)` — a 24-bit bitmap held as bottom-up
  rows of BGR triples, without row padding. `load(path)` reads an
  uncompressed 24-bit file and `save(path)` writes one. A file that is
  missing, has a bad signature, another bit count, compression or is
  truncated raises `BitmapError`.
- Block access: `get_block(x, y, sx, sy)` returns rows of `BGR` tuples,
  `get_block_channels(...)` returns separate red, green and blue planes,
  `get_block_16x16(x, y)` returns `BGRA` tuples with alpha 1, and
  `set_block(x, y, sx, sy, pixels)` stores BGR pixels. A block reaching
  outside the image raises `ValueError`; a single pixel outside it raises
  `IndexError`.

### `jpegenc.jpeg_info`

`JpegInfo(image)` holds the default frame and scan parameters for an image
(component ids, sampling factors, table numbers, spectral selection) and
its Y, Cb and Cr planes in `components`. Planes are padded with zeros to a
whole number of 8x8 blocks. `add_comment(text)` appends to `comment`, which
starts as `"pjpegenc"`.

### `jpegenc.dct`

- `forward_dct(block)` — AAN forward DCT of an 8x8 block (8 rows of 8 values
  or 64 values row-major), level-shifted by 128.
- `forward_dct_extreme(block)` — the literal 2-D DCT formula, no level shift.

### `jpegenc.quantize`

`Quantizer(quality=80)` builds luminance and chrominance tables for a
quality; values outside 1..100 are clamped. `init(quality)` rebuilds them.
`quantum` and `divisors` hold the tables (index 0 luminance, 1 chrominance),
also exposed as `luminance` and `chrominance`. `quantize_block(data, code)`
quantizes the output of `forward_dct`, and `quantize_block_extreme(data, code)`
that of `forward_dct_extreme`; both return 64 integers in row-major order.

## Example

```python
from jpegenc.bitmap import Bitmap
from jpegenc.dct import forward_dct
from jpegenc.jpeg_info import JpegInfo
from jpegenc.quantize import Quantizer

image = Bitmap("photo.bmp")
info = JpegInfo(image)

luma = info.components[0]
block = [row[0:8] for row in luma[0:8]]
coefficients = Quantizer(75).quantize_block(forward_dct(block), 0)
```

## What this package does not do

It does not write JPEG files. There is no Huffman entropy coding, no
writing of JPEG markers and headers, no output-stream classes and no
command-line program: the package stops at quantized coefficients, and
turning them into a `.jpg` file is left to the caller.