"""Images and a loader/saver for uncompressed 24-bit Windows bitmaps."""

from __future__ import annotations

import abc
import os
import struct
from pathlib import Path
from typing import List, NamedTuple, Optional, Sequence, Tuple, Union

BITMAP_SIGNATURE = 0x4D42  # "BM" read little-endian
PELS_PER_METER = 3780

_FILE_HEADER = struct.Struct("<HIII")
_INFO_PREFIX = struct.Struct("<IiiHHI")
_INFO_HEADER = struct.Struct("<IiiHHIIiiII")
# The written info header is the 108-byte V4 layout; fields past the
# basic ones are left as zero.
_INFO_HEADER_SIZE = 108

PathLike = Union[str, os.PathLike]


class BGR(NamedTuple):
    blue: int
    green: int
    red: int


class BGRA(NamedTuple):
    blue: int
    green: int
    red: int
    alpha: int


class BitmapError(Exception):
    """Raised when a bitmap file cannot be read."""


class Image(abc.ABC):
    """A picture addressed from the top-left corner."""

    @property
    @abc.abstractmethod
    def width(self) -> int:
        """Width in pixels."""

    @property
    @abc.abstractmethod
    def height(self) -> int:
        """Height in pixels."""

    @abc.abstractmethod
    def get_rgb_components(self, x: int, y: int) -> Tuple[int, int, int]:
        """Return ``(red, green, blue)`` of the pixel at ``(x, y)``."""

    def get_rgb(self, x: int, y: int) -> int:
        """Return the pixel at ``(x, y)`` packed as ``0xRRGGBB``."""
        red, green, blue = self.get_rgb_components(x, y)
        return (red << 16) | (green << 8) | blue


class Bitmap(Image):
    """A 24-bit bitmap held as bottom-up rows of BGR triples.

    Rows are stored without padding, both in memory and on disk.
    """

    def __init__(self, path: Optional[PathLike] = None, width: int = 0, height: int = 0) -> None:
        if width < 0 or height < 0:
            raise ValueError("width and height must not be negative")
        self._reset()
        if path is not None:
            self.load(path)
        else:
            self._width = width
            self._height = height
            self._data = bytearray(width * height * 3)
            if width and height:
                self._bit_count = 24

    def _reset(self) -> None:
        self._width = 0
        self._height = 0
        self._bit_count = 0
        self._data = bytearray()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def bit_count(self) -> int:
        return self._bit_count

    @property
    def size(self) -> int:
        """Number of pixels."""
        return self._width * self._height

    @property
    def data(self) -> bytes:
        """Raw pixel bytes, bottom row first, BGR order."""
        return bytes(self._data)

    def load(self, path: PathLike) -> None:
        """Read a 24-bit uncompressed bitmap, replacing the current contents."""
        self._reset()
        try:
            raw = Path(path).read_bytes()
        except FileNotFoundError as exc:
            raise BitmapError(f"file not found: {path}") from exc

        if len(raw) < _FILE_HEADER.size:
            raise BitmapError("truncated file header")
        signature, _size, _reserved, bits_offset = _FILE_HEADER.unpack_from(raw, 0)
        if signature != BITMAP_SIGNATURE:
            raise BitmapError(f"bad signature {signature:04X} != {BITMAP_SIGNATURE:04X}")

        if len(raw) < _FILE_HEADER.size + _INFO_PREFIX.size:
            raise BitmapError("truncated bitmap header")
        _hsize, width, height, _planes, bit_count, compression = _INFO_PREFIX.unpack_from(
            raw, _FILE_HEADER.size
        )
        if bit_count != 24:
            raise BitmapError(f"unsupported bit count {bit_count}")
        if compression:
            raise BitmapError(f"unsupported compression {compression}")

        width = abs(width)
        height = abs(height)
        length = width * height * 3
        pixels = raw[bits_offset:bits_offset + length]
        if len(pixels) < length:
            raise BitmapError("truncated pixel data")

        self._width = width
        self._height = height
        self._bit_count = bit_count
        self._data = bytearray(pixels)

    def save(self, path: PathLike) -> None:
        """Write the image as a 24-bit uncompressed bitmap."""
        size_image = self._width * self._height * 3
        bits_offset = _FILE_HEADER.size + _INFO_HEADER_SIZE
        file_header = _FILE_HEADER.pack(BITMAP_SIGNATURE, size_image + bits_offset, 0, bits_offset)
        info = _INFO_HEADER.pack(
            _INFO_HEADER_SIZE,
            self._width,
            self._height,
            1,
            24,
            0,
            size_image,
            PELS_PER_METER,
            PELS_PER_METER,
            0,
            0,
        )
        info += bytes(_INFO_HEADER_SIZE - len(info))
        with open(path, "wb") as handle:
            handle.write(file_header)
            handle.write(info)
            handle.write(self._data[:size_image])

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"pixel ({x}, {y}) outside {self._width}x{self._height} image")
        return ((self._height - (y + 1)) * self._width + x) * 3

    def get_rgb_components(self, x: int, y: int) -> Tuple[int, int, int]:
        offset = self._offset(x, y)
        blue, green, red = self._data[offset:offset + 3]
        return red, green, blue

    def get_rgb(self, x: int, y: int) -> int:
        offset = self._offset(x, y)
        blue, green, red = self._data[offset:offset + 3]
        return (red << 16) | (green << 8) | blue

    def _check_block(self, x: int, y: int, sx: int, sy: int) -> None:
        if min(x, y, sx, sy) < 0 or y + sy > self._height or x + sx > self._width:
            raise ValueError(
                f"block {sx}x{sy} at ({x}, {y}) outside {self._width}x{self._height} image"
            )

    def _row(self, x: int, y: int, sx: int) -> bytes:
        start = ((self._height - (y + 1)) * self._width + x) * 3
        return bytes(self._data[start:start + sx * 3])

    def get_block(self, x: int, y: int, sx: int, sy: int) -> List[List[BGR]]:
        """Return ``sy`` rows of ``sx`` pixels starting at ``(x, y)``, top row first."""
        self._check_block(x, y, sx, sy)
        rows = []
        for r in range(sy):
            row = self._row(x, y + r, sx)
            rows.append([BGR(*row[i:i + 3]) for i in range(0, len(row), 3)])
        return rows

    def get_block_channels(
        self, x: int, y: int, sx: int, sy: int
    ) -> Tuple[List[List[int]], List[List[int]], List[List[int]]]:
        """Return the block as separate red, green and blue planes."""
        self._check_block(x, y, sx, sy)
        reds, greens, blues = [], [], []
        for r in range(sy):
            row = self._row(x, y + r, sx)
            blues.append(list(row[0::3]))
            greens.append(list(row[1::3]))
            reds.append(list(row[2::3]))
        return reds, greens, blues

    def get_block_16x16(self, x: int, y: int) -> List[List[BGRA]]:
        """Return a 16x16 block with the alpha channel set to 1."""
        return [
            [BGRA(p.blue, p.green, p.red, 1) for p in row]
            for row in self.get_block(x, y, 16, 16)
        ]

    def set_block(
        self, x: int, y: int, sx: int, sy: int, pixels: Sequence[Sequence[Sequence[int]]]
    ) -> None:
        """Store ``sy`` rows of ``sx`` BGR pixels starting at ``(x, y)``."""
        self._check_block(x, y, sx, sy)
        if len(pixels) != sy or any(len(row) != sx for row in pixels):
            raise ValueError(f"pixels must be {sy} rows of {sx} values")
        for r, row in enumerate(pixels):
            start = ((self._height - (y + r + 1)) * self._width + x) * 3
            chunk = bytearray()
            for pixel in row:
                blue, green, red = pixel[:3]
                chunk.extend((blue & 0xFF, green & 0xFF, red & 0xFF))
            self._data[start:start + len(chunk)] = chunk