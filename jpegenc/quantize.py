"""Quantization tables and block quantization scaled by an image quality."""

from __future__ import annotations

import logging
import math
import struct
from typing import List, Sequence

logger = logging.getLogger(__name__)

BLOCK_SIZE = 8
DEFAULT_QUALITY = 80

LUMINANCE = 0
CHROMINANCE = 1

_F32 = struct.Struct("f")


def _f32(value: float) -> float:
    """Round ``value`` to single precision."""
    return _F32.unpack(_F32.pack(value))[0]


AAN_SCALE_FACTORS = tuple(
    _f32(v)
    for v in (
        1.0,
        1.387039845,
        1.306562965,
        1.175875602,
        1.0,
        0.785694958,
        0.541196100,
        0.275899379,
    )
)

BASE_LUMINANCE = (
    16, 11, 10, 16, 24, 40, 51, 61,
    12, 12, 14, 19, 26, 58, 60, 55,
    14, 13, 16, 24, 40, 57, 69, 56,
    14, 17, 22, 29, 51, 87, 80, 62,
    18, 22, 37, 56, 68, 109, 103, 77,
    24, 35, 55, 64, 81, 104, 113, 92,
    49, 64, 78, 87, 103, 121, 120, 101,
    72, 92, 95, 98, 112, 100, 103, 99,
)

BASE_CHROMINANCE = (
    17, 18, 24, 47, 99, 99, 99, 99,
    18, 21, 26, 66, 99, 99, 99, 99,
    24, 26, 56, 99, 99, 99, 99, 99,
    47, 66, 99, 99, 99, 99, 99, 99,
) + (99,) * 32


def _round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _scale_factor(quality: int) -> int:
    quality = min(max(quality, 1), 100)
    if quality < 50:
        return 5000 // quality
    return 200 - quality * 2


def _scale_table(base: Sequence[int], factor: int) -> List[int]:
    return [min(max((q * factor + 50) // 100, 1), 255) for q in base]


def _divisors(table: Sequence[int]) -> List[float]:
    result = []
    for i, row_scale in enumerate(AAN_SCALE_FACTORS):
        for j, col_scale in enumerate(AAN_SCALE_FACTORS):
            q = float(table[i * BLOCK_SIZE + j])
            denominator = _f32(_f32(_f32(q * row_scale) * col_scale) * 8.0)
            result.append(_f32(1.0 / denominator))
    return result


def _flatten(data: Sequence[Sequence[float]]) -> List[float]:
    if len(data) != BLOCK_SIZE or any(len(row) != BLOCK_SIZE for row in data):
        raise ValueError(f"block must be {BLOCK_SIZE} rows of {BLOCK_SIZE} values")
    return [float(v) for row in data for v in row]


class Quantizer:
    """Holds the luminance and chrominance tables for one quality setting.

    ``quantum`` holds the two 64-entry quantization tables in row-major order
    (index 0 for luminance, 1 for chrominance); ``divisors`` holds the matching
    single-precision multipliers used after the AAN forward DCT.
    """

    def __init__(self, quality: int = DEFAULT_QUALITY) -> None:
        self.quality = quality
        self.quantum: List[List[int]] = [[], []]
        self.divisors: List[List[float]] = [[], []]
        self.init(quality)

    @property
    def luminance(self) -> List[int]:
        return self.quantum[LUMINANCE]

    @property
    def chrominance(self) -> List[int]:
        return self.quantum[CHROMINANCE]

    def init(self, quality: int) -> None:
        """Build the tables for ``quality``; values outside 1..100 are clamped."""
        logger.debug("Initializing quantization tables with quality %d", quality)
        self.quality = quality
        factor = _scale_factor(quality)
        self.quantum = [
            _scale_table(BASE_LUMINANCE, factor),
            _scale_table(BASE_CHROMINANCE, factor),
        ]
        self.divisors = [_divisors(table) for table in self.quantum]

    def _check_code(self, code: int) -> None:
        if code not in (LUMINANCE, CHROMINANCE):
            raise ValueError(f"table code must be 0 or 1, not {code!r}")

    def quantize_block(self, data: Sequence[Sequence[float]], code: int) -> List[int]:
        """Quantize an 8x8 block from the AAN DCT; returns 64 ints row-major."""
        self._check_code(code)
        values = _flatten(data)
        divisors = self.divisors[code]
        return [
            _round_half_away(_f32(_f32(v) * d)) for v, d in zip(values, divisors)
        ]

    def quantize_block_extreme(
        self, data: Sequence[Sequence[float]], code: int
    ) -> List[int]:
        """Quantize an 8x8 block from the literal DCT by plain table division."""
        self._check_code(code)
        values = _flatten(data)
        table = self.quantum[code]
        return [_round_half_away(_f32(_f32(v) / q)) for v, q in zip(values, table)]