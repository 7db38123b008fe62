"""Forward 8x8 discrete cosine transforms used before quantization.

Arithmetic follows single precision step by step, so results match the
tables in :mod:`jpegenc.quantize`, which also work in single precision.
"""

from __future__ import annotations

import math
from typing import List, Sequence, Union

from jpegenc.quantize import BLOCK_SIZE, _f32

PI = 3.14159265359
LEVEL_SHIFT = 128.0

_C0_707 = _f32(0.707106781)
_C0_382 = _f32(0.382683433)
_C0_541 = _f32(0.541196100)
_C1_306 = _f32(1.306562965)

Block = Union[Sequence[Sequence[float]], Sequence[float]]


def _as_rows(block: Block) -> List[List[float]]:
    """Accept 8 rows of 8 values or 64 values in row-major order."""
    if len(block) == BLOCK_SIZE * BLOCK_SIZE and not isinstance(block[0], Sequence):
        flat = [float(v) for v in block]  # type: ignore[arg-type]
        return [flat[i:i + BLOCK_SIZE] for i in range(0, len(flat), BLOCK_SIZE)]
    if len(block) != BLOCK_SIZE or any(
        not isinstance(row, Sequence) or len(row) != BLOCK_SIZE for row in block
    ):
        raise ValueError(
            f"block must be {BLOCK_SIZE} rows of {BLOCK_SIZE} values "
            f"or {BLOCK_SIZE * BLOCK_SIZE} values"
        )
    return [[float(v) for v in row] for row in block]  # type: ignore[union-attr]


def _aan_1d(d: Sequence[float]) -> List[float]:
    """One-dimensional AAN pass over eight single-precision values."""
    tmp0 = _f32(d[0] + d[7])
    tmp7 = _f32(d[0] - d[7])
    tmp1 = _f32(d[1] + d[6])
    tmp6 = _f32(d[1] - d[6])
    tmp2 = _f32(d[2] + d[5])
    tmp5 = _f32(d[2] - d[5])
    tmp3 = _f32(d[3] + d[4])
    tmp4 = _f32(d[3] - d[4])

    tmp10 = _f32(tmp0 + tmp3)
    tmp13 = _f32(tmp0 - tmp3)
    tmp11 = _f32(tmp1 + tmp2)
    tmp12 = _f32(tmp1 - tmp2)

    out = [0.0] * BLOCK_SIZE
    out[0] = _f32(tmp10 + tmp11)
    out[4] = _f32(tmp10 - tmp11)

    z1 = _f32(_f32(tmp12 + tmp13) * _C0_707)
    out[2] = _f32(tmp13 + z1)
    out[6] = _f32(tmp13 - z1)

    tmp10 = _f32(tmp4 + tmp5)
    tmp11 = _f32(tmp5 + tmp6)
    tmp12 = _f32(tmp6 + tmp7)

    z5 = _f32(_f32(tmp10 - tmp12) * _C0_382)
    z2 = _f32(_f32(_C0_541 * tmp10) + z5)
    z4 = _f32(_f32(_C1_306 * tmp12) + z5)
    z3 = _f32(tmp11 * _C0_707)

    z11 = _f32(tmp7 + z3)
    z13 = _f32(tmp7 - z3)

    out[5] = _f32(z13 + z2)
    out[3] = _f32(z13 - z2)
    out[1] = _f32(z11 + z4)
    out[7] = _f32(z11 - z4)
    return out


def forward_dct(block: Block) -> List[List[float]]:
    """AAN forward DCT of an 8x8 block of samples in 0..255.

    The samples are level-shifted by 128 first. The result is scaled by the
    AAN factors and is meant to be quantized with
    :meth:`jpegenc.quantize.Quantizer.quantize_block`.
    """
    rows = [
        [_f32(_f32(v) - LEVEL_SHIFT) for v in row] for row in _as_rows(block)
    ]
    rows = [_aan_1d(row) for row in rows]
    columns = [_aan_1d(column) for column in zip(*rows)]
    return [list(row) for row in zip(*columns)]


def _cos_table() -> List[List[float]]:
    return [
        [math.cos((2 * x + 1) * u * PI / 16) for x in range(BLOCK_SIZE)]
        for u in range(BLOCK_SIZE)
    ]


_COS = _cos_table()
_INV_SQRT2 = 1.0 / math.sqrt(2)


def forward_dct_extreme(block: Block) -> List[List[float]]:
    """Literal 2-D DCT of an 8x8 block, with no level shift.

    ``result[v][u]`` pairs frequency ``u`` with the first index of the input
    and ``v`` with the second. Meant for
    :meth:`jpegenc.quantize.Quantizer.quantize_block_extreme`.
    """
    rows = [[_f32(v) for v in row] for row in _as_rows(block)]
    output = [[0.0] * BLOCK_SIZE for _ in range(BLOCK_SIZE)]
    for v in range(BLOCK_SIZE):
        cos_v = _COS[v]
        for u in range(BLOCK_SIZE):
            cos_u = _COS[u]
            acc = 0.0
            for x, row in enumerate(rows):
                for y, sample in enumerate(row):
                    acc = _f32(acc + sample * cos_u[x] * cos_v[y])
            scale = 0.25 * (_INV_SQRT2 if u == 0 else 1.0) * (_INV_SQRT2 if v == 0 else 1.0)
            output[v][u] = _f32(acc * scale)
    return output