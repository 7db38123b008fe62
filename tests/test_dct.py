import math
import random

import pytest

from jpegenc.dct import forward_dct, forward_dct_extreme
from jpegenc.quantize import AAN_SCALE_FACTORS


def _constant(value):
    return [[value] * 8 for _ in range(8)]


def _random_block(seed):
    rng = random.Random(seed)
    return [[rng.randint(0, 255) for _ in range(8)] for _ in range(8)]


def test_mid_grey_block_transforms_to_zero():
    result = forward_dct(_constant(128))
    assert all(v == 0.0 for row in result for v in row)


def test_constant_block_has_only_dc():
    result = forward_dct(_constant(129))
    assert result[0][0] == 64.0
    assert all(v == 0.0 for i, row in enumerate(result) for j, v in enumerate(row) if (i, j) != (0, 0))


def test_identical_rows_only_fill_first_output_row():
    row = [10, 40, 90, 200, 250, 130, 60, 0]
    result = forward_dct([list(row) for _ in range(8)])
    assert all(v == 0.0 for r in result[1:] for v in r)
    assert any(v != 0.0 for v in result[0][1:])


def test_flat_and_nested_inputs_agree():
    block = _random_block(1)
    flat = [v for row in block for v in row]
    assert forward_dct(flat) == forward_dct(block)
    assert forward_dct_extreme(flat) == forward_dct_extreme(block)


def test_shape_is_eight_by_eight():
    result = forward_dct(_random_block(2))
    assert len(result) == 8
    assert all(len(row) == 8 for row in result)


def test_level_shift_is_antisymmetric():
    block = _random_block(3)
    mirrored = [[256 - v for v in row] for row in block]
    a = forward_dct(block)
    b = forward_dct(mirrored)
    for ra, rb in zip(a, b):
        for va, vb in zip(ra, rb):
            assert va == pytest.approx(-vb, abs=1e-3)


@pytest.mark.parametrize("seed", [4, 5, 6])
def test_aan_matches_literal_dct_after_scaling(seed):
    block = _random_block(seed)
    aan = forward_dct(block)
    shifted = [[v - 128 for v in row] for row in block]
    literal = forward_dct_extreme(shifted)
    for i in range(8):
        for j in range(8):
            expected = literal[j][i]
            got = aan[i][j] / (8.0 * AAN_SCALE_FACTORS[i] * AAN_SCALE_FACTORS[j])
            assert got == pytest.approx(expected, abs=0.05)


def test_extreme_constant_block_has_only_dc():
    result = forward_dct_extreme(_constant(10))
    assert result[0][0] == pytest.approx(80.0, abs=1e-3)
    assert all(
        abs(v) < 1e-3 for i, row in enumerate(result) for j, v in enumerate(row) if (i, j) != (0, 0)
    )


def test_extreme_preserves_energy():
    block = [[v - 128 for v in row] for row in _random_block(7)]
    result = forward_dct_extreme(block)
    spatial = sum(v * v for row in block for v in row)
    spectral = sum(v * v for row in result for v in row)
    assert math.isclose(spatial, spectral, rel_tol=1e-4)


def test_extreme_output_is_transposed_relative_to_input_axes():
    column_wave = [[float(x)] * 8 for x in range(8)]
    result = forward_dct_extreme(column_wave)
    assert abs(result[0][1]) > 1.0
    assert all(abs(result[v][u]) < 1e-3 for v in range(1, 8) for u in range(8))


@pytest.mark.parametrize(
    "bad",
    [
        [[0] * 8 for _ in range(7)],
        [[0] * 7 for _ in range(8)],
        [0] * 63,
    ],
)
def test_bad_shapes_raise(bad):
    with pytest.raises(ValueError):
        forward_dct(bad)
    with pytest.raises(ValueError):
        forward_dct_extreme(bad)