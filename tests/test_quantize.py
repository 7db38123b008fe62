import pytest

from jpegenc.quantize import (
    BASE_CHROMINANCE,
    BASE_LUMINANCE,
    CHROMINANCE,
    LUMINANCE,
    Quantizer,
)


def _block(value=0.0):
    return [[value] * 8 for _ in range(8)]


def test_quality_50_gives_base_tables():
    q = Quantizer(50)
    assert q.luminance == list(BASE_LUMINANCE)
    assert q.chrominance == list(BASE_CHROMINANCE)
    assert q.luminance[0] == 16
    assert q.chrominance[0] == 17


def test_quality_100_gives_all_ones():
    q = Quantizer(100)
    assert q.luminance == [1] * 64
    assert q.chrominance == [1] * 64


def test_quality_clamped_above_100():
    assert Quantizer(150).quantum == Quantizer(100).quantum


def test_quality_zero_clamped_and_saturated():
    q = Quantizer(0)
    assert q.quantum == Quantizer(1).quantum
    assert q.luminance == [255] * 64
    assert q.chrominance == [255] * 64


@pytest.mark.parametrize("quality", [1, 10, 25, 49, 50, 75, 80, 99, 100])
def test_tables_in_range(quality):
    q = Quantizer(quality)
    for table in q.quantum:
        assert len(table) == 64
        assert all(1 <= v <= 255 for v in table)


def test_higher_quality_never_increases_entries():
    low = Quantizer(30)
    high = Quantizer(90)
    for lo_table, hi_table in zip(low.quantum, high.quantum):
        assert all(h <= lo for h, lo in zip(hi_table, lo_table))


def test_init_rebuilds_tables():
    q = Quantizer(80)
    q.init(50)
    assert q.quantum == Quantizer(50).quantum
    assert q.divisors == Quantizer(50).divisors


def test_divisors_positive_and_decreasing_with_table():
    q = Quantizer(50)
    assert len(q.divisors[LUMINANCE]) == 64
    assert all(d > 0 for d in q.divisors[LUMINANCE])
    # Larger table entry at the same position gives a smaller divisor.
    assert q.divisors[CHROMINANCE][0] < q.divisors[LUMINANCE][0]


def test_dc_divisor_at_full_quality():
    q = Quantizer(100)
    assert q.divisors[LUMINANCE][0] == 0.125


def test_zero_block_quantizes_to_zero():
    q = Quantizer(80)
    assert q.quantize_block(_block(), LUMINANCE) == [0] * 64
    assert q.quantize_block_extreme(_block(), CHROMINANCE) == [0] * 64


def test_quantize_rounds_halves_away_from_zero():
    q = Quantizer(100)
    block = _block()
    block[0][0] = 20.0
    assert q.quantize_block(block, LUMINANCE)[0] == 3
    block[0][0] = -4.0
    assert q.quantize_block(block, LUMINANCE)[0] == -1


def test_quantize_is_odd_symmetric():
    q = Quantizer(75)
    block = [[float(i * 8 + j) * 3.7 for j in range(8)] for i in range(8)]
    negated = [[-v for v in row] for row in block]
    pos = q.quantize_block(block, CHROMINANCE)
    neg = q.quantize_block(negated, CHROMINANCE)
    assert neg == [-v for v in pos]


def test_extreme_quantize_of_table_gives_ones():
    q = Quantizer(80)
    for code in (LUMINANCE, CHROMINANCE):
        table = q.quantum[code]
        block = [[float(table[i * 8 + j]) for j in range(8)] for i in range(8)]
        assert q.quantize_block_extreme(block, code) == [1] * 64


def test_output_is_row_major():
    q = Quantizer(100)
    block = _block()
    block[0][1] = 1000.0
    result = q.quantize_block(block, LUMINANCE)
    assert result[1] != 0
    assert result[8] == 0
    assert sum(1 for v in result if v) == 1


@pytest.mark.parametrize("code", [-1, 2, 5])
def test_bad_code_rejected(code):
    q = Quantizer()
    with pytest.raises(ValueError):
        q.quantize_block(_block(), code)
    with pytest.raises(ValueError):
        q.quantize_block_extreme(_block(), code)


def test_bad_shape_rejected():
    q = Quantizer()
    with pytest.raises(ValueError):
        q.quantize_block([[0.0] * 8 for _ in range(7)], LUMINANCE)
    with pytest.raises(ValueError):
        q.quantize_block_extreme([[0.0] * 7 for _ in range(8)], LUMINANCE)