import pytest
from hypothesis import given, strategies as st

from rdpcore.dither import (
    BAYER_MATRIX,
    MAGIC_MATRIX,
    dither_noise,
    noise_blend_threshold,
    noise_combiner,
    noise_dither_alpha,
    noise_dither_color,
    reseed_noise,
    rgb_dither,
)

u32 = st.integers(0, 0xFFFFFFFF)


@given(u32, u32, u32)
def test_reseed_is_deterministic_16bit(x, y, offset):
    seed = reseed_noise(x, y, offset)
    assert 0 <= seed < 1 << 16
    assert reseed_noise(x, y, offset) == seed


@given(st.integers(0, 0xFFFF))
def test_noise_getters(seed):
    comb = noise_combiner(seed)
    assert comb & 0x20
    assert comb >> 6 == seed & 7
    assert noise_dither_alpha(seed) == seed & 7
    assert noise_dither_color(seed) == seed & 0x1FF
    assert noise_blend_threshold(seed) == seed & 0xFF


@given(st.integers(0, 255), st.integers(0, 255), st.integers(0, 255))
def test_dither_seven_never_changes(r, g, b):
    assert rgb_dither(0, r, g, b, 7) == (r, g, b)


@given(st.integers(0, 1), st.integers(0, 255), st.integers(0, 0x1FF))
def test_dither_result_choices(sel, value, dith):
    out = rgb_dither(sel, value, value, value, dith)[0]
    assert out in (value, 255, (value & 0xF8) + 8)
    assert out >= value


def test_dither_zero_inputs():
    assert rgb_dither(0, 0, 0, 0, 0) == (0, 0, 0)
    assert rgb_dither(0, 250, 250, 250, 0) == (255, 255, 255)


def test_dither_sel2_per_channel():
    dith = 7 | (0 << 3) | (7 << 6)
    r, g, b = rgb_dither(2, 9, 9, 9, dith)
    assert r == 9
    assert b == 9
    assert g == (9 & 0xF8) + 8


def test_fixed_modes():
    assert dither_noise(0, 0, 0, 0, 0) == (MAGIC_MATRIX[0], MAGIC_MATRIX[0])
    assert dither_noise(4, 1, 0, 0, 0) == (BAYER_MATRIX[1], BAYER_MATRIX[1])
    assert dither_noise(15, 2, 3, 0xABC, 0) == (7, 0)
    assert dither_noise(14, 2, 3, 0xABC, 0) == (7, 0xABC & 7)
    assert dither_noise(11, 2, 3, 0xABC, 0) == (0xABC & 0x1FF, 0)


@given(st.integers(0, 100), st.integers(0, 100), st.integers(0, 0xFFFF))
def test_inverted_alpha_modes(x, y, seed):
    cdith, adith = dither_noise(1, x, y, seed, 0)
    assert adith == ~cdith & 7
    cdith, adith = dither_noise(5, x, y, seed, 0)
    assert adith == ~cdith & 7


@given(st.integers(0, 15), st.integers(0, 100), st.integers(0, 100), st.integers(0, 0xFFFF))
def test_scfield_halves_y(mode, x, y, seed):
    assert dither_noise(mode, x, 2 * y, seed, 1) == dither_noise(mode, x, y, seed, 0)


@given(st.integers(0, 15), st.integers(0, 100), st.integers(0, 100), st.integers(0, 0xFFFF))
def test_pattern_repeats_every_four(mode, x, y, seed):
    assert dither_noise(mode, x + 4, y + 4, seed, 0) == dither_noise(mode, x, y, seed, 0)


def test_bad_mode():
    with pytest.raises(ValueError):
        dither_noise(16, 0, 0, 0, 0)