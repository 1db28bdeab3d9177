"""Tests for colour text parsing, OKLab/OKLCh conversion and WCAG contrast."""

import numpy as np
import pytest

from palette_ramp.colour_convert import (
    FALLBACK_COLOR,
    contrast_ratio,
    hex_to_perceptual,
    linear_rgb_to_oklab,
    linear_to_srgb,
    oklab_to_linear_rgb,
    oklab_to_oklch,
    oklch_to_css,
    oklch_to_oklab,
    oklch_to_srgb,
    parse_color,
    parse_hex,
    relative_luminance,
    srgb_to_linear,
    srgb_to_oklch,
)
from palette_ramp.gamut import perceptual_to_hex


def test_red_has_expected_oklch_coordinates():
    red = hex_to_perceptual("#FF0000")
    assert red.l == pytest.approx(0.628, abs=0.002)
    assert red.c == pytest.approx(0.2577, abs=0.002)
    assert red.h == pytest.approx(29.23, abs=0.2)
    assert red.alpha == 1.0


def test_white_and_black_are_exact_greys():
    white = hex_to_perceptual("#ffffff")
    black = hex_to_perceptual("000")
    assert white.l == pytest.approx(1.0, abs=1e-6)
    assert (white.c, white.h) == (0.0, 0.0)
    assert black.l == pytest.approx(0.0, abs=1e-9)
    assert (black.c, black.h) == (0.0, 0.0)


def test_short_and_long_hex_agree_case_insensitively():
    assert hex_to_perceptual("#abc") == hex_to_perceptual("#AABBCC")
    assert hex_to_perceptual("aabbcc") == hex_to_perceptual("#aAbBcC")


def test_eight_digit_hex_carries_alpha():
    parsed = parse_hex("#FF000080")
    assert parsed is not None
    rgb, alpha = parsed
    assert rgb == (255, 0, 0)
    assert alpha == pytest.approx(128 / 255)
    assert hex_to_perceptual("#FF000080").alpha == pytest.approx(128 / 255)


@pytest.mark.parametrize("text", ["", "#12", "#GGGGGG", "blue-ish", "#1234567"])
def test_invalid_text_falls_back(text):
    assert parse_hex(text) is None
    assert hex_to_perceptual(text) is FALLBACK_COLOR
    assert parse_color(text) is FALLBACK_COLOR


def test_fallback_colour_values():
    assert (FALLBACK_COLOR.l, FALLBACK_COLOR.c, FALLBACK_COLOR.h) == (0.5, 0.1, 0.0)


@pytest.mark.parametrize(
    "hex_str", ["#FF0000", "#00FF00", "#0000FF", "#3B82F6", "#808080", "#F5F5DC", "#123456"]
)
def test_hex_survives_perceptual_round_trip(hex_str):
    out = perceptual_to_hex(hex_to_perceptual(hex_str))
    a = np.array([int(hex_str[i : i + 2], 16) for i in (1, 3, 5)])
    b = np.array([int(out[i : i + 2], 16) for i in (1, 3, 5)])
    assert np.max(np.abs(a - b)) <= 1


def test_oklab_array_conversion_is_vectorised():
    rgb = np.random.default_rng(7).random((4, 5, 3))
    back = oklab_to_linear_rgb(linear_rgb_to_oklab(rgb))
    assert back.shape == (4, 5, 3)
    assert np.allclose(back, rgb, atol=1e-5)


def test_srgb_to_oklch_accepts_uint8():
    lch = srgb_to_oklch(np.array([[255, 0, 0], [255, 255, 255]], dtype=np.uint8))
    assert lch.shape == (2, 3)
    assert lch[0, 2] == pytest.approx(29.23, abs=0.2)
    assert lch[1, 1] == 0.0


def test_parse_color_css_forms():
    assert parse_color("rgb(255, 0, 0)") == hex_to_perceptual("#FF0000")
    ok = parse_color("oklch(62.8% 0.258 29.2)")
    assert ok.l == pytest.approx(0.628)
    assert ok.c == pytest.approx(0.258)
    assert ok.h == pytest.approx(29.2)
    assert parse_color("oklch(0.5 0.1 400)").h == pytest.approx(40.0)
    assert parse_color("rgba(0, 0, 255, 0.5)").alpha == pytest.approx(0.5)


def test_luminance_and_contrast_extremes():
    assert relative_luminance("#FFFFFF") == pytest.approx(1.0)
    assert relative_luminance("#000000") == pytest.approx(0.0)
    assert contrast_ratio("#000000", "#FFFFFF") == pytest.approx(21.0)
    assert contrast_ratio("#FFFFFF", "#000000") == pytest.approx(21.0)
    assert contrast_ratio("#777777", "#777777") == pytest.approx(1.0)


def test_oklch_css_formatting():
    assert oklch_to_css(parse_color("oklch(62.8% 0.258 29.2)")) == "oklch(62.8% 0.258 29.2)"


def test_srgb_linear_transfer_inverts_across_the_range():
    values = np.linspace(0.0, 1.0, 11)
    assert np.allclose(linear_to_srgb(srgb_to_linear(values)), values, atol=1e-9)
    assert srgb_to_linear(np.array([0.04045]))[0] == pytest.approx(0.04045 / 12.92)


def test_oklch_oklab_conversion_keeps_shape_and_values():
    lch = np.array([[[0.7, 0.12, 200.0], [0.4, 0.05, 10.0]]])
    back = oklab_to_oklch(oklch_to_oklab(lch))
    assert back.shape == lch.shape
    assert np.allclose(back, lch, atol=1e-9)


def test_oklch_to_srgb_matches_hex_path_for_in_gamut_colour():
    rgb = oklch_to_srgb(srgb_to_oklch(np.array([59, 130, 246], dtype=np.uint8)))
    assert np.allclose(rgb * 255.0, [59, 130, 246], atol=0.5)
