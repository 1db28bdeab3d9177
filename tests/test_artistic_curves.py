"""Tests for hue-shift / chroma curves and the linear shift primitives."""

import pytest

from palette_ramp.artistic_curves import (
    apply_chroma_curve,
    apply_chroma_shift,
    apply_hue_shift,
    apply_hue_shift_curve,
    chroma_curve_multiplier,
    chroma_curve_values,
    hue_shift_values,
)
from palette_ramp.colour_convert import hex_to_perceptual
from palette_ramp.core_types import ChromaCurve, HueShiftCurve, PerceptualColor

YELLOW = hex_to_perceptual("#FFFF00")


def test_preset_and_custom_hue_shift_values():
    assert hue_shift_values(None) == (0.0, 0.0)
    assert hue_shift_values(HueShiftCurve("natural")) == (8.0, -10.0)
    assert hue_shift_values(HueShiftCurve("custom", light_shift=3.0)) == (3.0, 0.0)


def test_natural_curve_on_yellow():
    curve = HueShiftCurve("natural")
    light = apply_hue_shift_curve(YELLOW, 0.85, curve)
    mid = apply_hue_shift_curve(YELLOW, 0.5, curve)
    dark = apply_hue_shift_curve(YELLOW, 0.25, curve)
    # lights move toward cyan (higher hue), darks toward orange (lower hue)
    assert light.h == pytest.approx(YELLOW.h + 8.0 * 0.7)
    assert dark.h == pytest.approx(YELLOW.h - 10.0 * 0.5)
    assert mid.h == YELLOW.h


def test_hue_shift_curve_skips_near_greys():
    grey = PerceptualColor.of(0.9, 0.01, 110.0)
    assert apply_hue_shift_curve(grey, 0.9, HueShiftCurve("dramatic")) == grey


def test_linear_hue_shift_is_symmetric():
    color = PerceptualColor.of(0.5, 0.1, 100.0)
    assert apply_hue_shift(color, 0.0, 20.0).h == pytest.approx(110.0)
    assert apply_hue_shift(color, 1.0, 20.0).h == pytest.approx(90.0)
    assert apply_hue_shift(color, 0.5, 20.0).h == pytest.approx(100.0)
    assert apply_hue_shift(color, 0.0, 20.0, "cool-warm").h == pytest.approx(90.0)


def test_linear_hue_shift_wraps():
    color = PerceptualColor.of(0.5, 0.1, 355.0)
    assert apply_hue_shift(color, 0.0, 20.0).h == pytest.approx(5.0)


def test_linear_chroma_shift_only_reduces():
    color = PerceptualColor.of(0.5, 0.2, 30.0)
    # vivid-muted: darks lose chroma, lights keep it
    assert apply_chroma_shift(color, 0.0, 50.0).c == pytest.approx(0.1)
    assert apply_chroma_shift(color, 1.0, 50.0).c == pytest.approx(0.2)
    assert apply_chroma_shift(color, 1.0, 50.0, "muted-vivid").c == pytest.approx(0.1)
    assert apply_chroma_shift(color, 0.0, 250.0).c == 0.0


def test_chroma_curve_values():
    assert chroma_curve_values(None) == (100.0, 100.0, 100.0)
    assert chroma_curve_values(ChromaCurve("bell")) == (45.0, 100.0, 65.0)
    assert chroma_curve_values(ChromaCurve("custom", mid_pct=80.0)) == (100.0, 80.0, 100.0)


def test_custom_chroma_curve_out_of_range_clamps_to_bounds():
    wild = ChromaCurve("custom", light_pct=250.0, mid_pct=100.0, dark_pct=-20.0)
    tame = ChromaCurve("custom", light_pct=100.0, mid_pct=100.0, dark_pct=0.0)
    assert chroma_curve_values(wild) == (100.0, 100.0, 0.0)
    for l in (0.97, 0.85, 0.7, 0.55, 0.4, 0.25, 0.1):
        assert chroma_curve_multiplier(l, wild) == pytest.approx(
            chroma_curve_multiplier(l, tame)
        )
        assert 0.0 <= chroma_curve_multiplier(l, wild) <= 1.0

    slate = hex_to_perceptual("#94A3B8")
    boosted = apply_chroma_curve(slate, 0.85, ChromaCurve("custom", light_pct=250.0))
    assert boosted.c == pytest.approx(slate.c)


def test_chroma_curve_hits_anchors_and_clamps_outside():
    bell = ChromaCurve("bell")
    assert chroma_curve_multiplier(0.85, bell) == pytest.approx(0.45)
    assert chroma_curve_multiplier(0.97, bell) == pytest.approx(0.45)
    assert chroma_curve_multiplier(0.55, bell) == pytest.approx(1.0)
    assert chroma_curve_multiplier(0.25, bell) == pytest.approx(0.65)
    assert chroma_curve_multiplier(0.1, bell) == pytest.approx(0.65)
    # smoothstep halfway between mid and light anchors
    assert chroma_curve_multiplier(0.70, bell) == pytest.approx(0.725)


def test_flat_chroma_curve_is_identity():
    color = PerceptualColor.of(0.3, 0.12, 200.0)
    assert apply_chroma_curve(color, 0.3, ChromaCurve("flat")).c == pytest.approx(0.12)
    assert apply_chroma_curve(color, 0.3, None) == color


def test_direct_construction_normalizes_like_of():
    direct = PerceptualColor(l=1.3, c=-0.1, h=-30.0, alpha=2.0)
    assert direct == PerceptualColor.of(1.3, -0.1, -30.0, 2.0)
    assert (direct.l, direct.c, direct.h, direct.alpha) == (1.0, 0.0, 330.0, 1.0)
    assert PerceptualColor(0.5, 0.1, 725.0).with_h(-10.0).h == pytest.approx(350.0)
