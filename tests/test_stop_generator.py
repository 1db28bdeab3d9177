"""Tests for the single-stop pipeline."""

import pytest

from palette_ramp.colour_convert import contrast_ratio, hex_to_perceptual
from palette_ramp.core_types import (
    ChromaCurve,
    HueShiftCurve,
    PerceptualColor,
    RampConfig,
    Stop,
)
from palette_ramp.gamut import (
    is_in_gamut,
    max_lightness_for_min_chroma,
    perceptual_to_hex,
)
from palette_ramp.stop_generator import (
    fallback_lightness,
    generate_stop,
    generate_stop_color,
    resolve_target_chroma,
    resolve_target_contrast,
    resolve_target_lightness,
)

RED = hex_to_perceptual("#FF0000")
YELLOW = hex_to_perceptual("#FFFF00")


def test_fallback_lightness_curve():
    assert fallback_lightness(0) == pytest.approx(0.95)
    assert fallback_lightness(500) == pytest.approx(0.5)
    assert fallback_lightness(950) == pytest.approx(0.05)
    assert fallback_lightness(2000) == 0.0


def test_lightness_resolution_order():
    ramp = RampConfig(base_color="#FF0000")
    assert resolve_target_lightness(RED, Stop(500), ramp) == (0.55, None)
    assert resolve_target_lightness(RED, Stop(500, lightness_override=0.6), ramp)[0] == 0.6
    assert resolve_target_lightness(RED, Stop(250), ramp)[0] == pytest.approx(0.725)
    assert resolve_target_lightness(RED, Stop(500, lightness_override=1.4), ramp)[0] == 1.0


def test_contrast_target_resolution_order():
    ramp = RampConfig(base_color="#0000FF", method="contrast")
    assert resolve_target_contrast(Stop(700), ramp) == 8.0
    assert resolve_target_contrast(Stop(700, contrast_override=3.0), ramp) == 3.0
    assert resolve_target_contrast(Stop(750), ramp) == 4.5
    assert resolve_target_contrast(Stop(700, contrast_override=40.0), ramp) == 21.0


def test_soft_shoulder():
    assert resolve_target_chroma(0.2, 0.5) == 0.2
    assert resolve_target_chroma(0.2, 1.0) == pytest.approx(0.06)
    assert resolve_target_chroma(0.2, 0.0) == pytest.approx(0.06)
    assert resolve_target_chroma(0.2, 0.95) == pytest.approx(0.2 * 0.65)


def test_red_mid_stop_is_vivid_and_extremes_stay_in_gamut():
    ramp = RampConfig(base_color="#FF0000")
    mid = generate_stop_color(RED, Stop(500), ramp)
    assert mid.color.l == pytest.approx(0.55)
    assert mid.color.c > 0.15
    for number in (50, 900):
        sc = generate_stop_color(RED, Stop(number), ramp)
        assert is_in_gamut(sc.color.l, sc.color.c, sc.color.h)
        assert sc.color.c < RED.c
        decoded = hex_to_perceptual(generate_stop("#FF0000", Stop(number), ramp))
        assert decoded.c < RED.c


def test_identity_cap_applies_to_light_stops_only_in_lightness_mode():
    blue = hex_to_perceptual("#0000FF")
    ramp = RampConfig(base_color="#0000FF")
    cap = max_lightness_for_min_chroma(blue.h, 0.025)
    sc = generate_stop_color(blue, Stop(50, lightness_override=0.999), ramp)
    assert sc.original_l == 0.999
    assert sc.expanded_l == pytest.approx(cap)

    free = RampConfig(base_color="#0000FF", preserve_identity=False)
    sc = generate_stop_color(blue, Stop(50, lightness_override=0.999), free)
    assert sc.expanded_l == 0.999


def test_identity_cap_ignores_grey_bases():
    grey = hex_to_perceptual("#808080")
    sc = generate_stop_color(grey, Stop(50), RampConfig(base_color="#808080"))
    assert sc.expanded_l == sc.original_l == 0.97


def test_blue_contrast_stop_on_white():
    ramp = RampConfig(base_color="#0000FF", method="contrast", background_color="#FFFFFF")
    hex_str = generate_stop("#0000FF", Stop(500), ramp)
    assert 4.45 <= contrast_ratio(hex_str, "#FFFFFF") <= 4.55


def test_contrast_mode_survives_a_chroma_curve():
    ramp = RampConfig(
        base_color="#F97316",
        method="contrast",
        chroma_curve=ChromaCurve("pastel"),
    )
    hex_str = generate_stop("#F97316", Stop(600), ramp)
    assert contrast_ratio(hex_str, "#FFFFFF") == pytest.approx(6.0, abs=0.1)


def test_stop_method_override_wins():
    ramp = RampConfig(base_color="#0000FF", method="lightness")
    stop = Stop(500, contrast_override=4.5, method_override="contrast")
    sc = generate_stop_color(hex_to_perceptual("#0000FF"), stop, ramp)
    assert contrast_ratio(perceptual_to_hex(sc.color), "#FFFFFF") == pytest.approx(
        4.5, abs=0.05
    )


def test_natural_hue_curve_through_pipeline():
    plain = RampConfig(base_color="#FFFF00")
    curved = RampConfig(base_color="#FFFF00", hue_shift_curve=HueShiftCurve("natural"))

    def hue(ramp, l):
        return generate_stop_color(YELLOW, Stop(100, lightness_override=l), ramp).color.h

    assert hue(curved, 0.85) - hue(plain, 0.85) == pytest.approx(5.6)
    assert hue(curved, 0.25) - hue(plain, 0.25) == pytest.approx(-5.0)
    assert hue(curved, 0.5) == hue(plain, 0.5)


def test_manual_override_passes_through_untouched():
    manual = PerceptualColor.of(0.42, 0.08, 145.0)
    ramp = RampConfig(base_color="#FF0000", brightness_correction=True)
    sc = generate_stop_color(RED, Stop(500, manual_override=manual), ramp)
    assert sc.color == manual
    assert sc.is_manual
    assert sc.original_l == sc.expanded_l == 0.42


def test_manual_override_corrections_are_opt_in():
    manual = PerceptualColor.of(0.5, 0.15, 265.0)
    ramp = RampConfig(base_color="#FF0000", brightness_correction=True)
    opted = generate_stop_color(
        RED, Stop(500, manual_override=manual, apply_corrections_to_manual=True), ramp
    )
    assert opted.color.l < manual.l

    ramp_default = RampConfig(
        base_color="#FF0000", brightness_correction=True, apply_corrections_to_manual=True
    )
    assert generate_stop_color(RED, Stop(500, manual_override=manual), ramp_default).color.l < 0.5
    opted_out = generate_stop_color(
        RED,
        Stop(500, manual_override=manual, apply_corrections_to_manual=False),
        ramp_default,
    )
    assert opted_out.color == manual


def test_invalid_base_uses_fallback_colour():
    ramp = RampConfig(base_color="not a colour")
    assert generate_stop("not a colour", Stop(500), ramp) == generate_stop(
        "oklch(50% 0.1 0)", Stop(500), ramp
    )


def test_generate_stop_is_deterministic():
    ramp = RampConfig(
        base_color="#3B82F6",
        hue_shift_curve=HueShiftCurve("dramatic"),
        chroma_curve=ChromaCurve("jewel"),
        brightness_correction=True,
        hue_drift_correction=True,
    )
    first = [generate_stop("#3B82F6", Stop(n), ramp) for n in (50, 300, 700)]
    second = [generate_stop("#3B82F6", Stop(n), ramp) for n in (50, 300, 700)]
    assert first == second
