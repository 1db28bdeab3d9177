"""Tests for the delta-E metric and the adjacent-stop nudging pass."""

import pytest

from palette_ramp.core_types import PerceptualColor
from palette_ramp.gamut import perceptual_to_hex
from palette_ramp.stop_generator import StopColor
from palette_ramp.uniqueness import delta_e, ensure_distinct_stops, hex_delta_e


def _sc(l, c=0.12, h=30.0, manual=False):
    color = PerceptualColor.of(l, c, h)
    return StopColor(color=color, original_l=l, expanded_l=l, is_manual=manual)


def test_delta_e_components():
    a = PerceptualColor.of(0.5, 0.15, 0.0)
    assert delta_e(a, a) == 0.0
    assert delta_e(a, a.with_l(0.51)) == pytest.approx(1.0)
    assert delta_e(a, a.with_c(0.17)) == pytest.approx(2.0)
    assert delta_e(a, a.with_h(10.0)) == pytest.approx(5.0)
    assert delta_e(a, a.with_h(350.0)) == pytest.approx(5.0)


def test_delta_e_ignores_hue_of_greys():
    assert delta_e(PerceptualColor.of(0.5, 0.0, 0.0), PerceptualColor.of(0.5, 0.0, 180.0)) == 0.0


def test_distinct_stops_are_left_alone():
    out = ensure_distinct_stops([(100, _sc(0.9)), (200, _sc(0.7)), (300, _sc(0.5))])
    assert [s.stop_number for s in out] == [100, 200, 300]
    assert out[0].delta_e is None
    assert all(s.delta_e is not None and s.delta_e > 2.0 for s in out[1:])
    assert not any(s.was_nudged or s.too_similar for s in out)


def test_near_identical_neighbour_is_nudged_minimally():
    stops = [(500, _sc(0.50)), (600, _sc(0.505))]
    out = ensure_distinct_stops(stops)
    second = out[1]
    assert second.was_nudged
    assert not second.too_similar
    assert second.delta_e >= 2.0
    assert hex_delta_e(second.hex, out[0].hex) >= 2.0
    assert second.nudge_amount is not None
    assert second.nudge_amount.lightness > 0.0  # away from the darker predecessor

    steps = round(second.nudge_amount.lightness / 0.004)
    assert second.nudge_amount.lightness == pytest.approx(steps * 0.004)
    if steps > 1 and second.nudge_amount.chroma == 0.0:
        smaller = stops[1][1].color.with_l(0.505 + (steps - 1) * 0.004)
        assert hex_delta_e(perceptual_to_hex(smaller), out[0].hex) < 2.0


def test_identical_greys_are_separated_by_lightness_only():
    out = ensure_distinct_stops([(1, _sc(0.6, c=0.0)), (2, _sc(0.6, c=0.0))])
    assert out[1].was_nudged
    assert out[1].nudge_amount.chroma == 0.0
    assert out[1].hex != out[0].hex


def test_manual_override_is_never_nudged():
    out = ensure_distinct_stops([(1, _sc(0.5)), (2, _sc(0.5, manual=True))])
    assert out[1].hex == out[0].hex
    assert not out[1].was_nudged
    assert out[1].too_similar
    assert out[1].delta_e == 0.0


def test_unresolvable_collision_is_reported_not_raised():
    stops = [(1, _sc(0.5)), (2, _sc(0.5))]
    original = perceptual_to_hex(stops[1][1].color)
    out = ensure_distinct_stops(stops, threshold=1000.0)
    assert out[1].too_similar
    assert not out[1].was_nudged
    assert out[1].hex == original
    assert out[1].delta_e == 0.0


def test_each_stop_is_compared_with_the_nudged_predecessor():
    out = ensure_distinct_stops([(1, _sc(0.5)), (2, _sc(0.5)), (3, _sc(0.5))])
    hexes = [s.hex for s in out]
    assert out[1].was_nudged
    assert hex_delta_e(hexes[1], hexes[0]) >= 2.0
    assert hex_delta_e(hexes[2], hexes[1]) >= 2.0
