# palette_ramp/artistic_curves.py
from __future__ import annotations

"""
Artistic hue and chroma variation across lightness.

These are design features, not corrections. Presets are flat tables in
constants.py keyed by tag; 'custom' carries its own numbers.

Exports:
  apply_hue_shift(color, target_l, amount_deg, direction)
  apply_chroma_shift(color, target_l, amount_pct, direction)
  hue_shift_values(curve) / apply_hue_shift_curve(color, target_l, curve)
  chroma_curve_values(curve) / chroma_curve_multiplier(target_l, curve)
  apply_chroma_curve(color, target_l, curve)
"""

from typing import Optional, Tuple

from .constants import (
    CHROMA_ANCHOR_DARK_L,
    CHROMA_ANCHOR_LIGHT_L,
    CHROMA_ANCHOR_MID_L,
    CHROMA_CURVE_PRESETS,
    HUE_SHIFT_CURVE_PRESETS,
    HUE_SHIFT_MIN_C,
)
from .core_types import (
    ChromaCurve,
    ChromaShiftDirection,
    HueShiftCurve,
    HueShiftDirection,
    PerceptualColor,
    clamp_value,
)


def _normalized_l(target_l: float) -> float:
    """-1 at l=0, 0 at l=0.5, +1 at l=1."""
    return (clamp_value(target_l, 0.0, 1.0) - 0.5) * 2.0


# Linear shifts


def apply_hue_shift(
    color: PerceptualColor,
    target_l: float,
    amount_deg: float,
    direction: HueShiftDirection = "warm-cool",
) -> PerceptualColor:
    """
    Rotate hue by -normalized_l * shift / 2: +shift/2 at l=0, -shift/2 at l=1,
    zero at l=0.5. 'cool-warm' flips the sign of the shift.
    """
    if amount_deg == 0:
        return color
    shift = -amount_deg if direction == "cool-warm" else amount_deg
    offset = -_normalized_l(target_l) * (shift / 2.0)
    return color.with_h(color.h + offset)


def apply_chroma_shift(
    color: PerceptualColor,
    target_l: float,
    amount_pct: float,
    direction: ChromaShiftDirection = "vivid-muted",
) -> PerceptualColor:
    """
    Reduce chroma toward one end of the ramp. 'vivid-muted' keeps lights and
    mutes darks; 'muted-vivid' the reverse. Never increases chroma.
    """
    if amount_pct == 0 or color.c == 0:
        return color
    n = _normalized_l(target_l)
    reduction = max(0.0, -n) if direction == "vivid-muted" else max(0.0, n)
    pct = clamp_value(float(amount_pct), 0.0, 100.0)
    multiplier = max(0.0, 1.0 - reduction * (pct / 100.0))
    return color.with_c(color.c * multiplier)


# Hue shift curve


def hue_shift_values(curve: Optional[HueShiftCurve]) -> Tuple[float, float]:
    """(light, dark) shift in degrees for a preset or custom curve."""
    if curve is None or curve.preset == "none":
        return (0.0, 0.0)
    if curve.preset == "custom":
        return (float(curve.light_shift or 0.0), float(curve.dark_shift or 0.0))
    return HUE_SHIFT_CURVE_PRESETS[curve.preset]


def apply_hue_shift_curve(
    color: PerceptualColor, target_l: float, curve: Optional[HueShiftCurve]
) -> PerceptualColor:
    """
    Light shift above l=0.5 and dark shift below, each scaled linearly from 0
    at the midpoint to full strength at the extreme. Near-greys are left alone
    so they do not pick up a tint.
    """
    if color.c < HUE_SHIFT_MIN_C:
        return color
    light, dark = hue_shift_values(curve)
    if light == 0 and dark == 0:
        return color
    n = _normalized_l(target_l)
    offset = light * n if n > 0 else dark * -n
    if offset == 0:
        return color
    return color.with_h(color.h + offset)


# Chroma curve


def chroma_curve_values(curve: Optional[ChromaCurve]) -> Tuple[float, float, float]:
    """(light, mid, dark) chroma percentages for a preset or custom curve."""
    if curve is None:
        return CHROMA_CURVE_PRESETS["flat"]
    if curve.preset == "custom":
        # out-of-range percentages clamp to the nearest bound
        light, mid, dark = (
            100.0 if pct is None else clamp_value(float(pct), 0.0, 100.0)
            for pct in (curve.light_pct, curve.mid_pct, curve.dark_pct)
        )
        return light, mid, dark
    return CHROMA_CURVE_PRESETS[curve.preset]


def _smooth_step(t: float) -> float:
    return t * t * (3.0 - 2.0 * t)


def chroma_curve_multiplier(target_l: float, curve: Optional[ChromaCurve]) -> float:
    """Chroma multiplier in [0, 1] at this lightness."""
    light, mid, dark = chroma_curve_values(curve)
    if target_l >= CHROMA_ANCHOR_MID_L:
        span = CHROMA_ANCHOR_LIGHT_L - CHROMA_ANCHOR_MID_L
        t = clamp_value((target_l - CHROMA_ANCHOR_MID_L) / span, 0.0, 1.0)
        pct = mid + (light - mid) * _smooth_step(t)
    else:
        span = CHROMA_ANCHOR_MID_L - CHROMA_ANCHOR_DARK_L
        t = clamp_value((target_l - CHROMA_ANCHOR_DARK_L) / span, 0.0, 1.0)
        pct = dark + (mid - dark) * _smooth_step(t)
    return pct / 100.0


def apply_chroma_curve(
    color: PerceptualColor, target_l: float, curve: Optional[ChromaCurve]
) -> PerceptualColor:
    if color.c == 0 or curve is None:
        return color
    return color.with_c(color.c * chroma_curve_multiplier(target_l, curve))


__all__ = [
    "apply_hue_shift",
    "apply_chroma_shift",
    "hue_shift_values",
    "apply_hue_shift_curve",
    "chroma_curve_values",
    "chroma_curve_multiplier",
    "apply_chroma_curve",
]
