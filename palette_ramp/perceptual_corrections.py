# palette_ramp/perceptual_corrections.py
from __future__ import annotations

"""
Perceptual corrections.

- Brightness compensation (Helmholtz-Kohlrausch): saturated colours read
  brighter than their measured luminance; lightness is pulled back.
- Hue drift compensation (Bezold-Brucke): perceived hue drifts with lightness;
  hue is counter-rotated away from the nearest attractor hue.

Both are independent and composable. Combined order: hue drift first, then
brightness.
"""

import math

from .constants import (
    BB_DARK_ATTRACTORS,
    BB_DEAD_ZONE,
    BB_EXPONENT,
    BB_LIGHT_ATTRACTORS,
    BB_MAX_SHIFT,
    HK_CHROMA_NORM,
    HK_MAX_COMPENSATION,
    HK_PEAK_HUE,
    NEAR_GREY_C,
)
from .core_types import PerceptualColor, signed_hue_difference

# Brightness (Helmholtz-Kohlrausch)


def brightness_compensation(chroma: float, hue: float) -> float:
    """
    Lightness offset for a saturated colour, 0 .. HK_MAX_COMPENSATION.
    Peaks at blue (~270 deg), vanishes at yellow (~90 deg), grows with chroma.
    """
    if chroma < NEAR_GREY_C:
        return 0.0
    hue_factor = 0.5 + 0.5 * math.cos(math.radians(hue - HK_PEAK_HUE))
    chroma_factor = min(chroma / HK_CHROMA_NORM, 1.0)
    return HK_MAX_COMPENSATION * chroma_factor * hue_factor


def apply_brightness_compensation(
    color: PerceptualColor, light_background: bool
) -> PerceptualColor:
    """Darken on light backgrounds, lighten on dark ones."""
    compensation = brightness_compensation(color.c, color.h)
    if compensation == 0.0:
        return color
    sign = -1.0 if light_background else 1.0
    return color.with_l(color.l + sign * compensation)


# Hue drift (Bezold-Brucke)


def _closer_attractor(hue: float, attractors: tuple) -> float:
    first, second = attractors
    d_first = abs(signed_hue_difference(hue, first))
    d_second = abs(signed_hue_difference(hue, second))
    return first if d_first < d_second else second


def hue_drift_correction(hue: float, lightness: float, chroma: float = 0.1) -> float:
    """
    Signed hue correction in degrees for a colour at this lightness.

    Zero inside the dead zone around l = 0.5 and for near-greys. Otherwise the
    magnitude is BB_MAX_SHIFT * (2 * |l - 0.5|) ** 1.5, pointing away from the
    attractor (yellow/blue when light, red/green when dark).
    """
    if chroma < NEAR_GREY_C:
        return 0.0
    deviation = lightness - 0.5
    if abs(deviation) < BB_DEAD_ZONE:
        return 0.0

    attractors = BB_LIGHT_ATTRACTORS if deviation > 0 else BB_DARK_ATTRACTORS
    attractor = _closer_attractor(hue, attractors)

    magnitude = BB_MAX_SHIFT * (abs(deviation) * 2.0) ** BB_EXPONENT
    toward = signed_hue_difference(hue, attractor)
    return -magnitude if toward > 0 else magnitude


def apply_hue_drift_correction(color: PerceptualColor) -> PerceptualColor:
    shift = hue_drift_correction(color.h, color.l, color.c)
    if shift == 0.0:
        return color
    return color.with_h(color.h + shift)


# Combined pipeline


def apply_perceptual_corrections(
    color: PerceptualColor,
    background: PerceptualColor,
    *,
    hue_drift: bool = False,
    brightness: bool = False,
) -> PerceptualColor:
    """Hue drift first, then brightness compensation; each only when enabled."""
    result = color
    if hue_drift:
        result = apply_hue_drift_correction(result)
    if brightness:
        result = apply_brightness_compensation(result, background.l > 0.5)
    return result


__all__ = [
    "brightness_compensation",
    "apply_brightness_compensation",
    "hue_drift_correction",
    "apply_hue_drift_correction",
    "apply_perceptual_corrections",
]
