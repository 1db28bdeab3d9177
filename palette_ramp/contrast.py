# palette_ramp/contrast.py
from __future__ import annotations

"""
Contrast-driven lightness.

Exports:
  solve_lightness_for_contrast(base_hue, base_chroma, background, target_ratio)
  refine_contrast_to_target(color, target_ratio, background)
  is_light_background(background)

Both searches are bounded and keep a running best candidate, so they always
return the least-bad answer they saw instead of failing.
"""

from .colour_convert import contrast_ratio, hex_to_perceptual
from .constants import (
    CONTRAST_EARLY_EXIT,
    CONTRAST_REFINE_GAIN,
    CONTRAST_REFINE_ITERS,
    CONTRAST_REFINE_MAX_STEP,
    CONTRAST_REFINE_TOL,
    CONTRAST_SOLVE_ITERS,
    MAX_CONTRAST,
    MIN_CONTRAST,
)
from .core_types import HexStr, PerceptualColor, clamp_value
from .gamut import clamp_chroma, perceptual_to_hex


def is_light_background(background: HexStr) -> bool:
    """
    Light backgrounds get darker text-like stops, dark ones lighter.
    Lightness exactly 0.5 counts as dark for both the solver and the refinement.
    """
    return hex_to_perceptual(background).l > 0.5


def solve_lightness_for_contrast(
    base_hue: float,
    base_chroma: float,
    background: HexStr,
    target_ratio: float,
) -> float:
    """
    Binary search over OKLCh lightness for the target WCAG contrast ratio.

    The search direction is fixed once from the background lightness: on a
    dark background higher l means more contrast, on a light one lower l.
    Returns the lightness with the smallest |contrast - target| seen.
    """
    target = clamp_value(float(target_ratio), MIN_CONTRAST, MAX_CONTRAST)
    go_lighter = not is_light_background(background)

    low, high = 0.0, 1.0
    best_l, best_err = 0.5, float("inf")
    for _ in range(CONTRAST_SOLVE_ITERS):
        mid = 0.5 * (low + high)
        probe = perceptual_to_hex(PerceptualColor.of(mid, base_chroma, base_hue))
        ratio = contrast_ratio(probe, background)
        err = abs(ratio - target)
        if err < best_err:
            best_l, best_err = mid, err
        if err < CONTRAST_EARLY_EXIT:
            return mid

        need_more = ratio < target
        if go_lighter:
            low, high = (mid, high) if need_more else (low, mid)
        else:
            low, high = (low, mid) if need_more else (mid, high)
    return best_l


def refine_contrast_to_target(
    color: PerceptualColor,
    target_ratio: float,
    background: HexStr,
    tolerance: float = CONTRAST_REFINE_TOL,
) -> PerceptualColor:
    """
    Nudge lightness until the rendered colour meets the target contrast again.

    Chroma reduction and hue changes alter luminance, so a colour solved for a
    ratio can drift off it after the artistic curves. Each step moves l by a
    proportional amount (capped) and re-clamps the original chroma to gamut.
    """
    target = clamp_value(float(target_ratio), MIN_CONTRAST, MAX_CONTRAST)
    light_bg = is_light_background(background)
    original_c = color.c

    current = color
    best, best_err = color, float("inf")
    gain, prev_sign = CONTRAST_REFINE_GAIN, 0.0
    for _ in range(CONTRAST_REFINE_ITERS):
        error = contrast_ratio(perceptual_to_hex(current), background) - target
        if abs(error) < best_err:
            best, best_err = current, abs(error)
        if abs(error) <= tolerance:
            break

        # overshot: halve the gain so the steps settle instead of oscillating
        sign = 1.0 if error > 0 else -1.0
        if prev_sign and sign != prev_sign:
            gain *= 0.5
        prev_sign = sign

        step = min(abs(error) * gain, CONTRAST_REFINE_MAX_STEP)
        if error > 0:
            # too much contrast: move toward the background
            direction = 1.0 if light_bg else -1.0
        else:
            direction = -1.0 if light_bg else 1.0
        new_l = clamp_value(current.l + direction * step, 0.0, 1.0)
        current = PerceptualColor.of(
            new_l, clamp_chroma(original_c, new_l, current.h), current.h, current.alpha
        )
    return best


__all__ = [
    "is_light_background",
    "solve_lightness_for_contrast",
    "refine_contrast_to_target",
]
