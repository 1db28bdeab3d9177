# palette_ramp/gamut.py
from __future__ import annotations

"""
sRGB gamut boundaries in OKLCh.

Exports:
  is_in_gamut(l, c, h)
  max_chroma_in_gamut(l, h)
  clamp_chroma(desired, l, h)
  clamp_to_gamut(color)
  perceptual_to_hex(color)
  min_chroma_for_hue(h)
  max_lightness_for_min_chroma(h, min_chroma)

All searches are fixed-iteration bisections; nothing here can fail or loop
unboundedly.
"""

import numpy as np

from .colour_convert import linear_to_srgb, oklch_to_linear_rgb, srgb_unit_to_u8
from .constants import (
    GAMUT_BISECT_ITERS,
    GAMUT_EPS,
    IDENTITY_BISECT_ITERS,
    MAX_SEARCH_CHROMA,
    MIN_CHROMA_BLUE,
    MIN_CHROMA_CYAN_MAGENTA,
    MIN_CHROMA_RED_GREEN,
    MIN_CHROMA_YELLOW,
)
from .core_types import HexStr, PerceptualColor, clamp_value, normalize_hue, rgb_to_hex


def _linear_rgb(l: float, c: float, h: float) -> np.ndarray:
    return oklch_to_linear_rgb(np.array([l, c, h], dtype=np.float64))


def is_in_gamut(l: float, c: float, h: float) -> bool:
    """True if the OKLCh colour is displayable in sRGB (all channels in [0, 1])."""
    rgb = _linear_rgb(l, c, h)
    return bool(np.all(rgb >= -GAMUT_EPS) and np.all(rgb <= 1.0 + GAMUT_EPS))


def max_chroma_in_gamut(l: float, h: float) -> float:
    """
    Largest chroma in [0, MAX_SEARCH_CHROMA] that stays in sRGB for this l/h.
    Exact black and white have no chroma.
    """
    if l <= 0.0 or l >= 1.0:
        return 0.0
    if is_in_gamut(l, MAX_SEARCH_CHROMA, h):
        return MAX_SEARCH_CHROMA
    lo, hi = 0.0, MAX_SEARCH_CHROMA
    for _ in range(GAMUT_BISECT_ITERS):
        mid = 0.5 * (lo + hi)
        if is_in_gamut(l, mid, h):
            lo = mid
        else:
            hi = mid
    return lo


def clamp_chroma(desired: float, l: float, h: float) -> float:
    """min(desired, max_chroma_in_gamut(l, h)); desired is floored at 0."""
    desired = max(0.0, float(desired))
    if is_in_gamut(l, desired, h):
        return desired
    return min(desired, max_chroma_in_gamut(l, h))


def clamp_to_gamut(color: PerceptualColor) -> PerceptualColor:
    """Same lightness and hue, chroma reduced until the colour is displayable."""
    l = clamp_value(color.l, 0.0, 1.0)
    c = clamp_chroma(color.c, l, color.h)
    if l == color.l and c == color.c:
        return color
    return PerceptualColor.of(l, c, color.h, color.alpha)


def perceptual_to_hex(color: PerceptualColor) -> HexStr:
    """Gamut-safe OKLCh to uppercase '#RRGGBB'."""
    safe = clamp_to_gamut(color)
    srgb = linear_to_srgb(_linear_rgb(safe.l, safe.c, safe.h))
    return rgb_to_hex(srgb_unit_to_u8(srgb))


# Identity preservation


def min_chroma_for_hue(hue: float) -> float:
    """
    Minimum chroma that keeps a hue recognisable at very light stops.
    Blues have the tightest gamut near white, yellows the most generous.
    """
    h = normalize_hue(hue)
    if 200.0 <= h < 280.0:
        return MIN_CHROMA_BLUE
    if 160.0 <= h < 200.0 or 280.0 <= h < 340.0:
        return MIN_CHROMA_CYAN_MAGENTA
    if 80.0 <= h < 160.0 or h >= 340.0 or h < 40.0:
        return MIN_CHROMA_RED_GREEN
    return MIN_CHROMA_YELLOW


def max_lightness_for_min_chroma(hue: float, min_chroma: float) -> float:
    """Highest lightness in [0.5, 1] whose gamut still allows min_chroma."""
    lo, hi = 0.5, 1.0
    for _ in range(IDENTITY_BISECT_ITERS):
        mid = 0.5 * (lo + hi)
        if max_chroma_in_gamut(mid, hue) >= min_chroma:
            lo = mid
        else:
            hi = mid
    return lo


__all__ = [
    "is_in_gamut",
    "max_chroma_in_gamut",
    "clamp_chroma",
    "clamp_to_gamut",
    "perceptual_to_hex",
    "min_chroma_for_hue",
    "max_lightness_for_min_chroma",
]
