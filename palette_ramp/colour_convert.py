# palette_ramp/colour_convert.py
from __future__ import annotations

"""
Colour conversions and metrics (sRGB, D65).

Conversion chain: sRGB <-> linear RGB <-> OKLab <-> OKLCh.

Exports:
  srgb_to_linear(srgb), linear_to_srgb(linear)
  linear_rgb_to_oklab(rgb), oklab_to_linear_rgb(lab)
  oklab_to_oklch(lab), oklch_to_oklab(lch)
  srgb_to_oklch(srgb), oklch_to_srgb(lch), oklch_to_linear_rgb(lch)
  parse_hex(text), parse_color(text), hex_to_perceptual(text)
  relative_luminance(hex), contrast_ratio(hex_a, hex_b)

Array helpers are vectorised over (..., 3). Colour text parsing never raises:
unparseable input resolves to FALLBACK_COLOR.
"""

import re
from typing import Optional, Tuple

import numpy as np

from .constants import ACHROMATIC_C_EPS, FALLBACK_C, FALLBACK_H, FALLBACK_L
from .core_types import Oklab, Oklch, PerceptualColor, RGBTuple, clamp_value

FALLBACK_COLOR = PerceptualColor(l=FALLBACK_L, c=FALLBACK_C, h=FALLBACK_H)

# OKLab matrices (Bjorn Ottosson, https://bottosson.github.io/posts/oklab/)

_LINEAR_TO_LMS = np.array(
    [
        [0.4122214708, 0.5363325363, 0.0514459929],
        [0.2119034982, 0.6806995451, 0.1073969566],
        [0.0883024619, 0.2817188376, 0.6299787005],
    ],
    dtype=np.float64,
)
_LMS_TO_OKLAB = np.array(
    [
        [0.2104542553, 0.7936177850, -0.0040720468],
        [1.9779984951, -2.4285922050, 0.4505937099],
        [0.0259040371, 0.7827717662, -0.8086757660],
    ],
    dtype=np.float64,
)
_OKLAB_TO_LMS = np.array(
    [
        [1.0, 0.3963377774, 0.2158037573],
        [1.0, -0.1055613458, -0.0638541728],
        [1.0, -0.0894841775, -1.2914855480],
    ],
    dtype=np.float64,
)
_LMS_TO_LINEAR = np.array(
    [
        [4.0767416621, -3.3077115913, 0.2309699292],
        [-1.2684380046, 2.6097574011, -0.3413193965],
        [-0.0041960863, -0.7034186147, 1.7076147010],
    ],
    dtype=np.float64,
)

# WCAG relative luminance weights
_LUMA = np.array([0.2126, 0.7152, 0.0722], dtype=np.float64)


# sRGB <-> linear


def srgb_to_linear(srgb: np.ndarray) -> np.ndarray:
    """
    Convert sRGB (non-linear 0..1) to linear RGB (0..1). Vectorised.
    Args:
      srgb: array[...,3] in 0..1 (float)
    Returns:
      float64 array[...,3]
    """
    s = np.asarray(srgb, dtype=np.float64)
    with np.errstate(invalid="ignore"):
        return np.where(s <= 0.04045, s / 12.92, ((s + 0.055) / 1.055) ** 2.4)


def linear_to_srgb(linear: np.ndarray) -> np.ndarray:
    """Linear RGB to sRGB, clipped to [0, 1] before encoding."""
    lin = np.clip(np.asarray(linear, dtype=np.float64), 0.0, 1.0)
    return np.where(
        lin <= 0.0031308, lin * 12.92, 1.055 * np.power(lin, 1.0 / 2.4) - 0.055
    )


# linear RGB <-> OKLab


def linear_rgb_to_oklab(rgb: np.ndarray) -> Oklab:
    """Linear RGB[...,3] to OKLab[...,3]."""
    lms = np.asarray(rgb, dtype=np.float64) @ _LINEAR_TO_LMS.T
    return np.cbrt(lms) @ _LMS_TO_OKLAB.T


def oklab_to_linear_rgb(lab: Oklab) -> np.ndarray:
    """OKLab[...,3] to linear RGB[...,3]. Not clipped: out-of-gamut stays visible."""
    lms_root = np.asarray(lab, dtype=np.float64) @ _OKLAB_TO_LMS.T
    return (lms_root**3) @ _LMS_TO_LINEAR.T


# OKLab <-> OKLCh


def oklab_to_oklch(lab: Oklab) -> Oklch:
    """
    OKLab[...,3] to OKLCh[...,3] (degrees in [0,360)).
    Chroma below ACHROMATIC_C_EPS is snapped to an exact grey with hue 0.
    """
    arr = np.asarray(lab, dtype=np.float64)
    L = arr[..., 0]
    C = np.hypot(arr[..., 1], arr[..., 2])
    h = np.degrees(np.arctan2(arr[..., 2], arr[..., 1])) % 360.0
    h = np.where(h >= 360.0, 0.0, h)
    grey = C < ACHROMATIC_C_EPS
    C = np.where(grey, 0.0, C)
    h = np.where(grey, 0.0, h)
    return np.stack([L, C, h], axis=-1)


def oklch_to_oklab(lch: Oklch) -> Oklab:
    """OKLCh[...,3] to OKLab[...,3]."""
    arr = np.asarray(lch, dtype=np.float64)
    rad = np.radians(arr[..., 2])
    C = arr[..., 1]
    return np.stack([arr[..., 0], C * np.cos(rad), C * np.sin(rad)], axis=-1)


# Composite helpers


def srgb_to_oklch(srgb: np.ndarray) -> Oklch:
    """sRGB (0..1, or uint8 0..255) to OKLCh. Shape (..., 3) preserved."""
    arr = np.asarray(srgb)
    if arr.dtype == np.uint8:
        arr = arr.astype(np.float64) / 255.0
    return oklab_to_oklch(linear_rgb_to_oklab(srgb_to_linear(arr)))


def oklch_to_linear_rgb(lch: Oklch) -> np.ndarray:
    """OKLCh to unclipped linear RGB."""
    return oklab_to_linear_rgb(oklch_to_oklab(lch))


def oklch_to_srgb(lch: Oklch) -> np.ndarray:
    """OKLCh to sRGB 0..1 (channels clipped; no chroma reduction)."""
    return linear_to_srgb(oklch_to_linear_rgb(lch))


def srgb_unit_to_u8(srgb: np.ndarray) -> RGBTuple:
    """sRGB 0..1 triple to an 8-bit RGB tuple."""
    q = np.rint(np.clip(np.asarray(srgb, dtype=np.float64), 0.0, 1.0) * 255.0)
    return (int(q[0]), int(q[1]), int(q[2]))


# Colour text parsing

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_NUM = r"([-+]?(?:\d+\.?\d*|\.\d+))"
_RGB_RE = re.compile(
    rf"^rgba?\(\s*{_NUM}\s*[,\s]\s*{_NUM}\s*[,\s]\s*{_NUM}\s*(?:[,/]\s*{_NUM}(%?)\s*)?\)$",
    re.IGNORECASE,
)
_OKLCH_RE = re.compile(
    rf"^oklch\(\s*{_NUM}(%?)\s+{_NUM}\s+{_NUM}(?:deg)?\s*(?:/\s*{_NUM}(%?)\s*)?\)$",
    re.IGNORECASE,
)


def parse_hex(text: str) -> Optional[Tuple[RGBTuple, float]]:
    """
    Parse '#rgb', '#rgba', '#rrggbb' or '#rrggbbaa' ('#' optional).
    Returns ((r, g, b), alpha) or None when the text is not a hex colour.
    """
    if not isinstance(text, str):
        return None
    m = _HEX_RE.match(text.strip())
    if m is None:
        return None
    digits = m.group(1)
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)
    r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    alpha = int(digits[6:8], 16) / 255.0 if len(digits) == 8 else 1.0
    return (r, g, b), alpha


def _rgb_u8_to_perceptual(rgb: RGBTuple, alpha: float = 1.0) -> PerceptualColor:
    lch = srgb_to_oklch(np.array(rgb, dtype=np.uint8))
    return PerceptualColor.of(float(lch[0]), float(lch[1]), float(lch[2]), alpha)


def hex_to_perceptual(text: str) -> PerceptualColor:
    """Hex colour text to OKLCh. Unparseable text yields FALLBACK_COLOR."""
    parsed = parse_hex(text)
    if parsed is None:
        return FALLBACK_COLOR
    rgb, alpha = parsed
    return _rgb_u8_to_perceptual(rgb, alpha)


def _alpha_from(value: Optional[str], percent: Optional[str]) -> float:
    if value is None:
        return 1.0
    a = float(value)
    return clamp_value(a / 100.0 if percent else a, 0.0, 1.0)


def parse_color(text: str) -> PerceptualColor:
    """
    Parse hex, CSS 'rgb(r, g, b)' or 'oklch(L% C H)' text into OKLCh.
    Anything else yields FALLBACK_COLOR.
    """
    if not isinstance(text, str):
        return FALLBACK_COLOR
    s = text.strip()
    if parse_hex(s) is not None:
        return hex_to_perceptual(s)

    m = _RGB_RE.match(s)
    if m is not None:
        r, g, b = (int(round(clamp_value(float(m.group(i)), 0.0, 255.0))) for i in (1, 2, 3))
        return _rgb_u8_to_perceptual((r, g, b), _alpha_from(m.group(4), m.group(5)))

    m = _OKLCH_RE.match(s)
    if m is not None:
        l_val = float(m.group(1))
        if m.group(2) or l_val > 1.0:
            l_val /= 100.0
        return PerceptualColor.of(
            l_val,
            float(m.group(3)),
            float(m.group(4)),
            _alpha_from(m.group(5), m.group(6)),
        )
    return FALLBACK_COLOR


# Luminance / contrast


def _hex_to_unit_rgb(text: str) -> np.ndarray:
    parsed = parse_hex(text)
    if parsed is None:
        fb = FALLBACK_COLOR
        return oklch_to_srgb(np.array([fb.l, fb.c, fb.h], dtype=np.float64))
    return np.array(parsed[0], dtype=np.float64) / 255.0


def relative_luminance(hex_str: str) -> float:
    """WCAG relative luminance, 0 (black) .. 1 (white)."""
    return float(srgb_to_linear(_hex_to_unit_rgb(hex_str)) @ _LUMA)


def contrast_ratio(hex_a: str, hex_b: str) -> float:
    """WCAG contrast ratio (max + 0.05) / (min + 0.05), 1..21."""
    lum_a = relative_luminance(hex_a)
    lum_b = relative_luminance(hex_b)
    return (max(lum_a, lum_b) + 0.05) / (min(lum_a, lum_b) + 0.05)


def oklch_to_css(color: PerceptualColor) -> str:
    """CSS oklch() string, e.g. 'oklch(62.8% 0.258 29.2)'."""
    return f"oklch({color.l * 100.0:.1f}% {color.c:.3f} {color.h:.1f})"


__all__ = [
    "FALLBACK_COLOR",
    "srgb_to_linear",
    "linear_to_srgb",
    "linear_rgb_to_oklab",
    "oklab_to_linear_rgb",
    "oklab_to_oklch",
    "oklch_to_oklab",
    "srgb_to_oklch",
    "oklch_to_linear_rgb",
    "oklch_to_srgb",
    "srgb_unit_to_u8",
    "parse_hex",
    "parse_color",
    "hex_to_perceptual",
    "relative_luminance",
    "contrast_ratio",
    "oklch_to_css",
]
