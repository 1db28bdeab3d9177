# palette_ramp/constants.py
"""
Tunables, preset tables and default stop tables used across the project.

- DEFAULT_STOPS, DEFAULT_LIGHTNESS, DEFAULT_CONTRAST
- Hue shift / chroma curve presets
- Gamut search, contrast solver, correction and uniqueness constants
"""
from __future__ import annotations

from typing import Dict, List, Tuple

# =========================
# Default stop tables
# =========================
DEFAULT_STOPS: List[int] = [50, 100, 200, 300, 400, 500, 600, 700, 800, 900]

DEFAULT_LIGHTNESS: Dict[int, float] = {
    50: 0.97,
    100: 0.93,
    200: 0.85,
    300: 0.75,
    400: 0.65,
    500: 0.55,
    600: 0.45,
    700: 0.35,
    800: 0.25,
    900: 0.15,
}

DEFAULT_CONTRAST: Dict[int, float] = {
    50: 1.1,
    100: 1.3,
    200: 1.8,
    300: 2.5,
    400: 3.5,
    500: 4.5,
    600: 6.0,
    700: 8.0,
    800: 11.0,
    900: 15.0,
}

DEFAULT_BACKGROUND: str = "#FFFFFF"
FALLBACK_CONTRAST: float = 4.5

# Fallback lightness curve keyed by stop number (when no table entry exists)
FALLBACK_MID_STOP: int = 500
FALLBACK_LIGHT_L: float = 0.95
FALLBACK_SPAN_L: float = 0.45
FALLBACK_DARK_SPAN_STOPS: float = 450.0

# =========================
# Colour parsing
# =========================
# Returned for unparseable colour text.
FALLBACK_L: float = 0.5
FALLBACK_C: float = 0.1
FALLBACK_H: float = 0.0
ACHROMATIC_C_EPS: float = 1e-6

# =========================
# Gamut
# =========================
MAX_SEARCH_CHROMA: float = 0.4
GAMUT_BISECT_ITERS: int = 20
GAMUT_EPS: float = 1e-6
IDENTITY_BISECT_ITERS: int = 15

# Minimum chroma per hue band that keeps a colour recognisable at light stops.
MIN_CHROMA_BLUE: float = 0.025  # 200..280
MIN_CHROMA_CYAN_MAGENTA: float = 0.02  # 160..200, 280..340
MIN_CHROMA_RED_GREEN: float = 0.015  # 340..40, 80..160
MIN_CHROMA_YELLOW: float = 0.012  # 40..80

# =========================
# Contrast
# =========================
MIN_CONTRAST: float = 1.0
MAX_CONTRAST: float = 21.0
CONTRAST_SOLVE_ITERS: int = 20
CONTRAST_EARLY_EXIT: float = 0.01
CONTRAST_REFINE_ITERS: int = 20
CONTRAST_REFINE_TOL: float = 0.005
CONTRAST_REFINE_GAIN: float = 0.15
CONTRAST_REFINE_MAX_STEP: float = 0.05

# =========================
# Chroma shoulder near white / black
# =========================
SHOULDER_LIGHT_L: float = 0.9
SHOULDER_DARK_L: float = 0.15
SHOULDER_FLOOR: float = 0.3

# =========================
# Perceptual corrections
# =========================
HK_MAX_COMPENSATION: float = 0.05
HK_CHROMA_NORM: float = 0.2
HK_PEAK_HUE: float = 270.0
NEAR_GREY_C: float = 0.01

BB_DEAD_ZONE: float = 0.1
BB_MAX_SHIFT: float = 5.0
BB_EXPONENT: float = 1.5
BB_LIGHT_ATTRACTORS: Tuple[float, float] = (90.0, 270.0)  # yellow, blue
BB_DARK_ATTRACTORS: Tuple[float, float] = (0.0, 140.0)  # red, green

# =========================
# Artistic curves
# =========================
HUE_SHIFT_CURVE_PRESETS: Dict[str, Tuple[float, float]] = {
    # (light, dark) degrees
    "none": (0.0, 0.0),
    "subtle": (4.0, -5.0),
    "natural": (8.0, -10.0),
    "dramatic": (12.0, -15.0),
}

CHROMA_CURVE_PRESETS: Dict[str, Tuple[float, float, float]] = {
    # (light, mid, dark) percent of base chroma
    "flat": (100.0, 100.0, 100.0),
    "bell": (45.0, 100.0, 65.0),
    "pastel": (30.0, 70.0, 50.0),
    "jewel": (55.0, 100.0, 85.0),
    "linear-fade": (25.0, 60.0, 100.0),
}

CHROMA_ANCHOR_LIGHT_L: float = 0.85
CHROMA_ANCHOR_MID_L: float = 0.55
CHROMA_ANCHOR_DARK_L: float = 0.25

HUE_SHIFT_MIN_C: float = 0.02

# =========================
# Uniqueness pass
# =========================
SIMILARITY_THRESHOLD: float = 2.0
MAX_NUDGE_ATTEMPTS: int = 25
LIGHTNESS_NUDGE_STEP: float = 0.004  # ~ one 8-bit level
CHROMA_NUDGE_STEP: float = 0.002
HUE_NUDGE_STEP: float = 1.0
DELTA_E_SCALE: float = 100.0
DELTA_E_HUE_WEIGHT: float = 0.5
DELTA_E_FULL_HUE_C: float = 0.15

__all__ = [
    "DEFAULT_STOPS",
    "DEFAULT_LIGHTNESS",
    "DEFAULT_CONTRAST",
    "DEFAULT_BACKGROUND",
    "FALLBACK_CONTRAST",
    "FALLBACK_MID_STOP",
    "FALLBACK_LIGHT_L",
    "FALLBACK_SPAN_L",
    "FALLBACK_DARK_SPAN_STOPS",
    "FALLBACK_L",
    "FALLBACK_C",
    "FALLBACK_H",
    "ACHROMATIC_C_EPS",
    "MAX_SEARCH_CHROMA",
    "GAMUT_BISECT_ITERS",
    "GAMUT_EPS",
    "IDENTITY_BISECT_ITERS",
    "MIN_CHROMA_BLUE",
    "MIN_CHROMA_CYAN_MAGENTA",
    "MIN_CHROMA_RED_GREEN",
    "MIN_CHROMA_YELLOW",
    "MIN_CONTRAST",
    "MAX_CONTRAST",
    "CONTRAST_SOLVE_ITERS",
    "CONTRAST_EARLY_EXIT",
    "CONTRAST_REFINE_ITERS",
    "CONTRAST_REFINE_TOL",
    "CONTRAST_REFINE_GAIN",
    "CONTRAST_REFINE_MAX_STEP",
    "SHOULDER_LIGHT_L",
    "SHOULDER_DARK_L",
    "SHOULDER_FLOOR",
    "HK_MAX_COMPENSATION",
    "HK_CHROMA_NORM",
    "HK_PEAK_HUE",
    "NEAR_GREY_C",
    "BB_DEAD_ZONE",
    "BB_MAX_SHIFT",
    "BB_EXPONENT",
    "BB_LIGHT_ATTRACTORS",
    "BB_DARK_ATTRACTORS",
    "HUE_SHIFT_CURVE_PRESETS",
    "CHROMA_CURVE_PRESETS",
    "CHROMA_ANCHOR_LIGHT_L",
    "CHROMA_ANCHOR_MID_L",
    "CHROMA_ANCHOR_DARK_L",
    "HUE_SHIFT_MIN_C",
    "SIMILARITY_THRESHOLD",
    "MAX_NUDGE_ATTEMPTS",
    "LIGHTNESS_NUDGE_STEP",
    "CHROMA_NUDGE_STEP",
    "HUE_NUDGE_STEP",
    "DELTA_E_SCALE",
    "DELTA_E_HUE_WEIGHT",
    "DELTA_E_FULL_HUE_C",
]
