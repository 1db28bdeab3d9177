# palette_ramp/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.

Everything here is immutable. Pipeline stages take a value and return a new
one; nothing is updated in place.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Literal, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .constants import DEFAULT_BACKGROUND, DEFAULT_CONTRAST, DEFAULT_LIGHTNESS

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str

Oklab = NDArray[np.float64]  # (..., 3) OKLab
Oklch = NDArray[np.float64]  # (..., 3) OKLCh, hue in degrees

EmphasisMethod = Literal["lightness", "contrast"]
HueShiftPreset = Literal["none", "subtle", "natural", "dramatic", "custom"]
ChromaCurvePreset = Literal["flat", "bell", "pastel", "jewel", "linear-fade", "custom"]
HueShiftDirection = Literal["warm-cool", "cool-warm"]
ChromaShiftDirection = Literal["vivid-muted", "muted-vivid"]

EMPHASIS_METHODS: Tuple[str, ...] = ("lightness", "contrast")
HUE_SHIFT_PRESETS: Tuple[str, ...] = ("none", "subtle", "natural", "dramatic", "custom")
CHROMA_CURVE_PRESETS: Tuple[str, ...] = (
    "flat",
    "bell",
    "pastel",
    "jewel",
    "linear-fade",
    "custom",
)
HUE_SHIFT_DIRECTIONS: Tuple[str, ...] = ("warm-cool", "cool-warm")
CHROMA_SHIFT_DIRECTIONS: Tuple[str, ...] = ("vivid-muted", "muted-vivid")


# Small helpers


def clamp_value(value: float, lo: float, hi: float) -> float:
    """Clamp value to [lo, hi]."""
    return lo if value < lo else hi if value > hi else value


def normalize_hue(hue_deg: float) -> float:
    """Wrap a hue angle into [0, 360)."""
    h = float(hue_deg) % 360.0
    # -1e-17 % 360 rounds to 360.0
    return 0.0 if h >= 360.0 else h


def signed_hue_difference(from_deg: float, to_deg: float) -> float:
    """Shortest signed rotation from one hue to another, in (-180, 180]."""
    diff = (to_deg - from_deg) % 360.0
    return diff - 360.0 if diff > 180.0 else diff


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to uppercase hex string '#RRGGBB'."""
    return f"#{rgb[0]:02X}{rgb[1]:02X}{rgb[2]:02X}"


def hex_to_rgb(hex_str: str) -> RGBTuple:
    """Parse '#rgb' or '#rrggbb' (case-insensitive, '#' optional) into an RGB tuple."""
    s = hex_str.strip().lower()
    if s.startswith("#"):
        s = s[1:]
    if len(s) == 3:
        s = "".join(ch * 2 for ch in s)
    if len(s) != 6:
        raise ValueError("hex must be '#rrggbb' or '#rgb'")
    try:
        return (int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))
    except ValueError:
        raise ValueError(f"invalid hex digits in {hex_str!r}") from None


# Value objects


@dataclass(frozen=True)
class PerceptualColor:
    """
    OKLCH colour: lightness 0..1, chroma >= 0, hue degrees [0, 360).

    Every construction path (direct, .of, the with_* copies) clamps lightness
    and alpha, floors chroma at 0 and wraps the hue.
    """

    l: float
    c: float
    h: float
    alpha: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "l", clamp_value(float(self.l), 0.0, 1.0))
        object.__setattr__(self, "c", max(0.0, float(self.c)))
        object.__setattr__(self, "h", normalize_hue(self.h))
        object.__setattr__(self, "alpha", clamp_value(float(self.alpha), 0.0, 1.0))

    @classmethod
    def of(cls, l: float, c: float, h: float, alpha: float = 1.0) -> "PerceptualColor":
        return cls(l=l, c=c, h=h, alpha=alpha)

    def with_l(self, l: float) -> "PerceptualColor":
        return replace(self, l=l)

    def with_c(self, c: float) -> "PerceptualColor":
        return replace(self, c=c)

    def with_h(self, h: float) -> "PerceptualColor":
        return replace(self, h=h)


@dataclass(frozen=True)
class HueShiftCurve:
    """Hue variation across lightness: preset tag or custom light/dark degrees."""

    preset: HueShiftPreset = "none"
    light_shift: Optional[float] = None  # degrees, positive = toward cool/cyan
    dark_shift: Optional[float] = None  # degrees, negative = toward warm/purple


@dataclass(frozen=True)
class ChromaCurve:
    """Chroma distribution across lightness: preset tag or custom percentages."""

    preset: ChromaCurvePreset = "flat"
    light_pct: Optional[float] = None
    mid_pct: Optional[float] = None
    dark_pct: Optional[float] = None


@dataclass(frozen=True)
class LinearHueShift:
    """Symmetric hue rotation: +amount/2 at one end, -amount/2 at the other."""

    amount_deg: float = 0.0
    direction: HueShiftDirection = "warm-cool"


@dataclass(frozen=True)
class LinearChromaShift:
    """Chroma reduction toward one end of the ramp."""

    amount_pct: float = 0.0
    direction: ChromaShiftDirection = "vivid-muted"


@dataclass(frozen=True)
class Stop:
    """One numbered stop of a ramp, with optional per-stop overrides."""

    number: int
    lightness_override: Optional[float] = None
    contrast_override: Optional[float] = None
    manual_override: Optional[PerceptualColor] = None
    method_override: Optional[EmphasisMethod] = None
    apply_corrections_to_manual: Optional[bool] = None


@dataclass(frozen=True)
class ColourConfig:
    """Per-colour settings plus its stops."""

    id: str
    base_color: HexStr
    stops: Tuple[Stop, ...] = ()
    label: str = ""
    method_override: Optional[EmphasisMethod] = None
    hk_correction: bool = False
    bb_correction: bool = False
    preserve_identity: bool = True
    hue_shift_curve: Optional[HueShiftCurve] = None
    chroma_curve: Optional[ChromaCurve] = None
    hue_shift: Optional[LinearHueShift] = None
    chroma_shift: Optional[LinearChromaShift] = None
    apply_corrections_to_manual: bool = False


@dataclass(frozen=True)
class EffectiveSettings:
    """Group settings merged with the global background colour."""

    method: EmphasisMethod = "lightness"
    default_lightness: Dict[int, float] = field(
        default_factory=lambda: dict(DEFAULT_LIGHTNESS)
    )
    default_contrast: Dict[int, float] = field(
        default_factory=lambda: dict(DEFAULT_CONTRAST)
    )
    background_color: HexStr = DEFAULT_BACKGROUND


@dataclass(frozen=True)
class RampConfig:
    """Resolved configuration consumed by the single-stop pipeline."""

    base_color: HexStr
    method: EmphasisMethod = "lightness"
    default_lightness: Dict[int, float] = field(
        default_factory=lambda: dict(DEFAULT_LIGHTNESS)
    )
    default_contrast: Dict[int, float] = field(
        default_factory=lambda: dict(DEFAULT_CONTRAST)
    )
    background_color: HexStr = DEFAULT_BACKGROUND
    preserve_identity: bool = True
    brightness_correction: bool = False  # Helmholtz-Kohlrausch
    hue_drift_correction: bool = False  # Bezold-Brucke
    hue_shift_curve: Optional[HueShiftCurve] = None
    chroma_curve: Optional[ChromaCurve] = None
    hue_shift: Optional[LinearHueShift] = None
    chroma_shift: Optional[LinearChromaShift] = None
    apply_corrections_to_manual: bool = False

    @classmethod
    def from_settings(
        cls, colour: ColourConfig, settings: EffectiveSettings
    ) -> "RampConfig":
        """Merge a colour's own settings over its group's effective settings."""
        return cls(
            base_color=colour.base_color,
            method=colour.method_override or settings.method,
            default_lightness=dict(settings.default_lightness),
            default_contrast=dict(settings.default_contrast),
            background_color=settings.background_color,
            preserve_identity=colour.preserve_identity,
            brightness_correction=colour.hk_correction,
            hue_drift_correction=colour.bb_correction,
            hue_shift_curve=colour.hue_shift_curve,
            chroma_curve=colour.chroma_curve,
            hue_shift=colour.hue_shift,
            chroma_shift=colour.chroma_shift,
            apply_corrections_to_manual=colour.apply_corrections_to_manual,
        )

    @property
    def corrections_enabled(self) -> bool:
        return self.brightness_correction or self.hue_drift_correction


@dataclass(frozen=True)
class NudgeAmount:
    """Displacement applied by the uniqueness pass (positive = lighter/more saturated/clockwise)."""

    lightness: float = 0.0
    chroma: float = 0.0
    hue: float = 0.0


@dataclass(frozen=True)
class GeneratedStop:
    """Output of one stop: final hex plus what the algorithm did to get there."""

    stop_number: int
    hex: HexStr
    original_l: float
    expanded_l: float
    was_nudged: bool = False
    nudge_amount: Optional[NudgeAmount] = None
    too_similar: bool = False
    delta_e: Optional[float] = None


@dataclass(frozen=True)
class PaletteResult:
    """All generated stops of one colour, in stop-number order."""

    colour_id: str
    stops: Tuple[GeneratedStop, ...]
    had_duplicates: bool = False

    @property
    def hexes(self) -> Tuple[HexStr, ...]:
        return tuple(s.hex for s in self.stops)


__all__ = [
    # aliases / types
    "RGBTuple",
    "HexStr",
    "Oklab",
    "Oklch",
    "EmphasisMethod",
    "HueShiftPreset",
    "ChromaCurvePreset",
    "HueShiftDirection",
    "ChromaShiftDirection",
    "EMPHASIS_METHODS",
    "HUE_SHIFT_PRESETS",
    "CHROMA_CURVE_PRESETS",
    "HUE_SHIFT_DIRECTIONS",
    "CHROMA_SHIFT_DIRECTIONS",
    # value objects
    "PerceptualColor",
    "HueShiftCurve",
    "ChromaCurve",
    "LinearHueShift",
    "LinearChromaShift",
    "Stop",
    "ColourConfig",
    "EffectiveSettings",
    "RampConfig",
    "NudgeAmount",
    "GeneratedStop",
    "PaletteResult",
    # helpers
    "clamp_value",
    "normalize_hue",
    "signed_hue_difference",
    "rgb_to_hex",
    "hex_to_rgb",
]
