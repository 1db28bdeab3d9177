# palette_ramp/stop_generator.py
from __future__ import annotations

"""
Single-stop pipeline: base colour + stop + ramp config -> one colour.

Order:
  1) target lightness (table / override / contrast solve), identity cap
  2) target chroma with the soft shoulder near white and black
  3) hue-shift curve, linear hue shift, chroma curve, linear chroma shift
     (contrast mode then re-solves lightness for the target ratio)
  4) perceptual corrections, when enabled
  5) gamut clamp

Manual overrides skip 1-3 and only get 4 when opted in.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .artistic_curves import (
    apply_chroma_curve,
    apply_chroma_shift,
    apply_hue_shift,
    apply_hue_shift_curve,
)
from .colour_convert import FALLBACK_COLOR, hex_to_perceptual, parse_color
from .constants import (
    FALLBACK_CONTRAST,
    FALLBACK_DARK_SPAN_STOPS,
    FALLBACK_LIGHT_L,
    FALLBACK_MID_STOP,
    FALLBACK_SPAN_L,
    MAX_CONTRAST,
    MIN_CONTRAST,
    SHOULDER_DARK_L,
    SHOULDER_FLOOR,
    SHOULDER_LIGHT_L,
)
from .contrast import refine_contrast_to_target, solve_lightness_for_contrast
from .core_types import (
    EmphasisMethod,
    HexStr,
    PerceptualColor,
    RampConfig,
    Stop,
    clamp_value,
)
from .gamut import (
    clamp_to_gamut,
    max_lightness_for_min_chroma,
    min_chroma_for_hue,
    perceptual_to_hex,
)
from .perceptual_corrections import apply_perceptual_corrections
from .utils import debug_log


@dataclass(frozen=True)
class StopColor:
    """Pipeline output for one stop, before serialization."""

    color: PerceptualColor
    original_l: float
    expanded_l: float
    is_manual: bool = False


def fallback_lightness(stop_number: int) -> float:
    """Lightness for a stop number missing from the default table."""
    n = float(stop_number)
    if n <= FALLBACK_MID_STOP:
        l = FALLBACK_LIGHT_L - (n / FALLBACK_MID_STOP) * FALLBACK_SPAN_L
    else:
        l = 0.5 - ((n - FALLBACK_MID_STOP) / FALLBACK_DARK_SPAN_STOPS) * FALLBACK_SPAN_L
    return clamp_value(l, 0.0, 1.0)


def resolve_method(stop: Stop, ramp: RampConfig) -> EmphasisMethod:
    return stop.method_override or ramp.method


def resolve_target_contrast(stop: Stop, ramp: RampConfig) -> float:
    """Stop override, then the default table, then 4.5; clamped to [1, 21]."""
    if stop.contrast_override is not None:
        target = stop.contrast_override
    else:
        target = ramp.default_contrast.get(stop.number, FALLBACK_CONTRAST)
    return clamp_value(float(target), MIN_CONTRAST, MAX_CONTRAST)


def resolve_target_lightness(
    base: PerceptualColor, stop: Stop, ramp: RampConfig
) -> Tuple[float, Optional[float]]:
    """
    Returns (lightness, target_contrast). target_contrast is None in
    lightness mode.
    """
    if resolve_method(stop, ramp) == "contrast":
        target = resolve_target_contrast(stop, ramp)
        l = solve_lightness_for_contrast(base.h, base.c, ramp.background_color, target)
        return clamp_value(l, 0.0, 1.0), target

    if stop.lightness_override is not None:
        l = float(stop.lightness_override)
    elif stop.number in ramp.default_lightness:
        l = float(ramp.default_lightness[stop.number])
    else:
        l = fallback_lightness(stop.number)
    return clamp_value(l, 0.0, 1.0), None


def identity_capped_lightness(
    target_l: float, base: PerceptualColor, ramp: RampConfig, method: EmphasisMethod
) -> float:
    """
    Cap very light stops so the hue keeps enough chroma to stay recognisable.
    Only for chromatic bases in lightness mode.
    """
    if not ramp.preserve_identity or method != "lightness":
        return target_l
    min_c = min_chroma_for_hue(base.h)
    if base.c < min_c:
        return target_l
    return min(target_l, max_lightness_for_min_chroma(base.h, min_c))


def resolve_target_chroma(base_chroma: float, target_l: float) -> float:
    """
    Base chroma, eased down near white and black. The shoulder factor runs
    from 1 at the shoulder edge to SHOULDER_FLOOR at the extreme.
    """
    if target_l > SHOULDER_LIGHT_L:
        t = (1.0 - target_l) / (1.0 - SHOULDER_LIGHT_L)
    elif target_l < SHOULDER_DARK_L:
        t = target_l / SHOULDER_DARK_L
    else:
        return base_chroma
    factor = SHOULDER_FLOOR + (1.0 - SHOULDER_FLOOR) * clamp_value(t, 0.0, 1.0)
    return base_chroma * factor


def _manual_stop_color(
    manual: PerceptualColor,
    stop: Stop,
    ramp: RampConfig,
    background: PerceptualColor,
) -> StopColor:
    color = PerceptualColor.of(manual.l, manual.c, manual.h, manual.alpha)
    opt_in = (
        stop.apply_corrections_to_manual
        if stop.apply_corrections_to_manual is not None
        else ramp.apply_corrections_to_manual
    )
    if opt_in and ramp.corrections_enabled:
        color = apply_perceptual_corrections(
            color,
            background,
            hue_drift=ramp.hue_drift_correction,
            brightness=ramp.brightness_correction,
        )
    return StopColor(
        color=clamp_to_gamut(color),
        original_l=manual.l,
        expanded_l=manual.l,
        is_manual=True,
    )


def generate_stop_color(
    base: PerceptualColor, stop: Stop, ramp: RampConfig, debug: bool = False
) -> StopColor:
    """Run the full pipeline for one stop and return the gamut-safe colour."""
    background = hex_to_perceptual(ramp.background_color)
    if stop.manual_override is not None:
        if debug:
            debug_log(f"stop {stop.number}: manual override")
        return _manual_stop_color(stop.manual_override, stop, ramp, background)

    method = resolve_method(stop, ramp)
    original_l, target_contrast = resolve_target_lightness(base, stop, ramp)
    expanded_l = identity_capped_lightness(original_l, base, ramp, method)

    color = PerceptualColor.of(
        expanded_l, resolve_target_chroma(base.c, expanded_l), base.h, base.alpha
    )

    color = apply_hue_shift_curve(color, expanded_l, ramp.hue_shift_curve)
    if ramp.hue_shift is not None:
        color = apply_hue_shift(
            color, expanded_l, ramp.hue_shift.amount_deg, ramp.hue_shift.direction
        )
    color = apply_chroma_curve(color, expanded_l, ramp.chroma_curve)
    if ramp.chroma_shift is not None:
        color = apply_chroma_shift(
            color, expanded_l, ramp.chroma_shift.amount_pct, ramp.chroma_shift.direction
        )

    if target_contrast is not None:
        color = refine_contrast_to_target(color, target_contrast, ramp.background_color)

    if ramp.corrections_enabled:
        color = apply_perceptual_corrections(
            color,
            background,
            hue_drift=ramp.hue_drift_correction,
            brightness=ramp.brightness_correction,
        )

    color = clamp_to_gamut(color)
    if debug:
        debug_log(
            f"stop {stop.number}: method={method} l={original_l:.4f}"
            f" expanded={expanded_l:.4f} -> l={color.l:.4f} c={color.c:.4f} h={color.h:.1f}"
        )
    return StopColor(
        color=color,
        original_l=original_l,
        expanded_l=expanded_l,
    )


def resolve_base_color(base_color: str, debug: bool = False) -> PerceptualColor:
    """Parse the ramp's base colour; unparseable text yields the fallback colour."""
    base = parse_color(base_color)
    if base is FALLBACK_COLOR and debug:
        debug_log(f"base colour {base_color!r} not understood, using fallback")
    return base


def generate_stop(
    base_color: str, stop: Stop, ramp: RampConfig, debug: bool = False
) -> HexStr:
    """Final '#RRGGBB' for one stop of a ramp built from base_color."""
    base = resolve_base_color(base_color, debug)
    return perceptual_to_hex(generate_stop_color(base, stop, ramp, debug).color)


__all__ = [
    "StopColor",
    "fallback_lightness",
    "resolve_method",
    "resolve_target_contrast",
    "resolve_target_lightness",
    "identity_capped_lightness",
    "resolve_target_chroma",
    "generate_stop_color",
    "resolve_base_color",
    "generate_stop",
]
