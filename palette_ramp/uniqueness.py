# palette_ramp/uniqueness.py
from __future__ import annotations

"""
Uniqueness pass over a generated ramp.

Adjacent stops that render (almost) the same are pushed apart with the
smallest displacement that clears SIMILARITY_THRESHOLD:

  phase 1: lightness, k * LIGHTNESS_NUDGE_STEP away from the predecessor
  phase 2: the same lightness step plus k * CHROMA_NUDGE_STEP chroma and
           k * HUE_NUDGE_STEP degrees of hue

Each phase is capped at MAX_NUDGE_ATTEMPTS. Distances are measured on the
colours decoded back from the output hex, so 8-bit quantization is included.
Manual overrides are never moved; unresolved collisions are reported as
data (too_similar), not raised.
"""

import math
from typing import List, Optional, Sequence, Tuple

from .colour_convert import hex_to_perceptual
from .constants import (
    CHROMA_NUDGE_STEP,
    DELTA_E_FULL_HUE_C,
    DELTA_E_HUE_WEIGHT,
    DELTA_E_SCALE,
    HUE_NUDGE_STEP,
    LIGHTNESS_NUDGE_STEP,
    MAX_NUDGE_ATTEMPTS,
    NEAR_GREY_C,
    SIMILARITY_THRESHOLD,
)
from .core_types import (
    GeneratedStop,
    HexStr,
    NudgeAmount,
    PerceptualColor,
    signed_hue_difference,
)
from .gamut import perceptual_to_hex
from .stop_generator import StopColor
from .utils import debug_log

# (hex, nudge, delta_e) of an accepted candidate
_Candidate = Tuple[HexStr, NudgeAmount, float]


def delta_e(a: PerceptualColor, b: PerceptualColor) -> float:
    """
    Euclidean distance in weighted OKLCh.

    L and C are scaled by 100. Hue is weighted by average chroma (full weight
    from DELTA_E_FULL_HUE_C up) so greys with different hue angles still
    count as the same colour.
    """
    d_l = (a.l - b.l) * DELTA_E_SCALE
    d_c = (a.c - b.c) * DELTA_E_SCALE
    avg_c = 0.5 * (a.c + b.c)
    chroma_weight = min(avg_c / DELTA_E_FULL_HUE_C, 1.0)
    d_h = signed_hue_difference(b.h, a.h) * chroma_weight * DELTA_E_HUE_WEIGHT
    return math.sqrt(d_l * d_l + d_c * d_c + d_h * d_h)


def hex_delta_e(hex_a: HexStr, hex_b: HexStr) -> float:
    return delta_e(hex_to_perceptual(hex_a), hex_to_perceptual(hex_b))


def _ramp_direction(colors: Sequence[PerceptualColor]) -> float:
    """+1 if the ramp gets lighter from first to last stop, else -1."""
    if len(colors) >= 2 and colors[-1].l > colors[0].l:
        return 1.0
    return -1.0


def _accept(
    candidate: PerceptualColor,
    previous: PerceptualColor,
    taken: Sequence[HexStr],
    threshold: float,
) -> Optional[Tuple[HexStr, float]]:
    hex_str = perceptual_to_hex(candidate)
    if hex_str in taken:
        return None
    distance = delta_e(hex_to_perceptual(hex_str), previous)
    if distance < threshold:
        return None
    return hex_str, distance


def find_nudge(
    color: PerceptualColor,
    previous: PerceptualColor,
    direction: float,
    taken: Sequence[HexStr] = (),
    threshold: float = SIMILARITY_THRESHOLD,
) -> Optional[_Candidate]:
    """
    Smallest displacement of color that is at least threshold away from
    previous and renders to a hex not in taken. None if both phases fail.
    """
    for k in range(1, MAX_NUDGE_ATTEMPTS + 1):
        d_l = direction * LIGHTNESS_NUDGE_STEP * k
        hit = _accept(color.with_l(color.l + d_l), previous, taken, threshold)
        if hit is not None:
            return hit[0], NudgeAmount(lightness=d_l), hit[1]

    # greys would only pick up a tint here
    if color.c < NEAR_GREY_C:
        return None

    for k in range(1, MAX_NUDGE_ATTEMPTS + 1):
        d_l = direction * LIGHTNESS_NUDGE_STEP * k
        d_c = CHROMA_NUDGE_STEP * k
        d_h = HUE_NUDGE_STEP * k
        candidate = PerceptualColor.of(
            color.l + d_l, color.c + d_c, color.h + d_h, color.alpha
        )
        hit = _accept(candidate, previous, taken, threshold)
        if hit is not None:
            return hit[0], NudgeAmount(lightness=d_l, chroma=d_c, hue=d_h), hit[1]
    return None


def ensure_distinct_stops(
    stops: Sequence[Tuple[int, StopColor]],
    threshold: float = SIMILARITY_THRESHOLD,
    debug: bool = False,
) -> List[GeneratedStop]:
    """
    Serialize a ramp (already in stop order) and separate near-identical
    neighbours. Each stop is compared with its predecessor's final colour.
    """
    hexes: List[HexStr] = [perceptual_to_hex(sc.color) for _, sc in stops]
    trend = _ramp_direction([sc.color for _, sc in stops])

    out: List[GeneratedStop] = []
    for i, (number, sc) in enumerate(stops):
        if i == 0:
            out.append(
                GeneratedStop(
                    stop_number=number,
                    hex=hexes[0],
                    original_l=sc.original_l,
                    expanded_l=sc.expanded_l,
                )
            )
            continue

        previous = hex_to_perceptual(hexes[i - 1])
        current = hex_to_perceptual(hexes[i])
        distance = delta_e(current, previous)

        if distance >= threshold or sc.is_manual:
            too_similar = distance < threshold
            if too_similar and debug:
                debug_log(
                    f"stop {number}: manual override {hexes[i]} too close to"
                    f" stop {stops[i - 1][0]} (dE={distance:.2f})"
                )
            out.append(
                GeneratedStop(
                    stop_number=number,
                    hex=hexes[i],
                    original_l=sc.original_l,
                    expanded_l=sc.expanded_l,
                    too_similar=too_similar,
                    delta_e=distance,
                )
            )
            continue

        if current.l > previous.l:
            direction = 1.0
        elif current.l < previous.l:
            direction = -1.0
        else:
            direction = trend

        taken = hexes[:i] + hexes[i + 1 :]
        found = find_nudge(sc.color, previous, direction, taken, threshold)
        if found is None:
            if debug:
                debug_log(
                    f"stop {number}: {hexes[i]} could not be separated from"
                    f" stop {stops[i - 1][0]} (dE={distance:.2f})"
                )
            out.append(
                GeneratedStop(
                    stop_number=number,
                    hex=hexes[i],
                    original_l=sc.original_l,
                    expanded_l=sc.expanded_l,
                    too_similar=True,
                    delta_e=distance,
                )
            )
            continue

        new_hex, nudge, new_distance = found
        if debug:
            debug_log(
                f"stop {number}: nudged {hexes[i]} -> {new_hex}"
                f" (dL={nudge.lightness:+.3f} dC={nudge.chroma:+.3f}"
                f" dH={nudge.hue:+.1f}, dE {distance:.2f} -> {new_distance:.2f})"
            )
        was_nudged = new_hex != hexes[i]
        hexes[i] = new_hex
        out.append(
            GeneratedStop(
                stop_number=number,
                hex=new_hex,
                original_l=sc.original_l,
                expanded_l=sc.expanded_l,
                was_nudged=was_nudged,
                nudge_amount=nudge if was_nudged else None,
                delta_e=new_distance,
            )
        )
    return out


__all__ = [
    "delta_e",
    "hex_delta_e",
    "find_nudge",
    "ensure_distinct_stops",
]
