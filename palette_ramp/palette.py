# palette_ramp/palette.py
from __future__ import annotations

"""
Palette orchestration: every stop of a colour through the single-stop
pipeline, in ascending stop order, then the uniqueness pass.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from .constants import DEFAULT_STOPS
from .core_types import (
    ColourConfig,
    EffectiveSettings,
    PaletteResult,
    RampConfig,
    Stop,
)
from .stop_generator import StopColor, generate_stop_color, resolve_base_color
from .uniqueness import ensure_distinct_stops
from .utils import debug_log, key_value_pairs_to_string


def normalize_stops(stops: Iterable[Stop], debug: bool = False) -> List[Stop]:
    """
    Sort by stop number and drop repeated numbers (first one wins).
    No stops at all means the default 50..900 set.
    """
    seen: Dict[int, Stop] = {}
    for stop in stops:
        if stop.number in seen:
            if debug:
                debug_log(f"duplicate stop {stop.number} ignored")
            continue
        seen[stop.number] = stop
    if not seen:
        return [Stop(number=n) for n in DEFAULT_STOPS]
    return [seen[n] for n in sorted(seen)]


def generate_ramp(
    ramp: RampConfig,
    stops: Optional[Iterable[Stop]] = None,
    colour_id: str = "",
    debug: bool = False,
) -> PaletteResult:
    """Generate a full ramp from a resolved RampConfig."""
    ordered = normalize_stops(stops or (), debug)
    base = resolve_base_color(ramp.base_color, debug)
    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Colour", colour_id or "-"),
                    ("Base", ramp.base_color),
                    ("L", round(base.l, 4)),
                    ("C", round(base.c, 4)),
                    ("H", round(base.h, 2)),
                    ("Stops", len(ordered)),
                ]
            )
        )

    generated: List[Tuple[int, StopColor]] = [
        (stop.number, generate_stop_color(base, stop, ramp, debug)) for stop in ordered
    ]
    final = ensure_distinct_stops(generated, debug=debug)
    return PaletteResult(
        colour_id=colour_id,
        stops=tuple(final),
        had_duplicates=any(s.was_nudged for s in final),
    )


def generate_palette(
    colour: ColourConfig, settings: EffectiveSettings, debug: bool = False
) -> PaletteResult:
    """Generate one colour's ramp under its group's effective settings."""
    ramp = RampConfig.from_settings(colour, settings)
    return generate_ramp(ramp, colour.stops, colour_id=colour.id, debug=debug)


__all__ = [
    "normalize_stops",
    "generate_ramp",
    "generate_palette",
]
