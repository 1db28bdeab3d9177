#!/usr/bin/env python3
"""
palette_ramp.cli
Generate multi-stop colour ramps from a base colour.

Usage:
  palette-ramp BASE [--method lightness|contrast] [--background HEX]
               [--hue-curve PRESET] [--chroma-curve PRESET] [--hk] [--bb]
               [--hue-shift DEG] [--chroma-shift PCT] [--no-preserve-identity]
               [--stops 50,100,...] [--swatch PNG] [--swatch-size N] [--debug]
  palette-ramp --config ramps.json [--jobs N] [--swatch PNG] [--debug]

Modes:
  single : one ramp from BASE and the flags.
  config : every colour of a JSON document (see palette_ramp.config_loader).

Output:
  One line per stop: number, hex, OKLCh, and flags for nudged or too-similar
  stops. --swatch also writes a PNG with one strip per ramp.
"""

from __future__ import annotations

import argparse
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .colour_convert import hex_to_perceptual, oklch_to_css
from .core_types import (
    CHROMA_CURVE_PRESETS,
    CHROMA_SHIFT_DIRECTIONS,
    EMPHASIS_METHODS,
    HUE_SHIFT_DIRECTIONS,
    HUE_SHIFT_PRESETS,
    ChromaCurve,
    ColourConfig,
    EffectiveSettings,
    GeneratedStop,
    HueShiftCurve,
    LinearChromaShift,
    LinearHueShift,
    PaletteResult,
    Stop,
)
from .config_loader import load_config, settings_from_dict
from .palette import generate_palette
from .utils import (
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_seconds_compact,
    log,
    print_banner,
    print_config_line,
    save_swatch_png,
    warn,
)

# CLI args & small helpers


def _parse_stops(text: str) -> List[int]:
    try:
        numbers = [int(part) for part in text.split(",") if part.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid stop list {text!r}") from None
    if not numbers or any(n <= 0 for n in numbers):
        raise argparse.ArgumentTypeError("stops must be positive integers")
    return numbers


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return value


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments for ramp generation.

    Returns:
      argparse.Namespace with:
        base: base colour text (hex, rgb(), oklch()) or None with --config
        config: optional Path to a JSON ramp document
        method, background, hue_curve, chroma_curve: single-ramp settings
        hue_shift / chroma_shift (+ directions): linear shifts
        hk, bb, preserve_identity: correction flags
        stops: list of stop numbers or None for the defaults
        swatch: optional PNG Path
        jobs: ramps generated in parallel
        debug: bool for per-stop diagnostics
    """
    parser = argparse.ArgumentParser(
        prog="palette-ramp",
        description="Generate perceptual colour ramps with tidy, readable output.",
    )
    parser.add_argument("base", nargs="?", default=None, help="Base colour")
    parser.add_argument(
        "--config", type=Path, default=None, help="JSON ramp document"
    )
    parser.add_argument(
        "--method", choices=list(EMPHASIS_METHODS), default="lightness"
    )
    parser.add_argument(
        "--background", default="#FFFFFF", help="Background for contrast mode"
    )
    parser.add_argument(
        "--hue-curve",
        choices=[p for p in HUE_SHIFT_PRESETS if p != "custom"],
        default="none",
    )
    parser.add_argument(
        "--chroma-curve",
        choices=[p for p in CHROMA_CURVE_PRESETS if p != "custom"],
        default="flat",
    )
    parser.add_argument(
        "--hue-shift", type=float, default=0.0, help="Linear hue shift in degrees"
    )
    parser.add_argument(
        "--hue-shift-direction", choices=list(HUE_SHIFT_DIRECTIONS), default="warm-cool"
    )
    parser.add_argument(
        "--chroma-shift", type=float, default=0.0, help="Linear chroma shift in percent"
    )
    parser.add_argument(
        "--chroma-shift-direction",
        choices=list(CHROMA_SHIFT_DIRECTIONS),
        default="vivid-muted",
    )
    parser.add_argument(
        "--hk", action="store_true", help="Helmholtz-Kohlrausch brightness compensation"
    )
    parser.add_argument(
        "--bb", action="store_true", help="Bezold-Brucke hue drift compensation"
    )
    parser.add_argument(
        "--no-preserve-identity",
        dest="preserve_identity",
        action="store_false",
        help="Allow very light stops to wash out to grey",
    )
    parser.add_argument(
        "--stops", type=_parse_stops, default=None, help="Comma-separated stop numbers"
    )
    parser.add_argument(
        "--swatch", type=Path, default=None, help="Write a swatch PNG"
    )
    parser.add_argument(
        "--swatch-size", type=_positive_int, default=64, help="Swatch square size"
    )
    parser.add_argument(
        "--jobs", type=_positive_int, default=1, help="Ramps generated in parallel"
    )
    parser.add_argument("--debug", action="store_true", help="Per-stop details")
    args = parser.parse_args(argv)
    if args.base is None and args.config is None:
        parser.error("give a BASE colour or --config FILE")
    if args.base is not None and args.config is not None:
        parser.error("BASE and --config are mutually exclusive")
    return args


def colour_from_args(args: argparse.Namespace) -> ColourConfig:
    stops = tuple(Stop(number=n) for n in args.stops) if args.stops else ()
    return ColourConfig(
        id="ramp",
        label=args.base,
        base_color=args.base,
        stops=stops,
        hk_correction=args.hk,
        bb_correction=args.bb,
        preserve_identity=args.preserve_identity,
        hue_shift_curve=HueShiftCurve(preset=args.hue_curve),
        chroma_curve=ChromaCurve(preset=args.chroma_curve),
        hue_shift=(
            LinearHueShift(max(0.0, args.hue_shift), args.hue_shift_direction)
            if args.hue_shift
            else None
        ),
        chroma_shift=(
            LinearChromaShift(
                min(100.0, max(0.0, args.chroma_shift)), args.chroma_shift_direction
            )
            if args.chroma_shift
            else None
        ),
    )


def _load_job(
    args: argparse.Namespace,
) -> Tuple[EffectiveSettings, List[ColourConfig]]:
    if args.config is not None:
        return load_config(args.config)
    settings = settings_from_dict(
        {"method": args.method, "background": args.background}
    )
    return settings, [colour_from_args(args)]


# Reporting


def _stop_flags(stop: GeneratedStop) -> str:
    flags = []
    if stop.was_nudged:
        flags.append("nudged")
    if stop.too_similar:
        flags.append(f"too similar (dE={stop.delta_e:.2f})")
    return ", ".join(flags)


def report_palette(colour: ColourConfig, result: PaletteResult, debug: bool) -> None:
    print_banner(colour.label or colour.id)
    for stop in result.stops:
        css = oklch_to_css(hex_to_perceptual(stop.hex))
        line = f"  {stop.stop_number:>5}  {stop.hex}  {css}"
        flags = _stop_flags(stop)
        if flags:
            line += f"  [{flags}]"
        log(line)
        if debug:
            debug_log(
                f"  {stop.stop_number}: original_l={stop.original_l:.4f}"
                f" expanded_l={stop.expanded_l:.4f}"
                + ("" if stop.delta_e is None else f" dE={stop.delta_e:.2f}")
            )
    if result.had_duplicates:
        log("  some stops were nudged apart to stay distinct")
    unresolved = [s.stop_number for s in result.stops if s.too_similar]
    if unresolved:
        warn(f"{colour.id}: stops {unresolved} are still too similar to their neighbour")


# Entry point


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    CLI entry point.

    Returns the process exit status: 0 on success, 2 for unreadable or
    malformed input.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)
    t_start = time.perf_counter()

    try:
        settings, colours = _load_job(args)
    except (OSError, ValueError) as e:
        error(str(e))
        return 2
    if not colours:
        warn("no colours to generate")
        return 0

    print_config_line(
        "run",
        [
            ("Method", settings.method),
            ("Background", settings.background_color),
            ("Colours", len(colours)),
            ("Jobs", args.jobs),
        ],
        debug=False,
    )

    if args.jobs == 1 or len(colours) == 1:
        results = [generate_palette(c, settings, debug=args.debug) for c in colours]
    else:
        # debug output from worker threads would interleave
        with ThreadPoolExecutor(max_workers=args.jobs) as ex:
            futures = [ex.submit(generate_palette, c, settings) for c in colours]
            results = [f.result() for f in futures]

    for colour, result in zip(colours, results):
        report_palette(colour, result, args.debug)

    if args.swatch is not None:
        try:
            width, height = save_swatch_png(
                args.swatch, [r.hexes for r in results], args.swatch_size
            )
        except (OSError, ValueError) as e:
            error(f"could not write {args.swatch}: {e}")
            return 2
        log(f"\nWrote {args.swatch.name} | size={width}x{height}")

    log(f"Total time {format_seconds_compact(time.perf_counter() - t_start)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
