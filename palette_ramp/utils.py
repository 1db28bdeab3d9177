# palette_ramp/utils.py
from __future__ import annotations

"""
Shared utilities for palette_ramp.

Includes time and number formatting, tidy print-based logging, and the
swatch-strip PNG writer used by the CLI.
"""

import sys
from pathlib import Path
from typing import Any, Iterable, List, Sequence, Tuple

import numpy as np
from PIL import Image

from .core_types import HexStr, hex_to_rgb


#  Time formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


# Swatch image


def swatch_strip_rgb(
    hexes: Sequence[HexStr], swatch_size: int = 64
) -> np.ndarray:
    """
    One square per colour, left to right, as a uint8 [H, W, 3] array.
    An empty ramp gives a zero-width strip.
    """
    size = max(1, int(swatch_size))
    strip = np.zeros((size, size * len(hexes), 3), dtype=np.uint8)
    for i, hex_str in enumerate(hexes):
        strip[:, i * size : (i + 1) * size] = np.array(
            hex_to_rgb(hex_str), dtype=np.uint8
        )
    return strip


def save_swatch_png(
    path: Path, rows: Sequence[Sequence[HexStr]], swatch_size: int = 64
) -> Tuple[int, int]:
    """
    Save ramps as a PNG, one strip per row, padded to the widest ramp.
    Returns (width, height) of the written image.
    """
    if not rows:
        raise ValueError("no ramps to draw")
    strips = [swatch_strip_rgb(hexes, swatch_size) for hexes in rows]
    width = max(s.shape[1] for s in strips)
    if width == 0:
        raise ValueError("no stops to draw")
    padded = [
        np.pad(s, ((0, 0), (0, width - s.shape[1]), (0, 0)), constant_values=255)
        for s in strips
    ]
    out = np.concatenate(padded, axis=0)
    Image.fromarray(out).save(path)
    return out.shape[1], out.shape[0]


#  CLI logging


def enable_line_buffered_stdout() -> None:
    """
    Enable line-buffered stdout when supported.
    Keeps log lines ordered with stderr output in terminals and pipes.
    """
    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (OSError, ValueError):
            pass


# Pretty logging


def format_bool_on_off(value: Any) -> str:
    """Pretty boolean: 'on'/'off' for bools; str(value) otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def format_number_compact(value: Any) -> str:
    """Pretty number: 1_234 style for ints; compact for floats; passthrough otherwise."""
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        return f"{value:.3f}".rstrip("0").rstrip(".")
    return str(value)


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """
    Format (name, value) pairs as 'Name: value' blocks separated by sep.
    Uses format_bool_on_off / format_number_compact for readability.
    """
    out: List[str] = []
    for name, value in pairs:
        display = (
            format_bool_on_off(value)
            if isinstance(value, bool)
            else format_number_compact(value)
        )
        out.append(f"{name}{eq}{display}")
    return sep.join(out)


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool
) -> None:
    """
    Emit a single human-readable config line, e.g.:
      [ramp] Method: lightness  Background: #FFFFFF  HK: off  BB: on
    Routes to debug_log() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line)


def print_banner(title: str) -> None:
    """Section banner."""
    print(f"\n=== {title} ===", flush=True)


def log(message: str) -> None:
    """Plain log line."""
    print(message, flush=True)


def debug_log(message: str) -> None:
    """Debug log line."""
    print(f"[debug] {message}", flush=True)


def warn(message: str) -> None:
    """Warning log line."""
    print(f"[warn] {message}", flush=True)


def error(message: str) -> None:
    """Error log line to stderr."""
    print(f"[error] {message}", file=sys.stderr, flush=True)


__all__ = [
    "format_seconds_compact",
    "swatch_strip_rgb",
    "save_swatch_png",
    "enable_line_buffered_stdout",
    "format_bool_on_off",
    "format_number_compact",
    "key_value_pairs_to_string",
    "print_config_line",
    "print_banner",
    "log",
    "debug_log",
    "warn",
    "error",
]
