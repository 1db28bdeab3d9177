# palette_ramp/__init__.py
"""
palette_ramp package.

Purpose:
  Generate multi-stop colour ramps (design tokens) from one base colour, in
  OKLCh, with contrast targets, artistic curves and perceptual corrections.
  See palette_ramp.cli for the command line.

Public API:
  generate_palette : one colour's ramp under group settings -> PaletteResult.
  generate_ramp    : ramp from a resolved RampConfig and stop list.
  generate_stop    : single stop -> '#RRGGBB'.
  load_config      : JSON ramp document -> (settings, colours).
  colour_convert   : sRGB / OKLab / OKLCh transforms, parsing, contrast.
  core_types       : value objects (PerceptualColor, Stop, RampConfig, ...).
  utils            : logging and formatting helpers, swatch PNG writer.

Quick start:
  from palette_ramp import ColourConfig, EffectiveSettings, generate_palette
  result = generate_palette(ColourConfig(id="red", base_color="#E53935"), EffectiveSettings())
  print(result.hexes)
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import colour_convert
from . import core_types
from . import utils

from .core_types import (  # noqa: E402
    ChromaCurve,
    ColourConfig,
    EffectiveSettings,
    GeneratedStop,
    HueShiftCurve,
    LinearChromaShift,
    LinearHueShift,
    NudgeAmount,
    PaletteResult,
    PerceptualColor,
    RampConfig,
    Stop,
)
from .colour_convert import contrast_ratio, hex_to_perceptual, parse_color  # noqa: E402
from .gamut import perceptual_to_hex  # noqa: E402
from .stop_generator import generate_stop  # noqa: E402
from .palette import generate_palette, generate_ramp  # noqa: E402
from .config_loader import load_config  # noqa: E402

__all__ = [
    "__version__",
    "colour_convert",
    "core_types",
    "utils",
    "ChromaCurve",
    "ColourConfig",
    "EffectiveSettings",
    "GeneratedStop",
    "HueShiftCurve",
    "LinearChromaShift",
    "LinearHueShift",
    "NudgeAmount",
    "PaletteResult",
    "PerceptualColor",
    "RampConfig",
    "Stop",
    "contrast_ratio",
    "hex_to_perceptual",
    "parse_color",
    "perceptual_to_hex",
    "generate_stop",
    "generate_palette",
    "generate_ramp",
    "load_config",
]
