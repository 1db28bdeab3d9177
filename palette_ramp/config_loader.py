# palette_ramp/config_loader.py
from __future__ import annotations

"""
JSON ramp documents.

Shape:
  {
    "settings": {
      "method": "lightness" | "contrast",
      "background": "#FFFFFF",
      "default_lightness": {"50": 0.97, ...},   # merged over the built-in table
      "default_contrast": {"500": 4.5, ...}
    },
    "colours": [
      {
        "id": "brand",
        "label": "Brand",
        "base": "#3B82F6",
        "method": "contrast",                    # optional override
        "hk_correction": false,
        "bb_correction": false,
        "preserve_identity": true,
        "hue_shift_curve": "natural" | {"preset": "custom", "light": 6, "dark": -8},
        "chroma_curve": "bell" | {"preset": "custom", "light": 40, "mid": 100, "dark": 70},
        "hue_shift": {"amount": 10, "direction": "warm-cool"},
        "chroma_shift": {"amount": 30, "direction": "vivid-muted"},
        "apply_corrections_to_manual": false,
        "stops": [50, 100, {"number": 500, "lightness": 0.6, "manual": "#1D4ED8"}]
      }
    ]
  }

Keys starting with '_' are ignored. Structural problems raise ValueError.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .colour_convert import FALLBACK_COLOR, parse_color
from .constants import DEFAULT_BACKGROUND, DEFAULT_CONTRAST, DEFAULT_LIGHTNESS
from .core_types import (
    CHROMA_CURVE_PRESETS,
    CHROMA_SHIFT_DIRECTIONS,
    EMPHASIS_METHODS,
    HUE_SHIFT_DIRECTIONS,
    HUE_SHIFT_PRESETS,
    ChromaCurve,
    ColourConfig,
    EffectiveSettings,
    HueShiftCurve,
    LinearChromaShift,
    LinearHueShift,
    PerceptualColor,
    Stop,
)


def _require_mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"{where}: expected an object, got {type(value).__name__}")
    return value


def _number(value: Any, where: str) -> float:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{where}: expected a number, got {value!r}")
    return float(value)


def _optional_number(data: Mapping[str, Any], key: str, where: str) -> Optional[float]:
    if data.get(key) is None:
        return None
    return _number(data[key], f"{where}.{key}")


def _flag(data: Mapping[str, Any], key: str, default: bool, where: str) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"{where}.{key}: expected true/false, got {value!r}")
    return value


def _choice(value: Any, allowed: Tuple[str, ...], where: str) -> str:
    if value not in allowed:
        raise ValueError(f"{where}: {value!r} is not one of {', '.join(allowed)}")
    return value


def _stop_table(
    raw: Any, base: Mapping[int, float], where: str
) -> Dict[int, float]:
    """Merge {"stop": value} entries over a default table."""
    table = dict(base)
    if raw is None:
        return table
    for key, value in _require_mapping(raw, where).items():
        try:
            number = int(key)
        except ValueError:
            raise ValueError(f"{where}: stop key {key!r} is not an integer") from None
        table[number] = _number(value, f"{where}[{key}]")
    return table


def settings_from_dict(data: Optional[Mapping[str, Any]]) -> EffectiveSettings:
    """Build EffectiveSettings from the 'settings' object (all keys optional)."""
    if data is None:
        return EffectiveSettings()
    data = _require_mapping(data, "settings")
    background = data.get("background", DEFAULT_BACKGROUND)
    if not isinstance(background, str):
        raise ValueError(f"settings.background: expected a colour string, got {background!r}")
    return EffectiveSettings(
        method=_choice(data.get("method", "lightness"), EMPHASIS_METHODS, "settings.method"),
        default_lightness=_stop_table(
            data.get("default_lightness"), DEFAULT_LIGHTNESS, "settings.default_lightness"
        ),
        default_contrast=_stop_table(
            data.get("default_contrast"), DEFAULT_CONTRAST, "settings.default_contrast"
        ),
        background_color=background,
    )


def _manual_colour(value: Any, where: str) -> PerceptualColor:
    if isinstance(value, dict):
        return PerceptualColor.of(
            _number(value.get("l"), f"{where}.l"),
            _number(value.get("c"), f"{where}.c"),
            _number(value.get("h"), f"{where}.h"),
            _number(value.get("alpha", 1.0), f"{where}.alpha"),
        )
    if isinstance(value, str):
        color = parse_color(value)
        if color is FALLBACK_COLOR:
            raise ValueError(f"{where}: unrecognised colour {value!r}")
        return color
    raise ValueError(f"{where}: expected a colour string or {{l, c, h}} object")


def stop_from_dict(raw: Any, where: str = "stop") -> Stop:
    """A stop is a bare number or an object with 'number' plus overrides."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        number = raw
        raw = {}
    else:
        data = _require_mapping(raw, where)
        value = data.get("number")
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{where}.number: expected an integer, got {value!r}")
        number = value
    if number <= 0:
        raise ValueError(f"{where}: stop number must be positive, got {number}")

    method = raw.get("method")
    apply_corrections = raw.get("apply_corrections")
    if apply_corrections is not None and not isinstance(apply_corrections, bool):
        raise ValueError(f"{where}.apply_corrections: expected true/false")
    return Stop(
        number=number,
        lightness_override=_optional_number(raw, "lightness", where),
        contrast_override=_optional_number(raw, "contrast", where),
        manual_override=(
            None if raw.get("manual") is None else _manual_colour(raw["manual"], f"{where}.manual")
        ),
        method_override=(
            None if method is None else _choice(method, EMPHASIS_METHODS, f"{where}.method")
        ),
        apply_corrections_to_manual=apply_corrections,
    )


def _hue_shift_curve(raw: Any, where: str) -> Optional[HueShiftCurve]:
    if raw is None:
        return None
    if isinstance(raw, str):
        preset = _choice(raw, HUE_SHIFT_PRESETS, where)
        if preset == "custom":
            raise ValueError(f"{where}: 'custom' needs an object with light/dark")
        return HueShiftCurve(preset=preset)
    data = _require_mapping(raw, where)
    return HueShiftCurve(
        preset=_choice(data.get("preset", "custom"), HUE_SHIFT_PRESETS, f"{where}.preset"),
        light_shift=_optional_number(data, "light", where),
        dark_shift=_optional_number(data, "dark", where),
    )


def _chroma_curve(raw: Any, where: str) -> Optional[ChromaCurve]:
    if raw is None:
        return None
    if isinstance(raw, str):
        preset = _choice(raw, CHROMA_CURVE_PRESETS, where)
        if preset == "custom":
            raise ValueError(f"{where}: 'custom' needs an object with light/mid/dark")
        return ChromaCurve(preset=preset)
    data = _require_mapping(raw, where)
    return ChromaCurve(
        preset=_choice(data.get("preset", "custom"), CHROMA_CURVE_PRESETS, f"{where}.preset"),
        light_pct=_optional_number(data, "light", where),
        mid_pct=_optional_number(data, "mid", where),
        dark_pct=_optional_number(data, "dark", where),
    )


def _hue_shift(raw: Any, where: str) -> Optional[LinearHueShift]:
    if raw is None:
        return None
    data = _require_mapping(raw, where)
    amount = _number(data.get("amount", 0.0), f"{where}.amount")
    if amount < 0:
        raise ValueError(f"{where}.amount: must be >= 0")
    return LinearHueShift(
        amount_deg=amount,
        direction=_choice(
            data.get("direction", "warm-cool"), HUE_SHIFT_DIRECTIONS, f"{where}.direction"
        ),
    )


def _chroma_shift(raw: Any, where: str) -> Optional[LinearChromaShift]:
    if raw is None:
        return None
    data = _require_mapping(raw, where)
    amount = _number(data.get("amount", 0.0), f"{where}.amount")
    if not 0.0 <= amount <= 100.0:
        raise ValueError(f"{where}.amount: must be within 0..100")
    return LinearChromaShift(
        amount_pct=amount,
        direction=_choice(
            data.get("direction", "vivid-muted"),
            CHROMA_SHIFT_DIRECTIONS,
            f"{where}.direction",
        ),
    )


def colour_from_dict(data: Any, index: int = 0) -> ColourConfig:
    """One entry of the 'colours' list."""
    where = f"colours[{index}]"
    data = _require_mapping(data, where)
    base = data.get("base")
    if not isinstance(base, str):
        raise ValueError(f"{where}.base: expected a colour string, got {base!r}")

    raw_stops = data.get("stops", [])
    if not isinstance(raw_stops, list):
        raise ValueError(f"{where}.stops: expected a list")
    method = data.get("method")

    colour_id = str(data.get("id", f"colour-{index + 1}"))
    return ColourConfig(
        id=colour_id,
        label=str(data.get("label", colour_id)),
        base_color=base,
        stops=tuple(
            stop_from_dict(s, f"{where}.stops[{i}]") for i, s in enumerate(raw_stops)
        ),
        method_override=(
            None if method is None else _choice(method, EMPHASIS_METHODS, f"{where}.method")
        ),
        hk_correction=_flag(data, "hk_correction", False, where),
        bb_correction=_flag(data, "bb_correction", False, where),
        preserve_identity=_flag(data, "preserve_identity", True, where),
        hue_shift_curve=_hue_shift_curve(data.get("hue_shift_curve"), f"{where}.hue_shift_curve"),
        chroma_curve=_chroma_curve(data.get("chroma_curve"), f"{where}.chroma_curve"),
        hue_shift=_hue_shift(data.get("hue_shift"), f"{where}.hue_shift"),
        chroma_shift=_chroma_shift(data.get("chroma_shift"), f"{where}.chroma_shift"),
        apply_corrections_to_manual=_flag(data, "apply_corrections_to_manual", False, where),
    )


def config_from_dict(
    data: Any,
) -> Tuple[EffectiveSettings, List[ColourConfig]]:
    data = _require_mapping(data, "document")
    raw_colours = data.get("colours", [])
    if not isinstance(raw_colours, list):
        raise ValueError("colours: expected a list")
    settings = settings_from_dict(data.get("settings"))
    colours = [colour_from_dict(c, i) for i, c in enumerate(raw_colours)]
    return settings, colours


def load_config(path: Path) -> Tuple[EffectiveSettings, List[ColourConfig]]:
    """
    Load a ramp document from JSON.

    Returns:
      (settings, colours). Raises ValueError for malformed JSON or structure,
      OSError if the file cannot be read.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = {k: v for k, v in data.items() if not k.startswith("_")}
    return config_from_dict(data)


__all__ = [
    "settings_from_dict",
    "stop_from_dict",
    "colour_from_dict",
    "config_from_dict",
    "load_config",
]
