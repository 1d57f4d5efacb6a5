"""Settings loader for model sheet builds.

Settings are optional. Without a file every run uses the built-in
defaults (2048x2048 canvas, the five standard keywords, grey
background, JPEG quality 80). A YAML file may override any subset:

    canvas:
      size: [2048, 2048]
    keywords: [front, back, left, right, hero]
    grid_order: [front, right, left, back]
    background: "#808080"
    jpeg_quality: 80
    fit:
      padding: 0.95
      min_scale: 0.05
      max_scale: 2.0

Processing: parse YAML, merge over defaults, validate, then convert the
background hex string to RGB and the canvas size to a tuple.
"""

import copy
from pathlib import Path

import yaml

from .common import parse_hex_color
from .compositor import FIT_PADDING, MAX_SCALE, MIN_SCALE
from .matcher import DEFAULT_KEYWORDS
from .planner import DEFAULT_CANVAS_SIZE, DEFAULT_GRID_ORDER, HERO_KEYWORD


DEFAULT_BACKGROUND = "#808080"

DEFAULT_JPEG_QUALITY = 80

DEFAULT_SETTINGS = {
    "canvas": {"size": list(DEFAULT_CANVAS_SIZE)},
    "keywords": list(DEFAULT_KEYWORDS),
    "grid_order": list(DEFAULT_GRID_ORDER),
    "background": DEFAULT_BACKGROUND,
    "jpeg_quality": DEFAULT_JPEG_QUALITY,
    "fit": {
        "padding": FIT_PADDING,
        "min_scale": MIN_SCALE,
        "max_scale": MAX_SCALE,
    },
}

VALID_TOP_LEVEL_KEYS = set(DEFAULT_SETTINGS)


# ── Loading ───────────────────────────────────────────────────────


def load_settings(settings_path: str | Path | None = None) -> dict:
    """Load, validate, and normalize build settings.

    Args:
        settings_path: YAML file to read, or None for defaults only.

    Returns:
        Settings dict with canvas.size as a tuple and background as RGB.

    Raises:
        ValueError: Unknown key or out-of-range value.
        FileNotFoundError: Missing settings file.
    """
    raw = {}
    if settings_path is not None:
        with open(settings_path) as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"{settings_path}: settings must be a mapping")
    return normalize_settings(raw)


def normalize_settings(raw: dict) -> dict:
    """Merge raw overrides onto the defaults and validate the result."""
    unknown = set(raw) - VALID_TOP_LEVEL_KEYS
    if unknown:
        raise ValueError(
            f"Unknown settings key(s): {sorted(unknown)}. "
            f"Valid: {sorted(VALID_TOP_LEVEL_KEYS)}"
        )

    settings = copy.deepcopy(DEFAULT_SETTINGS)
    for key, value in raw.items():
        if isinstance(value, dict) and isinstance(settings[key], dict):
            settings[key].update(value)
        else:
            settings[key] = value

    _validate(settings)

    settings["canvas"]["size"] = tuple(int(v) for v in settings["canvas"]["size"])
    settings["background"] = parse_hex_color(settings["background"])
    return settings


# ── Validation ────────────────────────────────────────────────────


def _validate(settings: dict) -> None:
    for section in ("canvas", "fit"):
        if not isinstance(settings[section], dict):
            raise ValueError(f"{section} must be a mapping")

    size = settings["canvas"].get("size")
    if (
        not isinstance(size, (list, tuple))
        or len(size) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) and v > 0 for v in size)
    ):
        raise ValueError(f"canvas.size must be two positive integers, got {size!r}")

    keywords = settings["keywords"]
    if (
        not isinstance(keywords, list)
        or not keywords
        or not all(isinstance(k, str) and k.strip() for k in keywords)
    ):
        raise ValueError("keywords must be a non-empty list of strings")

    lowered = [k.lower() for k in keywords]
    grid_order = settings["grid_order"]
    if not isinstance(grid_order, list) or not all(isinstance(k, str) for k in grid_order):
        raise ValueError("grid_order must be a list of strings")
    seen = set()
    for k in grid_order:
        if k.lower() in seen:
            raise ValueError(f"grid_order: duplicate keyword '{k}'")
        seen.add(k.lower())
        if k.lower() == HERO_KEYWORD:
            raise ValueError("grid_order: 'hero' cannot be placed in the grid")
        if k.lower() not in lowered:
            raise ValueError(
                f"grid_order: '{k}' is not one of the keywords {keywords}"
            )

    if not isinstance(settings["background"], str):
        raise ValueError("background must be a hex color string like '#808080'")

    quality = settings["jpeg_quality"]
    if not isinstance(quality, int) or isinstance(quality, bool) or not (1 <= quality <= 100):
        raise ValueError(f"jpeg_quality must be an integer 1-100, got {quality!r}")

    fit = settings["fit"]
    unknown_fit = set(fit) - set(DEFAULT_SETTINGS["fit"])
    if unknown_fit:
        raise ValueError(f"Unknown fit key(s): {sorted(unknown_fit)}")
    padding = fit["padding"]
    if not isinstance(padding, (int, float)) or not (0 < padding <= 1):
        raise ValueError(f"fit.padding must be in (0, 1], got {padding!r}")
    lo, hi = fit["min_scale"], fit["max_scale"]
    if (
        not isinstance(lo, (int, float))
        or not isinstance(hi, (int, float))
        or lo <= 0
        or lo > hi
    ):
        raise ValueError(
            f"fit.min_scale/max_scale must satisfy 0 < min <= max, got {lo!r}/{hi!r}"
        )
