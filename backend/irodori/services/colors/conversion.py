"""
Color space conversions for Irodori.

Single shared implementation of the HEX <-> RGB <-> HSL conversions used by
the palette generator, the hair color extractor and the API layer. All
functions work on 8-bit sRGB channel values with no gamma handling.

Conventions:
    RGB: (r, g, b) integers in [0, 255]
    HSL: (h, s, l) floats, h in [0, 360), s and l in [0, 100]
    HEX: "#RRGGBB", uppercase on output, case-insensitive on input

Malformed HEX never raises: parsing returns None and the display helpers
fall back to DEFAULT_COLOR.
"""

import math
import re
from typing import Optional, Sequence, Tuple

import numpy as np
from loguru import logger

RGB = Tuple[int, int, int]
HSL = Tuple[float, float, float]

DEFAULT_COLOR = "#3B82F6"

_HEX_PATTERN = re.compile(r"#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})")
_DISPLAY_HEX_PATTERN = re.compile(r"#[0-9a-fA-F]{6}")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 away from zero for positives."""
    return int(math.floor(value + 0.5))


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value to [lower, upper]; NaN collapses to lower."""
    if value != value:
        return lower
    return max(lower, min(upper, value))


def _to_channel(value: float) -> int:
    return int(clamp(round_half_up(clamp(float(value), -1.0, 256.0)), 0, 255))


def hex_to_rgb(hex_color: str) -> Optional[RGB]:
    """
    Parse a 6-digit HEX color.

    Args:
        hex_color: Color such as "#1F4E79" or "1f4e79"

    Returns:
        (r, g, b) tuple, or None when the input is not exactly six hex
        digits with an optional leading '#'. 3-digit shorthand is rejected.
    """
    if not isinstance(hex_color, str):
        return None
    match = _HEX_PATTERN.fullmatch(hex_color)
    if match is None:
        return None
    r, g, b = (int(part, 16) for part in match.groups())
    return r, g, b


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Encode channels as "#RRGGBB" after rounding and clamping to [0, 255]."""
    return "#{:02X}{:02X}{:02X}".format(_to_channel(r), _to_channel(g), _to_channel(b))


def normalize_hex(hex_color: str) -> Optional[str]:
    """Canonical uppercase "#RRGGBB" form, or None for invalid input."""
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return None
    return rgb_to_hex(*rgb)


def rgb_to_hsl(r: float, g: float, b: float) -> HSL:
    """
    Convert RGB channels to HSL.

    Args:
        r, g, b: Channel values, clamped to [0, 255]

    Returns:
        (h, s, l) with h in degrees [0, 360) and s, l in percent [0, 100]
    """
    r = clamp(float(r), 0.0, 255.0) / 255
    g = clamp(float(g), 0.0, 255.0) / 255
    b = clamp(float(b), 0.0, 255.0) / 255

    c_max = max(r, g, b)
    c_min = min(r, g, b)
    l = (c_max + c_min) / 2

    if c_max == c_min:
        # Achromatic
        return 0.0, 0.0, clamp(l * 100, 0.0, 100.0)

    d = c_max - c_min
    s = d / (2 - c_max - c_min) if l > 0.5 else d / (c_max + c_min)

    if c_max == r:
        h = (g - b) / d + (6 if g < b else 0)
    elif c_max == g:
        h = (b - r) / d + 2
    else:
        h = (r - g) / d + 4
    h *= 60

    h = h % 360.0
    if h >= 360.0:
        h = 0.0
    return h, clamp(s * 100, 0.0, 100.0), clamp(l * 100, 0.0, 100.0)


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """
    Convert HSL to RGB.

    Hue wraps modulo 360 to a positive angle; saturation and lightness are
    clamped to [0, 100]. Out-of-range input is never rejected.
    """
    h = float(h) % 360.0 if math.isfinite(h) else 0.0
    if h >= 360.0:
        h = 0.0
    s = clamp(float(s), 0.0, 100.0) / 100
    l = clamp(float(l), 0.0, 100.0) / 100

    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = l - c / 2

    if h < 60:
        r, g, b = c, x, 0.0
    elif h < 120:
        r, g, b = x, c, 0.0
    elif h < 180:
        r, g, b = 0.0, c, x
    elif h < 240:
        r, g, b = 0.0, x, c
    elif h < 300:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    return _to_channel((r + m) * 255), _to_channel((g + m) * 255), _to_channel((b + m) * 255)


def hex_to_hsl(hex_color: str) -> Optional[HSL]:
    """HSL for a HEX color, or None when the HEX is invalid."""
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return None
    return rgb_to_hsl(*rgb)


def hsl_to_hex(h: float, s: float, l: float) -> str:
    return rgb_to_hex(*hsl_to_rgb(h, s, l))


def rgb_to_hsl_array(rgb: np.ndarray) -> np.ndarray:
    """
    Vectorised rgb_to_hsl over an (N, 3) array.

    Uses the same formula and operation order as the scalar version so both
    agree bit for bit on 8-bit input.

    Returns:
        float64 array (N, 3) of h, s, l
    """
    rgb = np.clip(np.asarray(rgb, dtype=np.float64).reshape(-1, 3), 0.0, 255.0) / 255.0
    if rgb.shape[0] == 0:
        return np.zeros((0, 3), dtype=np.float64)

    r, g, b = rgb[:, 0], rgb[:, 1], rgb[:, 2]
    c_max = rgb.max(axis=1)
    c_min = rgb.min(axis=1)
    l = (c_max + c_min) / 2
    d = c_max - c_min

    chromatic = d > 0
    safe_d = np.where(chromatic, d, 1.0)
    denom = np.where(l > 0.5, 2 - c_max - c_min, c_max + c_min)
    s = np.where(chromatic, d / np.where(chromatic, denom, 1.0), 0.0)

    h_red = (g - b) / safe_d + np.where(g < b, 6.0, 0.0)
    h_green = (b - r) / safe_d + 2
    h_blue = (r - g) / safe_d + 4
    h = np.where(c_max == r, h_red, np.where(c_max == g, h_green, h_blue))
    h = np.where(chromatic, (h * 60) % 360.0, 0.0)

    return np.stack([h, np.clip(s * 100, 0.0, 100.0), np.clip(l * 100, 0.0, 100.0)], axis=1)


def valid_hex_or_default(color: str, default: str = DEFAULT_COLOR) -> str:
    """
    Return color when it is a displayable "#RRGGBB" value, else the default blue.
    """
    if isinstance(color, str) and _DISPLAY_HEX_PATTERN.fullmatch(color):
        return color
    logger.warning(f"Invalid color value {color!r}, using {default}")
    return default


def format_hsl(hsl: Sequence[float]) -> Tuple[str, str, str]:
    """Display strings for an HSL triple, e.g. ("210°", "89%", "60%")."""
    h, s, l = hsl
    return f"{round_half_up(h)}°", f"{round_half_up(s)}%", f"{round_half_up(l)}%"


def contrast_text_color(hex_color: str) -> str:
    """
    Pick black or white text for a swatch background.

    Perceived brightness (299R + 587G + 114B) / 1000 above 128 gives black.
    Invalid input gives black.
    """
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return "#000000"
    r, g, b = rgb
    brightness = (r * 299 + g * 587 + b * 114) / 1000
    return "#000000" if brightness > 128 else "#FFFFFF"


def color_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two RGB triples."""
    return math.sqrt(sum((float(x) - float(y)) ** 2 for x, y in zip(a, b)))
