"""
Irodori Color Harmony Engine

Derives harmony palettes from a single base color using fixed color theory
rules: RGB inversion for the complement and HSL hue rotation for analogous,
triadic and split-complementary colors.

Invalid HEX input never raises here. Every derivation hands the original
string back unchanged so callers can keep rendering.
"""

from typing import Dict, List, Tuple

from loguru import logger

from .conversion import (
    hex_to_hsl, hex_to_rgb, hsl_to_hex, normalize_hex, rgb_to_hex,
)

# Hue rotations following base and complement in the six-color palette
PALETTE_ROTATIONS: Tuple[float, ...] = (30.0, -30.0, 120.0, 240.0)

SCHEME_ROTATIONS: Dict[str, Tuple[float, ...]] = {
    "analogous": (30.0, -30.0),
    "triadic": (120.0, 240.0),
    "split-complementary": (150.0, 210.0),
}

# Lightness offsets (percentage points) for monochromatic variants
MONOCHROMATIC_STEPS: Tuple[float, ...] = (12.5, 25.0)

SCHEMES = ("full", "complementary", "analogous", "triadic", "split-complementary", "monochromatic")


def _canonical(color: str) -> str:
    return normalize_hex(color) or color


def complementary(color: str) -> str:
    """
    Complement by RGB inversion (255 - channel), independent of HSL.

    Args:
        color: Base color as HEX

    Returns:
        "#RRGGBB" complement, or the input unchanged if it is not valid HEX
    """
    rgb = hex_to_rgb(color)
    if rgb is None:
        logger.warning(f"complementary: invalid color {color!r}, returned unchanged")
        return color
    r, g, b = rgb
    return rgb_to_hex(255 - r, 255 - g, 255 - b)


def rotate_hue(color: str, degrees: float) -> str:
    """
    Rotate the hue of a HEX color, keeping saturation and lightness.

    Args:
        color: Base color as HEX
        degrees: Rotation, may be negative or larger than 360

    Returns:
        Rotated "#RRGGBB", or the input unchanged if it is not valid HEX
    """
    hsl = hex_to_hsl(color)
    if hsl is None:
        logger.warning(f"rotate_hue: invalid color {color!r}, returned unchanged")
        return color
    h, s, l = hsl
    return hsl_to_hex((h + degrees) % 360.0, s, l)


def analogous(color: str, degrees: float = 30.0) -> str:
    return rotate_hue(color, degrees)


def triadic(color: str, degrees: float = 120.0) -> str:
    return rotate_hue(color, degrees)


def shift_lightness(color: str, delta: float) -> str:
    """Move lightness by delta percentage points (clamped to [0, 100])."""
    hsl = hex_to_hsl(color)
    if hsl is None:
        logger.warning(f"shift_lightness: invalid color {color!r}, returned unchanged")
        return color
    h, s, l = hsl
    return hsl_to_hex(h, s, l + delta)


def generate_palette(base_color: str) -> List[str]:
    """
    Build the six-color harmony palette for a base color.

    Order: base, complement, analogous +30°, analogous -30°,
    triadic +120°, triadic +240°. Deterministic.
    """
    palette = [_canonical(base_color), complementary(base_color)]
    palette.extend(rotate_hue(base_color, degrees) for degrees in PALETTE_ROTATIONS)
    logger.debug(f"Generated palette for {base_color}: {palette}")
    return palette


def generate_scheme(base_color: str, scheme: str = "full") -> List[str]:
    """
    Colors for a named harmony scheme, base color first.

    Args:
        base_color: Base color as HEX
        scheme: One of SCHEMES

    Raises:
        ValueError: If scheme is unknown
    """
    if scheme == "full":
        return generate_palette(base_color)

    base = _canonical(base_color)
    if scheme == "complementary":
        return [base, complementary(base_color)]
    if scheme == "monochromatic":
        return [base] + [shift_lightness(base_color, step) for step in MONOCHROMATIC_STEPS]
    if scheme in SCHEME_ROTATIONS:
        return [base] + [rotate_hue(base_color, degrees) for degrees in SCHEME_ROTATIONS[scheme]]

    raise ValueError(f"Unknown harmony scheme: {scheme}. Expected one of {', '.join(SCHEMES)}")
