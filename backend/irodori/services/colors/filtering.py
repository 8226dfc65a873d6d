"""
Hair pixel filtering.

Scans an interleaved RGBA buffer and keeps pixels whose HSL looks like a
plausible hair color rather than skin or background. The thresholds are
fixed heuristics, not tuning knobs.
"""

import math
from typing import Optional, Tuple, Union

import numpy as np
from loguru import logger

from .conversion import rgb_to_hsl_array

BufferLike = Union[bytes, bytearray, memoryview, np.ndarray]

# Accepted hue bands in degrees, inclusive: yellow-orange, pink-red, blue
HUE_BANDS = ((0.0, 60.0), (300.0, 360.0), (180.0, 240.0))
MIN_SATURATION = 10.0
MIN_LIGHTNESS = 10.0
MAX_LIGHTNESS = 90.0

MAX_CLUSTER_SAMPLES = 1000


def rgba_pixels(rgba: BufferLike, pixel_count: Optional[int] = None) -> np.ndarray:
    """
    View a flat RGBA buffer as an (N, 4) uint8 array.

    Args:
        rgba: Interleaved R, G, B, A bytes
        pixel_count: Number of pixels to read; defaults to every complete
            pixel in the buffer and is clipped to it when larger

    Returns:
        (N, 4) uint8 array
    """
    if isinstance(rgba, np.ndarray):
        flat = np.asarray(rgba, dtype=np.uint8).reshape(-1)
    else:
        flat = np.frombuffer(rgba, dtype=np.uint8)

    available = flat.size // 4
    if pixel_count is None:
        pixel_count = available
    elif pixel_count > available:
        logger.warning(f"pixel_count {pixel_count} exceeds buffer, using {available} pixels")
        pixel_count = available
    pixel_count = max(0, int(pixel_count))

    return flat[:pixel_count * 4].reshape(-1, 4)


def hair_pixel_mask(hsl: np.ndarray) -> np.ndarray:
    """Boolean mask of HSL rows that pass the hair color heuristic."""
    h, s, l = hsl[:, 0], hsl[:, 1], hsl[:, 2]

    in_band = np.zeros(len(hsl), dtype=bool)
    for low, high in HUE_BANDS:
        in_band |= (h >= low) & (h <= high)

    return (s > MIN_SATURATION) & (l > MIN_LIGHTNESS) & (l < MAX_LIGHTNESS) & in_band


def filter_hair_pixels(rgba: BufferLike, pixel_count: Optional[int] = None) -> np.ndarray:
    """
    Keep the RGB of every pixel that passes the hair color heuristic.

    A pixel is kept when saturation > 10, 10 < lightness < 90 and its hue
    falls in [0, 60], [300, 360] or [180, 240]. Alpha is ignored and pixel
    order is preserved.

    Returns:
        (N, 3) uint8 array, possibly empty
    """
    pixels = rgba_pixels(rgba, pixel_count)
    rgb = pixels[:, :3]
    if rgb.shape[0] == 0:
        return np.zeros((0, 3), dtype=np.uint8)

    keep = hair_pixel_mask(rgb_to_hsl_array(rgb))
    kept = rgb[keep]
    logger.debug(f"Hair filter: kept {len(kept)}/{len(rgb)} pixels")
    return np.ascontiguousarray(kept)


def downsample_points(points: np.ndarray, limit: int = MAX_CLUSTER_SAMPLES) -> np.ndarray:
    """
    Deterministically thin a point set to bound clustering cost.

    When there are more than limit points, every ceil(N / limit)-th point is
    kept (indices 0, step, 2*step, ...). Otherwise the set is returned as is.
    """
    count = len(points)
    if count <= limit:
        return points
    step = math.ceil(count / limit)
    sampled = points[::step]
    logger.debug(f"Downsampled {count} points with step {step} to {len(sampled)}")
    return sampled


def sample_hair_points(rgba: BufferLike, pixel_count: Optional[int] = None,
                       limit: int = MAX_CLUSTER_SAMPLES) -> Tuple[np.ndarray, int]:
    """
    Filter then downsample, producing the clustering input.

    Returns:
        (sampled points, number of pixels retained by the filter)
    """
    retained = filter_hair_pixels(rgba, pixel_count)
    return downsample_points(retained, limit), len(retained)
