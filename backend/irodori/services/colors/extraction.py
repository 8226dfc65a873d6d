"""
Hair color extraction pipeline.

raw RGBA pixels -> hair pixel filter -> downsample -> k-means -> role
classification. Also holds the image decoding helpers that turn uploaded
image bytes into the RGBA buffer the pipeline consumes.
"""

import base64
import binascii
import time
from dataclasses import dataclass, field
from io import BytesIO
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
from loguru import logger
from PIL import Image, UnidentifiedImageError

from .classification import HairColorSet, classify_hair_colors
from .clustering import CONVERGENCE_TOLERANCE, MAX_ITERATIONS, kmeans_cluster
from .conversion import rgb_to_hex
from .filtering import BufferLike, MAX_CLUSTER_SAMPLES, rgba_pixels, sample_hair_points

DEFAULT_HAIR_CLUSTERS = 5


@dataclass
class HairColorExtraction:
    """Result of one extraction run."""
    colors: HairColorSet
    centroids: List[str]
    pixel_count: int
    retained_count: int
    sampled_count: int
    k: int
    duration_ms: float
    params: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "colors": self.colors.to_dict(),
            "centroids": list(self.centroids),
            "metadata": {
                "pixel_count": self.pixel_count,
                "retained_count": self.retained_count,
                "sampled_count": self.sampled_count,
                "k": self.k,
                "duration_ms": self.duration_ms,
                "params": dict(self.params),
            },
        }


def extract_hair_colors(rgba: BufferLike,
                        pixel_count: Optional[int] = None,
                        k: int = DEFAULT_HAIR_CLUSTERS,
                        rng_seed: Optional[int] = None,
                        rng: Optional[np.random.Generator] = None,
                        max_samples: int = MAX_CLUSTER_SAMPLES,
                        max_iter: int = MAX_ITERATIONS,
                        tolerance: float = CONVERGENCE_TOLERANCE,
                        keep_empty: bool = False) -> HairColorExtraction:
    """
    Extract the five hair color roles from an RGBA pixel buffer.

    Args:
        rgba: Interleaved RGBA bytes or a uint8 array (any shape)
        pixel_count: Pixels to read from the buffer (default: all)
        k: Number of clusters
        rng_seed: Seed for centroid initialisation; None is unseeded
        rng: Explicit Generator, overrides rng_seed
        max_samples: Cap on clustering input after filtering
        max_iter: k-means iteration cap
        tolerance: k-means convergence distance
        keep_empty: k-means empty cluster policy

    Returns:
        HairColorExtraction. An image with no hair-like pixels yields the
        all-black fallback roles and no centroids.
    """
    start_time = time.time()
    total_pixels = len(rgba_pixels(rgba, pixel_count))

    sampled, retained_count = sample_hair_points(rgba, pixel_count, max_samples)

    centroids = kmeans_cluster(
        sampled, k,
        rng_seed=rng_seed, rng=rng,
        max_iter=max_iter, tolerance=tolerance, keep_empty=keep_empty,
    )
    colors = classify_hair_colors(centroids)

    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        f"Hair extraction: {total_pixels} pixels -> {retained_count} retained -> "
        f"{len(sampled)} sampled, k={k}, {duration_ms:.1f}ms"
    )

    return HairColorExtraction(
        colors=colors,
        centroids=[rgb_to_hex(*centroid) for centroid in centroids],
        pixel_count=total_pixels,
        retained_count=retained_count,
        sampled_count=len(sampled),
        k=k,
        duration_ms=duration_ms,
        params={
            "rng_seed": rng_seed,
            "max_samples": max_samples,
            "max_iter": max_iter,
            "tolerance": tolerance,
            "keep_empty": keep_empty,
        },
    )


def load_rgba_image(image_bytes: bytes) -> np.ndarray:
    """
    Decode image bytes to an (H, W, 4) uint8 RGBA array.

    Raises:
        ValueError: If the bytes are not a decodable image
    """
    try:
        with Image.open(BytesIO(image_bytes)) as image:
            rgba = image.convert("RGBA")
            return np.array(rgba, dtype=np.uint8)
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Failed to decode image data: {e}")


def decode_base64_bytes(b64_data: str) -> bytes:
    """
    Decode a base64 string or data URL to the raw image bytes.

    Raises:
        ValueError: If the payload is not valid base64
    """
    # Remove data URL prefix if present
    if "," in b64_data:
        b64_data = b64_data.split(",", 1)[1]

    try:
        return base64.b64decode(b64_data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 image data: {e}")


def decode_base64_image(b64_data: str) -> np.ndarray:
    """Decode a base64 string or data URL to an RGBA array."""
    return load_rgba_image(decode_base64_bytes(b64_data))


def rgba_array_to_buffer(image: np.ndarray) -> Tuple[bytes, int]:
    """Flatten an (H, W, 4) image into (rgba_bytes, pixel_count)."""
    if image.ndim != 3 or image.shape[2] != 4:
        raise ValueError(f"Expected RGBA image with 4 channels, got shape {image.shape}")
    height, width = image.shape[:2]
    return np.ascontiguousarray(image, dtype=np.uint8).tobytes(), height * width
