"""
Irodori Imaging Utilities
Handles upload validation, decoding and optional downscaling.
"""
from typing import Optional

import cv2
import numpy as np
from fastapi import HTTPException, UploadFile

from irodori.config import config
from irodori.services.colors.extraction import load_rgba_image


def validate_file_upload(file: UploadFile) -> None:
    """
    Validate uploaded file metadata before reading it.

    Raises:
        HTTPException: 413 for oversized files, 415 for unsupported formats
    """
    if file.size and file.size > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    if file.content_type not in config.SUPPORTED_MIME_TYPES:
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported media type. Supported: {', '.join(config.SUPPORTED_MIME_TYPES)}"
        )

    if file.filename and "." in file.filename:
        ext = "." + file.filename.lower().rsplit(".", 1)[-1]
        if ext not in config.SUPPORTED_EXTENSIONS:
            raise HTTPException(
                status_code=415,
                detail=f"Unsupported file extension. Supported: {', '.join(sorted(config.SUPPORTED_EXTENSIONS))}"
            )


def validate_magic_bytes(file_bytes: bytes) -> str:
    """
    Check magic bytes so only real PNG, JPEG or WEBP data is decoded.

    Returns:
        Detected MIME type

    Raises:
        HTTPException: 400 for unknown or truncated data
    """
    if len(file_bytes) < 12:
        raise HTTPException(status_code=400, detail="File too small or corrupt")

    if file_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if file_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if file_bytes[:4] == b"RIFF" and file_bytes[8:12] == b"WEBP":
        return "image/webp"

    raise HTTPException(
        status_code=400,
        detail="Invalid image file. Magic bytes don't match supported formats."
    )


def decode_upload_bytes(file_bytes: bytes, max_edge: Optional[int] = None) -> np.ndarray:
    """
    Decode validated upload bytes to an RGBA array, downscaling if configured.

    Raises:
        HTTPException: 413 when too large, 400 when undecodable
    """
    if len(file_bytes) > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    validate_magic_bytes(file_bytes)

    try:
        rgba = load_rgba_image(file_bytes)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return resize_long_edge(rgba, max_edge)


async def read_upload_rgba(file: UploadFile, max_edge: Optional[int] = None) -> np.ndarray:
    """Validate, read and decode an uploaded image to RGBA."""
    validate_file_upload(file)
    try:
        file_bytes = await file.read()
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to read file: {str(e)}")
    return decode_upload_bytes(file_bytes, max_edge)


def resize_long_edge(image: np.ndarray, max_edge: Optional[int] = None) -> np.ndarray:
    """
    Resize so the longest edge is at most max_edge pixels.

    max_edge of 0 (the default config) leaves the image untouched.
    """
    if max_edge is None:
        max_edge = config.MAX_EDGE
    if not config.validate_max_edge(max_edge):
        raise ValueError(f"Invalid max_edge value: {max_edge}")
    if max_edge == 0:
        return image

    height, width = image.shape[:2]
    current_max = max(height, width)
    if current_max <= max_edge:
        return image

    scale = max_edge / current_max
    new_size = (max(1, int(width * scale)), max(1, int(height * scale)))

    # INTER_AREA for downscaling
    return cv2.resize(image, new_size, interpolation=cv2.INTER_AREA)
