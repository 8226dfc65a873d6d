"""
Irodori API Routes
Palette generation, color conversion and hair color extraction endpoints.
"""
from typing import List, Optional

import numpy as np
from fastapi import APIRouter, File, HTTPException, Path, Query, Request, UploadFile

from irodori.config import config
from irodori.schemas import (
    HEX_INPUT_PATTERN, ColorInfoResponse, ErrorResponse, HairExtractB64Request,
    HairExtractionResponse, HairPresetModel, HarmonyResponse, PaletteResponse,
)
from irodori.services.colors.conversion import (
    contrast_text_color, format_hsl, hex_to_rgb, normalize_hex, rgb_to_hsl, valid_hex_or_default,
)
from irodori.services.colors.extraction import (
    decode_base64_bytes, extract_hair_colors, rgba_array_to_buffer,
)
from irodori.services.colors.harmony import SCHEMES, generate_palette, generate_scheme
from irodori.services.colors.presets import HairColorPreset, get_preset, get_presets
from irodori.services.imaging import decode_upload_bytes, read_upload_rgba
from irodori.utils.ids import generate_request_id
from irodori.utils.logging import get_logger
from irodori.utils.metrics import get_metrics

router = APIRouter(prefix="/v1", tags=["Colors"])
palette_router = APIRouter(prefix="/api/palette", tags=["Palette"])

SCHEME_PATTERN = "^(" + "|".join(SCHEMES) + ")$"

EXTRACTION_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid parameters or undecodable image"},
    413: {"model": ErrorResponse, "description": "Image larger than the upload limit"},
    415: {"model": ErrorResponse, "description": "Unsupported media type"},
}


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or generate_request_id()


def _count(endpoint: str):
    if config.METRICS_ENABLED:
        get_metrics().increment_request_count(endpoint)


def _validate_extraction_params(k: int, max_samples: int):
    if not config.validate_k(k):
        raise HTTPException(status_code=400, detail="Invalid k value, expected 1-16")
    if not config.validate_max_samples(max_samples):
        raise HTTPException(status_code=400, detail="Invalid max_samples value, expected 1-50000")


@palette_router.get(
    "/generate",
    response_model=PaletteResponse,
    summary="Generate color palette",
    description="Six-color palette (base, complement, analogous, triadic) from a base HEX color."
)
def generate_palette_endpoint(
    base_color: str = Query(..., alias="baseColor", pattern=HEX_INPUT_PATTERN,
                            description="Base color, e.g. #3B82F6")
) -> PaletteResponse:
    _count("palette_generate")
    return PaletteResponse(palette=generate_palette(base_color))


@router.get(
    "/colors/convert",
    response_model=ColorInfoResponse,
    summary="Describe a color",
    description="HEX, RGB, HSL and the readable text color for one HEX value."
)
def convert_color(
    hex_color: str = Query(..., alias="hex", pattern=HEX_INPUT_PATTERN, description="Color as HEX")
) -> ColorInfoResponse:
    _count("colors_convert")
    rgb = hex_to_rgb(hex_color)
    hsl = rgb_to_hsl(*rgb)
    canonical = normalize_hex(hex_color)
    return ColorInfoResponse(
        hex=canonical,
        rgb=list(rgb),
        hsl=list(hsl),
        hsl_display=list(format_hsl(hsl)),
        contrast_text=contrast_text_color(canonical),
    )


@router.get(
    "/harmony",
    response_model=HarmonyResponse,
    summary="Harmony scheme",
    description="Colors for a harmony scheme: " + ", ".join(SCHEMES)
)
def harmony(
    base_hex: str = Query(..., pattern=HEX_INPUT_PATTERN, description="Base color"),
    scheme: str = Query("full", pattern=SCHEME_PATTERN, description="Harmony scheme")
) -> HarmonyResponse:
    _count("harmony")
    colors = generate_scheme(base_hex, scheme)
    return HarmonyResponse(
        scheme=scheme,
        base_hex=normalize_hex(base_hex),
        colors=colors,
        text_colors=[contrast_text_color(color) for color in colors],
    )


def _run_extraction(request_id: str, rgba: np.ndarray, k: int,
                    seed: Optional[int], max_samples: int) -> HairExtractionResponse:
    log = get_logger().for_request(request_id)
    height, width = rgba.shape[:2]
    buffer, pixel_count = rgba_array_to_buffer(rgba)

    result = extract_hair_colors(
        buffer, pixel_count,
        k=k,
        rng_seed=seed if seed is not None else config.KMEANS_SEED,
        max_samples=max_samples,
        max_iter=config.KMEANS_MAX_ITER,
        tolerance=config.KMEANS_TOLERANCE,
    )

    if config.METRICS_ENABLED:
        metrics = get_metrics()
        metrics.record_timing("hair_extraction", result.duration_ms)
        metrics.record_retained_ratio(result.retained_count, result.pixel_count)

    if result.retained_count == 0:
        log.warning("No hair-like pixels found, returning fallback roles")

    payload = result.to_dict()
    return HairExtractionResponse(
        request_id=request_id,
        width=width,
        height=height,
        colors=payload["colors"],
        centroids=payload["centroids"],
        metadata=payload["metadata"],
    )


@router.post(
    "/hair/extract",
    response_model=HairExtractionResponse,
    responses=EXTRACTION_ERRORS,
    summary="Extract hair colors from an upload",
    description="Filter hair-like pixels, cluster them with k-means and assign the five hair color roles."
)
async def extract_hair_from_upload(
    request: Request,
    file: UploadFile = File(..., description="PNG, JPEG or WEBP image"),
    k: int = Query(config.HAIR_CLUSTER_K, description="Number of color clusters (1-16)"),
    seed: Optional[int] = Query(None, ge=0, description="Seed for centroid initialisation"),
    max_samples: int = Query(config.MAX_CLUSTER_SAMPLES,
                             description="Maximum points passed to clustering (1-50000)")
) -> HairExtractionResponse:
    _count("hair_extract")
    request_id = _request_id(request)
    _validate_extraction_params(k, max_samples)
    rgba = await read_upload_rgba(file)
    return _run_extraction(request_id, rgba, k, seed, max_samples)


@router.post(
    "/hair/extract/b64",
    response_model=HairExtractionResponse,
    responses=EXTRACTION_ERRORS,
    summary="Extract hair colors from base64 image data",
    description="Same pipeline and upload limits as /hair/extract, for a base64 PNG, JPEG or WEBP."
)
def extract_hair_from_b64(request: Request, body: HairExtractB64Request) -> HairExtractionResponse:
    _count("hair_extract_b64")
    request_id = _request_id(request)
    k = body.k if body.k is not None else config.HAIR_CLUSTER_K
    _validate_extraction_params(k, config.MAX_CLUSTER_SAMPLES)

    try:
        image_bytes = decode_base64_bytes(body.image_b64)
    except ValueError as e:
        if config.METRICS_ENABLED:
            get_metrics().increment_failure_count("decode")
        raise HTTPException(status_code=400, detail=str(e))

    rgba = decode_upload_bytes(image_bytes)
    return _run_extraction(request_id, rgba, k, body.seed, config.MAX_CLUSTER_SAMPLES)


def _preset_model(preset: HairColorPreset) -> HairPresetModel:
    return HairPresetModel(
        name=preset.name,
        colors=[valid_hex_or_default(color) for color in preset.colors],
        description=preset.description,
    )


@router.get("/hair/presets", response_model=List[HairPresetModel], summary="Hair color presets")
def list_hair_presets() -> List[HairPresetModel]:
    _count("hair_presets")
    return [_preset_model(preset) for preset in get_presets()]


@router.get(
    "/hair/presets/{name}",
    response_model=HairPresetModel,
    responses={404: {"model": ErrorResponse, "description": "Unknown preset"}},
    summary="Single hair color preset"
)
def get_hair_preset(name: str = Path(..., description="Preset family name")) -> HairPresetModel:
    _count("hair_presets")
    preset = get_preset(name)
    if preset is None:
        raise HTTPException(status_code=404, detail=f"Unknown hair color preset: {name}")
    return _preset_model(preset)
