"""
Irodori API Schemas
Pydantic models for palette, conversion and hair extraction responses.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

HEX_PATTERN = r"^#[0-9A-Fa-f]{6}$"
HEX_INPUT_PATTERN = r"^#?[0-9A-Fa-f]{6}$"


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("irodori", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")


# ============================================================================
# PALETTE / HARMONY SCHEMAS
# ============================================================================

class PaletteResponse(BaseModel):
    """Six-color harmony palette."""
    palette: List[str] = Field(
        ...,
        min_length=6,
        max_length=6,
        description="[base, complement, analogous +30, analogous -30, triadic +120, triadic +240]"
    )


class HarmonyResponse(BaseModel):
    """Colors for a named harmony scheme."""
    scheme: str = Field(..., description="Harmony scheme used")
    base_hex: str = Field(..., pattern=HEX_PATTERN, description="Canonical base color")
    colors: List[str] = Field(..., description="Scheme colors, base first")
    text_colors: List[str] = Field(..., description="Readable text color for each swatch")


class ColorInfoResponse(BaseModel):
    """A single color in every supported representation."""
    hex: str = Field(..., pattern=HEX_PATTERN, description="Canonical #RRGGBB")
    rgb: List[int] = Field(..., min_length=3, max_length=3, description="[r, g, b] in 0-255")
    hsl: List[float] = Field(..., min_length=3, max_length=3, description="[h, s, l], h in degrees, s/l in percent")
    hsl_display: List[str] = Field(..., min_length=3, max_length=3, description="Rounded HSL strings")
    contrast_text: str = Field(..., pattern=HEX_PATTERN, description="Black or white text color")


# ============================================================================
# HAIR EXTRACTION SCHEMAS
# ============================================================================

class HairColorRoleModel(BaseModel):
    """One hair color role."""
    role: str = Field(..., description="base, shadow1, shadow2, highlight or accent")
    label: str = Field(..., description="Display label")
    hex: str = Field(..., pattern=HEX_PATTERN, description="Role color")
    percentage: int = Field(..., ge=0, le=100, description="Brightness-rank position in percent")


class HairExtractionMetadata(BaseModel):
    """Pipeline counters for an extraction."""
    pixel_count: int = Field(..., ge=0, description="Pixels read from the image")
    retained_count: int = Field(..., ge=0, description="Pixels passing the hair filter")
    sampled_count: int = Field(..., ge=0, description="Points fed to k-means")
    k: int = Field(..., ge=1, description="Number of clusters")
    duration_ms: float = Field(..., ge=0.0, description="Pipeline duration")
    params: Dict[str, Any] = Field(default_factory=dict, description="Algorithm parameters used")


class HairExtractionResponse(BaseModel):
    """Hair color extraction result."""
    request_id: str = Field(..., description="Request identifier")
    width: int = Field(..., ge=0, description="Decoded image width")
    height: int = Field(..., ge=0, description="Decoded image height")
    colors: Dict[str, HairColorRoleModel] = Field(..., description="Role name to color")
    centroids: List[str] = Field(..., description="Raw cluster centroids as HEX")
    metadata: HairExtractionMetadata


class HairExtractB64Request(BaseModel):
    """JSON body for base64 extraction."""
    image_b64: str = Field(..., min_length=1, description="Base64 image or data URL (PNG, JPEG, WEBP)")
    k: Optional[int] = Field(None, description="Number of clusters (1-16)")
    seed: Optional[int] = Field(None, ge=0, description="Seed for centroid initialisation")


class HairPresetModel(BaseModel):
    """Hair color preset family."""
    name: str
    colors: List[str]
    description: str
