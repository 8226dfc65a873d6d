"""
Irodori Configuration
Manages environment variables and defaults for the color services.
"""
import os
from typing import Optional


def _optional_int(name: str, minimum: Optional[int] = None) -> Optional[int]:
    value = os.environ.get(name, "").strip()
    if not value:
        return None
    number = int(value)
    if minimum is not None and number < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {number}")
    return number


class Config:
    """Configuration class for Irodori services."""

    # Service identity
    SERVICE_NAME: str = "irodori"
    VERSION: str = "1.0.0"

    # Logging
    LOG_LEVEL: str = os.environ.get("IRODORI_LOG_LEVEL", "INFO")
    LOG_JSON: bool = bool(int(os.environ.get("IRODORI_LOG_JSON", "0")))

    # Upload limits
    MAX_FILE_MB: int = int(os.environ.get("IRODORI_MAX_FILE_MB", "10"))
    MAX_EDGE: int = int(os.environ.get("IRODORI_MAX_EDGE", "0"))  # 0 keeps the full image

    # Hair extraction / clustering
    HAIR_CLUSTER_K: int = int(os.environ.get("IRODORI_HAIR_CLUSTER_K", "5"))
    KMEANS_MAX_ITER: int = int(os.environ.get("IRODORI_KMEANS_MAX_ITER", "100"))
    KMEANS_TOLERANCE: float = float(os.environ.get("IRODORI_KMEANS_TOLERANCE", "1.0"))
    KMEANS_SEED: Optional[int] = _optional_int("IRODORI_KMEANS_SEED", minimum=0)
    MAX_CLUSTER_SAMPLES: int = int(os.environ.get("IRODORI_MAX_CLUSTER_SAMPLES", "1000"))

    # CORS settings
    ALLOWED_ORIGINS: str = os.environ.get(
        "IRODORI_ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:3001"
    )

    # Observability
    METRICS_ENABLED: bool = bool(int(os.environ.get("IRODORI_METRICS_ENABLED", "1")))

    # Supported image formats
    SUPPORTED_MIME_TYPES = ["image/jpeg", "image/png", "image/webp"]
    SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp"}

    @classmethod
    def allowed_origins(cls) -> list:
        """Split the comma separated origin list."""
        return [origin.strip() for origin in cls.ALLOWED_ORIGINS.split(",") if origin.strip()]

    @classmethod
    def validate_k(cls, k: int) -> bool:
        """Validate cluster count parameter."""
        return 1 <= k <= 16

    @classmethod
    def validate_max_edge(cls, max_edge: int) -> bool:
        """Validate max_edge parameter (0 disables resizing)."""
        return max_edge == 0 or 64 <= max_edge <= 8192

    @classmethod
    def validate_max_samples(cls, max_samples: int) -> bool:
        """Validate clustering sample cap."""
        return 1 <= max_samples <= 50000


# Global config instance
config = Config()
