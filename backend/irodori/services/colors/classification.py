"""
Hair color role classification.

Ranks clustered centroids by HSL lightness (brightest first) and assigns
them to five illustration roles by percentile position:

    highlight 10%, base 40%, accent 50%, shadow1 70%, shadow2 90%

Role choice is purely positional; hue plays no part.
"""

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Sequence

from loguru import logger

from .conversion import rgb_to_hex, rgb_to_hsl, round_half_up

# (role, display label, percentile position)
ROLE_PERCENTILES = (
    ("base", "Base", 0.4),
    ("shadow1", "Shadow 1", 0.7),
    ("shadow2", "Shadow 2", 0.9),
    ("highlight", "Highlight", 0.1),
    ("accent", "Accent", 0.5),
)

FALLBACK_HEX = "#000000"


@dataclass(frozen=True)
class HairColorRole:
    """A centroid assigned to a named role."""
    role: str
    label: str
    hex: str
    percentage: int


@dataclass(frozen=True)
class HairColorSet:
    """The five role assignments for one extraction."""
    base: HairColorRole
    shadow1: HairColorRole
    shadow2: HairColorRole
    highlight: HairColorRole
    accent: HairColorRole

    def roles(self) -> List[HairColorRole]:
        """Roles in display order."""
        return [self.base, self.shadow1, self.shadow2, self.highlight, self.accent]

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {role.role: asdict(role) for role in self.roles()}


def percentile_index(count: int, fraction: float) -> int:
    """floor(count * fraction), falling back to 0 when out of range."""
    index = int(math.floor(count * fraction))
    if 0 <= index < count:
        return index
    return 0


def empty_hair_color_set() -> HairColorSet:
    """All-black roles with 0% each, used when nothing was clustered."""
    return HairColorSet(**{
        role: HairColorRole(role=role, label=label, hex=FALLBACK_HEX, percentage=0)
        for role, label, _ in ROLE_PERCENTILES
    })


def classify_hair_colors(centroids: Sequence[Sequence[float]]) -> HairColorSet:
    """
    Assign centroids to the five hair color roles.

    Args:
        centroids: RGB centroids (floats are fine), e.g. kmeans_cluster output

    Returns:
        HairColorSet; all-black with 0% for empty input
    """
    colors = [tuple(float(channel) for channel in centroid[:3]) for centroid in centroids]
    if not colors:
        logger.debug("classify_hair_colors: no centroids, using fallback set")
        return empty_hair_color_set()

    # Stable sort keeps input order among equal lightness
    ranked = sorted(colors, key=lambda rgb: rgb_to_hsl(*rgb)[2], reverse=True)
    total = len(ranked)

    roles = {}
    for role, label, fraction in ROLE_PERCENTILES:
        index = percentile_index(total, fraction)
        roles[role] = HairColorRole(
            role=role,
            label=label,
            hex=rgb_to_hex(*ranked[index]),
            percentage=round_half_up(index / total * 100),
        )

    return HairColorSet(**roles)
