"""
Hair color preset catalogue for character illustration.

Each family lists six swatches ordered from lightest to darkest (or as a
gradient for the fantasy families).
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class HairColorPreset:
    name: str
    colors: Tuple[str, ...]
    description: str


HAIR_COLOR_PRESETS: Tuple[HairColorPreset, ...] = (
    HairColorPreset(
        name="Blonde",
        colors=("#F4E4BC", "#E6D3A3", "#D4C08A", "#C2AD71", "#B09A58", "#9E873F"),
        description="Bright and clean. Ideal for golden-haired characters.",
    ),
    HairColorPreset(
        name="Brown",
        colors=("#8B4513", "#A0522D", "#CD853F", "#D2691E", "#B8860B", "#DAA520"),
        description="Natural and approachable. Suits most characters.",
    ),
    HairColorPreset(
        name="Red",
        colors=("#DC143C", "#B22222", "#CD5C5C", "#F08080", "#FA8072", "#E9967A"),
        description="Passionate and eye-catching. Ideal for characters with strong personalities.",
    ),
    HairColorPreset(
        name="Black",
        colors=("#000000", "#1C1C1C", "#2F2F2F", "#404040", "#525252", "#696969"),
        description="Mysterious. Ideal for cool, intellectual characters.",
    ),
    HairColorPreset(
        name="Pink",
        colors=("#FFC0CB", "#FFB6C1", "#FF69B4", "#FF1493", "#DB7093", "#FFB6C1"),
        description="Cute and dreamy. Ideal for fantasy characters.",
    ),
    HairColorPreset(
        name="Blue",
        colors=("#87CEEB", "#4682B4", "#1E90FF", "#4169E1", "#0000CD", "#000080"),
        description="Calm and intellectual. Ideal for science fiction characters.",
    ),
    HairColorPreset(
        name="Pastel",
        colors=("#FFE4E1", "#E6E6FA", "#F0F8FF", "#F5F5DC", "#FFFACD", "#F0FFF0"),
        description="Gentle and soft. Ideal for soothing characters.",
    ),
    HairColorPreset(
        name="Gradient",
        colors=("#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4", "#FFEAA7", "#DDA0DD"),
        description="Fantastical and striking. Ideal for special characters.",
    ),
)


def get_presets() -> List[HairColorPreset]:
    return list(HAIR_COLOR_PRESETS)


def get_preset(name: str) -> Optional[HairColorPreset]:
    """Look up a preset family by name, case-insensitively."""
    wanted = name.strip().lower()
    for preset in HAIR_COLOR_PRESETS:
        if preset.name.lower() == wanted:
            return preset
    return None
