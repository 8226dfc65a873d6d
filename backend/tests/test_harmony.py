"""
Unit tests for the color harmony engine.

Checks the fixed six-color recipe, hue rotation wraparound, the
complement-by-inversion rule and the invalid-input fallbacks.
"""

import pytest

from irodori.services.colors.conversion import hex_to_hsl
from irodori.services.colors.harmony import (
    SCHEMES, analogous, complementary, generate_palette, generate_scheme,
    rotate_hue, shift_lightness, triadic,
)


class TestComplementary:
    """Test RGB inversion complement"""

    def test_black_and_white(self):
        assert complementary("#000000") == "#FFFFFF"
        assert complementary("#FFFFFF") == "#000000"

    def test_inversion_is_per_channel(self):
        assert complementary("#1F4E79") == "#E0B186"
        assert complementary("#ff0000") == "#00FFFF"

    def test_invalid_returns_input(self):
        assert complementary("#12345") == "#12345"
        assert complementary("banana") == "banana"


class TestHueRotation:
    """Test hue rotation on HEX colors"""

    def test_rotate_red(self):
        assert rotate_hue("#FF0000", 120) == "#00FF00"
        assert rotate_hue("#FF0000", 240) == "#0000FF"
        assert rotate_hue("#FF0000", 30) == "#FF8000"

    def test_negative_and_large_angles_wrap(self):
        assert rotate_hue("#FF0000", -30) == "#FF0080"
        assert rotate_hue("#FF0000", 390) == rotate_hue("#FF0000", 30)
        assert rotate_hue("#FF0000", -120) == rotate_hue("#FF0000", 240)

    def test_rotation_keeps_saturation_and_lightness(self):
        base = "#1F4E79"
        h, s, l = hex_to_hsl(base)
        rh, rs, rl = hex_to_hsl(rotate_hue(base, 30))
        assert abs(rs - s) < 1.5
        assert abs(rl - l) < 0.5
        assert abs(((rh - h) % 360) - 30) < 1.5

    def test_analogous_and_triadic_are_rotations(self):
        assert analogous("#3B82F6") == rotate_hue("#3B82F6", 30)
        assert analogous("#3B82F6", -30) == rotate_hue("#3B82F6", -30)
        assert triadic("#3B82F6") == rotate_hue("#3B82F6", 120)
        assert triadic("#3B82F6", 240) == rotate_hue("#3B82F6", 240)

    def test_invalid_returns_input(self):
        assert rotate_hue("#GG0000", 30) == "#GG0000"
        assert shift_lightness("oops", 10) == "oops"


class TestGeneratePalette:
    """Test the six-color palette recipe"""

    def test_red_palette(self):
        assert generate_palette("#FF0000") == [
            "#FF0000", "#00FFFF", "#FF8000", "#FF0080", "#00FF00", "#0000FF",
        ]

    def test_palette_is_deterministic(self):
        first = generate_palette("#FF0000")
        for _ in range(5):
            assert generate_palette("#FF0000") == first

    def test_palette_size_and_order(self):
        palette = generate_palette("#3b82f6")
        assert len(palette) == 6
        assert palette[0] == "#3B82F6"
        assert palette[1] == complementary("#3B82F6")
        assert palette[2] == rotate_hue("#3B82F6", 30)
        assert palette[3] == rotate_hue("#3B82F6", -30)
        assert palette[4] == rotate_hue("#3B82F6", 120)
        assert palette[5] == rotate_hue("#3B82F6", 240)

    def test_base_without_hash_is_canonicalised(self):
        assert generate_palette("ff0000")[0] == "#FF0000"

    def test_invalid_base_falls_back_to_input(self):
        assert generate_palette("#XYZ") == ["#XYZ"] * 6


class TestSchemes:
    """Test named harmony schemes"""

    def test_complementary_scheme(self):
        assert generate_scheme("#FF0000", "complementary") == ["#FF0000", "#00FFFF"]

    def test_analogous_scheme(self):
        assert generate_scheme("#FF0000", "analogous") == ["#FF0000", "#FF8000", "#FF0080"]

    def test_triadic_scheme(self):
        assert generate_scheme("#FF0000", "triadic") == ["#FF0000", "#00FF00", "#0000FF"]

    def test_split_complementary_scheme(self):
        assert generate_scheme("#FF0000", "split-complementary") == ["#FF0000", "#00FF80", "#0080FF"]

    def test_monochromatic_scheme(self):
        assert generate_scheme("#FF0000", "monochromatic") == ["#FF0000", "#FF4040", "#FF8080"]

    def test_monochromatic_clamps_lightness(self):
        assert generate_scheme("#FFFFFF", "monochromatic") == ["#FFFFFF", "#FFFFFF", "#FFFFFF"]

    def test_full_scheme_is_palette(self):
        assert generate_scheme("#1F4E79", "full") == generate_palette("#1F4E79")

    def test_every_scheme_starts_with_base(self):
        for scheme in SCHEMES:
            assert generate_scheme("#2D7560", scheme)[0] == "#2D7560"

    def test_unknown_scheme(self):
        with pytest.raises(ValueError):
            generate_scheme("#FF0000", "tetradic")
