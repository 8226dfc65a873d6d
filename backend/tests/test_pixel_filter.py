"""
Unit tests for hair pixel filtering and deterministic downsampling.
"""

import numpy as np
import pytest

from irodori.services.colors.conversion import hsl_to_rgb
from irodori.services.colors.filtering import (
    downsample_points, filter_hair_pixels, rgba_pixels, sample_hair_points,
)


class TestRgbaPixels:
    """Test RGBA buffer handling"""

    def test_bytes_buffer(self, make_rgba):
        buffer = make_rgba([(1, 2, 3), (4, 5, 6)])
        pixels = rgba_pixels(buffer)
        assert pixels.shape == (2, 4)
        assert pixels[1].tolist() == [4, 5, 6, 255]

    def test_pixel_count_limits_read(self, make_rgba):
        buffer = make_rgba([(1, 2, 3), (4, 5, 6), (7, 8, 9)])
        assert rgba_pixels(buffer, 2).shape == (2, 4)

    def test_pixel_count_larger_than_buffer_is_clipped(self, make_rgba):
        buffer = make_rgba([(1, 2, 3)]) + b"\x00\x00"
        assert rgba_pixels(buffer, 10).shape == (1, 4)

    def test_image_array(self):
        image = np.zeros((4, 5, 4), dtype=np.uint8)
        assert rgba_pixels(image).shape == (20, 4)


class TestHairFilter:
    """Test the hue / saturation / lightness bands"""

    def test_in_band_pixel_is_retained(self, make_rgba):
        warm = hsl_to_rgb(30, 50, 50)
        kept = filter_hair_pixels(make_rgba([warm]), 1)
        assert kept.tolist() == [list(warm)]

    def test_out_of_band_hue_is_rejected(self, make_rgba):
        green = hsl_to_rgb(100, 50, 50)
        assert len(filter_hair_pixels(make_rgba([green]), 1)) == 0

    @pytest.mark.parametrize("hue", [0, 45, 200, 240, 300, 350])
    def test_accepted_bands(self, make_rgba, hue):
        assert len(filter_hair_pixels(make_rgba([hsl_to_rgb(hue, 60, 50)]))) == 1

    @pytest.mark.parametrize("hue", [90, 150, 270])
    def test_rejected_bands(self, make_rgba, hue):
        assert len(filter_hair_pixels(make_rgba([hsl_to_rgb(hue, 60, 50)]))) == 0

    def test_low_saturation_rejected(self, make_rgba):
        gray = (128, 128, 128)
        muted = hsl_to_rgb(30, 5, 50)
        assert len(filter_hair_pixels(make_rgba([gray, muted]))) == 0

    def test_lightness_extremes_rejected(self, make_rgba):
        dark = hsl_to_rgb(30, 80, 5)
        light = hsl_to_rgb(30, 80, 95)
        assert len(filter_hair_pixels(make_rgba([dark, light]))) == 0

    def test_alpha_is_ignored(self, make_rgba):
        warm = hsl_to_rgb(30, 50, 50)
        assert len(filter_hair_pixels(make_rgba([warm], alpha=0))) == 1

    def test_order_is_preserved(self, make_rgba):
        a = hsl_to_rgb(20, 70, 40)
        b = hsl_to_rgb(100, 70, 40)  # rejected
        c = hsl_to_rgb(210, 70, 40)
        kept = filter_hair_pixels(make_rgba([a, b, c]))
        assert kept.tolist() == [list(a), list(c)]

    def test_empty_buffer(self):
        kept = filter_hair_pixels(b"", 0)
        assert kept.shape == (0, 3)


class TestDownsampling:
    """Test deterministic index-modulo downsampling"""

    def test_small_sets_untouched(self):
        points = np.arange(3000).reshape(1000, 3)
        assert downsample_points(points) is points

    def test_every_third_point_for_2500(self):
        points = np.arange(2500 * 3).reshape(2500, 3)
        sampled = downsample_points(points)

        assert len(sampled) <= 1000
        assert len(sampled) == 834
        np.testing.assert_array_equal(sampled, points[[i for i in range(2500) if i % 3 == 0]])

    def test_custom_limit(self):
        points = np.arange(30).reshape(10, 3)
        sampled = downsample_points(points, limit=4)
        np.testing.assert_array_equal(sampled, points[[0, 3, 6, 9]])

    def test_sample_hair_points(self, make_rgba):
        warm = hsl_to_rgb(30, 50, 50)
        green = hsl_to_rgb(100, 50, 50)
        buffer = make_rgba([warm] * 2500 + [green] * 100)

        sampled, retained_count = sample_hair_points(buffer)
        assert retained_count == 2500
        assert len(sampled) == 834
        assert np.all(sampled == np.array(warm))
