"""
Tests for wafercrop.image.crop module.

Tests masked circular cropping and rectangular cropping, including regions
that run past the image edge.
"""

import numpy as np
import pytest

from wafercrop.domain_types import Circle, Point, Rectangle
from wafercrop.image.crop import crop_circle, crop_rect


def make_circle(x, y, r):
    return Circle(center=Point(x=x, y=y), radius=r)


class TestCropCircle:
    """Tests for crop_circle function."""

    @pytest.fixture
    def white_image(self):
        """Uniform white image so masked pixels are easy to tell apart."""
        return np.full((300, 400, 3), 255, dtype=np.uint8)

    def test_interior_disk_size(self, white_image):
        """Test that an interior disk crops to exactly 2r x 2r."""
        result = crop_circle(white_image, make_circle(200, 150, 50))

        assert result.shape == (100, 100, 3)

    def test_corners_are_masked(self, white_image):
        """Test that pixels outside the disk are black."""
        result = crop_circle(white_image, make_circle(200, 150, 50))

        for y, x in [(0, 0), (0, 99), (99, 0), (99, 99)]:
            assert np.all(result[y, x] == 0)

    def test_center_is_kept(self, white_image):
        """Test that pixels inside the disk keep their value."""
        result = crop_circle(white_image, make_circle(200, 150, 50))

        assert np.all(result[50, 50] == 255)

    def test_fractional_circle_truncated(self, white_image):
        """Test that center and radius are truncated to whole pixels."""
        result = crop_circle(white_image, make_circle(200.9, 150.7, 50.8))

        assert result.shape[:2] == (100, 100)

    def test_disk_past_left_edge_is_truncated(self, white_image):
        """Test that a disk running past the left edge yields a narrower crop."""
        result = crop_circle(white_image, make_circle(30, 150, 50))

        # x range [-20, 80) clipped to [0, 80)
        assert result.shape[:2] == (100, 80)

    def test_disk_past_bottom_right_is_truncated(self, white_image):
        """Test clipping on the far edges."""
        result = crop_circle(white_image, make_circle(380, 280, 50))

        # x range [330, 430) -> [330, 400), y range [230, 330) -> [230, 300)
        assert result.shape[:2] == (70, 70)

    def test_disk_larger_than_image(self, white_image):
        """Test a disk covering the whole image does not fault."""
        result = crop_circle(white_image, make_circle(200, 150, 500))

        assert result.shape[:2] == (300, 400)

    def test_grayscale_input(self):
        """Test that single-channel images are masked too."""
        image = np.full((100, 100), 200, dtype=np.uint8)

        result = crop_circle(image, make_circle(50, 50, 20))

        assert result.shape == (40, 40)
        assert result[0, 0] == 0
        assert result[20, 20] == 200

    def test_source_not_modified(self, white_image):
        crop_circle(white_image, make_circle(200, 150, 50))

        assert np.all(white_image == 255)

    def test_disk_outside_image_raises(self, white_image):
        """Test a disk with no overlap is a contract violation."""
        with pytest.raises(ValueError):
            crop_circle(white_image, make_circle(2000, 2000, 50))


class TestCropRect:
    """Tests for crop_rect function."""

    @pytest.fixture
    def gradient_image(self):
        """Image whose pixel value encodes its column."""
        row = np.arange(200, dtype=np.uint8)
        return np.tile(row, (100, 1))

    def test_crop_interior(self, gradient_image):
        result = crop_rect(gradient_image, Rectangle(x=10, y=20, width=50, height=30))

        assert result.shape == (30, 50)
        assert result[0, 0] == 10
        assert result[0, -1] == 59

    def test_crop_is_copy(self, gradient_image):
        result = crop_rect(gradient_image, Rectangle(x=0, y=0, width=10, height=10))
        result[:] = 0

        assert gradient_image[0, 5] == 5

    def test_crop_clipped(self, gradient_image):
        """Test that a box running past the image is clipped."""
        result = crop_rect(gradient_image, Rectangle(x=180, y=90, width=50, height=50))

        assert result.shape == (10, 20)

    def test_crop_outside_raises(self, gradient_image):
        with pytest.raises(ValueError):
            crop_rect(gradient_image, Rectangle(x=500, y=500, width=10, height=10))
