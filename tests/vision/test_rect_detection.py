"""
Tests for wafercrop.vision.rect_detection module.

Tests the quadrilateral filter boundary and panel detection on synthetic
images.
"""

import numpy as np
import pytest

from wafercrop.domain_types import Rectangle
from wafercrop.image.converters import to_grayscale
from wafercrop.vision.params import PanelDetectionParams
from wafercrop.vision.rect_detection import (
    RectangleDetector,
    detect_quad_candidates,
    filter_quad_candidates,
    is_panel_candidate,
)


def quad(width, height, x=0, y=0):
    """Contour of an axis-aligned box whose bounding rect is width x height."""
    return np.array(
        [
            [[x, y]],
            [[x + width - 1, y]],
            [[x + width - 1, y + height - 1]],
            [[x, y + height - 1]],
        ],
        dtype=np.int32,
    )


class TestPanelFilter:
    """Tests for is_panel_candidate / filter_quad_candidates."""

    def test_minimum_size_accepted(self):
        assert is_panel_candidate(quad(940, 260)) is True

    @pytest.mark.parametrize("size", [(939, 260), (940, 259), (100, 100)])
    def test_below_minimum_rejected(self, size):
        assert is_panel_candidate(quad(*size)) is False

    def test_non_quadrilateral_rejected(self):
        triangle = np.array([[[0, 0]], [[1999, 0]], [[1000, 999]]], dtype=np.int32)

        assert is_panel_candidate(triangle) is False

    def test_filter_boundary(self):
        """Test 940x260 passes while 939x260 and 940x259 do not."""
        contours = [quad(939, 260), quad(940, 260, x=5, y=7), quad(940, 259)]

        candidates = filter_quad_candidates(contours)

        assert candidates == [Rectangle(x=5, y=7, width=940, height=260)]

    def test_filter_keeps_contour_order(self):
        """Test that candidates come back in contour order, not by size."""
        contours = [quad(1000, 300, x=1), quad(2000, 900, x=2)]

        candidates = filter_quad_candidates(contours)

        assert [c.x for c in candidates] == [1, 2]

    def test_filter_custom_floor(self):
        params = PanelDetectionParams(min_width=100, min_height=100)

        assert len(filter_quad_candidates([quad(100, 100)], params)) == 1

    def test_filter_empty(self):
        assert filter_quad_candidates([]) == []


class TestRectangleDetector:
    """Tests for RectangleDetector class."""

    @pytest.fixture
    def detector(self):
        """Create RectangleDetector instance."""
        return RectangleDetector()

    def test_default_params(self, detector):
        p = detector.params
        assert p.blur_kernel == 5
        assert (p.canny_low, p.canny_high) == (75, 200)
        assert p.epsilon_factor == pytest.approx(0.02)
        assert (p.min_width, p.min_height) == (940, 260)

    def test_detects_panel(self, detector, panel_image):
        """Test that a 1000x300 panel is found with a matching bounding box."""
        candidates = detector.detect(to_grayscale(panel_image))

        assert len(candidates) == 1
        rect = candidates[0]
        assert rect.x == pytest.approx(100, abs=3)
        assert rect.y == pytest.approx(300, abs=3)
        assert rect.width == pytest.approx(1000, abs=4)
        assert rect.height == pytest.approx(300, abs=4)

    def test_small_panel_ignored(self, detector):
        """Test that quadrilaterals under the size floor are not reported."""
        import cv2

        image = np.full((900, 1200), 40, dtype=np.uint8)
        cv2.rectangle(image, (100, 100), (600, 300), 255, -1)

        assert detector.detect(image) == []

    def test_blank_image_returns_empty(self, detector, blank_image):
        assert detector.detect(to_grayscale(blank_image)) == []

    def test_even_blur_kernel_made_odd(self):
        assert PanelDetectionParams(blur_kernel=4).blur_kernel == 5

    def test_function_matches_detector(self, panel_image):
        gray = to_grayscale(panel_image)

        assert detect_quad_candidates(gray) == RectangleDetector().detect(gray)
