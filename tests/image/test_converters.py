"""
Tests for wafercrop.image.converters module.

Tests grayscale conversion, BGR promotion and byte encoding/decoding.
"""

import cv2
import numpy as np
import pytest

from wafercrop.core.exceptions import InvalidImageException
from wafercrop.image.converters import decode_image, encode_image, ensure_bgr, to_grayscale


class TestToGrayscale:
    """Tests for to_grayscale function."""

    def test_bgr_to_gray_keeps_dimensions(self):
        """Test that output is single-channel with the same width and height."""
        image = np.zeros((120, 200, 3), dtype=np.uint8)

        gray = to_grayscale(image)

        assert gray.shape == (120, 200)
        assert gray.dtype == np.uint8

    def test_uses_luma_weights(self):
        """Test that channels are weighted like OpenCV's BGR2GRAY."""
        image = np.zeros((2, 3, 3), dtype=np.uint8)
        image[:, 0] = (255, 0, 0)  # Blue
        image[:, 1] = (0, 255, 0)  # Green
        image[:, 2] = (0, 0, 255)  # Red

        gray = to_grayscale(image)

        assert gray[0, 0] == pytest.approx(0.114 * 255, abs=1)
        assert gray[0, 1] == pytest.approx(0.587 * 255, abs=1)
        assert gray[0, 2] == pytest.approx(0.299 * 255, abs=1)

    def test_returns_new_array(self):
        """Test that grayscale input is copied, not shared."""
        image = np.full((10, 10), 7, dtype=np.uint8)

        gray = to_grayscale(image)
        gray[0, 0] = 99

        assert image[0, 0] == 7

    def test_bgra_input(self):
        """Test 4-channel input is accepted."""
        image = np.zeros((10, 20, 4), dtype=np.uint8)

        assert to_grayscale(image).shape == (10, 20)

    @pytest.mark.parametrize(
        "image",
        [
            None,
            np.zeros((0, 10, 3), dtype=np.uint8),
            np.zeros((10, 0, 3), dtype=np.uint8),
            np.zeros((10,), dtype=np.uint8),
        ],
    )
    def test_malformed_input_raises(self, image):
        """Test that empty or malformed images raise InvalidImageException."""
        with pytest.raises(InvalidImageException):
            to_grayscale(image)


class TestEnsureBgr:
    """Tests for ensure_bgr function."""

    def test_gray_promoted(self):
        image = np.full((5, 6), 100, dtype=np.uint8)

        result = ensure_bgr(image)

        assert result.shape == (5, 6, 3)
        assert np.all(result == 100)

    def test_bgr_copied(self):
        image = np.zeros((5, 6, 3), dtype=np.uint8)

        result = ensure_bgr(image)

        assert result.shape == image.shape
        assert result is not image


class TestEncodeDecode:
    """Tests for encode_image / decode_image."""

    def test_png_bytes_decode_to_same_pixels(self):
        """Test that PNG is lossless through encode and decode."""
        image = np.zeros((50, 80, 3), dtype=np.uint8)
        cv2.rectangle(image, (10, 10), (40, 30), (0, 128, 255), -1)

        decoded = decode_image(encode_image(image, ".png"))

        assert decoded is not None
        np.testing.assert_array_equal(decoded, image)

    def test_format_without_dot(self):
        image = np.zeros((10, 10, 3), dtype=np.uint8)

        data = encode_image(image, "png")

        assert data[:8] == b"\x89PNG\r\n\x1a\n"

    def test_garbage_bytes_decode_to_none(self):
        assert decode_image(b"definitely not an image") is None

    def test_empty_bytes_decode_to_none(self):
        assert decode_image(b"") is None
