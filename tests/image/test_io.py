"""
Tests for wafercrop.image.io module.
"""

import numpy as np
import pytest

from wafercrop.image.io import load_image, save_image


class TestLoadImage:
    """Tests for load_image function."""

    def test_load_from_path(self, write_image, wafer_image):
        path = write_image(wafer_image)

        image = load_image(path)

        assert image is not None
        np.testing.assert_array_equal(image, wafer_image)

    def test_load_from_str_path(self, write_image, wafer_image):
        path = write_image(wafer_image)

        assert load_image(str(path)).shape == wafer_image.shape

    def test_load_from_bytes(self, write_image, wafer_image):
        data = write_image(wafer_image).read_bytes()

        image = load_image(data)

        np.testing.assert_array_equal(image, wafer_image)

    def test_missing_file_returns_none(self, tmp_path):
        assert load_image(tmp_path / "missing.png") is None

    def test_corrupt_file_returns_none(self, tmp_path):
        path = tmp_path / "corrupt.png"
        path.write_bytes(b"not a png at all")

        assert load_image(path) is None

    def test_none_source_raises(self):
        with pytest.raises(ValueError):
            load_image(None)

    def test_empty_path_raises(self):
        with pytest.raises(ValueError):
            load_image("")


class TestSaveImage:
    """Tests for save_image function."""

    def test_save_and_reload(self, tmp_path):
        image = np.full((30, 40, 3), 77, dtype=np.uint8)
        destination = tmp_path / "out.png"

        assert save_image(image, destination) is True
        np.testing.assert_array_equal(load_image(destination), image)
