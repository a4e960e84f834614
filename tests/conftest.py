"""
Pytest configuration and fixtures for wafer-crop tests
"""

from unittest.mock import MagicMock

import cv2
import numpy as np
import pytest

from wafercrop.services.crop_service import CropService

BACKGROUND = 40
FOREGROUND = 230


def draw_wafer(image, center, radius=200):
    """Draw a bright filled disk (anti-aliased edge)."""
    cv2.circle(image, center, radius, (FOREGROUND,) * 3, -1, lineType=cv2.LINE_AA)
    return image


def draw_panel(image, top_left, size):
    """Draw a bright filled axis-aligned panel of size (width, height)."""
    x, y = top_left
    w, h = size
    cv2.rectangle(image, (x, y), (x + w - 1, y + h - 1), (255, 255, 255), -1)
    return image


@pytest.fixture
def blank_image():
    """Uniform image without any feature"""
    return np.full((900, 1200, 3), 128, dtype=np.uint8)


@pytest.fixture
def wafer_image():
    """Single wafer disk (r=200) centered at (600, 450), no panel"""
    image = np.full((900, 1200, 3), BACKGROUND, dtype=np.uint8)
    return draw_wafer(image, (600, 450))


@pytest.fixture
def panel_image():
    """Single 1000x300 panel at (100, 300), no wafer"""
    image = np.full((900, 1200, 3), BACKGROUND, dtype=np.uint8)
    return draw_panel(image, (100, 300), (1000, 300))


@pytest.fixture
def wafer_and_panel_image():
    """Wafer disk above a 1100x300 panel"""
    image = np.full((1200, 1400, 3), BACKGROUND, dtype=np.uint8)
    draw_wafer(image, (400, 300))
    draw_panel(image, (100, 750), (1100, 300))
    return image


@pytest.fixture
def write_image(tmp_path):
    """Write an image to a temporary PNG and return its path"""

    def _write(image, name="source.png"):
        path = tmp_path / name
        assert cv2.imwrite(str(path), image)
        return path

    return _write


@pytest.fixture
def crop_service():
    """CropService with default detectors"""
    return CropService()


@pytest.fixture
def mock_circle_detector():
    """Circle detector that finds nothing"""
    mock = MagicMock()
    mock.detect.return_value = []
    return mock


@pytest.fixture
def mock_rect_detector():
    """Rectangle detector that finds nothing"""
    mock = MagicMock()
    mock.detect.return_value = []
    return mock
