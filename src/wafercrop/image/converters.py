"""
Image format conversion utilities.

Handles conversions between different image formats using OpenCV:
- Grayscale/color conversions
- Encoded bytes (PNG, JPEG, ...) to and from NumPy arrays
"""

import logging
from typing import Optional

import cv2
import numpy as np

from wafercrop.common.constants import ImageConstants
from wafercrop.core.exceptions import InvalidImageException

logger = logging.getLogger(__name__)


def validate_image(image: Optional[np.ndarray]) -> None:
    """
    Check that image is a non-empty 2D or 3D array.

    Raises:
        InvalidImageException: If the image is None, empty or has an unexpected shape
    """
    if image is None:
        raise InvalidImageException("image is None")
    if not isinstance(image, np.ndarray):
        raise InvalidImageException(f"expected numpy array, got {type(image).__name__}")
    if image.ndim not in (2, 3):
        raise InvalidImageException(f"unsupported number of dimensions: {image.ndim}")
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise InvalidImageException(f"zero dimensions: {image.shape[1]}x{image.shape[0]}")


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """
    Convert a color image to single-channel luma.

    Args:
        image: Input image (BGR, BGRA or already grayscale)

    Returns:
        New grayscale image with the same width and height

    Raises:
        InvalidImageException: If the image is malformed
    """
    validate_image(image)

    if image.ndim == 2:
        return image.copy()

    channels = image.shape[2]
    if channels == 1:
        return image[:, :, 0].copy()
    if channels == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)

    raise InvalidImageException(f"unsupported channel count: {channels}")


def ensure_bgr(image: np.ndarray) -> np.ndarray:
    """
    Ensure image is in BGR format (convert from grayscale if needed).

    Args:
        image: Input image (grayscale or BGR)

    Returns:
        Image in BGR format
    """
    if len(image.shape) == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    return image.copy()


def decode_image(data: bytes) -> Optional[np.ndarray]:
    """
    Decode encoded image bytes into a BGR array.

    Returns:
        NumPy array in BGR format, or None if the bytes are not a readable image
    """
    if not data:
        return None

    nparr = np.frombuffer(data, np.uint8)
    image = cv2.imdecode(nparr, cv2.IMREAD_COLOR)

    if image is None or image.size == 0:
        return None
    return image


def encode_image(image: np.ndarray, format: str = ImageConstants.DEFAULT_OUTPUT_FORMAT) -> bytes:
    """
    Encode image to bytes using OpenCV.

    Args:
        image: Input image as NumPy array (BGR format)
        format: Image format extension ('.png', '.jpg', ...)

    Returns:
        Encoded image bytes
    """
    ext = format.lower() if format.startswith(".") else f".{format.lower()}"

    success, buffer = cv2.imencode(ext, image)
    if not success:
        raise ValueError(f"Failed to encode image to {format}")

    return buffer.tobytes()
