"""
Image loading and saving.

An unreadable source is reported as None, never as an exception, so the
pipeline can treat it as an expected absent result.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np

from .converters import decode_image, validate_image

logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, bytes]


def describe_source(source: ImageSource) -> str:
    """Short human-readable label for log messages."""
    if isinstance(source, (bytes, bytearray)):
        return f"<{len(source)} bytes>"
    return str(source)


def load_image(source: ImageSource) -> Optional[np.ndarray]:
    """
    Load a BGR image from a file path or encoded bytes.

    Args:
        source: Path to an image file, or the encoded file contents

    Returns:
        BGR image, or None if the source could not be decoded

    Raises:
        ValueError: If source is None or an empty path
    """
    if source is None:
        raise ValueError("Image source must not be None")

    if isinstance(source, (bytes, bytearray)):
        return decode_image(bytes(source))

    path = str(source)
    if not path:
        raise ValueError("Image path must not be empty")

    image = cv2.imread(path, cv2.IMREAD_COLOR)
    if image is None or image.size == 0:
        return None
    return image


def save_image(image: np.ndarray, destination: Union[str, Path]) -> bool:
    """
    Write image to disk; the format follows the destination extension.

    Returns:
        True if OpenCV reported a successful write
    """
    validate_image(image)

    destination = Path(destination)
    success = cv2.imwrite(str(destination), image)
    if success:
        logger.info(f"Saved {image.shape[1]}x{image.shape[0]} image to {destination}")
    else:
        logger.error(f"Failed to write image to {destination}")
    return bool(success)
