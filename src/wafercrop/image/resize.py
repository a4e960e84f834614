"""
Aspect-preserving resize.

Only the longer side is fitted to its target; the other dimension is derived
from the source aspect ratio. This is a "fit by longer side" policy, not a
bounding-box fit: a wide image resized to (400, 400) is always 400 wide.
"""

import logging
from typing import Tuple

import cv2
import numpy as np

from .converters import validate_image

logger = logging.getLogger(__name__)


def fit_dimensions(width: int, height: int, target_width: int, target_height: int) -> Tuple[int, int]:
    """
    Compute output size for an image of width x height.

    Returns:
        (new_width, new_height); derived dimensions are at least one pixel
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Source dimensions must be positive: {width}x{height}")
    if target_width <= 0 or target_height <= 0:
        raise ValueError(f"Target dimensions must be positive: {target_width}x{target_height}")

    if width > height:
        new_width = target_width
        new_height = max(1, int(round(height * target_width / width)))
    else:
        new_height = target_height
        new_width = max(1, int(round(width * target_height / height)))

    return new_width, new_height


def resize_keep_aspect(image: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Resize image so its longer side matches the corresponding target.

    Args:
        image: Input image
        width: Target width, honored when the image is wider than tall
        height: Target height, honored otherwise

    Returns:
        Resized image
    """
    validate_image(image)

    src_height, src_width = image.shape[:2]
    new_width, new_height = fit_dimensions(src_width, src_height, width, height)

    logger.debug(f"Resizing {src_width}x{src_height} -> {new_width}x{new_height}")
    return cv2.resize(image, (new_width, new_height))
