"""
Vertical composition of two crops into one canvas.
"""

import logging

import numpy as np

from wafercrop.common.constants import ImageConstants

from .converters import ensure_bgr, validate_image

logger = logging.getLogger(__name__)


def combine_vertical(image1: np.ndarray, image2: np.ndarray) -> np.ndarray:
    """
    Stack image1 above image2.

    The canvas is as wide as the wider input and as tall as both together.
    Areas not covered by a narrower input keep the background value. No
    scaling is applied; callers reconcile widths beforehand if needed.

    Args:
        image1: Image placed at (0, 0)
        image2: Image placed at (0, height of image1)

    Returns:
        Combined image
    """
    validate_image(image1)
    validate_image(image2)

    # Mixed gray/color inputs are promoted so both share one channel layout
    if image1.ndim != image2.ndim or image1.shape[2:] != image2.shape[2:]:
        image1 = ensure_bgr(image1)
        image2 = ensure_bgr(image2)

    h1, w1 = image1.shape[:2]
    h2, w2 = image2.shape[:2]

    width = max(w1, w2)
    height = h1 + h2
    combined = np.full(
        (height, width) + image1.shape[2:], ImageConstants.BACKGROUND_VALUE, dtype=image1.dtype
    )

    combined[0:h1, 0:w1] = image1
    combined[h1 : h1 + h2, 0:w2] = image2

    logger.debug(f"Combined {w1}x{h1} and {w2}x{h2} into {width}x{height}")
    return combined
