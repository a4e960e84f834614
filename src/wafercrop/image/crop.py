"""
Cropping stages for detected regions.

crop_circle masks everything outside a disk before cropping to the disk's
bounding box; crop_rect is a plain sub-image copy. Both clip to the image
bounds, so a region running past an edge yields a smaller crop instead of
padding.
"""

import logging

import cv2
import numpy as np

from wafercrop.domain_types import Circle, Rectangle

from .converters import validate_image

logger = logging.getLogger(__name__)


def extract_region(image: np.ndarray, rect: Rectangle) -> np.ndarray:
    """
    Copy the part of image covered by rect, clipped to the image bounds.

    Raises:
        ValueError: If the rectangle does not overlap the image
    """
    img_height, img_width = image.shape[:2]
    clipped = rect.clip(img_width, img_height)

    if clipped.is_empty:
        raise ValueError(
            f"Region {rect.to_dict()} does not overlap image {img_width}x{img_height}"
        )

    if clipped != rect:
        logger.debug(f"Region clipped from {rect.to_dict()} to {clipped.to_dict()}")

    return image[clipped.y : clipped.y2, clipped.x : clipped.x2].copy()


def circle_mask(shape: tuple, circle: Circle) -> np.ndarray:
    """Full-size single-channel mask with a filled disk at the circle."""
    mask = np.zeros(shape[:2], dtype=np.uint8)
    center = (int(circle.center.x), int(circle.center.y))
    cv2.circle(mask, center, int(circle.radius), 255, thickness=-1)
    return mask


def crop_circle(image: np.ndarray, circle: Circle) -> np.ndarray:
    """
    Crop image to a disk, blacking out everything outside it.

    Args:
        image: Source image (BGR or grayscale)
        circle: Disk to keep

    Returns:
        Image sized to the disk's bounding box clipped to the source bounds;
        pixels outside the disk are black

    Raises:
        InvalidImageException: If the image is malformed
        ValueError: If the disk does not overlap the image
    """
    validate_image(image)

    mask = circle_mask(image.shape, circle)
    masked = cv2.bitwise_and(image, image, mask=mask)

    return extract_region(masked, circle.bounding_box())


def crop_rect(image: np.ndarray, rect: Rectangle) -> np.ndarray:
    """
    Crop image to an axis-aligned rectangle.

    Raises:
        InvalidImageException: If the image is malformed
        ValueError: If the rectangle does not overlap the image
    """
    validate_image(image)
    return extract_region(image, rect)
