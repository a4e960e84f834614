"""
Histogram panel detection from contours.

Edges are extracted with Canny, outer contours are approximated to
polygons, and a contour qualifies as a panel when its approximation has
exactly four vertices and its bounding box meets a minimum size.
"""

from typing import List, Optional, Sequence, Union

import cv2
import numpy as np

from wafercrop.common.constants import VisionConstants
from wafercrop.domain_types import Rectangle

from .base_detector import BaseDetector
from .params import PanelDetectionParams


def approximate_polygon(contour: np.ndarray, epsilon_factor: float) -> np.ndarray:
    """Approximate a closed contour with tolerance epsilon_factor * perimeter."""
    perimeter = cv2.arcLength(contour, True)
    return cv2.approxPolyDP(contour, epsilon_factor * perimeter, True)


def is_panel_candidate(
    approx: np.ndarray,
    min_width: int = VisionConstants.PANEL_MIN_WIDTH,
    min_height: int = VisionConstants.PANEL_MIN_HEIGHT,
) -> bool:
    """
    Check whether an approximated polygon qualifies as a panel.

    Args:
        approx: Polygon vertices as returned by cv2.approxPolyDP
        min_width: Minimum bounding box width (inclusive)
        min_height: Minimum bounding box height (inclusive)
    """
    if len(approx) != VisionConstants.QUAD_VERTEX_COUNT:
        return False

    _, _, w, h = cv2.boundingRect(approx)
    return w >= min_width and h >= min_height


def filter_quad_candidates(
    contours: Sequence[np.ndarray], params: Optional[PanelDetectionParams] = None
) -> List[Rectangle]:
    """
    Bounding boxes of contours that qualify as panels, in contour order.

    Args:
        contours: Contours as returned by cv2.findContours
        params: Approximation tolerance and size floor

    Returns:
        Bounding boxes of qualifying contours
    """
    if params is None:
        params = PanelDetectionParams()

    candidates = []
    for contour in contours:
        approx = approximate_polygon(contour, params.epsilon_factor)
        if is_panel_candidate(approx, params.min_width, params.min_height):
            candidates.append(Rectangle.from_cv(cv2.boundingRect(approx)))

    return candidates


class RectangleDetector(BaseDetector[PanelDetectionParams]):
    """
    Quadrilateral panel detector.

    Candidates are returned in OpenCV's native contour order; the pipeline
    takes the first qualifying contour and does not rank by size.
    """

    params_class = PanelDetectionParams

    def detect(self, image: np.ndarray) -> List[Rectangle]:
        """
        Detect panel-sized quadrilaterals in image.

        Args:
            image: Grayscale image (BGR is converted)

        Returns:
            Bounding boxes of qualifying contours; empty list if none found
        """
        gray = self._ensure_grayscale(image)
        p = self.params

        blurred = cv2.GaussianBlur(gray, (p.blur_kernel, p.blur_kernel), 0)
        edged = cv2.Canny(blurred, p.canny_low, p.canny_high)

        contours, _ = cv2.findContours(edged, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
        candidates = filter_quad_candidates(contours, p)

        self.logger.debug(
            f"{len(candidates)} of {len(contours)} contour(s) qualify as panels"
        )
        return candidates


def detect_quad_candidates(
    image: np.ndarray, params: Optional[Union[PanelDetectionParams, dict]] = None
) -> List[Rectangle]:
    """Detect panel-sized quadrilaterals in image, in native contour order."""
    return RectangleDetector(params).detect(image)
