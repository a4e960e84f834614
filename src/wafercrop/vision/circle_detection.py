"""
Wafer disk detection using the Hough gradient circle transform.
"""

from typing import List, Optional, Union

import cv2
import numpy as np

from wafercrop.domain_types import Circle

from .base_detector import BaseDetector
from .params import CircleDetectionParams


class CircleDetector(BaseDetector[CircleDetectionParams]):
    """
    Hough circle detector tuned to a known wafer size.

    Only radii within a narrow band are searched. Results keep OpenCV's
    ordering (strongest accumulator first); the pipeline consumes only the
    first circle and does not disambiguate between candidates.
    """

    params_class = CircleDetectionParams

    def detect(self, image: np.ndarray) -> List[Circle]:
        """
        Detect circles in image.

        Args:
            image: Grayscale image (BGR is converted)

        Returns:
            Detected circles, best first; empty list if none found
        """
        gray = self._ensure_grayscale(image)
        p = self.params

        circles = cv2.HoughCircles(
            gray,
            cv2.HOUGH_GRADIENT,
            dp=p.dp,
            minDist=p.min_dist,
            param1=p.param1,
            param2=p.param2,
            minRadius=p.min_radius,
            maxRadius=p.max_radius,
        )

        if circles is None:
            self.logger.debug("No circles found")
            return []

        # HoughCircles returns shape (1, N, 3) with rows of (x, y, r)
        results = [Circle.from_hough(row) for row in circles[0] if row[2] > 0]
        self.logger.debug(f"Found {len(results)} circle(s)")
        return results


def detect_circles(
    image: np.ndarray, params: Optional[Union[CircleDetectionParams, dict]] = None
) -> List[Circle]:
    """Detect wafer-sized circles in image, best first."""
    return CircleDetector(params).detect(image)
