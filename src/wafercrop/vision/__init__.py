"""
Feature detectors behind narrow interfaces.

The pipeline only depends on detect_circles / detect_quad_candidates (or the
detect() method of the detector classes), so the vision library underneath
can be swapped without touching the orchestration code.
"""

from .base_detector import BaseDetector
from .circle_detection import CircleDetector, detect_circles
from .params import BaseDetectionParams, CircleDetectionParams, PanelDetectionParams
from .rect_detection import (
    RectangleDetector,
    detect_quad_candidates,
    filter_quad_candidates,
    is_panel_candidate,
)

__all__ = [
    "BaseDetectionParams",
    "BaseDetector",
    "CircleDetectionParams",
    "CircleDetector",
    "PanelDetectionParams",
    "RectangleDetector",
    "detect_circles",
    "detect_quad_candidates",
    "filter_quad_candidates",
    "is_panel_candidate",
]
