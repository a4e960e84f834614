"""
wafer-crop - wafer disk and histogram panel extraction.

Detects a wafer disk (Hough circle search) and/or a histogram panel
(quadrilateral contour search) in an inspection image, crops and normalizes
each, and stacks both into one composite when both are found.
"""

__version__ = "0.1.0"

from .config import PipelineConfig, Settings, get_settings  # noqa: E402
from .domain_types import BranchStatus, Circle, CropKind, Point, Rectangle  # noqa: E402
from .services.crop_service import BranchResult, CropService, PipelineResult  # noqa: E402

__all__ = [
    "BranchResult",
    "BranchStatus",
    "Circle",
    "CropKind",
    "CropService",
    "PipelineConfig",
    "PipelineResult",
    "Point",
    "Rectangle",
    "Settings",
    "get_settings",
]
