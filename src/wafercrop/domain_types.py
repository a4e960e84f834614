"""
Central types module for the wafer-crop pipeline.

This module holds the geometric primitives (Point, Circle, Rectangle) and the
enums describing pipeline branches. It has no dependencies on other project
modules (only stdlib and Pydantic).

IMPORTANT: This module must NOT import from image, vision, services, storage
or api to avoid circular dependencies.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Tuple

from pydantic import BaseModel, Field

# ==============================================================================
# Base Data Models
# ==============================================================================


class Point(BaseModel):
    """2D Point"""

    x: float
    y: float


class Rectangle(BaseModel):
    """
    Axis-aligned bounding box in image coordinates.

    Coordinates may be negative before clipping (e.g. the bounding box of a
    disk that runs past the image edge); use clip() before slicing.
    """

    x: int = Field(..., description="X coordinate of the left edge")
    y: int = Field(..., description="Y coordinate of the top edge")
    width: int = Field(..., ge=0, description="Width")
    height: int = Field(..., ge=0, description="Height")

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_points(cls, x1: int, y1: int, x2: int, y2: int) -> "Rectangle":
        """Create Rectangle from two corner points."""
        return cls(x=min(x1, x2), y=min(y1, y2), width=abs(x2 - x1), height=abs(y2 - y1))

    @classmethod
    def from_cv(cls, rect: Tuple[int, int, int, int]) -> "Rectangle":
        """Create Rectangle from an OpenCV (x, y, w, h) tuple."""
        x, y, w, h = rect
        return cls(x=int(x), y=int(y), width=int(w), height=int(h))

    @property
    def x2(self) -> int:
        """Get right edge coordinate (exclusive)."""
        return self.x + self.width

    @property
    def y2(self) -> int:
        """Get bottom edge coordinate (exclusive)."""
        return self.y + self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def clip(self, image_width: int, image_height: int) -> "Rectangle":
        """
        Clip rectangle to image bounds.

        Args:
            image_width: Maximum width (image width)
            image_height: Maximum height (image height)

        Returns:
            Clipped Rectangle that fits within image bounds (possibly empty)
        """
        x = max(0, min(self.x, image_width))
        y = max(0, min(self.y, image_height))
        x2 = max(0, min(self.x2, image_width))
        y2 = max(0, min(self.y2, image_height))

        return Rectangle.from_points(x, y, x2, y2)


class Circle(BaseModel):
    """Detected circular feature (center and radius in pixels)."""

    center: Point
    radius: float = Field(..., gt=0, description="Radius in pixels")

    @classmethod
    def from_hough(cls, values: Any) -> "Circle":
        """Create Circle from one (x, y, r) row of cv2.HoughCircles output."""
        x, y, r = (float(v) for v in values[:3])
        return cls(center=Point(x=x, y=y), radius=r)

    def bounding_box(self) -> Rectangle:
        """
        Integer bounding box of the disk, unclipped.

        Center and radius are truncated to whole pixels, matching the mask
        drawn by the circular cropper.
        """
        cx, cy, r = int(self.center.x), int(self.center.y), int(self.radius)
        return Rectangle(x=cx - r, y=cy - r, width=2 * r, height=2 * r)


# ==============================================================================
# Enums
# ==============================================================================


class CropKind(str, Enum):
    """Kind of region a pipeline branch extracts."""

    CIRCLE = "circle"
    RECT = "rect"


class BranchStatus(str, Enum):
    """Outcome of a single pipeline branch."""

    SUCCESS = "success"
    ABSENT = "absent"  # Unreadable source or no feature detected
    FAULT = "fault"  # Unexpected exception caught at the branch boundary
