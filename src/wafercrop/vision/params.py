"""
Parameter models for the wafer and panel detectors.

Defaults reproduce the tuning for the target image class: a wafer disk of
roughly 200px radius and a histogram panel at least 940x260px.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from wafercrop.common.constants import VisionConstants


class BaseDetectionParams(BaseModel):
    """
    Base class for detection parameter models. Unknown fields are rejected.
    """

    model_config = ConfigDict(extra="forbid")

    def to_dict(self) -> Dict[str, Any]:
        """Export parameters to a plain dictionary."""
        return self.model_dump()


class CircleDetectionParams(BaseDetectionParams):
    """Hough circle search parameters."""

    dp: float = Field(
        default=VisionConstants.HOUGH_DP,
        gt=0,
        description="Inverse ratio of accumulator resolution to image resolution",
    )
    min_dist: float = Field(
        default=VisionConstants.HOUGH_MIN_DIST,
        gt=0,
        description="Minimum distance between detected centers in pixels",
    )
    param1: float = Field(
        default=VisionConstants.HOUGH_PARAM1,
        gt=0,
        description="Higher Canny threshold used by the gradient method",
    )
    param2: float = Field(
        default=VisionConstants.HOUGH_PARAM2,
        gt=0,
        description="Accumulator threshold for circle centers",
    )
    min_radius: int = Field(
        default=VisionConstants.HOUGH_MIN_RADIUS, ge=0, description="Minimum radius in pixels"
    )
    max_radius: int = Field(
        default=VisionConstants.HOUGH_MAX_RADIUS, ge=0, description="Maximum radius in pixels"
    )

    @model_validator(mode="after")
    def check_radius_range(self):
        if self.max_radius < self.min_radius:
            raise ValueError(
                f"max_radius ({self.max_radius}) must be >= min_radius ({self.min_radius})"
            )
        return self


class PanelDetectionParams(BaseDetectionParams):
    """Contour-based quadrilateral panel detection parameters."""

    blur_kernel: int = Field(
        default=VisionConstants.GAUSSIAN_BLUR_SIZE_DEFAULT,
        ge=VisionConstants.GAUSSIAN_BLUR_SIZE_MIN,
        le=VisionConstants.GAUSSIAN_BLUR_SIZE_MAX,
        description="Gaussian blur kernel size (must be odd)",
    )
    canny_low: int = Field(
        default=VisionConstants.CANNY_LOW_THRESHOLD_DEFAULT,
        ge=VisionConstants.CANNY_THRESHOLD_MIN,
        le=VisionConstants.CANNY_THRESHOLD_MAX,
        description="Canny low threshold",
    )
    canny_high: int = Field(
        default=VisionConstants.CANNY_HIGH_THRESHOLD_DEFAULT,
        ge=VisionConstants.CANNY_THRESHOLD_MIN,
        le=VisionConstants.CANNY_THRESHOLD_MAX,
        description="Canny high threshold",
    )
    epsilon_factor: float = Field(
        default=VisionConstants.CONTOUR_APPROX_EPSILON_FACTOR,
        gt=0,
        lt=1,
        description="Polygon approximation tolerance as a fraction of the perimeter",
    )
    min_width: int = Field(
        default=VisionConstants.PANEL_MIN_WIDTH, ge=0, description="Minimum bounding box width"
    )
    min_height: int = Field(
        default=VisionConstants.PANEL_MIN_HEIGHT, ge=0, description="Minimum bounding box height"
    )

    @field_validator("blur_kernel")
    @classmethod
    def validate_odd_kernel(cls, v):
        """Ensure kernel size is odd."""
        if v % 2 == 0:
            return v + 1
        return v
