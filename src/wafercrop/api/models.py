"""
Response models for the wafer-crop API.
"""

from typing import Optional

from pydantic import BaseModel


class BranchInfo(BaseModel):
    """Outcome of one pipeline branch."""

    kind: str
    status: str
    reason: Optional[str] = None
    processing_time_ms: int = 0


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str
    api_version: str
    crop_service: bool


class ConfigResponse(BaseModel):
    """Pipeline defaults currently in effect."""

    include_circle: bool
    include_rect: bool
    circle_target_size: int
    rect_target_width: int
    max_upload_size_mb: int

