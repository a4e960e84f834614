"""
Service layer.
"""

from .crop_service import BranchResult, CropService, PipelineResult

__all__ = ["BranchResult", "CropService", "PipelineResult"]
