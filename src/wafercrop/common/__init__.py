"""
Common constants shared across the wafer-crop package.
"""

from .constants import APIConstants, ImageConstants, StorageConstants, SystemConstants, VisionConstants

__all__ = [
    "APIConstants",
    "ImageConstants",
    "StorageConstants",
    "SystemConstants",
    "VisionConstants",
]
