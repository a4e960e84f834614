"""
Core building blocks shared by the pipeline and the API layer.
"""

from .exceptions import (
    ConfigurationException,
    InvalidImageException,
    NoFeatureDetectedException,
    ProcessingException,
    StorageException,
    UnreadableSourceException,
    WaferCropException,
)

__all__ = [
    "ConfigurationException",
    "InvalidImageException",
    "NoFeatureDetectedException",
    "ProcessingException",
    "StorageException",
    "UnreadableSourceException",
    "WaferCropException",
]
