"""
Custom exceptions for the wafer-crop pipeline.

The pipeline entry points never raise UnreadableSourceException or
NoFeatureDetectedException; they report those outcomes as absent results.
Both classes exist so the API layer can turn an absent result into a
consistent error response.
"""

from typing import Dict, List, Optional


class WaferCropException(Exception):
    """Base exception for wafer-crop."""

    def __init__(self, message: str, status_code: int = 500, details: Optional[Dict] = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class InvalidImageException(WaferCropException):
    """Exception raised when an image is missing, empty or has an unsupported layout."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Invalid image: {reason}",
            status_code=400,
            details={"reason": reason},
        )


class UnreadableSourceException(WaferCropException):
    """Exception raised when an image source cannot be decoded."""

    def __init__(self, source: str):
        super().__init__(
            message=f"Image could not be read: {source}",
            status_code=400,
            details={"source": source},
        )


class NoFeatureDetectedException(WaferCropException):
    """Exception raised when no region of an enabled kind was found."""

    def __init__(self, kinds: str, branches: Optional[List[Dict]] = None):
        super().__init__(
            message=f"No region of interest found ({kinds})",
            status_code=404,
            details={"kinds": kinds, "branches": branches or []},
        )


class ProcessingException(WaferCropException):
    """Exception raised when image processing fails."""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            message=f"Processing failed for {operation}: {reason}",
            status_code=500,
            details={"operation": operation, "reason": reason},
        )


class StorageException(WaferCropException):
    """Exception raised when storage operations fail."""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            message=f"Storage operation failed: {operation} - {reason}",
            status_code=507,  # Insufficient Storage
            details={"operation": operation, "reason": reason},
        )


class ConfigurationException(WaferCropException):
    """Exception raised when configuration is invalid."""

    def __init__(self, config_key: str, reason: str):
        super().__init__(
            message=f"Invalid configuration for {config_key}: {reason}",
            status_code=500,
            details={"config_key": config_key, "reason": reason},
        )
