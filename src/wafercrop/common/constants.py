"""
Constants and configuration values for the wafer-crop pipeline.
Centralizes all magic numbers used by detectors, croppers and the API.
"""


# Image Constants
class ImageConstants:
    """Constants related to image sizing and composition."""

    # Circular crops are fitted into a square footprint
    CIRCLE_TARGET_SIZE = 400

    # Rectangular crops are fitted to a fixed width, height derived
    RECT_TARGET_WIDTH = 800

    # Canvas fill for masked and uncovered areas (black)
    BACKGROUND_VALUE = 0

    # Encoding
    DEFAULT_OUTPUT_FORMAT = ".png"


# Vision Processing Constants
class VisionConstants:
    """Constants for the wafer and panel detectors."""

    # Hough circle search (wafer disk)
    HOUGH_DP = 1
    HOUGH_MIN_DIST = 100
    HOUGH_PARAM1 = 100  # Canny high threshold used internally by HOUGH_GRADIENT
    HOUGH_PARAM2 = 30  # Accumulator threshold
    HOUGH_MIN_RADIUS = 190
    HOUGH_MAX_RADIUS = 210

    # Panel (histogram) detection
    GAUSSIAN_BLUR_SIZE_DEFAULT = 5
    GAUSSIAN_BLUR_SIZE_MIN = 1
    GAUSSIAN_BLUR_SIZE_MAX = 31
    CANNY_LOW_THRESHOLD_DEFAULT = 75
    CANNY_HIGH_THRESHOLD_DEFAULT = 200
    CANNY_THRESHOLD_MIN = 0
    CANNY_THRESHOLD_MAX = 500

    # Contour approximation
    CONTOUR_APPROX_EPSILON_FACTOR = 0.02  # 2% of perimeter for polygon approximation
    QUAD_VERTEX_COUNT = 4

    # Minimum panel bounding box
    PANEL_MIN_WIDTH = 940
    PANEL_MIN_HEIGHT = 260


# Storage Constants
class StorageConstants:
    """Constants for the relational storage helper."""

    DEFAULT_DATABASE = ""
    NO_RECORDS_MESSAGE = "No records found"


# API Constants
class APIConstants:
    """Constants for API endpoints."""

    # File uploads
    MAX_UPLOAD_SIZE_MB = 50

    # API versions
    API_VERSION = "v1"
    DEFAULT_HOST = "0.0.0.0"
    DEFAULT_PORT = 8000


# System Constants
class SystemConstants:
    """Constants for system operations."""

    # Logging
    LOG_LEVEL_DEFAULT = "INFO"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
