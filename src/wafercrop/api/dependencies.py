"""
Shared FastAPI dependencies.
"""

import logging

from fastapi import HTTPException, Request

from wafercrop.config import Settings
from wafercrop.services.crop_service import CropService

logger = logging.getLogger(__name__)


def get_crop_service(request: Request) -> CropService:
    """
    Get the crop service from app state.

    Raises:
        HTTPException: If the service was not initialized
    """
    service = getattr(request.app.state, "crop_service", None)
    if service is None:
        logger.error("Crop service not initialized")
        raise HTTPException(status_code=503, detail="Crop service not initialized")
    return service


def get_app_settings(request: Request) -> Settings:
    """Get the settings the app was started with."""
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise HTTPException(status_code=503, detail="Settings not initialized")
    return settings
