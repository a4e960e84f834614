"""
System API Router - health and effective configuration
"""

import logging

from fastapi import APIRouter, Depends, Request

from wafercrop import __version__
from wafercrop.api.dependencies import get_app_settings, get_crop_service
from wafercrop.api.exceptions import safe_endpoint
from wafercrop.api.models import ConfigResponse, HealthResponse
from wafercrop.config import Settings
from wafercrop.services.crop_service import CropService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
@safe_endpoint
async def health(
    request: Request, settings: Settings = Depends(get_app_settings)
) -> HealthResponse:
    """Report whether the crop service is available."""
    return HealthResponse(
        version=__version__,
        api_version=settings.api.api_version,
        crop_service=getattr(request.app.state, "crop_service", None) is not None,
    )


@router.get("/config")
@safe_endpoint
async def get_config(
    service: CropService = Depends(get_crop_service),
    settings: Settings = Depends(get_app_settings),
) -> ConfigResponse:
    """Pipeline defaults used when a crop request omits the branch flags."""
    return ConfigResponse(
        include_circle=service.default_config.include_circle,
        include_rect=service.default_config.include_rect,
        circle_target_size=service.circle_target_size,
        rect_target_width=service.rect_target_width,
        max_upload_size_mb=settings.api.max_upload_size_mb,
    )
