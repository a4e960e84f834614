"""
Crop API Router - wafer and panel extraction from uploaded images
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from wafercrop.api.dependencies import get_app_settings, get_crop_service
from wafercrop.api.exceptions import safe_endpoint
from wafercrop.api.models import BranchInfo
from wafercrop.config import PipelineConfig, Settings
from wafercrop.core.exceptions import NoFeatureDetectedException, UnreadableSourceException
from wafercrop.image.converters import decode_image, encode_image
from wafercrop.services.crop_service import BranchResult, CropService

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_upload(file: UploadFile, settings: Settings) -> bytes:
    """Read an upload, enforcing the size limit and checking it decodes."""
    data = await file.read()

    max_bytes = settings.api.max_upload_size_mb * 1024 * 1024
    if len(data) > max_bytes:
        raise HTTPException(
            status_code=413,
            detail={
                "error": "File too large",
                "max_upload_size_mb": settings.api.max_upload_size_mb,
            },
        )

    if decode_image(data) is None:
        raise UnreadableSourceException(file.filename or "upload")

    return data


def _branch_info(branches: List[BranchResult]) -> List[dict]:
    return [
        BranchInfo(
            kind=b.kind.value,
            status=b.status.value,
            reason=b.reason,
            processing_time_ms=b.processing_time_ms,
        ).model_dump()
        for b in branches
    ]


def _png_response(image, branches: List[BranchResult]) -> Response:
    content = encode_image(image, ".png")
    headers = {"X-Crop-Branches": ",".join(f"{b.kind.value}={b.status.value}" for b in branches)}
    return Response(content=content, media_type="image/png", headers=headers)


@router.post("")
@safe_endpoint
async def crop(
    file: UploadFile = File(...),
    include_circle: Optional[bool] = Form(None),
    include_rect: Optional[bool] = Form(None),
    service: CropService = Depends(get_crop_service),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """
    Crop an uploaded image with the enabled branches.

    Flags left out of the form fall back to the configured defaults. Returns
    the wafer crop, the panel crop, or both stacked vertically, as PNG.
    """
    data = await _read_upload(file, settings)

    defaults = service.default_config
    config = PipelineConfig(
        include_circle=defaults.include_circle if include_circle is None else include_circle,
        include_rect=defaults.include_rect if include_rect is None else include_rect,
    )

    result = service.run(data, config)
    if result.image is None:
        kinds = ",".join(b.kind.value for b in result.branches) or "none"
        raise NoFeatureDetectedException(kinds, _branch_info(result.branches))

    logger.info(f"Cropped {file.filename}: {result.image.shape[1]}x{result.image.shape[0]}")
    return _png_response(result.image, result.branches)


@router.post("/circle")
@safe_endpoint
async def crop_circle(
    file: UploadFile = File(...),
    service: CropService = Depends(get_crop_service),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """Extract only the wafer disk."""
    data = await _read_upload(file, settings)

    branch = service.crop_circle(data)
    if not branch.succeeded:
        raise NoFeatureDetectedException("circle", _branch_info([branch]))

    return _png_response(branch.image, [branch])


@router.post("/rect")
@safe_endpoint
async def crop_rect(
    file: UploadFile = File(...),
    service: CropService = Depends(get_crop_service),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """Extract only the histogram panel."""
    data = await _read_upload(file, settings)

    branch = service.crop_rect(data)
    if not branch.succeeded:
        raise NoFeatureDetectedException("rect", _branch_info([branch]))

    return _png_response(branch.image, [branch])
