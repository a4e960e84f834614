"""
Exception handling for the wafer-crop API.

Every error leaves the API as JSON shaped {"error", "details", "type"}.
Endpoints wrapped with safe_endpoint translate OpenCV and encoding failures
into ProcessingException before they reach the handlers; anything else that
escapes is answered by the catch-all handler.
"""

import logging
import traceback
from functools import wraps
from typing import Any, Callable, Dict, Optional, Type

import cv2
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from wafercrop.core.exceptions import ProcessingException, WaferCropException

logger = logging.getLogger(__name__)


def error_response(status_code: int, error: str, details: Any, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "details": details, "type": error_type},
    )


async def wafercrop_exception_handler(request: Request, exc: WaferCropException) -> JSONResponse:
    """Answer a WaferCropException with its own status code and details."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"{request.method} {request.url.path} -> {exc.status_code} "
        f"{type(exc).__name__}: {exc.message}"
    )

    return error_response(exc.status_code, exc.message, exc.details, type(exc).__name__)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer malformed requests (missing upload, bad form flags) with 422."""
    # loc[0] names the request part (body, query); the rest is the field path
    errors = [
        {"field": ".".join(str(part) for part in err["loc"][1:]), "message": err["msg"]}
        for err in exc.errors()
    ]
    logger.warning(f"Rejected {request.method} {request.url.path}: {errors}")

    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY, "Validation failed", errors, "ValidationError"
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Answer anything else with 500; the traceback is exposed only in debug mode."""
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)

    details: Dict[str, Any] = {}
    if getattr(request.app.state, "debug", False):
        details = {
            "exception": str(exc),
            "type": type(exc).__name__,
            "traceback": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        }

    return error_response(500, "Internal server error", details, "InternalError")


# Failures raised outside the WaferCropException hierarchy while an endpoint
# works on an image, mapped to the project exception they stand for.
# Checked in order with isinstance.
EXCEPTION_MAPPING: Dict[Type[Exception], Callable[[str, Exception], WaferCropException]] = {
    cv2.error: lambda operation, e: ProcessingException(operation, f"OpenCV error: {e}"),
    ValueError: lambda operation, e: ProcessingException(operation, str(e)),
}


def translate_exception(operation: str, exc: Exception) -> Optional[WaferCropException]:
    """Map exc to a WaferCropException, or None if it has no mapping."""
    for exc_type, build in EXCEPTION_MAPPING.items():
        if isinstance(exc, exc_type):
            return build(operation, exc)
    return None


def safe_endpoint(func):
    """
    Decorator translating image-processing failures raised by an endpoint.

    WaferCropException and HTTPException pass through untouched. Mapped
    exceptions are re-raised as their WaferCropException counterpart, with the
    endpoint name as the operation. Unmapped ones propagate to the catch-all
    handler.
    """

    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except (WaferCropException, HTTPException):
            raise
        except Exception as e:
            translated = translate_exception(func.__name__, e)
            if translated is None:
                raise
            logger.error(f"{type(e).__name__} in {func.__name__}: {e}")
            raise translated from e

    return wrapper


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on app."""
    app.add_exception_handler(WaferCropException, wafercrop_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    logger.info("Exception handlers registered")
