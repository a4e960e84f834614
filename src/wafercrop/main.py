"""
wafer-crop - Main FastAPI Application
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from wafercrop import __version__
from wafercrop.api.exceptions import register_exception_handlers
from wafercrop.api.routers import crop, system
from wafercrop.common.constants import SystemConstants
from wafercrop.config import get_settings
from wafercrop.services.crop_service import CropService

# Get configuration
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.system.log_level),
    format=SystemConstants.LOG_FORMAT,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    # Startup
    logger.info("Starting wafer-crop server...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.system.debug}")

    app.state.crop_service = CropService.from_settings(settings)
    app.state.settings = settings
    app.state.debug = settings.system.debug

    logger.info(
        f"Crop service initialized (circle={settings.pipeline.include_circle}, "
        f"rect={settings.pipeline.include_rect})"
    )

    yield

    # Shutdown
    logger.info("wafer-crop server shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="wafer-crop",
    description="Wafer disk and histogram panel extraction",
    version=__version__,
    lifespan=lifespan,
)

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(crop.router, prefix="/api/crop", tags=["Crop"])
app.include_router(system.router, prefix="/api/system", tags=["System"])


# Root endpoint
@app.get("/")
async def root():
    return {
        "name": "wafer-crop",
        "status": "running",
        "version": __version__,
        "endpoints": {
            "crop": "/api/crop",
            "system": "/api/system",
            "docs": "/docs",
        },
    }


def run() -> None:
    """Run the API server with the configured host and port."""
    server_config = uvicorn.Config(
        "wafercrop.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.system.debug,
        log_level=settings.system.log_level.lower(),
    )
    server = uvicorn.Server(server_config)

    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")
    finally:
        logger.info("Server exiting...")


if __name__ == "__main__":
    run()
