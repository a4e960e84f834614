"""
Pytest configuration for API integration tests
"""

import cv2
import pytest
from fastapi.testclient import TestClient


@pytest.fixture(scope="function")
def client():
    """
    Create a test client with properly initialized app state.
    Each test gets a fresh client to avoid state contamination.
    """
    from wafercrop.config import Settings
    from wafercrop.main import app
    from wafercrop.services.crop_service import CropService

    app.state.crop_service = CropService()
    app.state.settings = Settings()
    app.state.debug = False

    # Create test client (no context manager so the lifespan does not replace state)
    test_client = TestClient(app, raise_server_exceptions=False)

    yield test_client


@pytest.fixture
def png_bytes():
    """Encode an image as PNG bytes for upload"""

    def _encode(image):
        ok, buffer = cv2.imencode(".png", image)
        assert ok
        return buffer.tobytes()

    return _encode
