"""Shared test fixtures and configuration for backend tests."""
import pytest
from fastapi.testclient import TestClient

from relay.config import AppSettings, ServerSettings, StorageSettings
from relay.main import create_app

PUBLIC_HOST = "192.168.1.50"
PORT = 3000


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def settings(upload_dir):
    """Settings pointing the content directory at a temp path."""
    return AppSettings(
        server=ServerSettings(port=PORT, public_host=PUBLIC_HOST),
        storage=StorageSettings(upload_dir=str(upload_dir)),
    )


@pytest.fixture
def api_client(settings):
    """Provide a TestClient with the app lifespan running.

    The lifespan creates the content directory, so uploads only work
    inside the ``with`` block.
    """
    with TestClient(create_app(settings)) as client:
        yield client
