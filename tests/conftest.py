"""
Root conftest.py for svc-uploads tests.

Provides:
1. Marker registration and automatic marking by path
2. Settings, app and client fixtures bound to a temporary storage root
"""

from __future__ import annotations

from pathlib import Path

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from svc_uploads.api.fastapi import create_app
from svc_uploads.app.settings import AppSettings, UploadSettings
from tests.helpers import SECRET


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_collection_modifyitems(config, items):
    """Mark auth / size-limit tests as `security` and backup tests as `backup`."""
    for item in items:
        norm = str(item.fspath).replace("\\", "/")
        if "auth" in norm or "request_size" in norm:
            item.add_marker(pytest.mark.security)
        if "backup" in norm:
            item.add_marker(pytest.mark.backup)


def pytest_configure(config):
    # Ensure custom markers are registered even if pyproject.toml isn't picked up
    for name, desc in [
        ("storage", "Local storage and path convention tests"),
        ("security", "Authentication and request limit tests"),
        ("backup", "Backup archive tests"),
    ]:
        config.addinivalue_line("markers", f"{name}: {desc}")


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def storage_root(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def upload_settings(storage_root: Path) -> UploadSettings:
    return UploadSettings(api_secret_token=SECRET, storage_root=storage_root)


@pytest.fixture
def app(upload_settings: UploadSettings) -> FastAPI:
    return create_app(upload_settings, AppSettings(name="svc-uploads test", version="0.0.0"))


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
