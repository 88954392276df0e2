"""
NGO Site Backend - Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the test suite.
How:   Every fixture works in pytest's tmp_path: uploads, the TinyDB file and
       the SQLite database never touch the working directory.

Fixtures:
    ├── test_settings:      Settings in tmp_path, parametrized over json + database
    ├── asset_store:        LocalAssetStore over a temp upload dir
    ├── services:           AppServices, parametrized over json + database
    ├── sample_png_bytes:   Minimal PNG payload
    └── test_client:        HTTPX AsyncClient bound to a fresh app
"""

import os
import tempfile

# Environment for the module-level `app` in ngo_api.main, set before any
# ngo_api import reads Settings
_scratch = tempfile.mkdtemp(prefix="ngo_site_test_")
os.environ["STORAGE_BACKEND"] = "json"
os.environ["JSON_DB_PATH"] = os.path.join(_scratch, "db.json")
os.environ["UPLOAD_DIR"] = os.path.join(_scratch, "uploads")
os.environ["PUBLIC_BASE_URL"] = "http://test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from ngo_api.bootstrap import build_services  # noqa: E402
from ngo_api.config import Settings  # noqa: E402
from ngo_api.services.asset_store import LocalAssetStore  # noqa: E402


def make_settings(tmp_path, backend: str = "json", **overrides) -> Settings:
    values = dict(
        storage_backend=backend,
        json_db_path=str(tmp_path / "db" / "ngo_site.json"),
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'ngo_site.db'}",
        db_auto_create=True,
        upload_dir=str(tmp_path / "uploads"),
        public_base_url="http://test",
        max_file_size=1024 * 1024,
        log_level="WARNING",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(params=["json", "database"])
def test_settings(request, tmp_path) -> Settings:
    """App settings on each record backend; every HTTP test runs on both."""
    return make_settings(tmp_path, backend=request.param)


@pytest.fixture
def sample_png_bytes() -> bytes:
    """PNG signature + IHDR chunk header; enough bytes to look like an image."""
    return (
        b"\x89PNG\r\n\x1a\n"
        b"\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00"
        b"\x1f\x15\xc4\x89"
    )


@pytest.fixture
def asset_store(tmp_path) -> LocalAssetStore:
    return LocalAssetStore(
        upload_dir=str(tmp_path / "uploads"),
        public_base_url="http://test",
        max_file_size=64,
    )


@pytest_asyncio.fixture(params=["json", "database"])
async def services(request, tmp_path):
    """AppServices on each record backend (TinyDB file, SQLite via aiosqlite)."""
    app_services = build_services(make_settings(tmp_path, backend=request.param))
    await app_services.startup()
    yield app_services
    await app_services.shutdown()


@pytest_asyncio.fixture
async def test_app(test_settings):
    from ngo_api.main import create_app

    app = create_app(test_settings)
    # ASGITransport does not run the lifespan; start the services by hand
    await app.state.services.startup()
    yield app
    await app.state.services.shutdown()


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient routed straight into the app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
