"""
NGO Site Backend - Application Tests
====================================

What:  Banner, health check, image serving and storage error mapping.
"""

from unittest.mock import AsyncMock, patch

import pytest

from ngo_api.exceptions import DatabaseError


@pytest.mark.asyncio
async def test_root_banner(test_client):
    response = await test_client.get("/")

    assert response.status_code == 200
    assert response.text == "NGO backend running! Use /api/members or /api/events"


@pytest.mark.asyncio
async def test_health_ok(test_client, test_settings):
    response = await test_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["backend"] == test_settings.storage_backend
    assert body["records"] == "connected"
    assert body["assets"] == "available"


@pytest.mark.asyncio
async def test_health_reports_unreachable_store(test_client, test_app):
    records = test_app.state.services.member_records
    with patch.object(records, "ping", AsyncMock(side_effect=DatabaseError("connection refused"))):
        response = await test_client.get("/health")

    assert response.status_code == 503
    assert response.json()["records"] == "disconnected"


@pytest.mark.asyncio
async def test_unknown_upload_returns_404(test_client):
    response = await test_client.get("/uploads/image-1-000000001.png")

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


@pytest.mark.asyncio
async def test_upload_route_stays_inside_upload_dir(test_client, test_settings, tmp_path):
    (tmp_path / "secret.txt").write_text("do not serve")

    response = await test_client.get("/uploads/..%2Fsecret.txt")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_storage_error_maps_to_500(test_client, test_app):
    records = test_app.state.services.member_records
    failure = DatabaseError("Could not list member: database is locked")
    with patch.object(records, "list_all", AsyncMock(side_effect=failure)):
        response = await test_client.get("/api/members")

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "storage_error"
    assert body["message"] == "Could not list member: database is locked"


@pytest.mark.asyncio
async def test_non_form_member_body_rejected(test_client):
    response = await test_client.post(
        "/api/members",
        content=b"--broken\r\n",
        headers={"Content-Type": "multipart/form-data; boundary=broken"},
    )

    assert response.status_code == 400
