"""
NGO Site Backend - Member API Integration Tests
===============================================

What:  /api/members end to end through the ASGI app: form parsing, camelCase
       responses, image replacement and cleanup, and error bodies.
"""

import pytest


def _image(content: bytes, filename: str = "photo.png", content_type: str = "image/png"):
    return {"image": (filename, content, content_type)}


async def _create_asha(client, **extra):
    data = {"name": "Asha", "position": "Coordinator", **extra}
    response = await client.post("/api/members", data=data)
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_member_lifecycle(test_client, sample_png_bytes):
    # Create without a photo
    created = await _create_asha(test_client)
    assert created["name"] == "Asha"
    assert created["position"] == "Coordinator"
    assert created["description"] == ""
    assert created["imageRef"] is None
    member_id = created["id"]

    # Attach a photo
    response = await test_client.put(
        f"/api/members/{member_id}", files=_image(sample_png_bytes)
    )
    assert response.status_code == 200
    first_ref = response.json()["imageRef"]
    assert first_ref.startswith("http://test/uploads/image-")
    assert first_ref.endswith(".png")

    image = await test_client.get(first_ref)
    assert image.status_code == 200
    assert image.content == sample_png_bytes
    assert image.headers["content-type"] == "image/png"

    # Replace the photo; the first one is removed
    response = await test_client.put(
        f"/api/members/{member_id}", files=_image(b"second-photo", "second.jpg", "image/jpeg")
    )
    second_ref = response.json()["imageRef"]
    assert second_ref != first_ref
    assert (await test_client.get(first_ref)).status_code == 404
    assert (await test_client.get(second_ref)).status_code == 200

    # Delete the member and its photo
    response = await test_client.delete(f"/api/members/{member_id}")
    assert response.status_code == 200
    assert response.json() == {"success": True}

    listing = await test_client.get("/api/members")
    assert member_id not in [m["id"] for m in listing.json()]
    assert (await test_client.get(second_ref)).status_code == 404


@pytest.mark.asyncio
async def test_create_with_photo_and_all_fields(test_client, sample_png_bytes):
    response = await test_client.post(
        "/api/members",
        data={
            "name": " Bilal ",
            "position": "Treasurer",
            "description": "Keeps the books",
            "achievements": "Audit 2023",
        },
        files=_image(sample_png_bytes),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Bilal"
    assert body["achievements"] == "Audit 2023"
    assert set(body) == {
        "id",
        "name",
        "position",
        "description",
        "achievements",
        "imageRef",
        "createdAt",
        "updatedAt",
    }


@pytest.mark.asyncio
async def test_get_member_by_id(test_client):
    created = await _create_asha(test_client)

    response = await test_client.get(f"/api/members/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


@pytest.mark.asyncio
async def test_list_members_in_creation_order(test_client):
    await _create_asha(test_client)
    await test_client.post("/api/members", data={"name": "Chen", "position": "Volunteer"})

    response = await test_client.get("/api/members")

    assert [m["name"] for m in response.json()] == ["Asha", "Chen"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "data",
    [{"name": "Asha"}, {"position": "Coordinator"}, {"name": "", "position": "Coordinator"}],
)
async def test_create_requires_name_and_position(test_client, data):
    response = await test_client.post("/api/members", data=data)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "validation_error"
    assert body["message"] == "Name and position are required"
    assert (await test_client.get("/api/members")).json() == []


@pytest.mark.asyncio
async def test_rejected_create_stores_no_image(test_client, test_app, sample_png_bytes):
    response = await test_client.post(
        "/api/members", data={"name": "Asha"}, files=_image(sample_png_bytes)
    )

    assert response.status_code == 400
    assert list(test_app.state.services.assets.upload_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_two_images_rejected(test_client, sample_png_bytes):
    response = await test_client.post(
        "/api/members",
        data={"name": "Asha", "position": "Coordinator"},
        files=[
            ("image", ("a.png", sample_png_bytes, "image/png")),
            ("image", ("b.png", sample_png_bytes, "image/png")),
        ],
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_without_photo_keeps_image_ref(test_client, sample_png_bytes):
    response = await test_client.post(
        "/api/members",
        data={"name": "Asha", "position": "Coordinator"},
        files=_image(sample_png_bytes),
    )
    created = response.json()

    response = await test_client.put(
        f"/api/members/{created['id']}", data={"description": "Founder"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["description"] == "Founder"
    assert body["name"] == "Asha"
    assert body["imageRef"] == created["imageRef"]
    assert (await test_client.get(created["imageRef"])).status_code == 200


@pytest.mark.asyncio
async def test_update_blank_name_rejected(test_client):
    created = await _create_asha(test_client)

    response = await test_client.put(f"/api/members/{created['id']}", data={"name": "  "})

    assert response.status_code == 400
    assert (await test_client.get(f"/api/members/{created['id']}")).json()["name"] == "Asha"


@pytest.mark.asyncio
async def test_unknown_member_returns_404(test_client):
    for response in (
        await test_client.get("/api/members/nope"),
        await test_client.put("/api/members/nope", data={"name": "X"}),
        await test_client.delete("/api/members/nope"),
    ):
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


@pytest.mark.asyncio
async def test_blank_name_on_unknown_member_returns_404(test_client):
    response = await test_client.put("/api/members/nope", data={"name": "  "})

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


@pytest.mark.asyncio
async def test_delete_unknown_leaves_members(test_client):
    await _create_asha(test_client)

    response = await test_client.delete("/api/members/nope")

    assert response.status_code == 404
    assert len((await test_client.get("/api/members")).json()) == 1


@pytest.mark.asyncio
async def test_request_id_echoed(test_client):
    response = await test_client.get("/api/members", headers={"X-Request-ID": "abc-123"})

    assert response.headers["X-Request-ID"] == "abc-123"


@pytest.mark.asyncio
async def test_error_body_carries_request_id(test_client):
    response = await test_client.get("/api/members/nope", headers={"X-Request-ID": "trace-42"})

    assert response.json()["request_id"] == "trace-42"
