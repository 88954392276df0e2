"""
NGO Site Backend - Record Store Tests
=====================================

What:  The CRUD contract, run against both backends (TinyDB file and SQLite
       through async SQLAlchemy) via the parametrized `services` fixture.
"""

import pytest

from ngo_api.exceptions import NotFoundError, ValidationError


@pytest.mark.asyncio
async def test_create_assigns_id_timestamps_and_defaults(services):
    record = await services.member_records.create({"name": "Asha", "position": "Coordinator"})

    assert len(record["id"]) == 32
    assert record["created_at"] == record["updated_at"]
    assert record["description"] == ""
    assert record["achievements"] == ""
    assert record["image_ref"] is None


@pytest.mark.asyncio
async def test_create_ignores_client_supplied_id(services):
    record = await services.member_records.create(
        {"id": "chosen-by-client", "name": "Asha", "position": "Coordinator"}
    )

    assert record["id"] != "chosen-by-client"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "fields",
    [
        {"name": "Asha"},
        {"position": "Coordinator"},
        {"name": "   ", "position": "Coordinator"},
    ],
)
async def test_create_rejects_missing_required(services, fields):
    with pytest.raises(ValidationError):
        await services.member_records.create(fields)

    assert await services.member_records.list_all() == []


@pytest.mark.asyncio
async def test_get_round_trips_record(services):
    created = await services.member_records.create(
        {"name": "Asha", "position": "Coordinator", "image_ref": "http://test/uploads/a.png"}
    )

    fetched = await services.member_records.get(created["id"])

    assert fetched["name"] == "Asha"
    assert fetched["image_ref"] == "http://test/uploads/a.png"
    assert fetched["created_at"] == created["created_at"]


@pytest.mark.asyncio
async def test_get_unknown_raises_not_found(services):
    with pytest.raises(NotFoundError, match="was not found"):
        await services.member_records.get("does-not-exist")


@pytest.mark.asyncio
async def test_list_preserves_creation_order(services):
    names = ["Asha", "Bilal", "Chen"]
    for name in names:
        await services.member_records.create({"name": name, "position": "Volunteer"})

    records = await services.member_records.list_all()

    assert [r["name"] for r in records] == names


@pytest.mark.asyncio
async def test_partial_update_keeps_other_fields(services):
    created = await services.member_records.create(
        {
            "name": "Asha",
            "position": "Coordinator",
            "achievements": "Ran 12 camps",
            "image_ref": "http://test/uploads/a.png",
        }
    )

    updated = await services.member_records.update(created["id"], {"description": "Founder"})

    assert updated["description"] == "Founder"
    assert updated["achievements"] == "Ran 12 camps"
    assert updated["image_ref"] == "http://test/uploads/a.png"
    assert updated["created_at"] == created["created_at"]
    assert updated["updated_at"] >= created["updated_at"]


@pytest.mark.asyncio
async def test_update_can_clear_optional_field(services):
    created = await services.member_records.create(
        {"name": "Asha", "position": "Coordinator", "image_ref": "http://test/uploads/a.png"}
    )

    updated = await services.member_records.update(created["id"], {"image_ref": None})

    assert updated["image_ref"] is None


@pytest.mark.asyncio
async def test_update_rejects_blank_required(services):
    created = await services.member_records.create({"name": "Asha", "position": "Coordinator"})

    with pytest.raises(ValidationError):
        await services.member_records.update(created["id"], {"name": ""})

    assert (await services.member_records.get(created["id"]))["name"] == "Asha"


@pytest.mark.asyncio
async def test_update_unknown_raises_not_found(services):
    with pytest.raises(NotFoundError):
        await services.member_records.update("does-not-exist", {"name": "Nobody"})


@pytest.mark.asyncio
async def test_update_unknown_with_blank_required_is_not_found(services):
    with pytest.raises(NotFoundError):
        await services.event_records.update("does-not-exist", {"title": ""})


@pytest.mark.asyncio
async def test_delete_returns_record_and_removes_it(services):
    created = await services.member_records.create({"name": "Asha", "position": "Coordinator"})

    removed = await services.member_records.delete(created["id"])

    assert removed["id"] == created["id"]
    with pytest.raises(NotFoundError):
        await services.member_records.get(created["id"])


@pytest.mark.asyncio
async def test_delete_unknown_leaves_store_unchanged(services):
    await services.member_records.create({"name": "Asha", "position": "Coordinator"})

    with pytest.raises(NotFoundError):
        await services.member_records.delete("does-not-exist")

    assert len(await services.member_records.list_all()) == 1


@pytest.mark.asyncio
async def test_ids_are_not_reused(services):
    first = await services.member_records.create({"name": "Asha", "position": "Coordinator"})
    await services.member_records.delete(first["id"])

    second = await services.member_records.create({"name": "Asha", "position": "Coordinator"})

    assert second["id"] != first["id"]


@pytest.mark.asyncio
async def test_event_records(services):
    created = await services.event_records.create(
        {"title": "Beach clean-up", "date": "2024-07-14", "time": "09:00", "volunteers_needed": 25}
    )

    assert created["volunteers_needed"] == 25
    assert created["location"] == ""
    assert created["category"] == ""

    updated = await services.event_records.update(created["id"], {"location": "Juhu Beach"})
    assert updated["title"] == "Beach clean-up"
    assert updated["location"] == "Juhu Beach"


@pytest.mark.asyncio
async def test_members_and_events_are_separate(services):
    await services.member_records.create({"name": "Asha", "position": "Coordinator"})

    assert await services.event_records.list_all() == []


@pytest.mark.asyncio
async def test_ping(services):
    await services.member_records.ping()
    await services.event_records.ping()
