"""Note CRUD endpoint tests."""

import uuid

import pytest
from httpx import AsyncClient

API = "/api/v1"


@pytest.mark.asyncio
async def test_create_note_defaults_and_auto_tags(client: AsyncClient):
    """Test creating a note applies defaults and keyword tags."""
    response = await client.post(
        f"{API}/notes",
        json={
            "title": "Standup",
            "content": "Discuss sprint todo items and deadline for release",
        },
    )
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "success"
    assert body["message"] == "Note created successfully"

    note = body["data"]["note"]
    assert note["category"] == "Other"
    assert note["priority"] == "Medium"
    assert note["color"] == "#ffffff"
    assert note["isArchived"] is False
    assert note["isFavorite"] is False
    assert "task" in note["tags"]
    assert "deadline" in note["tags"]
    assert note["summary"] is None
    assert note["lastSummarized"] is None


@pytest.mark.asyncio
async def test_create_note_derived_fields(client: AsyncClient):
    """Test word count and reading time are derived from content."""
    content = " ".join(["word"] * 401)
    response = await client.post(f"{API}/notes", json={"title": "Long", "content": content})
    assert response.status_code == 201
    note = response.json()["data"]["note"]
    assert note["wordCount"] == 401
    assert note["readingTime"] == 3


@pytest.mark.asyncio
async def test_create_note_without_keywords_has_no_tags(client: AsyncClient):
    """Test content without trigger words is not tagged."""
    response = await client.post(
        f"{API}/notes", json={"title": "Groceries", "content": "Milk, eggs and bread"}
    )
    assert response.status_code == 201
    assert response.json()["data"]["note"]["tags"] == []


@pytest.mark.asyncio
async def test_supplied_tags_skip_auto_tagging(client: AsyncClient):
    """Test explicit tags are kept as given and deduplicated."""
    response = await client.post(
        f"{API}/notes",
        json={"title": "Plan", "content": "A todo list", "tags": ["x", "x", "y"]},
    )
    assert response.status_code == 201
    assert response.json()["data"]["note"]["tags"] == ["x", "y"]


@pytest.mark.asyncio
async def test_create_note_trims_title(client: AsyncClient):
    response = await client.post(
        f"{API}/notes", json={"title": "   Padded   ", "content": "body"}
    )
    assert response.status_code == 201
    assert response.json()["data"]["note"]["title"] == "Padded"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload,field",
    [
        ({"content": "missing title"}, "title"),
        ({"title": "   ", "content": "blank title"}, "title"),
        ({"title": "x" * 101, "content": "long title"}, "title"),
        ({"title": "No content"}, "content"),
        ({"title": "Big", "content": "x" * 10001}, "content"),
        ({"title": "Cat", "content": "c", "category": "Hobby"}, "category"),
        ({"title": "Pri", "content": "c", "priority": "Urgent"}, "priority"),
        ({"title": "Col", "content": "c", "color": "red"}, "color"),
        ({"title": "Col", "content": "c", "color": "#12345"}, "color"),
        ({"title": "Tags", "content": "c", "tags": "not-a-list"}, "tags"),
        ({"title": "Tags", "content": "c", "tags": ["y" * 31]}, "tags.0"),
    ],
)
async def test_create_note_validation(client: AsyncClient, payload, field):
    """Test note creation validation."""
    response = await client.post(f"{API}/notes", json=payload)
    assert response.status_code == 400
    body = response.json()
    assert body["status"] == "error"
    assert body["message"] == "Validation failed"
    assert field in [error["field"] for error in body["errors"]]


@pytest.mark.asyncio
async def test_short_hex_color_accepted(client: AsyncClient):
    response = await client.post(
        f"{API}/notes", json={"title": "Color", "content": "c", "color": "#abc"}
    )
    assert response.status_code == 201
    assert response.json()["data"]["note"]["color"] == "#abc"


@pytest.mark.asyncio
async def test_get_note_round_trip(client: AsyncClient, make_note):
    """Test fetching a created note returns the same fields."""
    created = await make_note(
        title="Round trip",
        content="Content of the note",
        tags=["alpha", "beta"],
        category="Work",
        priority="High",
        color="#123456",
    )

    response = await client.get(f"{API}/notes/{created['id']}")
    assert response.status_code == 200
    fetched = response.json()["data"]["note"]
    for field in ("id", "title", "content", "category", "priority", "color", "tags"):
        assert fetched[field] == created[field]
    assert fetched["createdAt"]
    assert fetched["updatedAt"]


@pytest.mark.asyncio
async def test_get_note_not_found(client: AsyncClient):
    response = await client.get(f"{API}/notes/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.json() == {"status": "error", "message": "Note not found"}


@pytest.mark.asyncio
async def test_get_note_invalid_id(client: AsyncClient):
    """Test a malformed id is a bad request, not a 404."""
    response = await client.get(f"{API}/notes/not-a-uuid")
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid note ID"


@pytest.mark.asyncio
async def test_update_note(client: AsyncClient, make_note):
    """Test updating only the supplied fields."""
    created = await make_note(title="Old title", category="Work")

    response = await client.put(
        f"{API}/notes/{created['id']}", json={"title": "New title", "priority": "Low"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Note updated successfully"
    note = body["data"]["note"]
    assert note["title"] == "New title"
    assert note["priority"] == "Low"
    assert note["category"] == "Work"
    assert note["content"] == created["content"]


@pytest.mark.asyncio
async def test_update_is_idempotent(client: AsyncClient, make_note):
    """Test applying the same update twice only moves updatedAt."""
    created = await make_note()
    payload = {"content": "Rewritten content about the project", "color": "#000"}

    first = await client.put(f"{API}/notes/{created['id']}", json=payload)
    second = await client.put(f"{API}/notes/{created['id']}", json=payload)
    assert first.status_code == 200
    assert second.status_code == 200

    a = first.json()["data"]["note"]
    b = second.json()["data"]["note"]
    a.pop("updatedAt")
    b.pop("updatedAt")
    assert a == b
    assert a["tags"] == ["project"]
    assert a["wordCount"] == 5


@pytest.mark.asyncio
async def test_update_validation(client: AsyncClient, make_note):
    created = await make_note()
    response = await client.put(f"{API}/notes/{created['id']}", json={"title": ""})
    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"


@pytest.mark.asyncio
async def test_update_not_found_and_invalid_id(client: AsyncClient):
    missing = await client.put(f"{API}/notes/{uuid.uuid4()}", json={"title": "x"})
    assert missing.status_code == 404

    invalid = await client.put(f"{API}/notes/123", json={"title": "x"})
    assert invalid.status_code == 400
    assert invalid.json()["message"] == "Invalid note ID"


@pytest.mark.asyncio
async def test_delete_note(client: AsyncClient, make_note):
    """Test deleting returns the note and it is gone afterwards."""
    created = await make_note(title="To delete")

    response = await client.delete(f"{API}/notes/{created['id']}")
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Note deleted successfully"
    assert body["data"]["deletedNote"]["id"] == created["id"]
    assert body["data"]["deletedNote"]["title"] == "To delete"

    response = await client.get(f"{API}/notes/{created['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_missing_note(client: AsyncClient):
    response = await client.delete(f"{API}/notes/{uuid.uuid4()}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_toggle_favorite_twice(client: AsyncClient, make_note):
    """Test toggling favorite twice restores the original value."""
    created = await make_note()

    first = await client.patch(f"{API}/notes/{created['id']}/favorite")
    assert first.status_code == 200
    assert first.json()["message"] == "Note added to favorites"
    assert first.json()["data"]["note"]["isFavorite"] is True

    second = await client.patch(f"{API}/notes/{created['id']}/favorite")
    assert second.json()["message"] == "Note removed from favorites"
    assert second.json()["data"]["note"]["isFavorite"] is False


@pytest.mark.asyncio
async def test_toggle_archive(client: AsyncClient, make_note):
    created = await make_note()

    response = await client.patch(f"{API}/notes/{created['id']}/archive")
    assert response.status_code == 200
    assert response.json()["message"] == "Note archived successfully"
    assert response.json()["data"]["note"]["isArchived"] is True

    response = await client.patch(f"{API}/notes/{created['id']}/archive")
    assert response.json()["message"] == "Note unarchived successfully"
    assert response.json()["data"]["note"]["isArchived"] is False


@pytest.mark.asyncio
async def test_toggle_invalid_id(client: AsyncClient):
    response = await client.patch(f"{API}/notes/nope/favorite")
    assert response.status_code == 400
